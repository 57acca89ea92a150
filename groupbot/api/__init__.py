"""HTTP surface of groupbot: callback intake and health."""
