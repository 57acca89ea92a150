"""Command line interface for groupbot."""
