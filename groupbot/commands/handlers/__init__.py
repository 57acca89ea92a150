"""Command handlers, grouped by what they orchestrate."""

from . import economy, fun, group, pictures

__all__ = ["economy", "fun", "group", "pictures"]
