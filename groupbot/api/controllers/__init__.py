"""
API controllers for groupbot.

Controllers handle business logic and dependency management for API routes.
"""

from .callback_controller import CallbackController

__all__ = ["CallbackController"]
