"""Inbound event processing."""

from .callback_processor import CallbackProcessor

__all__ = ["CallbackProcessor"]
