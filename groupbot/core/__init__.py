"""
Core of groupbot: configuration, logging, state ownership, event processing
and the application wiring in ``bot_app``.
"""
