"""
Domain layer for groupbot.

Models, error taxonomy, interfaces and the stateful services.
"""
