"""
groupbot - GroupMe bot with a points economy and a shared picture catalog.

Quick start:
    from groupbot import GroupBot

    GroupBot(store="json").run()
"""

from .core.bot_app import GroupBot
from .core.config.settings import settings

__version__ = settings.version

__all__ = ["GroupBot", "__version__"]
