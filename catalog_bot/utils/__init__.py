"""
Utility modules
"""
from catalog_bot.utils.keyed_lock import KeyedLock

__all__ = ["KeyedLock"]
