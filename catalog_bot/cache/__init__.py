"""
Cache layer: in-process identifier and listing caches.
"""
from catalog_bot.cache.identifier_cache import IdentifierCache
from catalog_bot.cache.listing_cache import ListingCache

__all__ = [
    "IdentifierCache",
    "ListingCache",
]
