"""
Business logic services
"""
from catalog_bot.services.keepalive import KeepAlive
from catalog_bot.services.listing_service import ListingService, normalize_page
from catalog_bot.services.media_relay import MediaRelay
from catalog_bot.services.resolution_service import ResolutionOutcome, ResolutionService
from catalog_bot.services.upload_service import UploadResult, UploadService, UploadState

__all__ = [
    "KeepAlive",
    "ListingService",
    "normalize_page",
    "MediaRelay",
    "ResolutionOutcome",
    "ResolutionService",
    "UploadResult",
    "UploadService",
    "UploadState",
]
