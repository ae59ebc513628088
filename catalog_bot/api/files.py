"""
Files API: paginated catalog listing
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from catalog_bot.dependencies import get_listing_service
from catalog_bot.exceptions import StoreFailure
from catalog_bot.schemas.media import FileListResponse
from catalog_bot.services.listing_service import ListingService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/files", response_model=FileListResponse)
async def list_files(
    page: Optional[str] = Query(None),
    service: ListingService = Depends(get_listing_service),
):
    """Список видео, новые первыми (page по умолчанию 1)."""
    try:
        snapshot = await service.get_page(page)
    except StoreFailure as e:
        logger.error("Listing failed: %s", e)
        return JSONResponse(status_code=500, content={"success": False})
    return FileListResponse.from_snapshot(snapshot)
