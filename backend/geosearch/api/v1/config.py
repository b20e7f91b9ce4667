"""API endpoint exposing the public filter-panel configuration."""
from fastapi import APIRouter

from ...config import settings
from ...config.search_config import get_public_config

router = APIRouter()


@router.get("")
async def get_config():
    """Filter sections, pagination and default sort for the search UI."""
    return get_public_config(
        default_page_size=settings.default_page_size,
        default_sort=settings.default_sort,
    )
