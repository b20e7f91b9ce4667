"""Aggregate v1 routers under their path prefixes."""
from fastapi import APIRouter

from . import config, locations, search

router = APIRouter()
router.include_router(search.router, prefix="/search", tags=["search"])
router.include_router(locations.router, prefix="/locations", tags=["locations"])
router.include_router(config.router, prefix="/config", tags=["config"])
