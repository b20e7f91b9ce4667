"""
Main FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .domain.common.errors import SearchRequestError
from .wiring.bootstrap import close_clients

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    logger.info("Starting Geo Search API...")
    logger.info("Voyager: %s", settings.voyager_base_url)
    logger.info("CORS origins: %s", settings.cors_origins_list)

    yield

    # Shutdown
    await close_clients()
    logger.info("Shutting down Geo Search API...")


# Create FastAPI application
app = FastAPI(
    title="Geo Search API",
    description="Faceted geospatial search over a Voyager catalog",
    version="0.1.0",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SearchRequestError)
async def search_request_error_handler(request: Request, exc: SearchRequestError):
    """Backend failures surface as 502 so clients can tell them from an empty result."""
    logger.error("Search backend failure on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Geo Search API",
        "version": "0.1.0",
        "docs": "/docs",
        "status": "running"
    }


@app.get("/livez")
async def liveness():
    """Liveness probe - zero dependencies, confirms process is responsive."""
    return {"status": "ok"}


# Include API routers
from .api.v1.router import router as api_router
app.include_router(api_router, prefix="/api/v1")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "geosearch.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True
    )
