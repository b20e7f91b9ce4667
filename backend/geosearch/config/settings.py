"""
Configuration settings for the geospatial search service.
Loads environment variables and provides application settings.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Voyager search backend
    voyager_base_url: str = "http://localhost:8888/solr/v0/select"
    voyager_display_id: str = "D187992491DF"  # disp / voyager.config.id
    request_timeout: float = 30.0  # seconds
    max_get_url_length: int = 2000  # longer URLs switch to POST

    # Gazetteer (optional place-name enrichment)
    gazetteer_base_url: str = "http://172.22.1.25:8888"
    gazetteer_enabled: bool = True

    # Result paging and ordering
    default_page_size: int = 48
    max_page_size: int = 100
    default_sort: str = "score desc"

    # Facet requests
    facet_limit: int = 50
    facet_mincount: int = 1

    # Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: str = "http://localhost:5173,http://localhost:3000"
    log_level: str = "INFO"

    @property
    def cors_origins_list(self) -> List[str]:
        """Convert CORS origins string to list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def gazetteer_select_url(self) -> str:
        return f"{self.gazetteer_base_url.rstrip('/')}/solr/gazetteer/select"


# Global settings instance
settings = Settings()
