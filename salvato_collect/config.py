"""Application configuration for the Salvato auction-list service."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_TEMPLATE_PATH = PACKAGE_DIR / "templates" / "auction_list_template.html"


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # General
    environment: str = "development"
    log_level: str = "INFO"

    # Salvato auction API
    salvato_production_url: str = Field(
        default="https://api.salvatoauctions.com",
        description="Base URL of the Salvato auction API",
    )
    salvato_client_id: str | None = None
    salvato_client_secret: str | None = None
    salvato_page_size: int = Field(default=10, ge=1, description="Lots requested per page")
    salvato_timeout_seconds: float = 15.0
    include_in_progress: bool = Field(
        default=True,
        description="Fetch lots for IN_PROGRESS auctions as well as COMING_SOON ones",
    )

    # Delivery
    delivery_strategy: Literal["storage", "workflow"] = "storage"

    # Rendering
    template_path: Path = DEFAULT_TEMPLATE_PATH
    output_dir: Path = Path("/tmp")
    lot_url_base: str = "https://salvatoauctions.com/vehicle-details"
    placeholder_image_url: str = (
        "https://res.cloudinary.com/drydbxfl8/image/upload/v1758651858/"
        "Salvato_Auctions_Logo_Full_Color_Dark_dyltjs.png"
    )
    render_concurrency: int = Field(default=2, ge=1, description="Browsers allowed to run at once")
    render_timeout_seconds: float = 45.0
    render_settle_timeout_seconds: float = 2.5

    # Dropbox
    dropbox_access_token: str | None = None
    dropbox_folder: str = "/Salvato/Auction Lists"
    upload_timeout_seconds: float = 30.0

    # Plumsail
    plumsail_api_url: str | None = Field(
        default=None,
        description="Full https://.../processes/{id}/{id}/start endpoint",
    )
    plumsail_api_key: str | None = None
    plumsail_timeout_seconds: float = 15.0

    # HTTP server
    api_host: str = "0.0.0.0"
    api_port: int = 3001

    @property
    def salvato_base_url(self) -> str:
        return self.salvato_production_url.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()
