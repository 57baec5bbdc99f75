"""Local development server for the auction list endpoint."""

from __future__ import annotations

import uvicorn

from salvato_collect.config import get_settings
from salvato_collect.logging import configure_logging, get_logger


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    # Credential fields are masked by the logging pipeline.
    get_logger(__name__).info(
        "environment_loaded",
        salvato_production_url=settings.salvato_production_url,
        salvato_client_id=settings.salvato_client_id,
        salvato_client_secret=settings.salvato_client_secret,
        dropbox_access_token=settings.dropbox_access_token,
        dropbox_folder=settings.dropbox_folder,
        delivery_strategy=settings.delivery_strategy,
    )
    uvicorn.run("salvato_collect.server:app", host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()
