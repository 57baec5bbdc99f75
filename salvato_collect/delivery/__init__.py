"""Delivery strategies for rendered auction lists."""

from salvato_collect.config import Settings, get_settings

from .base import DeliveryStrategy
from .dropbox_storage import DropboxDelivery, direct_download_url
from .plumsail_workflow import PlumsailDelivery


def build_delivery(settings: Settings | None = None) -> DeliveryStrategy:
    """Pick the delivery strategy named by ``settings.delivery_strategy``."""

    settings = settings or get_settings()
    if settings.delivery_strategy == "workflow":
        return PlumsailDelivery(settings=settings)
    return DropboxDelivery(settings=settings)


__all__ = [
    "DeliveryStrategy",
    "DropboxDelivery",
    "PlumsailDelivery",
    "build_delivery",
    "direct_download_url",
]
