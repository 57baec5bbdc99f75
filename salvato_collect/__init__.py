"""Salvato Collect: auction list PDFs and workflow payloads from the Salvato API."""

from __future__ import annotations

from .api.salvato_client import SalvatoClient, ServiceRequest
from .config import Settings, get_settings
from .delivery import DropboxDelivery, PlumsailDelivery, build_delivery
from .pipelines import AuctionListPipeline, build_pipeline, project_lots

__all__ = [
    "AuctionListPipeline",
    "DropboxDelivery",
    "PlumsailDelivery",
    "SalvatoClient",
    "ServiceRequest",
    "Settings",
    "build_delivery",
    "build_pipeline",
    "get_settings",
    "project_lots",
]
