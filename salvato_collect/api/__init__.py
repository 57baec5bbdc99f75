"""Salvato auction API client."""

from .salvato_client import SalvatoClient, ServiceRequest

__all__ = ["SalvatoClient", "ServiceRequest"]
