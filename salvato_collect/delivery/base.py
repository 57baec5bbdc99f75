"""Delivery strategy interface."""

from __future__ import annotations

from typing import Sequence

from salvato_collect.models import AuctionPayload, RunSummary


class DeliveryStrategy:
    """Makes auction payloads available downstream."""

    name: str = ""

    def check_ready(self) -> None:
        """Raise ``ConfigMissing`` if required settings are absent."""

    async def deliver(self, payloads: Sequence[AuctionPayload]) -> RunSummary:  # pragma: no cover - interface only
        raise NotImplementedError
