"""Auction list pipeline orchestration."""

from __future__ import annotations

from typing import Callable, Sequence

from salvato_collect.api.salvato_client import SalvatoClient
from salvato_collect.config import Settings, get_settings
from salvato_collect.delivery import DeliveryStrategy, build_delivery
from salvato_collect.logging import get_logger
from salvato_collect.models import Auction, AuctionPayload, Lot, RunSummary
from salvato_collect.pipelines.transform import project_lots


class AuctionListPipeline:
    """Glue the Salvato client, the transformer and a delivery strategy together.

    One ``run`` is one request: authenticate, list auctions, fetch lots for the
    eligible ones in order, project them, then hand every payload to the delivery
    strategy. Nothing is retried and any failure propagates to the caller.
    """

    def __init__(
        self,
        *,
        client: SalvatoClient,
        delivery: DeliveryStrategy,
        settings: Settings | None = None,
        projector: Callable[[Sequence[Lot], int | str | None], AuctionPayload] = project_lots,
    ) -> None:
        self.client = client
        self.delivery = delivery
        self.settings = settings or get_settings()
        self.projector = projector
        self._logger = get_logger(__name__).bind(component="auction_list_pipeline")

    def is_eligible(self, auction: Auction) -> bool:
        status = auction.get("status")
        if status == "COMING_SOON":
            return True
        if status == "IN_PROGRESS":
            return self.settings.include_in_progress
        return False

    async def collect_payloads(self) -> list[AuctionPayload]:
        """Fetch and project lots for every eligible auction."""

        payloads: list[AuctionPayload] = []
        async with self.client.lifecycle():
            token = await self.client.get_token()
            auctions = await self.client.list_auctions(token)
            for auction in auctions:
                auction_id = auction.get("auctionId")
                if not self.is_eligible(auction):
                    self._logger.info(
                        "auction_skipped",
                        auction_id=auction_id,
                        status=auction.get("status"),
                    )
                    continue
                lots = await self.client.list_lots(auction_id, token)
                payloads.append(self.projector(lots, auction_id))
        self._logger.info("payloads_collected", count=len(payloads))
        return payloads

    async def run(self) -> RunSummary:
        self.delivery.check_ready()
        payloads = await self.collect_payloads()
        summary = await self.delivery.deliver(payloads)
        self._logger.info(
            "pipeline_completed",
            strategy=self.delivery.name,
            uploads=len(summary.uploads),
            workflow_calls=len(summary.workflow_responses),
        )
        return summary


def build_pipeline(settings: Settings | None = None) -> AuctionListPipeline:
    """Wire a pipeline from settings with the configured delivery strategy."""

    settings = settings or get_settings()
    return AuctionListPipeline(
        client=SalvatoClient(settings=settings),
        delivery=build_delivery(settings),
        settings=settings,
    )


__all__ = ["AuctionListPipeline", "build_pipeline"]
