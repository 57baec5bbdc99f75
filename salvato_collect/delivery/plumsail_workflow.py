"""Forward auction payloads to a Plumsail workflow process."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Sequence, cast

import httpx

from salvato_collect.config import Settings, get_settings
from salvato_collect.delivery.base import DeliveryStrategy
from salvato_collect.errors import ConfigMissing, DownstreamApiError
from salvato_collect.logging import get_logger
from salvato_collect.models import AuctionPayload, RunSummary


class PlumsailDelivery(DeliveryStrategy):
    """POST every payload to the configured ``processes/.../start`` endpoint.

    All-or-nothing: the first failing call fails the batch and cancels the calls
    still in flight.
    """

    name = "workflow"

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._client = client
        self._logger = get_logger(__name__).bind(component="plumsail_delivery")

    def check_ready(self) -> None:
        if not self.settings.plumsail_api_url:
            raise ConfigMissing("PLUMSAIL_API_URL environment variable is not set")

    @asynccontextmanager
    async def _http(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=httpx.Timeout(self.settings.plumsail_timeout_seconds)) as client:
            yield client

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.settings.plumsail_api_key:
            headers["Authorization"] = f"Bearer {self.settings.plumsail_api_key}"
        return headers

    async def start_process(self, client: httpx.AsyncClient, payload: AuctionPayload) -> Any:
        self.check_ready()
        url = cast(str, self.settings.plumsail_api_url)
        try:
            response = await client.post(url, json=payload.to_workflow_body(), headers=self._headers())
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._logger.warning(
                "workflow_start_failed",
                auction_id=payload.auction_id,
                status_code=exc.response.status_code,
            )
            raise DownstreamApiError(exc.response.status_code) from exc
        except httpx.TransportError as exc:
            raise DownstreamApiError(detail=exc.__class__.__name__) from exc

        self._logger.info("workflow_started", auction_id=payload.auction_id, vehicles=len(payload.lots))
        return response.json() if response.content else None

    async def deliver(self, payloads: Sequence[AuctionPayload]) -> RunSummary:
        self.check_ready()
        async with self._http() as client:
            tasks = [asyncio.create_task(self.start_process(client, payload)) for payload in payloads]
            try:
                responses = await asyncio.gather(*tasks)
            except BaseException:
                # Calls still in flight must not start workflows for a failed batch.
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise
        return RunSummary(workflow_responses=list(responses))
