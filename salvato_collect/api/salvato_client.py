"""Client for the Salvato auction API."""

from __future__ import annotations

import math
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Mapping, MutableMapping, cast

import httpx

from salvato_collect.config import Settings, get_settings
from salvato_collect.errors import (
    PaginationInvariantViolation,
    UpstreamApiError,
    UpstreamAuthError,
)
from salvato_collect.logging import get_logger
from salvato_collect.models import Auction, AuctionListResponse, AuthToken, Lot, LotPageResponse

_LOGGER = get_logger(__name__).bind(component="salvato_client")


@dataclass
class ServiceRequest:
    """Description of a request to send to the Salvato API."""

    method: str
    path: str
    params: Mapping[str, Any] | None = None
    json: Any | None = None
    token: str | None = None


class SalvatoClient:
    """Thin wrapper around httpx for the Salvato auction API.

    Tokens are passed per call and never stored on the client, so every invocation
    authenticates afresh.
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._client = client
        self._default_headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        self._logger = _LOGGER

    @property
    def base_url(self) -> str:
        return self.settings.salvato_base_url

    @property
    def page_size(self) -> int:
        return self.settings.salvato_page_size

    @asynccontextmanager
    async def lifecycle(self) -> AsyncIterator["SalvatoClient"]:
        """Ensure an AsyncClient is available for the duration of the context."""

        if self._client is not None:
            yield self
            return

        timeout = httpx.Timeout(self.settings.salvato_timeout_seconds)
        async with httpx.AsyncClient(timeout=timeout) as client:
            self._client = client
            try:
                yield self
            finally:
                self._client = None

    async def request(self, request: ServiceRequest) -> httpx.Response:
        """Perform a raw request against the API."""

        if self._client is None:
            raise RuntimeError("SalvatoClient.lifecycle must be entered before requesting")

        url = f"{self.base_url}/{request.path.lstrip('/')}"
        headers: MutableMapping[str, str] = dict(self._default_headers)
        if request.token:
            headers["Authorization"] = f"Bearer {request.token}"

        self._logger.debug(
            "salvato_request",
            method=request.method,
            url=url,
            params=dict(request.params or {}),
        )

        return await self._client.request(
            request.method,
            url,
            params=request.params,
            json=request.json,
            headers=headers,
        )

    async def request_json(
        self,
        request: ServiceRequest,
        *,
        error_cls: type[UpstreamApiError] | type[UpstreamAuthError] = UpstreamApiError,
    ) -> Any:
        """Perform a request and return the JSON body, mapping failures onto ``error_cls``."""

        try:
            response = await self.request(request)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._logger.warning(
                "salvato_request_failed",
                status_code=exc.response.status_code,
                url=str(exc.request.url),
            )
            raise error_cls(exc.response.status_code) from exc
        except httpx.TransportError as exc:
            self._logger.warning(
                "salvato_transport_failed",
                error_type=exc.__class__.__name__,
                path=request.path,
            )
            raise error_cls(detail=exc.__class__.__name__) from exc
        return response.json()

    async def get_token(self) -> AuthToken:
        """Exchange the configured client id/secret for a bearer token."""

        body = {
            "clientId": self.settings.salvato_client_id,
            "clientSecret": self.settings.salvato_client_secret,
        }
        data = await self.request_json(
            ServiceRequest(method="POST", path="/auth/token", json=body),
            error_cls=UpstreamAuthError,
        )
        token = AuthToken(token=data["token"], expires_in=data.get("expiresIn"))
        self._logger.info("auth_token_fetched", expires_in=token.expires_in)
        return token

    async def list_auctions(self, token: AuthToken | str) -> list[Auction]:
        data = cast(
            AuctionListResponse,
            await self.request_json(
                ServiceRequest(method="GET", path="/auctions", token=_bearer(token))
            ),
        )
        auctions = list(data.get("data") or [])
        self._logger.info("auctions_listed", count=len(auctions))
        return auctions

    async def list_lots(self, auction_id: int | str, token: AuthToken | str) -> list[Lot]:
        """Fetch every lot of one auction using offset/limit pagination.

        Stops once the collected count reaches the server-reported total. The number
        of page fetches is capped at ``ceil(total / page_size) + 1`` using the total
        from the first page; going past it raises ``PaginationInvariantViolation``.
        """

        limit = self.page_size
        offset = 0
        lots: list[Lot] = []
        max_pages: int | None = None
        pages = 0

        while True:
            if max_pages is not None and pages >= max_pages:
                raise PaginationInvariantViolation(
                    f"Lot pagination for auction {auction_id} did not converge after "
                    f"{pages} pages ({len(lots)} lots collected)"
                )

            page = cast(
                LotPageResponse,
                await self.request_json(
                    ServiceRequest(
                        method="GET",
                        path=f"/auctions/{auction_id}/lots",
                        params={"offset": offset, "limit": limit},
                        token=_bearer(token),
                    )
                ),
            )
            pages += 1
            records = page.get("data") or []
            lots.extend(records)
            total = int((page.get("pagination") or {}).get("total", 0))
            if max_pages is None:
                max_pages = math.ceil(total / limit) + 1

            self._logger.debug(
                "lots_page_fetched",
                auction_id=auction_id,
                offset=offset,
                received=len(records),
                collected=len(lots),
                total=total,
            )

            if len(lots) >= total:
                break
            offset += limit

        self._logger.info("lots_listed", auction_id=auction_id, count=len(lots), pages=pages)
        return lots


def _bearer(token: AuthToken | str) -> str:
    return token.token if isinstance(token, AuthToken) else token
