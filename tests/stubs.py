"""Shared test doubles for the Salvato API."""

from __future__ import annotations

import re
from types import SimpleNamespace
from typing import Any

import httpx
from dropbox.exceptions import ApiError


def make_lot(index: int, *, auction_id: int = 1, **overrides: Any) -> dict[str, Any]:
    lot: dict[str, Any] = {
        "id": 1000 + index,
        "lotUrl": f"https://salvatoauctions.com/vehicle-details/{1000 + index}",
        "auctionId": auction_id,
        "status": "COMING_SOON",
        "startDate": f"2025-10-0{1 + index % 9}T15:00:00Z",
        "endDate": f"2025-10-1{1 + index % 9}T15:00:00Z",
        "state": "TX",
        "city": "Houston",
        "vin": f"1HGCM82633A00{index:04d}",
        "year": 2018,
        "make": "Honda",
        "model": "Accord",
        "odometerReading": 45210 + index,
        "startCode": "RUNS_AND_DRIVES",
        "hasKeys": "YES",
        "lotImagesDetails": {
            "imgCount": 1,
            "lotImages": [
                {
                    "sequence": 1,
                    "category": "EXTERIOR",
                    "link": [
                        {"url": f"https://img.test/{1000 + index}.jpg", "isThumbNail": True, "isHdImage": False}
                    ],
                }
            ],
        },
    }
    lot.update(overrides)
    return lot


class StubSalvato:
    """In-memory Salvato API served through ``httpx.MockTransport``."""

    def __init__(
        self,
        auctions: list[dict[str, Any]],
        lots_by_auction: dict[int, list[dict[str, Any]]] | None = None,
        *,
        token_status: int = 200,
        total_override: int | None = None,
    ) -> None:
        self.auctions = auctions
        self.lots_by_auction = lots_by_auction or {}
        self.token_status = token_status
        self.total_override = total_override
        self.calls: list[tuple[str, str, dict[str, str]]] = []

    def lot_calls(self, auction_id: int | None = None) -> list[tuple[str, str, dict[str, str]]]:
        suffix = f"/auctions/{auction_id}/lots" if auction_id is not None else "/lots"
        return [call for call in self.calls if call[1].endswith(suffix)]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.calls.append((request.method, path, dict(request.url.params)))

        if path == "/auth/token":
            if self.token_status != 200:
                return httpx.Response(self.token_status, json={"message": "invalid client"})
            return httpx.Response(200, json={"token": "tok-123", "expiresIn": 3600})

        if request.headers.get("authorization") != "Bearer tok-123":
            return httpx.Response(401, json={"message": "missing bearer"})

        if path == "/auctions":
            return httpx.Response(
                200,
                json={
                    "data": self.auctions,
                    "pagination": {"limit": 50, "offset": 0, "total": len(self.auctions)},
                },
            )

        match = re.fullmatch(r"/auctions/(\d+)/lots", path)
        if match:
            lots = self.lots_by_auction.get(int(match.group(1)), [])
            offset = int(request.url.params["offset"])
            limit = int(request.url.params["limit"])
            total = self.total_override if self.total_override is not None else len(lots)
            return httpx.Response(
                200,
                json={
                    "data": lots[offset : offset + limit],
                    "pagination": {"limit": limit, "offset": offset, "total": total},
                },
            )

        return httpx.Response(404, json={"message": "not found"})


class FakeDropbox:
    """Stands in for ``dropbox.Dropbox`` and records uploads."""

    def __init__(self, *, link_exists: bool = False, existing_links: list[str] | None = None) -> None:
        self.link_exists = link_exists
        self.existing_links = existing_links if existing_links is not None else []
        self.uploads: dict[str, bytes] = {}
        self.modes: list[object] = []

    def files_upload(self, data, path, mode=None, autorename=False, mute=False):
        self.uploads[path] = data
        self.modes.append(mode)
        return SimpleNamespace(name=path.rsplit("/", 1)[-1], path_display=path)

    def sharing_create_shared_link_with_settings(self, path, settings=None):
        if self.link_exists:
            error = SimpleNamespace(is_shared_link_already_exists=lambda: True)
            raise ApiError("req-1", error, None, None)
        name = path.rsplit("/", 1)[-1]
        return SimpleNamespace(url=f"https://www.dropbox.com/scl/fi/x1/{name}?rlkey=k1&dl=0")

    def sharing_list_shared_links(self, path=None, direct_only=None):
        return SimpleNamespace(links=[SimpleNamespace(url=url) for url in self.existing_links])
