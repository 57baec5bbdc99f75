"""Salvato API shapes and the presentation records derived from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Literal, TypedDict

AuctionStatus = Literal["COMING_SOON", "IN_PROGRESS", "COMPLETED", "CANCELLED"]


class Pagination(TypedDict):
    limit: int
    offset: int
    total: int


class LotImageLink(TypedDict, total=False):
    url: str
    isThumbNail: bool
    isHdImage: bool


class LotImage(TypedDict, total=False):
    sequence: int
    category: str
    link: List[LotImageLink]


class LotImagesDetails(TypedDict, total=False):
    imgCount: int
    lotImages: List[LotImage]


class Lot(TypedDict, total=False):
    """One vehicle listing as returned by ``GET /auctions/{id}/lots``.

    Only the fields read by the pipeline are declared; the upstream record carries
    many more (title brands, damage, drivetrain, pricing) which pass through untouched.
    """

    id: int
    lotUrl: str
    auctionId: int
    status: AuctionStatus
    startDate: str
    endDate: str
    state: str
    city: str
    vin: str
    year: int
    make: str
    model: str
    odometerReading: int | float | None
    startCode: str | None
    hasKeys: str
    lotImagesDetails: LotImagesDetails


class Auction(TypedDict, total=False):
    auctionId: int
    name: str
    status: AuctionStatus
    createdAt: str
    updatedAt: str


class AuctionListResponse(TypedDict, total=False):
    data: List[Auction]
    pagination: Pagination


class LotPageResponse(TypedDict):
    data: List[Lot]
    pagination: Pagination


@dataclass(slots=True)
class AuthToken:
    """Bearer token from ``POST /auth/token``."""

    token: str
    expires_in: int | None = None


@dataclass(slots=True)
class FormattedLot:
    """Projection of a lot used to render one table row."""

    id: int | str | None
    make: str | None
    model: str | None
    year: int | None
    city: str | None
    state: str | None
    odometer_reading: int | float | None
    start_code: str | None
    has_keys: str | None
    thumbnail_url: str | None

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "make": self.make,
            "model": self.model,
            "year": self.year,
            "city": self.city,
            "state": self.state,
            "odometerReading": self.odometer_reading,
            "startCode": self.start_code,
            "hasKeys": self.has_keys,
            "thumbnailUrl": self.thumbnail_url,
        }

    @classmethod
    def from_json(cls, raw: dict[str, Any]) -> "FormattedLot":
        return cls(
            id=raw.get("id"),
            make=raw.get("make"),
            model=raw.get("model"),
            year=raw.get("year"),
            city=raw.get("city"),
            state=raw.get("state"),
            odometer_reading=raw.get("odometerReading"),
            start_code=raw.get("startCode"),
            has_keys=raw.get("hasKeys"),
            thumbnail_url=raw.get("thumbnailUrl"),
        )


@dataclass(slots=True)
class AuctionPayload:
    """Presentation-ready data for one auction."""

    lots: list[FormattedLot] = field(default_factory=list)
    start_date: str = ""
    end_date: str = ""
    auction_id: int | str | None = None

    def to_json(self) -> dict[str, Any]:
        """Serialise in the shape saved to disk and read back by ``from_json``."""

        return {
            "auctionId": self.auction_id,
            "data": [lot.to_json() for lot in self.lots],
            "startDate": self.start_date,
            "endDate": self.end_date,
        }

    def to_workflow_body(self) -> dict[str, Any]:
        """Body for the Plumsail ``start`` endpoint."""

        return {
            "vehicle": [lot.to_json() for lot in self.lots],
            "auctionStartDate": self.start_date,
            "auctionEndDate": self.end_date,
        }

    @classmethod
    def from_json(cls, raw: dict[str, Any]) -> "AuctionPayload":
        return cls(
            lots=[FormattedLot.from_json(item) for item in raw.get("data") or []],
            start_date=raw.get("startDate") or "",
            end_date=raw.get("endDate") or "",
            auction_id=raw.get("auctionId"),
        )


@dataclass(slots=True)
class UploadResult:
    """A PDF stored in Dropbox with its direct-download link."""

    name: str
    path: str
    shared_link: str


@dataclass(slots=True)
class RunSummary:
    """What one pipeline invocation delivered."""

    uploads: list[UploadResult] = field(default_factory=list)
    workflow_responses: list[Any] = field(default_factory=list)

    def to_response(self, strategy: str) -> dict[str, Any]:
        if strategy == "workflow":
            return {"success": True, "data": self.workflow_responses}
        return {
            "success": True,
            "pdfCount": len(self.uploads),
            "pdfs": [
                {"name": upload.name, "path": upload.path, "downloadUrl": upload.shared_link}
                for upload in self.uploads
            ],
        }
