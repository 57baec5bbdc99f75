"""Projection of raw Salvato lots into presentation payloads."""

from __future__ import annotations

from typing import Sequence

from salvato_collect.models import AuctionPayload, FormattedLot, Lot


def first_thumbnail_url(lot: Lot) -> str | None:
    """First URL of the first image link, or ``None`` when the lot has no images."""

    images = (lot.get("lotImagesDetails") or {}).get("lotImages") or []
    if not images:
        return None
    links = images[0].get("link") or []
    if not links:
        return None
    return links[0].get("url") or None


def format_lot(lot: Lot) -> FormattedLot:
    return FormattedLot(
        id=lot.get("id"),
        make=lot.get("make"),
        model=lot.get("model"),
        year=lot.get("year"),
        city=lot.get("city"),
        state=lot.get("state"),
        odometer_reading=lot.get("odometerReading"),
        start_code=lot.get("startCode"),
        has_keys=lot.get("hasKeys"),
        thumbnail_url=first_thumbnail_url(lot),
    )


def project_lots(lots: Sequence[Lot], auction_id: int | str | None = None) -> AuctionPayload:
    """Build the payload for one auction.

    The first lot's start and end dates stand in for the auction's; an empty lot
    list yields empty date strings.
    """

    formatted = [format_lot(lot) for lot in lots]
    first = lots[0] if lots else None
    return AuctionPayload(
        lots=formatted,
        start_date=(first.get("startDate") or "") if first else "",
        end_date=(first.get("endDate") or "") if first else "",
        auction_id=auction_id,
    )
