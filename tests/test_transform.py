from __future__ import annotations

from salvato_collect.pipelines.transform import first_thumbnail_url, project_lots

from .stubs import make_lot


def test_project_empty_lot_list() -> None:
    payload = project_lots([])

    assert payload.lots == []
    assert payload.start_date == ""
    assert payload.end_date == ""


def test_project_takes_dates_from_first_lot() -> None:
    lots = [
        make_lot(0, startDate="2025-11-01T10:00:00Z", endDate="2025-11-03T10:00:00Z"),
        make_lot(1, startDate="2025-12-01T10:00:00Z", endDate="2025-12-03T10:00:00Z"),
    ]

    payload = project_lots(lots, 42)

    assert payload.start_date == "2025-11-01T10:00:00Z"
    assert payload.end_date == "2025-11-03T10:00:00Z"
    assert payload.auction_id == 42
    assert [lot.id for lot in payload.lots] == [1000, 1001]


def test_project_maps_fields() -> None:
    lot = project_lots([make_lot(3, odometerReading=None, startCode="WILL_NOT_START", hasKeys="NO")]).lots[0]

    assert lot.make == "Honda"
    assert lot.model == "Accord"
    assert lot.year == 2018
    assert lot.city == "Houston"
    assert lot.state == "TX"
    assert lot.odometer_reading is None
    assert lot.start_code == "WILL_NOT_START"
    assert lot.has_keys == "NO"
    assert lot.thumbnail_url == "https://img.test/1003.jpg"


def test_thumbnail_missing_images_does_not_raise() -> None:
    assert first_thumbnail_url(make_lot(0, lotImagesDetails={"imgCount": 0, "lotImages": []})) is None
    assert first_thumbnail_url(make_lot(0, lotImagesDetails={"lotImages": [{"sequence": 1, "link": []}]})) is None
    lot = make_lot(0)
    del lot["lotImagesDetails"]
    assert first_thumbnail_url(lot) is None


def test_workflow_body_uses_camel_case_keys() -> None:
    body = project_lots([make_lot(0)]).to_workflow_body()

    assert set(body) == {"vehicle", "auctionStartDate", "auctionEndDate"}
    assert body["vehicle"][0]["thumbnailUrl"] == "https://img.test/1000.jpg"
    assert body["vehicle"][0]["odometerReading"] == 45210
