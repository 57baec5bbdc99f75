from __future__ import annotations

import json
from contextlib import asynccontextmanager
from pathlib import Path
from types import SimpleNamespace

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from salvato_collect.errors import RenderError
from salvato_collect.rendering import pdf as pdf_module


class FakePage:
    def __init__(self, *, fail_on_content: bool = False, images_settle: bool = True) -> None:
        self.fail_on_content = fail_on_content
        self.images_settle = images_settle
        self.html: str | None = None
        self.pdf_options: dict | None = None
        self.closed = False

    async def set_content(self, html, wait_until=None):
        if self.fail_on_content:
            raise PlaywrightError("Target page crashed")
        self.html = html

    async def wait_for_function(self, expression, timeout=None):
        if not self.images_settle:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded")

    async def pdf(self, path=None, **options):
        self.pdf_options = options
        Path(path).write_bytes(b"%PDF-1.4 fake")

    async def close(self):
        self.closed = True


class FakeBrowser:
    def __init__(self, page: FakePage) -> None:
        self.page = page
        self.closed = False

    async def new_page(self):
        return self.page

    async def close(self):
        self.closed = True


@pytest.fixture()
def fake_browser(monkeypatch):
    holder = SimpleNamespace(browser=FakeBrowser(FakePage()), launch_args=None)

    async def launch(headless=True, args=None):
        holder.launch_args = args
        return holder.browser

    @asynccontextmanager
    async def fake_async_playwright():
        yield SimpleNamespace(chromium=SimpleNamespace(launch=launch))

    monkeypatch.setattr(pdf_module, "async_playwright", fake_async_playwright)
    return holder


@pytest.mark.asyncio
async def test_rasterize_prints_a3_landscape(settings, tmp_path, fake_browser):
    output = await pdf_module.rasterize("<html></html>", tmp_path / "out" / "list.pdf", settings=settings)

    assert output.read_bytes().startswith(b"%PDF")
    options = fake_browser.browser.page.pdf_options
    assert options["format"] == "A3"
    assert options["landscape"] is True
    assert options["print_background"] is True
    assert options["margin"] == {"top": "1in", "right": "0.5in", "bottom": "1in", "left": "0.5in"}
    assert "totalPages" in options["footer_template"]
    assert "--no-sandbox" in fake_browser.launch_args
    assert fake_browser.browser.page.closed and fake_browser.browser.closed


@pytest.mark.asyncio
async def test_rasterize_continues_when_images_do_not_settle(settings, tmp_path, fake_browser):
    fake_browser.browser = FakeBrowser(FakePage(images_settle=False))

    output = await pdf_module.rasterize("<html></html>", tmp_path / "list.pdf", settings=settings)

    assert output.exists()


@pytest.mark.asyncio
async def test_rasterize_failure_raises_render_error(settings, tmp_path, fake_browser):
    fake_browser.browser = FakeBrowser(FakePage(fail_on_content=True))

    with pytest.raises(RenderError, match="Target page crashed"):
        await pdf_module.rasterize("<html></html>", tmp_path / "list.pdf", settings=settings)

    assert fake_browser.browser.page.closed
    assert fake_browser.browser.closed


@pytest.mark.asyncio
async def test_create_pdf_from_saved_json(settings, tmp_path, fake_browser):
    saved = tmp_path / "payload.json"
    saved.write_text(
        json.dumps(
            {
                "auctionId": 9,
                "data": [
                    {
                        "id": 77,
                        "make": "Nissan",
                        "model": "Altima",
                        "year": 2019,
                        "city": "Tulsa",
                        "state": "OK",
                        "odometerReading": 30500,
                        "startCode": "RUNS_AND_DRIVES",
                        "hasKeys": "YES",
                        "thumbnailUrl": None,
                    }
                ],
                "startDate": "2025-10-05",
                "endDate": "2025-10-06",
            }
        ),
        encoding="utf-8",
    )

    output = await pdf_module.create_auction_pdf_from_json(saved, settings=settings)

    assert output.parent == tmp_path
    assert output.name.startswith("auction_list_9_")
    html = fake_browser.browser.page.html
    assert "Altima" in html
    assert "30,500" in html
