"""Headless-Chromium rasterisation of the rendered auction list."""

from __future__ import annotations

import asyncio
import json
from datetime import datetime, timezone
from pathlib import Path

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from salvato_collect.config import Settings, get_settings
from salvato_collect.errors import RenderError
from salvato_collect.logging import get_logger
from salvato_collect.models import AuctionPayload
from salvato_collect.rendering.document import load_template, render_html

_LOGGER = get_logger(__name__).bind(component="pdf_renderer")

PLAYWRIGHT_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
]

PDF_OPTIONS = {
    "format": "A3",
    "landscape": True,
    "margin": {"top": "1in", "right": "0.5in", "bottom": "1in", "left": "0.5in"},
    "print_background": True,
    "display_header_footer": True,
    "header_template": (
        '<div style="font-size: 12px; text-align: center; width: 100%; color: #333; font-weight: bold;">'
        "SALVATO AUCTIONS - AUCTION LIST"
        "</div>"
    ),
    "footer_template": (
        '<div style="font-size: 10px; text-align: center; width: 100%; color: #666;">'
        'Page <span class="pageNumber"></span> of <span class="totalPages"></span>'
        "</div>"
    ),
}

_IMAGES_SETTLED = "() => Array.from(document.images).every((img) => img.complete)"


def default_output_path(payload: AuctionPayload, *, settings: Settings | None = None) -> Path:
    settings = settings or get_settings()
    stamp = datetime.now(timezone.utc).isoformat().replace(":", "-").replace(".", "-").replace("+", "-")
    suffix = f"_{payload.auction_id}" if payload.auction_id is not None else ""
    return Path(settings.output_dir) / f"auction_list{suffix}_{stamp}.pdf"


async def _print_pdf(html: str, output_path: Path, settings: Settings) -> None:
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=True, args=PLAYWRIGHT_ARGS)
        try:
            page = await browser.new_page()
            try:
                await page.set_content(html, wait_until="load")
                try:
                    await page.wait_for_function(
                        _IMAGES_SETTLED,
                        timeout=settings.render_settle_timeout_seconds * 1000,
                    )
                except PlaywrightTimeoutError:
                    _LOGGER.warning(
                        "images_not_settled",
                        timeout_seconds=settings.render_settle_timeout_seconds,
                    )
                await page.pdf(path=str(output_path), **PDF_OPTIONS)
            finally:
                await page.close()
        finally:
            await browser.close()


async def rasterize(html: str, output_path: str | Path, *, settings: Settings | None = None) -> Path:
    """Print ``html`` to an A3 landscape PDF at ``output_path``."""

    settings = settings or get_settings()
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    try:
        await asyncio.wait_for(
            _print_pdf(html, output, settings),
            timeout=settings.render_timeout_seconds,
        )
    except asyncio.TimeoutError as exc:
        raise RenderError(
            f"PDF rendering timed out after {settings.render_timeout_seconds}s"
        ) from exc
    except PlaywrightError as exc:
        raise RenderError(f"PDF rendering failed: {exc}") from exc
    _LOGGER.info("pdf_rendered", path=str(output))
    return output


async def create_auction_pdf(
    payload: AuctionPayload,
    output_path: str | Path | None = None,
    template_path: str | Path | None = None,
    *,
    settings: Settings | None = None,
) -> Path:
    """Load the template, render the payload into it and print the PDF."""

    settings = settings or get_settings()
    template = load_template(template_path or settings.template_path)
    html = render_html(template, payload, settings=settings)
    output = Path(output_path) if output_path else default_output_path(payload, settings=settings)
    return await rasterize(html, output, settings=settings)


async def create_auction_pdf_from_json(
    json_path: str | Path,
    output_path: str | Path | None = None,
    template_path: str | Path | None = None,
    *,
    settings: Settings | None = None,
) -> Path:
    """Render a PDF from an ``AuctionPayload`` previously saved as JSON."""

    raw = json.loads(Path(json_path).read_text(encoding="utf-8"))
    payload = AuctionPayload.from_json(raw)
    return await create_auction_pdf(payload, output_path, template_path, settings=settings)
