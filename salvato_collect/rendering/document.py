"""Server-side rendering of auction rows into the HTML template."""

from __future__ import annotations

import re
from numbers import Real
from pathlib import Path

from jinja2 import Environment
from markupsafe import escape

from salvato_collect.config import DEFAULT_TEMPLATE_PATH, Settings, get_settings
from salvato_collect.errors import TemplateMarkerNotFound, TemplateNotFound
from salvato_collect.models import AuctionPayload, FormattedLot

START_CODE_MAX_LENGTH = 20
START_CODE_KEEP = 17

_TBODY_OPEN = re.compile(r"""<tbody\b[^>]*\bid=["']auction-table-body["'][^>]*>""", re.IGNORECASE)
_TBODY_CLOSE = re.compile(r"</tbody\s*>", re.IGNORECASE)
# Inline (no src) script directly before </body>: the in-browser preview populator.
_TRAILING_INLINE_SCRIPT = re.compile(
    r"<script(?![^>]*\bsrc=)[^>]*>(?:(?!<script).)*?</script>\s*(?=</body>)",
    re.IGNORECASE | re.DOTALL,
)

_ROWS_TEMPLATE = """
{%- for row in rows %}
            <tr class="avoid-break{% if not loop.last %} border-b border-black{% endif %}">
                <td class="border-r border-black p-3 col-image"><img src="{{ row.image_url }}" alt="{{ row.lot.make }} {{ row.lot.model }}" class="max-w-full max-h-20 object-cover"></td>
                <td class="border-r border-black p-3 text-blue-600 hover:text-blue-800 underline col-stock"><a href="{{ lot_url_base }}/{{ row.lot.id }}" target="_blank" rel="noopener noreferrer">{{ row.lot.id }}</a></td>
                <td class="border-r border-black p-3 col-year">{{ row.lot.year }}</td>
                <td class="border-r border-black p-3 col-make">{{ row.lot.make }}</td>
                <td class="border-r border-black p-3 col-model">{{ row.lot.model }}</td>
                <td class="border-r border-black p-3 col-mileage">{{ row.mileage }}</td>
                <td class="border-r border-black p-3 col-city">{{ row.lot.city }}</td>
                <td class="border-r border-black p-3 col-state">{{ row.lot.state }}</td>
                <td class="border-r border-black p-3 col-keys">{{ row.has_keys }}</td>
                <td class="border-r border-black p-3 col-start-code">{{ row.start_code }}</td>
            </tr>
{%- endfor %}
"""

_env = Environment(autoescape=True, finalize=lambda value: "" if value is None else value)
_rows_template = _env.from_string(_ROWS_TEMPLATE)


def load_template(template_path: str | Path | None = None) -> str:
    """Read the HTML template, defaulting to the one shipped with the package."""

    path = Path(template_path) if template_path else DEFAULT_TEMPLATE_PATH
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise TemplateNotFound(f"Template not found: {path}") from exc


def format_odometer(value: object) -> str:
    if isinstance(value, bool) or not isinstance(value, Real):
        return "N/A"
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{float(value):,.3f}".rstrip("0").rstrip(".")


def format_start_code(value: str | None) -> str:
    if not value:
        return ""
    if len(value) > START_CODE_MAX_LENGTH:
        return f"{value[:START_CODE_KEEP]}..."
    return value


def format_has_keys(value: str | None) -> str:
    return "Yes" if value == "YES" else "No"


def render_rows(lots: list[FormattedLot], *, settings: Settings | None = None) -> str:
    settings = settings or get_settings()
    rows = [
        {
            "lot": lot,
            "image_url": lot.thumbnail_url or settings.placeholder_image_url,
            "mileage": format_odometer(lot.odometer_reading),
            "has_keys": format_has_keys(lot.has_keys),
            "start_code": format_start_code(lot.start_code),
        }
        for lot in lots
    ]
    return _rows_template.render(rows=rows, lot_url_base=settings.lot_url_base.rstrip("/"))


def _fill_span(html: str, element_id: str, text: str) -> str:
    pattern = re.compile(
        rf"""(<span\b[^>]*\bid=["']{element_id}["'][^>]*>).*?(</span>)""",
        re.IGNORECASE | re.DOTALL,
    )
    return pattern.sub(lambda m: f"{m.group(1)}{escape(text)}{m.group(2)}", html, count=1)


def render_html(
    template_html: str,
    payload: AuctionPayload,
    *,
    settings: Settings | None = None,
) -> str:
    """Inject one table row per lot into ``<tbody id="auction-table-body">``.

    Raises ``TemplateMarkerNotFound`` when the table body (or its closing tag) is
    missing; the template string is never modified in that case.
    """

    open_match = _TBODY_OPEN.search(template_html)
    if open_match is None:
        raise TemplateMarkerNotFound('Could not find <tbody id="auction-table-body"> in template.')
    close_match = _TBODY_CLOSE.search(template_html, open_match.end())
    if close_match is None:
        raise TemplateMarkerNotFound("Could not find closing </tbody> in template.")

    rows_html = render_rows(payload.lots, settings=settings)
    rendered = (
        template_html[: open_match.end()]
        + f"\n{rows_html}\n"
        + template_html[close_match.start() :]
    )

    rendered = _TRAILING_INLINE_SCRIPT.sub("", rendered, count=1)
    rendered = _fill_span(rendered, "auction-start-date", payload.start_date)
    rendered = _fill_span(rendered, "auction-end-date", payload.end_date)
    return rendered
