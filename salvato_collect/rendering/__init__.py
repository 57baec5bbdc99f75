"""HTML rendering and PDF rasterisation of auction lists."""

from .document import load_template, render_html
from .pdf import create_auction_pdf, create_auction_pdf_from_json, rasterize

__all__ = [
    "create_auction_pdf",
    "create_auction_pdf_from_json",
    "load_template",
    "rasterize",
    "render_html",
]
