"""Render an auction-list PDF from a saved payload JSON file.

The file uses the ``AuctionPayload.to_json`` shape:
``{"data": [...], "startDate": "...", "endDate": "..."}``.
"""

from __future__ import annotations

import argparse
import asyncio

from salvato_collect.config import get_settings
from salvato_collect.logging import configure_logging
from salvato_collect.rendering import create_auction_pdf_from_json


def main() -> None:
    ap = argparse.ArgumentParser(description="Render an auction list PDF from payload JSON")
    ap.add_argument("json_path", help="Path to the payload JSON")
    ap.add_argument("--output", help="PDF output path (defaults to OUTPUT_DIR)")
    ap.add_argument("--template", help="Override the HTML template path")
    args = ap.parse_args()

    settings = get_settings()
    configure_logging(settings.log_level)
    pdf_path = asyncio.run(
        create_auction_pdf_from_json(args.json_path, args.output, args.template, settings=settings)
    )
    print(pdf_path)


if __name__ == "__main__":
    main()
