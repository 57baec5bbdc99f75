"""Entry-point for running one auction-list pipeline invocation from the shell."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from salvato_collect.config import get_settings
from salvato_collect.logging import configure_logging, get_logger
from salvato_collect.pipelines import build_pipeline


async def main(args: argparse.Namespace) -> int:
    settings = get_settings()
    overrides = {}
    if args.strategy:
        overrides["delivery_strategy"] = args.strategy
    if args.skip_in_progress:
        overrides["include_in_progress"] = False
    if overrides:
        settings = settings.model_copy(update=overrides)
    configure_logging(settings.log_level)

    pipeline = build_pipeline(settings)
    try:
        summary = await pipeline.run()
    except Exception as exc:
        get_logger(__name__).error("pipeline_failed", error_type=exc.__class__.__name__, error=str(exc))
        print(json.dumps({"success": False, "error": str(exc)}))
        return 1

    print(json.dumps(summary.to_response(pipeline.delivery.name), indent=2))
    return 0


if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="Build Salvato auction lists and deliver them once")
    ap.add_argument("--strategy", choices=["storage", "workflow"], help="Override DELIVERY_STRATEGY")
    ap.add_argument("--skip-in-progress", action="store_true", help="Only process COMING_SOON auctions")
    sys.exit(asyncio.run(main(ap.parse_args())))
