"""HTTP entry point serving the auction list endpoint."""

from __future__ import annotations

from typing import Callable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from salvato_collect.config import Settings, get_settings
from salvato_collect.logging import configure_logging, get_logger
from salvato_collect.pipelines import AuctionListPipeline, build_pipeline

AUCTION_LIST_PATH = "/api/salvato_auction_list"

PipelineFactory = Callable[[Settings], AuctionListPipeline]

logger = get_logger(__name__).bind(component="server")


def create_app(
    settings: Settings | None = None,
    pipeline_factory: PipelineFactory = build_pipeline,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Salvato Auction Lists", version="0.1.0")
    app.state.settings = settings
    app.state.pipeline_factory = pipeline_factory

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "environment": settings.environment}

    @app.api_route(AUCTION_LIST_PATH, methods=["GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"])
    async def salvato_auction_list(request: Request) -> JSONResponse:
        """Build and deliver auction lists for every open auction."""

        if request.method != "GET":
            return JSONResponse({"error": "Method not allowed"}, status_code=405)

        pipeline = request.app.state.pipeline_factory(request.app.state.settings)
        try:
            summary = await pipeline.run()
        except Exception as exc:
            logger.error(
                "pipeline_failed",
                error_type=exc.__class__.__name__,
                error=str(exc),
                exc_info=True,
            )
            return JSONResponse(
                {"success": False, "error": str(exc) or "Unknown error"},
                status_code=500,
            )

        return JSONResponse(summary.to_response(pipeline.delivery.name))

    return app


app = create_app()
