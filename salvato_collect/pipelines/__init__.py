"""Pipeline orchestration for Salvato Collect."""

from .auction_list_pipeline import AuctionListPipeline, build_pipeline
from .transform import first_thumbnail_url, format_lot, project_lots

__all__ = [
	"AuctionListPipeline",
	"build_pipeline",
	"first_thumbnail_url",
	"format_lot",
	"project_lots",
]
