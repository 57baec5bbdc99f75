"""Render auction PDFs and publish them through Dropbox shared links."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Awaitable, Callable, Sequence

import dropbox
from dropbox.exceptions import ApiError, DropboxException
from dropbox.files import WriteMode
from dropbox.sharing import RequestedVisibility, SharedLinkSettings

from salvato_collect.config import Settings, get_settings
from salvato_collect.delivery.base import DeliveryStrategy
from salvato_collect.errors import ConfigMissing, StorageUploadError
from salvato_collect.logging import get_logger
from salvato_collect.models import AuctionPayload, RunSummary, UploadResult
from salvato_collect.rendering.pdf import create_auction_pdf

Renderer = Callable[..., Awaitable[Path]]


def direct_download_url(shared_link: str) -> str:
    """Turn a ``www.dropbox.com`` shared link into a direct-download URL."""

    url = shared_link.replace("www.dropbox.com", "dl.dropboxusercontent.com")
    url = url.replace("?dl=0&", "?").replace("&dl=0", "").replace("?dl=0", "")
    return url


class DropboxDelivery(DeliveryStrategy):
    """Render one PDF per auction, upload it and return shared links.

    Auctions are processed concurrently up to ``render_concurrency``. Every auction
    runs to completion even if another fails, so finished uploads are kept; the run
    as a whole still fails with the first error.
    """

    name = "storage"

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        client: dropbox.Dropbox | None = None,
        renderer: Renderer = create_auction_pdf,
    ) -> None:
        self.settings = settings or get_settings()
        self._client = client
        self._renderer = renderer
        self._logger = get_logger(__name__).bind(component="dropbox_delivery")

    @property
    def folder(self) -> str:
        return self.settings.dropbox_folder.rstrip("/")

    def check_ready(self) -> None:
        if self._client is None and not self.settings.dropbox_access_token:
            raise ConfigMissing("DROPBOX_ACCESS_TOKEN environment variable is not set")

    def _dropbox(self) -> dropbox.Dropbox:
        if self._client is None:
            self.check_ready()
            self._client = dropbox.Dropbox(
                oauth2_access_token=self.settings.dropbox_access_token,
                timeout=self.settings.upload_timeout_seconds,
            )
        return self._client

    async def deliver(self, payloads: Sequence[AuctionPayload]) -> RunSummary:
        self.check_ready()
        semaphore = asyncio.Semaphore(self.settings.render_concurrency)

        async def _deliver_one(payload: AuctionPayload) -> UploadResult:
            async with semaphore:
                pdf_path = await self._renderer(payload, settings=self.settings)
                return await self.upload(pdf_path)

        results = await asyncio.gather(
            *(_deliver_one(payload) for payload in payloads),
            return_exceptions=True,
        )

        uploads: list[UploadResult] = []
        first_error: BaseException | None = None
        for payload, result in zip(payloads, results):
            if isinstance(result, BaseException):
                self._logger.error(
                    "auction_delivery_failed",
                    auction_id=payload.auction_id,
                    error_type=result.__class__.__name__,
                    error=str(result),
                )
                first_error = first_error or result
            else:
                uploads.append(result)

        if first_error is not None:
            raise first_error
        return RunSummary(uploads=uploads)

    async def upload(self, pdf_path: str | Path) -> UploadResult:
        """Upload a local PDF, then delete the local copy."""

        local_path = Path(pdf_path)
        dropbox_path = f"{self.folder}/{local_path.name}"
        try:
            result = await asyncio.wait_for(
                asyncio.to_thread(self._upload_sync, local_path, dropbox_path),
                timeout=self.settings.upload_timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise StorageUploadError(
                f"Dropbox upload timed out after {self.settings.upload_timeout_seconds}s: {dropbox_path}"
            ) from exc
        except (DropboxException, OSError) as exc:
            raise StorageUploadError(f"Dropbox upload failed for {dropbox_path}: {exc}") from exc

        self._logger.info("pdf_uploaded", path=result.path, name=result.name)
        self._cleanup(local_path)
        return result

    def _upload_sync(self, local_path: Path, dropbox_path: str) -> UploadResult:
        client = self._dropbox()
        metadata = client.files_upload(
            local_path.read_bytes(),
            dropbox_path,
            mode=WriteMode.overwrite,
            autorename=False,
            mute=False,
        )
        shared_link = self._shared_link(client, dropbox_path)
        return UploadResult(
            name=metadata.name,
            path=metadata.path_display or dropbox_path,
            shared_link=direct_download_url(shared_link),
        )

    def _shared_link(self, client: dropbox.Dropbox, dropbox_path: str) -> str:
        try:
            link = client.sharing_create_shared_link_with_settings(
                dropbox_path,
                settings=SharedLinkSettings(requested_visibility=RequestedVisibility.public),
            )
            return link.url
        except ApiError as exc:
            if not exc.error.is_shared_link_already_exists():
                raise
        existing = client.sharing_list_shared_links(path=dropbox_path, direct_only=True)
        if not existing.links:
            raise StorageUploadError(f"Failed to get shared link for {dropbox_path}")
        self._logger.debug("shared_link_reused", path=dropbox_path)
        return existing.links[0].url

    def _cleanup(self, local_path: Path) -> None:
        try:
            local_path.unlink()
        except OSError as exc:
            self._logger.warning("pdf_cleanup_failed", path=str(local_path), error=str(exc))
