"""Exception hierarchy for the auction-list pipeline."""

from __future__ import annotations


class SalvatoCollectError(Exception):
    """Base class for every failure the pipeline reports to its caller."""


class _StatusError(SalvatoCollectError):
    """Error carrying an optional HTTP status from a remote API."""

    prefix = "Request failed"

    def __init__(self, status: int | None = None, detail: str | None = None) -> None:
        self.status = status
        self.detail = detail
        if status is not None:
            message = f"{self.prefix}: {status}"
        else:
            message = self.prefix
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class UpstreamAuthError(_StatusError):
    """Token exchange with the Salvato API did not succeed."""

    prefix = "Salvato auth failed"


class UpstreamApiError(_StatusError):
    """A Salvato listing request did not succeed."""

    prefix = "Salvato API failed"


class DownstreamApiError(_StatusError):
    """The Plumsail workflow endpoint rejected a payload."""

    prefix = "Plumsail API failed"


class PaginationInvariantViolation(SalvatoCollectError):
    """Lot pagination did not converge on the reported total."""


class TemplateNotFound(SalvatoCollectError):
    """The HTML template file does not exist."""


class TemplateMarkerNotFound(SalvatoCollectError):
    """The template lacks the table body that rows are injected into."""


class RenderError(SalvatoCollectError):
    """The headless browser failed to produce a PDF."""


class StorageUploadError(SalvatoCollectError):
    """Uploading a PDF or creating its shared link failed."""


class ConfigMissing(SalvatoCollectError):
    """A setting required by the selected delivery strategy is unset."""
