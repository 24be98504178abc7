"""Error taxonomy shared by adapters, domain services and the CLI."""

from __future__ import annotations


class ThemeSyncError(RuntimeError):
    """Base class for failures raised by themesync."""

    kind = "sync_error"


class AuthError(ThemeSyncError):
    """Credential grant, refresh or revoke failed."""

    kind = "auth_error"


class ParseError(ThemeSyncError, ValueError):
    """A classification identifier could not be parsed."""

    kind = "parse_error"


class UpstreamError(ThemeSyncError):
    """An upstream call failed; ``status_code`` is set for HTTP-level failures."""

    kind = "upstream_error"

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UpstreamFetchError(UpstreamError):
    kind = "upstream_fetch_error"


class UpstreamWriteError(UpstreamError):
    kind = "upstream_write_error"


class SyncError(ThemeSyncError):
    """An orchestration precondition was not met (nothing to map, patch or reconcile)."""
