"""
Custom exception types for the Instinct API client.

The public request methods never raise these for expected failures:
authentication and transport problems resolve to ``None`` and error
responses resolve to an unsuccessful :class:`~.result.ApiResult`.
They exist so the internals, and callers who opt in through
:meth:`ApiResult.raise_for_status`, can tell failures apart.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .result import ApiResult


class InstinctError(Exception):
    """Base exception for all Instinct client errors."""


class InstinctAuthError(InstinctError):
    """Raised when the client-credentials token exchange fails."""


class InstinctConfigError(InstinctError):
    """Raised when client configuration cannot be loaded from the environment."""


class InstinctAPIError(InstinctError):
    """Raised by :meth:`ApiResult.raise_for_status` for a non-2xx response."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        result: Optional["ApiResult"] = None,
        detail: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.result = result
        self.detail = detail
