"""
The uniform response envelope returned by every request method.

A request method returns either ``None`` (nothing could be learned:
authentication failed or the transport broke) or an :class:`ApiResult`
describing whatever the server replied, error statuses included.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

import requests

from .exceptions import InstinctAPIError

JSONValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


@dataclass(frozen=True)
class ApiResult:
    """Normalized outcome of one completed HTTP exchange.

    Attributes
    ----------
    http_status : int
        Status code returned by the server.
    data : JSONValue
        Parsed JSON body, or ``None`` when the body was empty or not
        valid JSON.
    raw_body : str
        The literal response text.
    success : bool
        ``True`` iff ``200 <= http_status < 300``.  Always derived from
        the status, never passed in.
    """

    http_status: int
    data: JSONValue = None
    raw_body: str = ""
    success: bool = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "success", is_success(self.http_status))

    @classmethod
    def from_response(cls, response: requests.Response) -> "ApiResult":
        """Build a result from a completed :class:`requests.Response`."""
        text = response.text
        data: JSONValue = None
        if text.strip():
            try:
                data = response.json()
            except ValueError:
                data = None
        return cls(http_status=response.status_code, data=data, raw_body=text)

    # ------------------------------------------------------------------
    # Body helpers
    # ------------------------------------------------------------------
    @property
    def message(self) -> Optional[str]:
        """The upstream ``message`` field, if the body carries one."""
        if isinstance(self.data, dict):
            message = self.data.get("message")
            if message is not None:
                return str(message)
        return None

    @property
    def items(self) -> List[Any]:
        """Records of a list response (the nested ``data`` array)."""
        if isinstance(self.data, dict):
            records = self.data.get("data")
            if isinstance(records, list):
                return records
        return []

    @property
    def page_cursor(self) -> Optional[str]:
        """Cursor for the next page of a list response, if any."""
        if isinstance(self.data, dict):
            cursor = self.data.get("pageCursor")
            if cursor:
                return str(cursor)
        return None

    def raise_for_status(self) -> "ApiResult":
        """Raise :class:`InstinctAPIError` unless the call succeeded.

        Returns ``self`` so the call can be chained.
        """
        if not self.success:
            detail = self.message or self.raw_body
            raise InstinctAPIError(
                f"Instinct API returned status {self.http_status}: {detail}",
                status_code=self.http_status,
                result=self,
                detail=self.data,
            )
        return self
