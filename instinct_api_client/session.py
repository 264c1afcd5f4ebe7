"""
Access-token handling for the Instinct partner API.

:class:`TokenSession` performs the OAuth2 client-credentials exchange
against ``{api_url}/auth/token`` and holds the resulting bearer token
for the lifetime of the owning client.  The token has no tracked
expiry; it is acquired lazily the first time a request needs one and
kept until :meth:`TokenSession.invalidate` is called.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Optional

import requests

from .config import ClientConfig
from .exceptions import InstinctAuthError
from .urls import build_url

logger = logging.getLogger(__name__)

TOKEN_PATH = "auth/token"


class TokenSession:
    """Owns the credentials and the current access token of one client.

    Parameters
    ----------
    config : ClientConfig
        Supplies the base URL, the credentials and the timeout.
    http : requests.Session
        Transport used for the token exchange.

    Notes
    -----
    Every read and write of the token happens under one lock, and the
    check-then-authenticate step in :meth:`ensure_token` holds it too,
    so threads sharing a client trigger a single exchange.
    """

    def __init__(self, config: ClientConfig, http: requests.Session) -> None:
        self._config = config
        self._http = http
        self._access_token: Optional[str] = None
        self._lock = threading.RLock()

    @property
    def token_url(self) -> str:
        return build_url(self._config.api_url, TOKEN_PATH)

    @property
    def token(self) -> Optional[str]:
        with self._lock:
            return self._access_token

    @property
    def has_token(self) -> bool:
        return self.token is not None

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------
    def _fetch_token(self) -> str:
        """POST the client credentials and return the issued token.

        Raises :class:`InstinctAuthError` on a transport failure, a
        status other than 200, or a body without an ``access_token``.
        """
        payload = {
            "client_id": self._config.client_id,
            "client_secret": self._config.client_secret,
            "grant_type": "client_credentials",
        }
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/x-www-form-urlencoded",
        }
        try:
            response = self._http.post(
                self.token_url,
                data=payload,
                headers=headers,
                timeout=self._config.timeout,
            )
        except requests.RequestException as exc:
            raise InstinctAuthError(f"Failed to connect to auth server: {exc}") from exc

        if response.status_code != 200:
            raise InstinctAuthError(
                f"Authentication failed with status {response.status_code}: {response.text}"
            )

        try:
            token_info: Any = response.json()
        except ValueError as exc:
            raise InstinctAuthError("Authentication response was not valid JSON") from exc

        access_token = token_info.get("access_token") if isinstance(token_info, dict) else None
        if not access_token or not isinstance(access_token, str):
            raise InstinctAuthError("Authentication response did not contain an access_token")
        return access_token

    def authenticate(self) -> bool:
        """Exchange the client credentials for a new access token.

        Returns ``True`` and stores the token on success.  On any
        failure the previously held token, if any, is left in place and
        ``False`` is returned.  Missing credentials fail without a
        network call.
        """
        if not self._config.has_credentials:
            logger.error("Missing Instinct client credentials; cannot authenticate")
            return False

        with self._lock:
            try:
                token = self._fetch_token()
            except InstinctAuthError as exc:
                logger.error("Instinct authentication failed: %s", exc)
                return False
            self._access_token = token
        logger.info("Acquired Instinct access token from %s", self.token_url)
        return True

    def ensure_token(self) -> Optional[str]:
        """Return the held token, authenticating first if there is none.

        ``None`` means authentication failed.  The value returned is the
        one checked under the lock, so callers should send it rather than
        read :attr:`token` again.
        """
        with self._lock:
            if self._access_token is None:
                self.authenticate()
            return self._access_token

    def invalidate(self, expected: Optional[str] = None) -> None:
        """Forget the held token so the next request re-authenticates.

        When ``expected`` is given the token is only cleared if it is
        still the one held, so a rejection of an old token does not
        discard a newer one acquired meanwhile by another thread.
        """
        with self._lock:
            if self._access_token is None:
                return
            if expected is not None and self._access_token != expected:
                return
            self._access_token = None
        logger.info("Discarded Instinct access token")
