"""
Client implementation for the Instinct partner API.

This module defines the :class:`InstinctClient` class which
authenticates against the Instinct partner API using the OAuth2
client credentials grant and performs HTTP requests against its
resource endpoints.  The access token is fetched lazily before the
first request and reused for every request after that.

Usage
-----

.. code-block:: python

    from instinct_api_client import InstinctClient

    client = InstinctClient(client_id="abc123", client_secret="shhsecret")

    result = client.get_patients({"limit": 25})
    if result is None:
        print("Instinct API unreachable")
    elif result.success:
        for patient in result.items:
            print(patient["id"])
    else:
        print(result.http_status, result.message)

Every request method returns ``None`` when nothing could be learned
(credentials missing, authentication failed, network error or timeout)
and an :class:`~instinct_api_client.result.ApiResult` whenever the
server answered, whatever the status code.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional

import requests

from .config import DEFAULT_API_URL, DEFAULT_TIMEOUT, ClientConfig, load_config_from_env
from .exceptions import InstinctConfigError
from .resources import ResourceMethodsMixin
from .result import ApiResult
from .session import TokenSession
from .urls import build_url, merge_query

logger = logging.getLogger(__name__)

_METHODS = {"GET", "POST", "PUT", "PATCH", "DELETE"}
_BODY_METHODS = {"POST", "PUT", "PATCH"}


class InstinctClient(ResourceMethodsMixin):
    """A client for the Instinct veterinary partner API.

    Parameters
    ----------
    api_url : str, optional
        Base URL of the API.  Defaults to
        ``https://partner.instinctvet.com/v1/``.
    client_id : str, optional
        Your Instinct OAuth client identifier.
    client_secret : str, optional
        Your Instinct OAuth client secret.
    timeout : float, optional
        Timeout in seconds for the token exchange and every request.
        Defaults to 30 seconds.
    session : requests.Session, optional
        Transport to use.  A new session is created when omitted.
    config : ClientConfig, optional
        A complete configuration.  When given, the other settings
        arguments are ignored and the environment is not consulted.

    Notes
    -----
    When ``client_id`` or ``client_secret`` is not supplied (and no
    ``config`` is), the missing values are read from the environment
    as described in :func:`~instinct_api_client.config.load_config_from_env`.
    If that fails the client is still created, and every request
    returns ``None`` because it cannot authenticate.
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        timeout: Optional[float] = None,
        *,
        session: Optional[requests.Session] = None,
        config: Optional[ClientConfig] = None,
    ) -> None:
        if config is None:
            if client_id and client_secret:
                config = ClientConfig(
                    api_url=api_url or DEFAULT_API_URL,
                    client_id=client_id,
                    client_secret=client_secret,
                    timeout=DEFAULT_TIMEOUT if timeout is None else float(timeout),
                )
            else:
                config = self._config_from_env(
                    api_url=api_url,
                    client_id=client_id,
                    client_secret=client_secret,
                    timeout=timeout,
                )
        if config.timeout <= 0:
            raise ValueError("timeout must be positive, got %r" % config.timeout)

        self._config = config
        self._owns_http = session is None
        self._http = session or requests.Session()
        self._tokens = TokenSession(config, self._http)

    @classmethod
    def from_env(
        cls,
        dotenv_path: Optional[str] = None,
        *,
        session: Optional[requests.Session] = None,
        **overrides: Any,
    ) -> "InstinctClient":
        """Create a client configured from the environment and ``.env`` file.

        ``overrides`` accepts ``api_url``, ``client_id``,
        ``client_secret`` and ``timeout`` and wins over the environment.
        """
        config = cls._config_from_env(dotenv_path=dotenv_path, **overrides)
        return cls(session=session, config=config)

    @staticmethod
    def _config_from_env(dotenv_path: Optional[str] = None, **overrides: Any) -> ClientConfig:
        try:
            return load_config_from_env(dotenv_path, **overrides)
        except InstinctConfigError as exc:
            logger.error("InstinctClient: failed to load configuration from environment: %s", exc)
        timeout = overrides.get("timeout")
        return ClientConfig(
            api_url=overrides.get("api_url") or DEFAULT_API_URL,
            client_id=overrides.get("client_id") or None,
            client_secret=overrides.get("client_secret") or None,
            timeout=DEFAULT_TIMEOUT if timeout is None else float(timeout),
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def api_url(self) -> str:
        return self._config.api_url

    @property
    def access_token(self) -> Optional[str]:
        """The bearer token currently held, or ``None`` before authentication."""
        return self._tokens.token

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------
    def authenticate(self) -> bool:
        """Fetch a new access token now instead of waiting for the first request."""
        return self._tokens.authenticate()

    # ------------------------------------------------------------------
    # HTTP request helpers
    # ------------------------------------------------------------------
    def dispatch(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        body: Optional[Any] = None,
    ) -> Optional[ApiResult]:
        """Perform one request against the Instinct API.

        Parameters
        ----------
        method : str
            The HTTP verb: ``"GET"``, ``"POST"``, ``"PUT"``, ``"PATCH"``
            or ``"DELETE"``.
        path : str
            Endpoint path relative to the base URL, with any identifiers
            already substituted (e.g. ``"/patients/pat_123"``).
        params : dict, optional
            Query parameters, percent-encoded onto the URL.
        body : object, optional
            A JSON-serialisable payload, sent for POST, PUT and PATCH.

        Returns
        -------
        ApiResult or None
            ``None`` when authentication failed or the server could not
            be reached.  Otherwise the normalized response, including
            4xx and 5xx replies (``success`` is then ``False``).

        Raises
        ------
        ValueError
            If ``method`` is not one of the supported verbs.
        """
        verb = method.upper()
        if verb not in _METHODS:
            raise ValueError("Unsupported HTTP method %r" % method)

        token = self._tokens.ensure_token()
        if token is None:
            return None

        url = build_url(self._config.api_url, path, params)
        headers = {
            "Accept": "application/json",
            "Authorization": f"Bearer {token}",
        }

        logger.debug("%s %s", verb, url)
        try:
            # requests sets the JSON content type and refuses NaN/Infinity
            response = self._http.request(
                verb,
                url,
                json=body if verb in _BODY_METHODS else None,
                headers=headers,
                timeout=self._config.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("InstinctClient: %s %s failed: %s", verb, url, exc)
            return None
        except TypeError:
            logger.exception("InstinctClient: request body for %s %s is not JSON serialisable", verb, url)
            return None

        # A rejected token is dropped so the next call authenticates again
        if response.status_code == 401:
            self._tokens.invalidate(expected=token)

        return ApiResult.from_response(response)

    # ------------------------------------------------------------------
    # Public convenience methods
    # ------------------------------------------------------------------
    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Optional[ApiResult]:
        """Perform a GET request.

        See :meth:`dispatch` for full parameter documentation.
        """
        return self.dispatch("GET", path, params=params)

    def post(
        self,
        path: str,
        body: Optional[Any] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Optional[ApiResult]:
        """Perform a POST request.

        See :meth:`dispatch` for full parameter documentation.
        """
        return self.dispatch("POST", path, params=params, body=body)

    def put(
        self,
        path: str,
        body: Optional[Any] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Optional[ApiResult]:
        """Perform a PUT request.

        See :meth:`dispatch` for full parameter documentation.
        """
        return self.dispatch("PUT", path, params=params, body=body)

    def patch(
        self,
        path: str,
        body: Optional[Any] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Optional[ApiResult]:
        """Perform a PATCH request.

        See :meth:`dispatch` for full parameter documentation.
        """
        return self.dispatch("PATCH", path, params=params, body=body)

    def delete(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Optional[ApiResult]:
        """Perform a DELETE request.

        See :meth:`dispatch` for full parameter documentation.
        """
        return self.dispatch("DELETE", path, params=params)

    # ------------------------------------------------------------------
    # Pagination helpers
    # ------------------------------------------------------------------
    def iter_pages(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Iterator[ApiResult]:
        """Yield successive pages of a list endpoint.

        The first page is requested with ``params``; each following page
        repeats them with ``pageCursor`` set to the cursor of the page
        before.  Iteration stops after a page without a cursor, after an
        unsuccessful page (which is still yielded), or when the API
        cannot be reached.
        """
        query: Dict[str, Any] = dict(params or {})
        seen = set()
        while True:
            result = self.get(path, params=query)
            if result is None:
                return
            yield result
            cursor = result.page_cursor
            if not result.success or not cursor or cursor in seen:
                return
            seen.add(cursor)
            query = merge_query(query, {"pageCursor": cursor})

    def get_all(self, path: str, params: Optional[Mapping[str, Any]] = None) -> List[Any]:
        """Performs GET requests until no more pages, returning all records."""
        output: List[Any] = []
        for page in self.iter_pages(path, params=params):
            output.extend(page.items)
        return output

    # ------------------------------------------------------------------
    # Resource management
    # ------------------------------------------------------------------
    def close(self) -> None:
        """Close the underlying HTTP session if this client created it."""
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "InstinctClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"InstinctClient(api_url={self._config.api_url!r}, client_id={self._config.client_id!r})"
