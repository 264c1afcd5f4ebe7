"""
Client configuration for the Instinct partner API.

:class:`ClientConfig` is the immutable bundle of settings a client is
built from.  :func:`load_config_from_env` fills one in from process
environment variables, optionally seeded from a ``.env`` file via
``python-dotenv``.

Recognised variables
--------------------
``INSTINCT_CLIENT_ID``
    OAuth client identifier.
``INSTINCT_CLIENT_SECRET``
    OAuth client secret.
``INSTINCT_API_URL``
    Base API URL.  Defaults to :data:`DEFAULT_API_URL`.
``INSTINCT_TIMEOUT``
    Request timeout in seconds.  Defaults to :data:`DEFAULT_TIMEOUT`.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import find_dotenv, load_dotenv

from .exceptions import InstinctConfigError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://partner.instinctvet.com/v1/"
DEFAULT_TIMEOUT = 30.0

ENV_CLIENT_ID = "INSTINCT_CLIENT_ID"
ENV_CLIENT_SECRET = "INSTINCT_CLIENT_SECRET"
ENV_API_URL = "INSTINCT_API_URL"
ENV_TIMEOUT = "INSTINCT_TIMEOUT"


@dataclass(frozen=True)
class ClientConfig:
    """Settings for one :class:`~.client.InstinctClient`.

    Parameters
    ----------
    api_url : str
        Base URL of the partner API, including the ``/v1/`` prefix.
    client_id : str, optional
        OAuth client identifier.
    client_secret : str, optional
        OAuth client secret.
    timeout : float
        Timeout in seconds applied to the token exchange and to every
        API request.
    """

    api_url: str = DEFAULT_API_URL
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    @property
    def has_credentials(self) -> bool:
        return bool(self.client_id) and bool(self.client_secret)

    def __repr__(self) -> str:
        # Keep the secret out of logs and tracebacks
        secret = "***" if self.client_secret else None
        return (
            f"ClientConfig(api_url={self.api_url!r}, client_id={self.client_id!r}, "
            f"client_secret={secret!r}, timeout={self.timeout!r})"
        )


def _parse_timeout(raw: str) -> float:
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise InstinctConfigError(f"{ENV_TIMEOUT} must be a number, got {raw!r}") from exc
    if timeout <= 0:
        raise InstinctConfigError(f"{ENV_TIMEOUT} must be positive, got {raw!r}")
    return timeout


def load_config_from_env(
    dotenv_path: Optional[Union[str, Path]] = None,
    *,
    api_url: Optional[str] = None,
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
    timeout: Optional[float] = None,
) -> ClientConfig:
    """Build a :class:`ClientConfig` from the environment.

    A ``.env`` file is loaded first (``dotenv_path`` if given, otherwise
    the nearest one found from the current working directory).  Values
    already present in the process environment are not overwritten.
    Keyword arguments that are not ``None`` take precedence over the
    environment.

    Raises
    ------
    InstinctConfigError
        If the dotenv file cannot be read or ``INSTINCT_TIMEOUT`` is not
        a positive number.
    """
    if dotenv_path is not None and not Path(dotenv_path).is_file():
        raise InstinctConfigError(f"dotenv file {dotenv_path} does not exist or is not a file")
    path = str(dotenv_path) if dotenv_path is not None else find_dotenv(usecwd=True)
    if path:
        try:
            load_dotenv(path, override=False)
        except OSError as exc:
            raise InstinctConfigError(f"Failed to read dotenv file {path}: {exc}") from exc
        logger.debug("Loaded environment from %s", path)

    if timeout is None:
        raw_timeout = os.getenv(ENV_TIMEOUT)
        timeout = _parse_timeout(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT

    return ClientConfig(
        api_url=api_url or os.getenv(ENV_API_URL) or DEFAULT_API_URL,
        client_id=client_id or os.getenv(ENV_CLIENT_ID) or None,
        client_secret=client_secret or os.getenv(ENV_CLIENT_SECRET) or None,
        timeout=float(timeout),
    )
