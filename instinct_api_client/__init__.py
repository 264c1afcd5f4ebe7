"""
Python client for interacting with the Instinct veterinary partner API.

This package provides an `InstinctClient` class that handles OAuth2
client‑credentials authentication against the Instinct partner API
and makes authenticated requests to its resource endpoints.

The access token is requested the first time a call needs one and
reused for the lifetime of the client.  A ``401`` response discards it
so that the following call authenticates again.

Examples
--------

```python
from instinct_api_client import InstinctClient

# Credentials can be passed explicitly or read from INSTINCT_CLIENT_ID
# and INSTINCT_CLIENT_SECRET (a .env file is honoured).
client = InstinctClient(
    client_id="YOUR_CLIENT_ID",
    client_secret="YOUR_CLIENT_SECRET",
)

visits = client.get_visits("2024-12-13")
if visits is not None and visits.success:
    for visit in visits.items:
        print(visit["id"])

# Any endpoint can be reached through the generic verbs
account = client.get("/accounts/acc_123456789")
```

Every call returns ``None`` when the API could not be reached or the
client could not authenticate, and an `ApiResult` otherwise.
"""

from .client import InstinctClient
from .config import DEFAULT_API_URL, ClientConfig, load_config_from_env
from .endpoints import ENDPOINTS, EndpointDescriptor
from .exceptions import InstinctAPIError, InstinctAuthError, InstinctConfigError, InstinctError
from .result import ApiResult, JSONValue
from .urls import build_url, merge_query

__all__ = [
    "InstinctClient",
    "ApiResult",
    "JSONValue",
    "ClientConfig",
    "DEFAULT_API_URL",
    "load_config_from_env",
    "EndpointDescriptor",
    "ENDPOINTS",
    "build_url",
    "merge_query",
    "InstinctError",
    "InstinctAuthError",
    "InstinctAPIError",
    "InstinctConfigError",
]
