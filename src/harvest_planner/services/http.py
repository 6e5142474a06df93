"""
Shared HTTP session factory with automatic retry and backoff.

Builds ``requests.Session`` objects that retry on transient
server errors (429/502/503/504) with exponential backoff.  Datasource modules
build their session here instead of calling bare ``requests.get``.

Usage::

    from harvest_planner.services.http import create_session

    session = create_session()
    resp = session.get("https://api.example.com/v1/data")
    resp.raise_for_status()
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

USER_AGENT = "harvest-planner/0.1"

#: Default retry strategy.
DEFAULT_RETRY = Retry(
    total=4,
    backoff_factor=2,  # 0s, 2s, 4s, 8s between retries
    status_forcelist=[429, 502, 503, 504],
    allowed_methods=["GET", "HEAD", "OPTIONS"],
    raise_on_status=False,  # let resp.raise_for_status() handle it
)

#: Weather fetches sit on the discovery request path. A read timeout is
#: reported as missing data for that region instead of being retried here.
NO_TIMEOUT_RETRY = Retry(
    total=2,
    read=0,
    backoff_factor=0.5,
    status_forcelist=[429, 502, 503, 504],
    allowed_methods=["GET"],
    raise_on_status=False,
)

DEFAULT_TIMEOUT = 30  # seconds


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Build a ``requests.Session`` with retry adapter mounted.

    Args:
        retry: Custom retry strategy (defaults to ``DEFAULT_RETRY``).
        timeout: Default timeout applied to every request.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or DEFAULT_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT

    # Inject a default timeout so callers don't need to pass ``timeout=``
    # every time.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s
