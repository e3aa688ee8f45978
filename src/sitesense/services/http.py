"""
HTTP sessions for upstream calls.

Two flavors, both with a ``sitesense/<version>`` User-Agent and a default
timeout carried by the mounted adapter:

  - ``session``: the weather API client. Retries transient failures
    (connection errors, 429/502/503/504) with exponential backoff and hands
    the last response back so the caller can read its error body.
  - ``create_session(retry=NO_RETRY, timeout=...)``: one-shot lookups that
    must give up quickly, e.g. geolocation.
"""

from __future__ import annotations

from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from sitesense import __version__

USER_AGENT = f"sitesense/{__version__}"

DEFAULT_TIMEOUT = 15  # seconds

DEFAULT_RETRY = Retry(
    total=3,
    backoff_factor=1,
    status_forcelist=[429, 502, 503, 504],
    allowed_methods=["GET", "HEAD", "OPTIONS"],
    raise_on_status=False,
)

NO_RETRY = Retry(total=0, raise_on_status=False)


class TimeoutHTTPAdapter(HTTPAdapter):
    """HTTPAdapter that fills in a timeout when the request has none."""

    def __init__(self, *args: Any, timeout: float = DEFAULT_TIMEOUT, **kwargs: Any) -> None:
        self.timeout = timeout
        super().__init__(*args, **kwargs)

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        # Session.request passes timeout=None explicitly when unset
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout
        return super().send(request, **kwargs)


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Build a ``requests.Session`` for upstream calls.

    Args:
        retry: Retry strategy (defaults to ``DEFAULT_RETRY``).
        timeout: Timeout applied when a request does not set one.
    """
    adapter = TimeoutHTTPAdapter(
        max_retries=retry if retry is not None else DEFAULT_RETRY,
        timeout=timeout,
    )
    s = requests.Session()
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT
    return s


#: Retrying session for the weather API.
session: requests.Session = create_session()
