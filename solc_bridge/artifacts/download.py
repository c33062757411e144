"""HTTP access to the remote compiler catalog."""

import urllib.error
import urllib.request
from typing import Callable, Optional

from solc_bridge.env import get_solc_download_timeout

HttpGet = Callable[[str], bytes]
"""Fetch the body of a URL. Raises ``OSError`` on transport failure or non-2xx status."""

_USER_AGENT = "solc-bridge/0.1"


def http_get(url: str, timeout: Optional[float] = None) -> bytes:
    """Download ``url`` and return its body.

    Parameters
    ----------
    url : str
        The URL to fetch.
    timeout : Optional[float]
        Socket timeout in seconds. Defaults to ``SOLC_DOWNLOAD_TIMEOUT``.

    Raises
    ------
    urllib.error.HTTPError
        If the server answers with a non-2xx status.
    OSError
        On any other transport failure (``URLError`` is a subclass).
    """
    if timeout is None:
        timeout = get_solc_download_timeout()
    request = urllib.request.Request(url, headers={"User-Agent": _USER_AGENT})
    with urllib.request.urlopen(request, timeout=timeout) as response:
        status = response.status
        if not 200 <= status < 300:
            raise urllib.error.HTTPError(url, status, f"HTTP {status}", response.headers, None)
        return response.read()
