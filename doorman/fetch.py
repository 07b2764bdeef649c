"""Key source: download an identity's published public keys over HTTP."""

from __future__ import annotations

from urllib.parse import quote

import requests

from doorman import __version__
from doorman.errors import FetchError

DEFAULT_KEYS_URL = "https://github.com/{identity}.keys"
DEFAULT_TIMEOUT = 30


def keys_url(identity: str, template: str = DEFAULT_KEYS_URL) -> str:
    """Expand *template*'s ``{identity}`` placeholder with the quoted identity."""
    return template.format(identity=quote(identity, safe=""))


def fetch_keys(
    identity: str,
    *,
    url_template: str = DEFAULT_KEYS_URL,
    timeout: float = DEFAULT_TIMEOUT,
) -> bytes:
    """Return the raw key blob published for *identity* (possibly empty).

    Raises FetchError on transport failure or any status other than 200.
    No retries.
    """
    url = keys_url(identity, url_template)
    headers = {"User-Agent": f"doorman/{__version__}"}
    try:
        response = requests.get(url, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        raise FetchError(str(exc)) from exc

    if response.status_code != 200:
        raise FetchError(f"failed to fetch keys: HTTP {response.status_code}")
    return response.content
