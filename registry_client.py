"""
Real HTTP Registry Client

Blocking Docker Registry API v2 client: the catalog and a repository's tags.

Endpoints: GET {ADDR}/v2/_catalog and GET {ADDR}/v2/{name}/tags/list, with
Link rel="next" pagination followed. Transport failures, error statuses and
malformed addresses raise NetworkError; unexpected bodies raise DecodeError.
"""

import re
from typing import Any, Dict, List
from urllib.parse import urljoin

import httpx

from debug_log import DebugLogger, null_logger


USER_AGENT = "Registry-Browser/0.1.0"


class RegistryError(Exception):
    """Base class for failures talking to the registry"""


class NetworkError(RegistryError):
    """Registry could not be reached or answered with an error status"""


class DecodeError(RegistryError):
    """Response body is not the expected JSON shape"""


def parse_link_header(link_header: str) -> Dict[str, str]:
    """Parse Link header to extract pagination URLs"""
    links = {}
    if link_header:
        # Parse: <url>; rel="next", <url2>; rel="prev"
        for url, rel in re.findall(r'<([^>]+)>;\s*rel="([^"]+)"', link_header):
            links[rel] = url
    return links


def _string_list(payload: Any, key: str, url: str, allow_null: bool = False) -> List[str]:
    """Pull a list of strings out of a decoded JSON object"""
    if not isinstance(payload, dict):
        raise DecodeError(f"{url}: expected a JSON object, got {type(payload).__name__}")
    if key not in payload:
        raise DecodeError(f"{url}: response has no '{key}' field")
    values = payload[key]
    if values is None and allow_null:
        return []
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise DecodeError(f"{url}: '{key}' is not a list of strings")
    return values


class RegistryClient:
    """HTTP client for the catalog and tag list endpoints"""

    def __init__(self, base_url: str, timeout: float = 30, transport: httpx.BaseTransport = None,
                 debug_logger: DebugLogger = None, max_pages: int = 50):
        self.base_url = (base_url or "").rstrip('/')
        self.timeout = timeout
        self.max_pages = max_pages
        self.debug_logger = debug_logger or null_logger
        self.session = httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
            headers={"User-Agent": USER_AGENT},
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self.session.close()

    def _join(self, base: str, reference: str) -> str:
        """urljoin that reports malformed addresses as NetworkError"""
        try:
            return urljoin(base, reference)
        except ValueError as e:
            raise NetworkError(f"invalid registry address {self.base_url!r}: {e}") from e

    def _get_json(self, url: str) -> httpx.Response:
        """GET one URL, mapping transport failures and error statuses to NetworkError"""
        self.debug_logger.debug("Request URL", url=url)
        try:
            response = self.session.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self.debug_logger.error("Request failed", url=url, error=repr(e))
            raise NetworkError(f"{url}: {e}") from e

        self.debug_logger.debug("Raw Response", status_code=response.status_code, body=response.text)
        if not response.is_success:
            raise NetworkError(f"{url}: HTTP {response.status_code} {response.reason_phrase}")
        return response

    def _decode(self, response: httpx.Response, url: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"{url}: response is not JSON ({e})") from e

    def _fetch_list(self, endpoint: str, key: str, allow_null: bool = False) -> List[str]:
        """Fetch a list field, following Link rel="next" pagination"""
        if not self.base_url:
            raise NetworkError("registry address is not configured (set ADDR or pass --addr)")

        url = self._join(self.base_url + '/', endpoint.lstrip('/'))
        collected: List[str] = []
        for _ in range(self.max_pages):
            response = self._get_json(url)
            collected.extend(_string_list(self._decode(response, url), key, url, allow_null))

            next_url = parse_link_header(response.headers.get('link', '')).get('next')
            if not next_url:
                break
            url = self._join(url, next_url)
        else:
            self.debug_logger.warning("Pagination limit reached", max_pages=self.max_pages, url=url)
        return collected

    def fetch_catalog(self) -> List[str]:
        """Repository names (GET /v2/_catalog)"""
        return self._fetch_list('/v2/_catalog', 'repositories')

    def fetch_tags(self, repository: str) -> List[str]:
        """Tag names for one repository (GET /v2/{name}/tags/list)"""
        # A repository whose tags were all deleted reports "tags": null
        return self._fetch_list(f'/v2/{repository}/tags/list', 'tags', allow_null=True)

