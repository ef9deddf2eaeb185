import httpx
import pytest

from registry_client import (
    DecodeError, NetworkError, RegistryClient, RegistryError, parse_link_header,
)


def make_client(handler, base_url="http://registry.test", **kwargs):
    return RegistryClient(base_url, transport=httpx.MockTransport(handler), **kwargs)


def test_fetch_catalog():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={"repositories": ["alpine", "nginx", "redis"]})

    with make_client(handler) as client:
        assert client.fetch_catalog() == ["alpine", "nginx", "redis"]
    assert str(requests[0].url) == "http://registry.test/v2/_catalog"


def test_fetch_tags_uses_repository_path():
    def handler(request):
        assert request.url.path == "/v2/library/nginx/tags/list"
        return httpx.Response(200, json={"name": "library/nginx", "tags": ["1.25", "latest"]})

    with make_client(handler, base_url="http://registry.test/") as client:
        assert client.fetch_tags("library/nginx") == ["1.25", "latest"]


def test_null_tags_is_empty_list():
    def handler(request):
        return httpx.Response(200, json={"name": "gone", "tags": None})

    with make_client(handler) as client:
        assert client.fetch_tags("gone") == []


def test_catalog_follows_link_pagination():
    pages = {
        None: (["a", "b"], '</v2/_catalog?last=b&n=2>; rel="next"'),
        "b": (["c"], None),
    }

    def handler(request):
        repos, link = pages[request.url.params.get("last")]
        headers = {"Link": link} if link else {}
        return httpx.Response(200, json={"repositories": repos}, headers=headers)

    with make_client(handler) as client:
        assert client.fetch_catalog() == ["a", "b", "c"]


def test_pagination_stops_at_max_pages():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"repositories": ["x"]},
                              headers={"Link": '</v2/_catalog?n=1>; rel="next"'})

    with make_client(handler, max_pages=3) as client:
        assert client.fetch_catalog() == ["x", "x", "x"]
    assert len(calls) == 3


def test_connection_failure_is_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with make_client(handler) as client:
        with pytest.raises(NetworkError) as info:
            client.fetch_catalog()
    assert "connection refused" in str(info.value)
    assert isinstance(info.value, RegistryError)


def test_error_status_is_network_error():
    def handler(request):
        return httpx.Response(404, json={"errors": [{"code": "NAME_UNKNOWN"}]})

    with make_client(handler) as client:
        with pytest.raises(NetworkError, match="404"):
            client.fetch_tags("missing")


@pytest.mark.parametrize("kwargs", [
    {"content": b"<html>not json</html>"},
    {"json": ["alpine"]},
    {"json": {"repos": ["alpine"]}},
    {"json": {"repositories": ["alpine", 3]}},
    {"json": {"repositories": None}},
])
def test_unexpected_body_is_decode_error(kwargs):
    def handler(request):
        return httpx.Response(200, **kwargs)

    with make_client(handler) as client:
        with pytest.raises(DecodeError):
            client.fetch_catalog()


@pytest.mark.parametrize("base_url", [
    "http://[bad",
    "localhost:5000",
    "http://",
    "ftp://x",
    "http://exa mple.com",
    "http://host:99999",
])
def test_malformed_address_is_network_error(base_url):
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    with make_client(handler, base_url=base_url) as client:
        with pytest.raises(NetworkError):
            client.fetch_catalog()


def test_missing_address_is_reported_not_requested():
    def handler(request):
        raise AssertionError("no request expected")

    with make_client(handler, base_url="") as client:
        with pytest.raises(NetworkError, match="ADDR"):
            client.fetch_catalog()


def test_parse_link_header():
    links = parse_link_header('</v2/_catalog?last=b&n=2>; rel="next", </v2/_catalog>; rel="first"')
    assert links == {"next": "/v2/_catalog?last=b&n=2", "first": "/v2/_catalog"}
    assert parse_link_header("") == {}
