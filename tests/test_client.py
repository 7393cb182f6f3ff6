import pytest
import requests
import responses

from wxradar.nws.client import NWSClient, NWSError

URL = "http://nws.example.com/test"


@pytest.fixture
def mock():
    with responses.RequestsMock() as rsps:
        yield rsps


def test_get_sends_headers_and_decodes_body(mock):
    mock.add(responses.GET, URL, json={"ok": True})
    client = NWSClient()
    result = client.get(URL)
    assert result == {"ok": True}
    request = mock.calls[0].request
    assert request.headers["User-Agent"] == "wxradar/1.0"
    assert request.headers["Accept"] == "application/geo+json"


def test_get_http_error_with_detail(mock):
    mock.add(
        responses.GET,
        URL,
        status=503,
        json={"title": "Service Unavailable", "detail": "NWS is down", "status": 503},
    )
    with pytest.raises(NWSError) as info:
        NWSClient().get(URL)
    assert info.value.status == 503
    assert str(info.value) == "HTTP 503: NWS is down"


def test_get_404_without_body(mock):
    mock.add(responses.GET, URL, status=404, body=b"")
    with pytest.raises(NWSError) as info:
        NWSClient().get(URL)
    assert info.value.status == 404
    assert str(info.value) == "HTTP 404"


def test_get_error_with_non_json_body(mock):
    mock.add(responses.GET, URL, status=500, body=b"<html>oops</html>")
    with pytest.raises(NWSError) as info:
        NWSClient().get(URL)
    assert str(info.value) == "HTTP 500"


def test_get_undecodable_body(mock):
    mock.add(responses.GET, URL, status=200, body=b"not json")
    with pytest.raises(NWSError) as info:
        NWSClient().get(URL)
    assert str(info.value).startswith("decode:")


def test_get_transport_failure(mock):
    mock.add(responses.GET, URL, body=requests.ConnectionError("refused"))
    with pytest.raises(NWSError) as info:
        NWSClient().get(URL)
    assert info.value.status is None
    assert str(info.value).startswith("request:")