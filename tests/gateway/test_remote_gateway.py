from __future__ import annotations

import json

import pytest
import requests

from src.school_portal.school_portal.core.exceptions import ApplicationError, TransportError
from src.school_portal.school_portal.gateway.client import GatewayConfig, RemoteGateway


class FakeResponse:
    def __init__(self, body=None, *, status=200, text=None):
        self.status_code = status
        self._body = body
        self._text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if self._text is not None:
            return json.loads(self._text)
        return self._body


class FakeHttp:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []
        self.closed = False

    def _call(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error:
            raise self.error
        return self.response

    def post(self, url, **kwargs):
        return self._call("POST", url, **kwargs)

    def get(self, url, **kwargs):
        return self._call("GET", url, **kwargs)

    def close(self):
        self.closed = True


def _gateway(http, token=None, base_url="http://backend.test/api/"):
    return RemoteGateway(GatewayConfig(base_url=base_url, timeout=3), http=http, token_provider=lambda: token)


def test_post_sends_json_with_bearer_token():
    http = FakeHttp(FakeResponse({"error": False, "attData": []}))

    data = _gateway(http, token="tok").post("getAttendanceData.php", {"sessionId": "2024-25"})

    assert data == {"error": False, "attData": []}
    method, url, kwargs = http.calls[0]
    assert (method, url) == ("POST", "http://backend.test/api/getAttendanceData.php")
    assert kwargs["json"] == {"sessionId": "2024-25"}
    assert kwargs["headers"]["Authorization"] == "Bearer tok"
    assert kwargs["timeout"] == 3


def test_no_token_no_authorization_header():
    http = FakeHttp(FakeResponse({"error": False}))
    _gateway(http).get("getSessions.php")
    assert "Authorization" not in http.calls[0][2]["headers"]


def test_error_flag_is_an_application_error():
    http = FakeHttp(FakeResponse({"error": True, "message": "Invalid session"}))

    with pytest.raises(ApplicationError) as exc:
        _gateway(http).post("saveAttendanceData.php", {"attData": []})

    assert exc.value.message == "Invalid session"
    assert exc.value.endpoint == "saveAttendanceData.php"
    assert exc.value.retryable is True


def test_error_flag_without_message():
    http = FakeHttp(FakeResponse({"error": True}))
    with pytest.raises(ApplicationError) as exc:
        _gateway(http).post("x.php", {})
    assert exc.value.message == "Try again"


def test_network_failure_is_a_transport_error():
    http = FakeHttp(error=requests.ConnectionError("refused"))
    with pytest.raises(TransportError):
        _gateway(http).post("x.php", {})


def test_http_error_status_is_a_transport_error():
    http = FakeHttp(FakeResponse({"error": False}, status=502))
    with pytest.raises(TransportError):
        _gateway(http).post("x.php", {})


def test_malformed_body_is_a_transport_error():
    with pytest.raises(TransportError):
        _gateway(FakeHttp(FakeResponse(text="<html>oops</html>"))).post("x.php", {})
    with pytest.raises(TransportError):
        _gateway(FakeHttp(FakeResponse(["not", "an", "object"]))).post("x.php", {})


def test_missing_base_url_fails_without_request():
    http = FakeHttp(FakeResponse({"error": False}))
    with pytest.raises(TransportError):
        _gateway(http, base_url="").post("x.php", {})
    assert http.calls == []


def test_close_closes_http_session():
    http = FakeHttp()
    _gateway(http).close()
    assert http.closed is True
