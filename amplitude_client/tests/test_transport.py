"""
Test suite for the transport adapter and error translation.

Tests:
- Single request per call
- Body decoding
- HTTP status -> RemoteRejectionError
- Network failures propagate unchanged
"""

import pytest
import requests
from unittest.mock import MagicMock

from amplitude_client import RemoteRejectionError
from amplitude_client.transport import Transport, decode_body, translate_http_error

from .conftest import make_response


@pytest.fixture
def session():
    return MagicMock()


class TestDecodeBody:
    """Test response body decoding."""

    def test_json_body(self):
        assert decode_body(make_response(200, {"some": "data"})) == {"some": "data"}

    def test_text_body(self):
        assert decode_body(make_response(200, "success")) == "success"

    def test_empty_body(self):
        assert decode_body(make_response(200)) is None


class TestTransportRequest:
    """Test request dispatch."""

    def test_success_returns_response(self, session):
        response = make_response(200, {"ok": True})
        session.request.return_value = response
        transport = Transport(session, timeout=12)

        result = transport.request("GET", "https://example.test/x", params={"a": 1})

        assert result is response
        session.request.assert_called_once_with(
            "GET", "https://example.test/x", params={"a": 1}, timeout=12
        )

    def test_request_json_decodes(self, session):
        session.request.return_value = make_response(200, {"ok": True})
        assert Transport(session).request_json("POST", "https://example.test") == {"ok": True}

    def test_remote_rejection_carries_status_and_body(self, session):
        body = {"code": 500, "error": "missing user_id"}
        session.request.return_value = make_response(500, body)
        transport = Transport(session)

        with pytest.raises(RemoteRejectionError) as exc_info:
            transport.request("POST", "https://example.test/2/httpapi", context="writing events")

        error = exc_info.value
        assert error.status_code == 500
        assert error.body == body
        assert error.message == "missing user_id"
        assert error.details["context"] == "writing events"
        assert isinstance(error.__cause__, requests.HTTPError)

    def test_remote_rejection_without_json_body(self, session):
        session.request.return_value = make_response(403, "Forbidden")

        with pytest.raises(RemoteRejectionError) as exc_info:
            Transport(session).request("GET", "https://example.test/export")

        assert exc_info.value.status_code == 403
        assert exc_info.value.body == "Forbidden"
        assert exc_info.value.message == "Forbidden"

    def test_remote_rejection_empty_body_uses_reason(self, session):
        session.request.return_value = make_response(500)

        with pytest.raises(RemoteRejectionError) as exc_info:
            Transport(session).request("GET", "https://example.test")

        assert exc_info.value.body is None
        assert exc_info.value.message == "Internal Server Error"

    @pytest.mark.parametrize("status", [300, 302, 304])
    def test_non_2xx_below_400_rejected(self, session, status):
        session.request.return_value = make_response(status, "moved" if status != 304 else None)

        with pytest.raises(RemoteRejectionError) as exc_info:
            Transport(session).request("GET", "https://example.test/usersearch", context="searching users")

        assert exc_info.value.status_code == status
        assert exc_info.value.details["context"] == "searching users"
        assert exc_info.value.message == f"HTTP {status}"

    def test_network_error_propagates_unchanged(self, session):
        original = requests.ConnectionError("some std error")
        session.request.side_effect = original

        with pytest.raises(requests.ConnectionError) as exc_info:
            Transport(session).request("GET", "https://example.test")

        assert exc_info.value is original
        assert str(exc_info.value) == "some std error"
        assert not hasattr(exc_info.value, "status_code")

    def test_timeout_propagates_unchanged(self, session):
        session.request.side_effect = requests.Timeout("timed out")

        with pytest.raises(requests.Timeout):
            Transport(session).request("GET", "https://example.test")

    def test_http_error_without_response_propagates_unchanged(self, session):
        original = requests.HTTPError("no response attached")
        session.request.side_effect = original

        with pytest.raises(requests.HTTPError) as exc_info:
            Transport(session).request("GET", "https://example.test")

        assert exc_info.value is original


class TestTranslateHttpError:
    """Test the translation helper directly."""

    def test_returns_rejection_for_response(self):
        response = make_response(400, {"message": "bad request"})
        error = requests.HTTPError("400", response=response)

        translated = translate_http_error(error, context="identify")

        assert isinstance(translated, RemoteRejectionError)
        assert translated.status_code == 400
        assert str(translated) == "RemoteRejectionError: bad request"

    def test_returns_original_without_response(self):
        error = requests.HTTPError("boom")
        assert translate_http_error(error) is error
