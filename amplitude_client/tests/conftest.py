"""
Pytest configuration and shared fixtures for Amplitude client tests.

Provides:
- Mock session fixtures
- Client fixtures (with and without secret key)
- Response builders
- Test data
"""

import json
import pytest
from unittest.mock import MagicMock
from typing import Any, Dict

import requests


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Set up mock environment variables."""
    monkeypatch.setenv("AMPLITUDE_API_KEY", "test_api_key_12345")
    monkeypatch.setenv("AMPLITUDE_SECRET_KEY", "test_secret_key_67890")
    monkeypatch.setenv("AMPLITUDE_USER_ID", "env_user")
    monkeypatch.setenv("AMPLITUDE_REGION", "standard")
    monkeypatch.setenv("AMPLITUDE_TIMEOUT", "15")
    monkeypatch.setenv("AMPLITUDE_DEBUG", "false")


def make_response(status: int = 200, body: Any = None, content: bytes = None, url: str = "https://example.test") -> requests.Response:
    """Build a real requests.Response so raise_for_status() behaves normally."""
    response = requests.Response()
    response.status_code = status
    response.url = url
    response.reason = {200: "OK", 403: "Forbidden", 500: "Internal Server Error"}.get(status, "")
    if content is not None:
        response._content = content
    elif isinstance(body, str):
        response._content = body.encode("utf-8")
    elif body is not None:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = b""
    return response


@pytest.fixture
def response_factory():
    """Expose make_response to tests."""
    return make_response


@pytest.fixture
def mock_session():
    """Create a mock requests session."""
    session = MagicMock()
    session.headers = {}
    session.request = MagicMock(return_value=make_response(200, {"some": "data"}))
    return session


@pytest.fixture
def amplitude_client(mock_session):
    """Client with secret key and a default user_id."""
    from amplitude_client import AmplitudeClient

    return AmplitudeClient(
        "token",
        secret_key="key",
        user_id="unique_user_id",
        device_id="unique_device_id",
        session=mock_session,
    )


@pytest.fixture
def ingestion_only_client(mock_session):
    """Client without secret key."""
    from amplitude_client import AmplitudeClient

    return AmplitudeClient("token", session=mock_session)


@pytest.fixture
def mock_track_response() -> Dict[str, Any]:
    """Mock response from the HTTP V2 API."""
    return {
        "code": 200,
        "events_ingested": 2,
        "payload_size_bytes": 120,
        "server_upload_time": 1609459200000
    }


@pytest.fixture
def mock_user_search_response() -> Dict[str, Any]:
    return {
        "matches": [
            {"amplitude_id": 12345, "user_id": "user_123", "last_seen": "2025-01-01"}
        ],
        "type": "match_user_or_device_id"
    }


@pytest.fixture
def mock_user_activity_response() -> Dict[str, Any]:
    return {
        "userData": {"user_id": "user_123", "num_events": 2},
        "events": [
            {"event_type": "page_view", "event_time": "2025-01-01 00:00:00"},
            {"event_type": "purchase", "event_time": "2025-01-01 00:01:00"}
        ]
    }


@pytest.fixture
def mock_export_response_zip() -> bytes:
    """Export archive: one plain member and one gzipped member."""
    import gzip
    import zipfile
    from io import BytesIO

    first = [
        {"event_type": "page_view", "user_id": "user_1"},
        {"event_type": "button_click", "user_id": "user_2"},
    ]
    second = [
        {"event_type": "purchase", "user_id": "user_3"},
    ]

    zip_buffer = BytesIO()
    with zipfile.ZipFile(zip_buffer, "w", zipfile.ZIP_DEFLATED) as zip_file:
        zip_file.writestr("123/123_2025-01-01_0#0.json", "\n".join(json.dumps(e) for e in first))
        zip_file.writestr(
            "123/123_2025-01-01_1#0.json.gz",
            gzip.compress("\n".join(json.dumps(e) for e in second).encode("utf-8"))
        )

    return zip_buffer.getvalue()


def sent_call(session) -> Dict[str, Any]:
    """Return method, url and kwargs of the single request made on a mock session."""
    session.request.assert_called_once()
    args, kwargs = session.request.call_args
    method, url = args
    return {"method": method, "url": url, **kwargs}
