"""
Amplitude Analytics Client

Python client for the Amplitude ingestion and dashboard APIs.

Supports:
- Event ingestion (HTTP V2 API, legacy /httpapi)
- User identification and property updates (Identify API)
- Raw event export (Export API)
- User search, user activity and event segmentation (Dashboard REST API)

Authentication differs per API:
- Body auth: HTTP V2, legacy httpapi, Identify (api_key in the request body)
- Basic auth: Dashboard APIs (api_key:secret_key)
"""

import os
import logging
from types import MappingProxyType
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

import requests
from dotenv import load_dotenv

from .encoding import (
    EXPORT_TIME_FORMAT,
    SEGMENTATION_DATE_FORMAT,
    batch_body,
    encode_form,
    query_params,
    to_json,
)
from .exceptions import AuthenticationError, ValidationError
from .normalizer import EventData, normalize_events
from .transport import Transport, decode_body

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class Endpoints:
    """Base URLs for one Amplitude data region"""
    ingestion: str
    legacy_httpapi: str
    dashboard: str

    @property
    def track(self) -> str:
        return f"{self.ingestion}/2/httpapi"

    @property
    def identify(self) -> str:
        return f"{self.ingestion}/identify"


REGIONS: Dict[str, Endpoints] = {
    "standard": Endpoints(
        ingestion="https://api2.amplitude.com",
        legacy_httpapi="https://api.amplitude.com/httpapi",
        dashboard="https://amplitude.com/api/2",
    ),
    "eu": Endpoints(
        ingestion="https://api.eu.amplitude.com",
        legacy_httpapi="https://api.eu.amplitude.com/httpapi",
        dashboard="https://analytics.eu.amplitude.com/api/2",
    ),
}


class AmplitudeClient:
    """
    Amplitude API client.

    The client only holds configuration: credentials, identity defaults and
    endpoints. Every method builds its own request, sends it once and returns
    the decoded body, so one instance can be shared freely.

    Example:
        client = AmplitudeClient("api-key", secret_key="secret", user_id="u1")
        client.track({"eventType": "page_view", "eventProperties": {"page": "/"}})
        matches = client.user_search("u1")["matches"]
        client.close()
    """

    def __init__(
        self,
        api_key: str,
        secret_key: Optional[str] = None,
        user_id: Optional[str] = None,
        device_id: Optional[str] = None,
        session_id: Optional[Union[int, str]] = None,
        region: str = "standard",
        timeout: Optional[float] = 30,
        session: Optional[requests.Session] = None,
        debug: bool = False,
    ):
        """
        Initialize Amplitude client.

        Args:
            api_key: Amplitude API key, the ingestion token (required)
            secret_key: Amplitude secret key (required for dashboard endpoints)
            user_id: Default user_id for events that do not set one
            device_id: Default device_id for events that do not set one
            session_id: Default session_id for events that do not set one
            region: "standard" or "eu" (default: "standard")
            timeout: Request timeout in seconds, passed to requests
            session: requests.Session to send requests through; one is
                created (and owned) by the client when omitted
            debug: Log every request at DEBUG level

        Raises:
            AuthenticationError: If api_key is empty
            ValidationError: If region is unknown
        """
        if not api_key:
            raise AuthenticationError(
                "No API key provided",
                details={"suggestion": "Pass api_key or set AMPLITUDE_API_KEY"}
            )

        if region not in REGIONS:
            raise ValidationError(
                f"Unknown region '{region}'",
                details={"provided": region, "available": sorted(REGIONS)}
            )

        self.api_key = api_key
        self.secret_key = secret_key
        self.region = region
        self.endpoints = REGIONS[region]
        self.defaults: Mapping[str, Any] = MappingProxyType({
            "user_id": user_id,
            "device_id": device_id,
            "session_id": session_id,
        })

        self.debug = debug
        if debug:
            logging.basicConfig(level=logging.DEBUG)
            logging.getLogger(__package__).setLevel(logging.DEBUG)

        self._owns_session = session is None
        self.session = session if session is not None else self._create_session()
        self.transport = Transport(self.session, timeout=timeout, debug=debug)

        if debug:
            logger.debug(f"[Init] region={region} API Key: {api_key[:4]}...")
            if not secret_key:
                logger.debug("[Init] Secret key not set (dashboard endpoints unavailable)")

    @classmethod
    def from_env(cls, **kwargs) -> "AmplitudeClient":
        """
        Create client from environment variables (a .env file is loaded first).

        Environment variables:
            AMPLITUDE_API_KEY: API key (required)
            AMPLITUDE_SECRET_KEY: Secret key for dashboard endpoints (optional)
            AMPLITUDE_USER_ID / AMPLITUDE_DEVICE_ID / AMPLITUDE_SESSION_ID:
                Identity defaults (optional)
            AMPLITUDE_REGION: "standard" or "eu" (default: "standard")
            AMPLITUDE_TIMEOUT: Request timeout in seconds (default: 30)
            AMPLITUDE_DEBUG: Enable debug logging (default: false)

        Keyword arguments override the environment.

        Raises:
            AuthenticationError: If AMPLITUDE_API_KEY is not set
        """
        load_dotenv()

        config = {
            "api_key": os.getenv("AMPLITUDE_API_KEY"),
            "secret_key": os.getenv("AMPLITUDE_SECRET_KEY"),
            "user_id": os.getenv("AMPLITUDE_USER_ID"),
            "device_id": os.getenv("AMPLITUDE_DEVICE_ID"),
            "session_id": os.getenv("AMPLITUDE_SESSION_ID"),
            "region": os.getenv("AMPLITUDE_REGION", "standard"),
            "timeout": float(os.getenv("AMPLITUDE_TIMEOUT", "30")),
            "debug": os.getenv("AMPLITUDE_DEBUG", "false").lower() == "true",
        }
        config.update(kwargs)

        if not config["api_key"]:
            raise AuthenticationError(
                "Missing Amplitude credentials. Set AMPLITUDE_API_KEY environment variable.",
                details={"env_vars": ["AMPLITUDE_API_KEY"]}
            )

        return cls(**config)

    # ========================================================================
    # Ingestion
    # ========================================================================

    def identify(self, data: EventData) -> Any:
        """
        Update user properties (Identify API).

        Args:
            data: One identification dict or a list of them. camelCase keys
                (userId, userProperties, ...) are accepted.

        Returns:
            Decoded response body (Amplitude answers "success")

        Example:
            client.identify({
                "userId": "user123",
                "userProperties": {"$set": {"plan": "premium"}}
            })
        """
        identification = normalize_events(data, self.defaults)
        body = encode_form({
            "api_key": self.api_key,
            "identification": identification,
        })

        if self.debug:
            logger.debug(f"[Identify API] POST {self.endpoints.identify} records={len(identification)}")

        return self.transport.request_json(
            "POST",
            self.endpoints.identify,
            context="updating user properties via Identify API",
            data=body,
            headers={"Content-Type": FORM_CONTENT_TYPE},
        )

    def track(self, data: EventData, options: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """
        Send events (HTTP V2 API).

        Args:
            data: One event dict or a list of events
            options: Request options, e.g. {"min_id_length": 1}

        Returns:
            Response with code, events_ingested, payload_size_bytes
            and server_upload_time

        Example:
            client.track([
                {"user_id": "user123", "event_type": "page_view"},
                {"userId": "user123", "eventType": "purchase"},
            ])
        """
        events = normalize_events(data, self.defaults)
        request_body = batch_body(self.api_key, events, options)

        if self.debug:
            logger.debug(f"[Track API] POST {self.endpoints.track} events={len(events)}")

        return self.transport.request_json(
            "POST",
            self.endpoints.track,
            context="writing events to HTTP V2 API",
            data=to_json(request_body),
            headers={"Content-Type": JSON_CONTENT_TYPE},
        )

    def track_legacy(self, data: EventData) -> Any:
        """
        Send events through the legacy form-encoded /httpapi endpoint.

        A single event dict is sent as a single JSON object; a list is sent
        as a JSON array.
        """
        events = normalize_events(data, self.defaults)
        event = events[0] if isinstance(data, Mapping) else events
        body = encode_form({"api_key": self.api_key, "event": event})

        if self.debug:
            logger.debug(f"[HTTP API] POST {self.endpoints.legacy_httpapi} events={len(events)}")

        return self.transport.request_json(
            "POST",
            self.endpoints.legacy_httpapi,
            context="writing events to legacy HTTP API",
            data=body,
            headers={"Content-Type": FORM_CONTENT_TYPE},
        )

    # ========================================================================
    # Dashboard (requires secret key)
    # ========================================================================

    def export(self, start: Any, end: Any) -> bytes:
        """
        Export raw event data (Export API).

        Args:
            start: First hour, "YYYYMMDDTHH" string or date/datetime
            end: Last hour, "YYYYMMDDTHH" string or date/datetime

        Returns:
            Raw response content: a ZIP archive of gzipped JSON-lines files.
            Use read_export_archive() to parse it.

        Raises:
            AuthenticationError: If secret_key is not set
            ValidationError: If start or end is missing
        """
        self._require_secret_key("export")
        if not start or not end:
            raise ValidationError(
                "`start` and `end` are required options",
                details={"start": start, "end": end}
            )

        params = query_params({"start": start, "end": end}, time_format=EXPORT_TIME_FORMAT)
        response = self._dashboard_get("/export", params, context="exporting events")
        return response.content

    def user_search(self, search_id: Union[int, str]) -> Dict[str, Any]:
        """
        Search for a user by user_id, device_id or Amplitude ID.

        Returns:
            {"matches": [{"amplitude_id", "user_id", ...}], "type": ...}
        """
        self._require_secret_key("user_search")
        if search_id is None or search_id == "":
            raise ValidationError("value to search for must be passed")

        response = self._dashboard_get("/usersearch", {"user": search_id}, context="searching users")
        return decode_body(response)

    def user_activity(
        self,
        amplitude_id: Union[int, str],
        offset: Optional[int] = None,
        limit: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Get a user's event stream.

        Args:
            amplitude_id: Amplitude ID of the user
            offset: Zero-indexed offset to start returning events from
            limit: Maximum number of events returned (up to 1000)

        Returns:
            {"userData": {...}, "events": [...]}
        """
        self._require_secret_key("user_activity")
        if amplitude_id is None or amplitude_id == "":
            raise ValidationError("Amplitude ID must be passed")

        params = query_params({"user": amplitude_id, "offset": offset, "limit": limit})
        response = self._dashboard_get("/useractivity", params, context="reading user activity")
        return decode_body(response)

    def event_segmentation(self, e: Any, start: Any, end: Any, **options) -> Any:
        """
        Query event segmentation.

        Args:
            e: Event filter, either a JSON string or a dict such as
                {"event_type": "purchase"} (sent JSON-encoded)
            start: First day, "YYYYMMDD" string or date
            end: Last day, "YYYYMMDD" string or date
            **options: Extra query params (m, i, s, g, limit, ...)

        Example:
            client.event_segmentation(
                e={"event_type": "purchase"},
                start="20250101",
                end="20250131",
                m="uniques",
            )
        """
        self._require_secret_key("event_segmentation")
        if not e or not start or not end:
            raise ValidationError(
                "`e`, `start` and `end` are required data properties",
                details={"e": e, "start": start, "end": end}
            )

        params = query_params(
            {"e": e, "start": start, "end": end, **options},
            time_format=SEGMENTATION_DATE_FORMAT,
        )
        response = self._dashboard_get("/events/segmentation", params, context="querying event segmentation")
        return decode_body(response)

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def close(self):
        """Close the session if the client created it."""
        if self._owns_session and self.session:
            self.session.close()
            if self.debug:
                logger.debug("Session closed")

    def __enter__(self) -> "AmplitudeClient":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # ========================================================================
    # Internal Methods
    # ========================================================================

    def _create_session(self) -> requests.Session:
        """
        Create HTTP session with headers shared by all requests.

        Content-Type is set per request: form bodies for Identify and the
        legacy httpapi, JSON for HTTP V2. Auth is set per request too.
        """
        session = requests.Session()
        session.headers.update({
            "Accept": "application/json",
            "User-Agent": "amplitude-client-python/1.0.0",
        })
        return session

    def _require_secret_key(self, method: str):
        if not self.secret_key:
            raise AuthenticationError(
                f"secretKey must be set to use the {method} method",
                details={"method": method, "secret_key_set": False}
            )

    def _dashboard_get(self, path: str, params: Mapping[str, Any], context: str) -> requests.Response:
        url = f"{self.endpoints.dashboard}{path}"

        if self.debug:
            logger.debug(f"[Dashboard API] GET {url} params={params}")

        return self.transport.request(
            "GET",
            url,
            context=context,
            params=params,
            auth=(self.api_key, self.secret_key),
        )
