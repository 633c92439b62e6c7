"""
Amplitude Analytics Python Client

A small client for Amplitude's ingestion and dashboard APIs.

Example:
    Basic usage:

    >>> from amplitude_client import AmplitudeClient
    >>>
    >>> client = AmplitudeClient.from_env()
    >>>
    >>> # Track events (camelCase keys are rewritten to snake_case)
    >>> response = client.track([
    ...     {"userId": "user123", "eventType": "page_view"},
    ...     {"user_id": "user123", "event_type": "purchase", "revenue": 9.99},
    ... ])
    >>> print(f"Ingested {response['events_ingested']} events")
    >>>
    >>> # Update user properties
    >>> client.identify({"user_id": "user123", "user_properties": {"$set": {"plan": "pro"}}})
    >>>
    >>> # Dashboard queries (need AMPLITUDE_SECRET_KEY)
    >>> matches = client.user_search("user123")["matches"]
    >>> archive = client.export(start="20250101T00", end="20250102T00")
    >>> events = read_export_archive(archive)
    >>>
    >>> client.close()

Errors:
    - ConfigurationError (AuthenticationError, ValidationError): raised before
      any request when a required key or option is missing
    - RemoteRejectionError: Amplitude answered with a non-2xx status
      (status_code, body)
    - requests exceptions: network failures, propagated unchanged

Authentication:
    Set environment variables (or a .env file):
    - AMPLITUDE_API_KEY: Required
    - AMPLITUDE_SECRET_KEY: Required for dashboard endpoints
    - AMPLITUDE_REGION: "standard" or "eu" (default: "standard")
    - AMPLITUDE_DEBUG: "true" or "false" (default: "false")
"""

__version__ = "1.0.0"
__license__ = "MIT"

from .client import (
    AmplitudeClient,
    Endpoints,
    REGIONS,
)

from .normalizer import (
    ALIASES,
    normalize_event,
    normalize_events,
)

from .export import (
    iter_export_events,
    read_export_archive,
)

from .exceptions import (
    AmplitudeError,
    ConfigurationError,
    AuthenticationError,
    ValidationError,
    RemoteRejectionError,
    ExportFormatError,
)

__all__ = [
    # Client
    "AmplitudeClient",
    "Endpoints",
    "REGIONS",
    # Normalization
    "ALIASES",
    "normalize_event",
    "normalize_events",
    # Export archives
    "iter_export_events",
    "read_export_archive",
    # Exceptions
    "AmplitudeError",
    "ConfigurationError",
    "AuthenticationError",
    "ValidationError",
    "RemoteRejectionError",
    "ExportFormatError",
]
