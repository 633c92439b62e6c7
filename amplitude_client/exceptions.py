"""
Amplitude Client Exception Hierarchy

Structured exceptions for the three ways a call can fail:

- ConfigurationError: detected locally, before any request is sent
- RemoteRejectionError: Amplitude replied with a non-2xx status
- Transport failures: raised by requests itself (no response received)
  and propagated unchanged, never wrapped here
"""

from typing import Dict, Any, Optional


class AmplitudeError(Exception):
    """Base exception for all client errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        return f"{self.__class__.__name__}: {self.message}"


class ConfigurationError(AmplitudeError):
    """
    A required constructor or call-time parameter is missing.

    Always raised before a request is attempted. Retrying the same call
    will fail the same way.
    """
    pass


class AuthenticationError(ConfigurationError):
    """
    Missing credentials.

    Raised when the API key is empty, or when a dashboard endpoint
    (export, user search, user activity, segmentation) is called on a
    client built without a secret key.
    """
    pass


class ValidationError(ConfigurationError):
    """
    A required query option is missing.

    Caller should:
    - Check required options for the endpoint (e.g. start/end for export)
    """
    pass


class RemoteRejectionError(AmplitudeError):
    """
    Amplitude responded with a non-success HTTP status.

    Attributes:
        status_code: HTTP status returned by Amplitude
        body: Decoded response body (dict for JSON, str otherwise, None if empty)
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        body: Any = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details=details)
        self.status_code = status_code
        self.body = body


class ExportFormatError(AmplitudeError):
    """Export content could not be read as a ZIP archive."""
    pass
