"""
HTTP transport for the Amplitude client.

Performs exactly one request per call through a requests.Session and turns
HTTP error statuses into RemoteRejectionError. Failures without a response
(connection refused, DNS, timeouts) are re-raised untouched so callers can
tell "Amplitude rejected the request" apart from "Amplitude was unreachable".
"""

import logging
from typing import Any, Optional

import requests

from .exceptions import RemoteRejectionError

logger = logging.getLogger(__name__)


def decode_body(response: requests.Response) -> Any:
    """
    Decode a response body.

    Returns:
        Parsed JSON when the body is JSON, the text otherwise,
        None for an empty body
    """
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def rejection_from_response(response: requests.Response, context: str = "", fallback: str = "") -> RemoteRejectionError:
    """Build a RemoteRejectionError from a non-2xx response."""
    body = decode_body(response)
    message = response.reason or fallback or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        message = body.get("error") or body.get("message") or message

    return RemoteRejectionError(
        str(message),
        status_code=response.status_code,
        body=body,
        details={
            "status_code": response.status_code,
            "context": context,
            "url": response.url,
        }
    )


def translate_http_error(error: requests.HTTPError, context: str = "") -> Exception:
    """
    Convert an HTTPError into a RemoteRejectionError.

    Errors that carry no response are returned unchanged.
    """
    if error.response is None:
        return error
    return rejection_from_response(error.response, context=context, fallback=str(error))


class Transport:
    """
    Thin adapter over requests.Session.

    Example:
        transport = Transport(requests.Session(), timeout=30)
        response = transport.request("GET", url, context="searching users")
    """

    def __init__(self, session: requests.Session, timeout: Optional[float] = 30, debug: bool = False):
        self.session = session
        self.timeout = timeout
        self.debug = debug

    def request(self, method: str, url: str, context: str = "", **kwargs) -> requests.Response:
        """
        Send a single request.

        Args:
            method: HTTP method
            url: Absolute URL
            context: Short description used in error details
            **kwargs: Passed to requests.Session.request (params, data, json, auth, headers)

        Returns:
            The successful requests.Response

        Raises:
            RemoteRejectionError: Amplitude answered with a non-2xx status
            requests.RequestException: No response was received (propagated as-is)
        """
        kwargs.setdefault("timeout", self.timeout)

        try:
            response = self.session.request(method, url, **kwargs)
            response.raise_for_status()
        except requests.HTTPError as e:
            translated = translate_http_error(e, context=context)
            if translated is e:
                raise
            raise translated from e

        # raise_for_status lets 1xx/3xx through
        if not 200 <= response.status_code < 300:
            raise rejection_from_response(response, context=context)

        if self.debug:
            logger.debug(f"{method} {url} -> {response.status_code}")

        return response

    def request_json(self, method: str, url: str, context: str = "", **kwargs) -> Any:
        """Send a request and return the decoded body."""
        response = self.request(method, url, context=context, **kwargs)
        return decode_body(response)
