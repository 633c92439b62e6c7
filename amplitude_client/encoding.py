"""
Wire encodings used by the Amplitude APIs.

- Form body (Identify API, legacy /httpapi): percent-encoded key=value pairs
- JSON body (HTTP V2 API): {"api_key", "events", "options"}
- Query string (dashboard APIs): plain params, objects sent as JSON
"""

import json
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote, urlencode

# Characters JavaScript's encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"

EXPORT_TIME_FORMAT = "%Y%m%dT%H"  # YYYYMMDDTHH
SEGMENTATION_DATE_FORMAT = "%Y%m%d"  # YYYYMMDD


def _json_default(value: Any) -> str:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def to_json(value: Any) -> str:
    """
    Compact JSON, matching what Amplitude examples send.

    Dates become ISO strings; other non-JSON values (Decimal, UUID, ...) use str().
    """
    return json.dumps(value, separators=(",", ":"), default=_json_default)


def form_value(value: Any) -> str:
    """
    Serialize one form field value to a string.

    str -> unchanged, None -> "", dict/list -> JSON,
    bool -> "true"/"false", anything else -> str(value)
    """
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, (dict, list, tuple)):
        return to_json(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_form(params: Mapping[str, Any]) -> str:
    """
    Build an application/x-www-form-urlencoded body.

    Example:
        >>> encode_form({"api_key": "token", "event": {"a": 1}})
        'api_key=token&event=%7B%22a%22%3A1%7D'
    """
    pairs = [(key, form_value(value)) for key, value in params.items()]
    return urlencode(pairs, safe=_URI_COMPONENT_SAFE, quote_via=quote)


def batch_body(
    api_key: str,
    events: List[Dict[str, Any]],
    options: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    """
    Build the HTTP V2 API request body.

    Args:
        api_key: Ingestion token (body auth)
        events: Normalized events, embedded as-is
        options: Per-request options such as {"min_id_length": 1}
    """
    body: Dict[str, Any] = {
        "api_key": api_key,
        "events": events,
    }
    if options:
        body["options"] = dict(options)
    return body


def format_time(value: Any, fmt: str) -> Any:
    """Format date/datetime values; leave everything else untouched."""
    if isinstance(value, datetime):
        return value.strftime(fmt)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day).strftime(fmt)
    return value


def query_params(
    options: Mapping[str, Any],
    time_format: Optional[str] = None
) -> Dict[str, Any]:
    """
    Build query-string params for dashboard endpoints.

    None values are dropped. dict/list values are sent as JSON strings
    (segmentation "e" filters). Dates are formatted with time_format when given.
    """
    params: Dict[str, Any] = {}
    for key, value in options.items():
        if value is None:
            continue
        if isinstance(value, (dict, list, tuple)):
            value = to_json(value)
        elif time_format:
            value = format_time(value, time_format)
        params[key] = value
    return params
