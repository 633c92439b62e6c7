"""
Event field normalization.

Callers may send events with camelCase convenience keys (userId, eventType,
...). Amplitude only understands the snake_case wire keys, so every event is
rewritten before it is encoded, and the client's default identity fields are
merged in.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

Event = Dict[str, Any]
EventData = Union[Mapping[str, Any], Sequence[Mapping[str, Any]]]

# Closed table: alias key -> canonical wire key
ALIASES: Dict[str, str] = {
    "userId": "user_id",
    "deviceId": "device_id",
    "sessionId": "session_id",
    "eventType": "event_type",
    "eventProperties": "event_properties",
    "userProperties": "user_properties",
    "appVersion": "app_version",
    "osName": "os_name",
    "osVersion": "os_version",
    "deviceBrand": "device_brand",
    "deviceManufacturer": "device_manufacturer",
    "deviceModel": "device_model",
    "locationLat": "location_lat",
    "locationLng": "location_lng",
}

# Fields seeded from client defaults when the event leaves them out
DEFAULT_FIELDS = ("event_type", "user_id", "device_id", "session_id")


def normalize_event(
    event: Mapping[str, Any],
    defaults: Optional[Mapping[str, Any]] = None
) -> Event:
    """
    Return a new event with alias keys rewritten and defaults merged.

    Args:
        event: Caller-supplied event (not modified)
        defaults: Client-level identity defaults, e.g. {"user_id": "u1"}

    Returns:
        New dict using canonical keys only. When an event carries both the
        alias and the canonical form of a field, the canonical value is kept
        unless it is None.
        Identity fields the event omits (or sets to None) are taken from
        defaults; if no default exists the key is left out entirely.
    """
    normalized: Event = {}

    for key, value in event.items():
        canonical = ALIASES.get(key, key)
        if canonical != key and event.get(canonical) is not None:
            continue
        if value is None and canonical in normalized:
            continue
        normalized[canonical] = value

    defaults = defaults or {}
    for field in DEFAULT_FIELDS:
        if normalized.get(field) is not None:
            continue
        default = defaults.get(field)
        if default is not None:
            normalized[field] = default
        else:
            normalized.pop(field, None)

    return normalized


def normalize_events(
    data: EventData,
    defaults: Optional[Mapping[str, Any]] = None
) -> List[Event]:
    """
    Normalize a single event or a batch of events.

    Always returns a list, in input order, one output per input event.
    """
    if isinstance(data, Mapping):
        data = [data]

    return [normalize_event(event, defaults) for event in data]
