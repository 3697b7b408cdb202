"""Common utility functions."""

from typing import Any


def json_safe(value: Any) -> Any:
    """Reduce a parsed feed/API structure to JSON-serializable values.

    feedparser entries carry time.struct_time and other non-JSON values;
    anything that is not a container or scalar is stringified.
    """
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, dict):
        return {str(k): json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [json_safe(v) for v in value]
    return str(value)
