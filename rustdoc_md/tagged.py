"""Helpers for rustdoc's externally tagged JSON enums."""

from typing import Any


def split_tagged(value: Any) -> tuple[str, Any]:
    """Split an externally tagged value into (tag, payload).

    Unit variants (e.g. `"infer"` or `"unit"`) are encoded as bare strings and
    come back with a `None` payload.
    """
    if isinstance(value, str):
        return value, None
    if isinstance(value, dict) and len(value) == 1:
        tag, payload = next(iter(value.items()))
        return str(tag), payload
    return "", value
