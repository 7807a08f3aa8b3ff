"""Shared input coercions for request schemas."""
from typing import Any, Optional


def blank_to_none(value: Any) -> Any:
    """Empty strings mean "not set"."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def optional_ref(value: Any) -> Optional[Any]:
    """A reference id of 0, "" or null means no reference."""
    if value in (None, "", 0, "0"):
        return None
    return value


def not_null(value: Any) -> Any:
    """Fields that may be omitted from an update but never cleared."""
    if value is None:
        raise ValueError("must not be null")
    return value
