"""
ValueCoercionEngine: raw filter values to comparison-native values.

``coerce`` is total: it never raises, it returns a :class:`CoercionResult`
whose ``success`` flag tells the caller whether the value is usable.

The same rules produce the typed projections stored next to every cell,
so filter values and stored values are always compared like with like.
"""

from __future__ import annotations

import datetime
import json
import math
from dataclasses import dataclass
from typing import Any

from .columns import ColumnType, TypeFamily

_UTC = datetime.timezone.utc
_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=_UTC)


@dataclass(frozen=True)
class CoercionResult:
    success: bool
    value: Any = None
    error: str | None = None

    @classmethod
    def ok(cls, value: Any) -> CoercionResult:
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: str) -> CoercionResult:
        return cls(success=False, error=error)


# ---------------------------------------------------------------------------
# Primitive parsers (raise ValueError / TypeError, wrapped by ``coerce``)
# ---------------------------------------------------------------------------


def parse_number(value: Any) -> float:
    """Locale-free float parse; booleans and non-finite values are rejected."""
    if isinstance(value, bool) or value is None:
        raise TypeError(f"Cannot convert {type(value).__name__} to number")
    number = float(value.strip()) if isinstance(value, str) else float(value)
    if not math.isfinite(number):
        raise ValueError(f"Cannot convert {value!r} to a finite number")
    return number


def parse_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    raise ValueError(f"Cannot convert {value!r} to boolean")


def parse_instant(value: Any) -> datetime.datetime:
    """
    Parse *value* into a timezone-aware instant.

    - ``datetime``: naive values are read as local wall-clock time.
    - ``date`` and date-only ISO strings: midnight UTC.
    - ISO 8601 strings (``Z`` suffix accepted).
    - Numbers: milliseconds since the Unix epoch.
    """
    if isinstance(value, bool) or value is None:
        raise TypeError(f"Cannot convert {type(value).__name__} to date")
    if isinstance(value, datetime.datetime):
        return value if value.tzinfo is not None else value.astimezone()
    if isinstance(value, datetime.date):
        return datetime.datetime(value.year, value.month, value.day, tzinfo=_UTC)
    if isinstance(value, int | float):
        return _EPOCH + datetime.timedelta(milliseconds=value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Empty date string")
        if len(text) == 10:
            day = datetime.date.fromisoformat(text)
            return datetime.datetime(day.year, day.month, day.day, tzinfo=_UTC)
        result = datetime.datetime.fromisoformat(text.replace("Z", "+00:00"))
        return result if result.tzinfo is not None else result.astimezone()
    raise TypeError(f"Cannot convert {type(value).__name__} to date")


def to_text(value: Any, column_type: str | None = None) -> str | None:
    """
    Canonical text rendering of a value.

    Used both for text comparisons and for the text projection of stored
    cells (global search).  ``None`` stays ``None``.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime.datetime):
        return value.isoformat()
    if isinstance(value, list | tuple):
        if column_type == ColumnType.REFERENCE.value:
            return ",".join(str(to_text(v)) for v in value)
        return json.dumps(list(value), default=str)
    if isinstance(value, dict):
        return json.dumps(value, sort_keys=True, default=str)
    return str(value)


# ---------------------------------------------------------------------------
# Per-family coercers
# ---------------------------------------------------------------------------


def _coerce_text(value: Any, _column_type: str) -> Any:
    text = to_text(value)
    return text.strip() if text is not None else None


def _coerce_structured(value: Any, _column_type: str) -> Any:
    if isinstance(value, str):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return value


def _coerce_reference(value: Any, _column_type: str) -> Any:
    if isinstance(value, list | tuple):
        return [str(v) for v in value]
    return str(value)


def _coerce_by_type(value: Any, column_type: str) -> Any:
    family = TypeFamily.of(column_type)
    if family is TypeFamily.NUMERIC:
        return parse_number(value)
    if family is TypeFamily.BOOLEAN:
        return parse_boolean(value)
    if family is TypeFamily.DATE:
        return parse_instant(value)
    if column_type in (ColumnType.JSON.value, ColumnType.CUSTOM_ARRAY.value):
        return _coerce_structured(value, column_type)
    if column_type == ColumnType.REFERENCE.value:
        return _coerce_reference(value, column_type)
    # Text family and unknown declared types compare as trimmed text.
    return _coerce_text(value, column_type)


def coerce(value: Any, column_type: ColumnType | str) -> CoercionResult:
    """
    Convert a raw filter value to the column type's native representation.

    Never raises.  ``None`` passes through as ``None`` for every type.
    """
    type_key = column_type.value if isinstance(column_type, ColumnType) else column_type
    if value is None:
        return CoercionResult.ok(None)
    try:
        return CoercionResult.ok(_coerce_by_type(value, type_key))
    except (TypeError, ValueError, OverflowError) as exc:
        return CoercionResult.fail(str(exc))


def format_value(value: Any, column_type: ColumnType | str) -> Any:
    """
    Render a native value back to its raw wire form.

    Inverse of :func:`coerce` for representable values: instants become
    ISO 8601 strings, numbers become their shortest decimal text.
    """
    type_key = column_type.value if isinstance(column_type, ColumnType) else column_type
    family = TypeFamily.of(type_key)
    if value is None:
        return None
    if family is TypeFamily.DATE and isinstance(value, datetime.datetime):
        return value.isoformat()
    if family is TypeFamily.NUMERIC:
        return repr(float(value))
    if family is TypeFamily.BOOLEAN:
        return "true" if value else "false"
    if type_key in (ColumnType.JSON.value, ColumnType.CUSTOM_ARRAY.value):
        return json.dumps(value)
    return value
