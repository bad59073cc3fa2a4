"""
Per-type value conversion for the delimited-text codec.

Every SemanticType maps to exactly one parser (text -> value), one formatter
(value -> text, before quoting), one coercion used when rows are appended
programmatically, and one polars dtype used by Table.to_frame(). Dispatch is
keyed by the enum member, never by a runtime type name.

Formats
- boolean:  "0" / "1" on write; any base-10 integer on read (non-zero -> True).
- date:     exactly eight ASCII digits YYYYMMDD.
- decimal:  invariant decimal text, no exponent or grouping; written with at
            most six fractional digits, trailing zeros trimmed.
- integer:  base-10 integer text.
- duration: H+:MM:SS, hours may exceed 24 (and 99) on both read and write.
- text:     verbatim.

Notes
- Parsers raise ValueError; the decoder decides whether a failure is fatal
  (every type except duration) or nulls the cell (duration).
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

import polars as pl

from feedio.core.errors import SchemaError
from feedio.core.grammar import SemanticType

__all__ = [
    "PARSERS",
    "FORMATTERS",
    "POLARS_DTYPES",
    "LENIENT_TYPES",
    "QUOTABLE_TYPES",
    "parse_value",
    "format_value",
    "coerce_value",
]

_INT_RE = re.compile(r"^\s*[+-]?[0-9]+\s*$")
_DECIMAL_RE = re.compile(r"^\s*[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)\s*$")
_DATE_RE = re.compile(r"^[0-9]{8}$")
_DURATION_RE = re.compile(r"^\s*([0-9]+):([0-9]{1,2}):([0-9]{1,2})\s*$")

_SIX_PLACES = Decimal("0.000001")
_ONE_SECOND = timedelta(seconds=1)

# Parse failures for these types null the cell instead of aborting the file.
LENIENT_TYPES: frozenset[SemanticType] = frozenset({SemanticType.DURATION})

# Only these types are quote-enclosed on write.
QUOTABLE_TYPES: frozenset[SemanticType] = frozenset({SemanticType.INTEGER, SemanticType.TEXT})


# -----------------------------------------------------------------------------
# Parsers
# -----------------------------------------------------------------------------


def _parse_boolean(text: str) -> bool:
    if not _INT_RE.match(text):
        raise ValueError("expected an integer flag")
    return int(text) != 0


def _parse_date(text: str) -> date:
    if not _DATE_RE.match(text):
        raise ValueError("expected YYYYMMDD")
    return date(int(text[0:4]), int(text[4:6]), int(text[6:8]))


def _parse_decimal(text: str) -> Decimal:
    if not _DECIMAL_RE.match(text):
        raise ValueError("expected a decimal number")
    return Decimal(text.strip())


def _parse_integer(text: str) -> int:
    if not _INT_RE.match(text):
        raise ValueError("expected a base-10 integer")
    return int(text)


def _parse_duration(text: str) -> timedelta:
    match = _DURATION_RE.match(text)
    if match is None:
        raise ValueError("expected H:MM:SS")
    hours, minutes, seconds = (int(g) for g in match.groups())
    if minutes > 59 or seconds > 59:
        raise ValueError("minutes and seconds must be below 60")
    return timedelta(hours=hours, minutes=minutes, seconds=seconds)


def _parse_text(text: str) -> str:
    return text


PARSERS: dict[SemanticType, Callable[[str], Any]] = {
    SemanticType.BOOLEAN: _parse_boolean,
    SemanticType.DATE: _parse_date,
    SemanticType.DECIMAL: _parse_decimal,
    SemanticType.INTEGER: _parse_integer,
    SemanticType.DURATION: _parse_duration,
    SemanticType.TEXT: _parse_text,
}


def parse_value(semantic_type: SemanticType, text: str) -> Any:
    """
    Convert a non-empty field to its typed value.

    Raises:
        ValueError: If ``text`` is malformed for ``semantic_type``.
    """
    return PARSERS[semantic_type](text)


# -----------------------------------------------------------------------------
# Formatters
# -----------------------------------------------------------------------------


def _format_boolean(value: Any) -> str:
    return "1" if value else "0"


def _format_date(value: date) -> str:
    return f"{value.year:04d}{value.month:02d}{value.day:02d}"


def _format_decimal(value: Any) -> str:
    number = value if isinstance(value, Decimal) else Decimal(str(value))
    if not number.is_finite():
        raise ValueError(f"cannot write non-finite decimal {value!r}")
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, number.adjusted() + 8)
        try:
            number = number.quantize(_SIX_PLACES, rounding=ROUND_HALF_UP)
        except InvalidOperation as exc:  # pragma: no cover - guarded by prec above
            raise ValueError(f"cannot write decimal {value!r}") from exc
    text = format(number, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def _format_integer(value: Any) -> str:
    return str(int(value))


def _format_duration(value: timedelta) -> str:
    total = value // _ONE_SECOND
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def _format_text(value: Any) -> str:
    return str(value)


FORMATTERS: dict[SemanticType, Callable[[Any], str]] = {
    SemanticType.BOOLEAN: _format_boolean,
    SemanticType.DATE: _format_date,
    SemanticType.DECIMAL: _format_decimal,
    SemanticType.INTEGER: _format_integer,
    SemanticType.DURATION: _format_duration,
    SemanticType.TEXT: _format_text,
}


def format_value(semantic_type: SemanticType, value: Any) -> str:
    """Format a non-null value (quoting is applied by the encoder)."""
    return FORMATTERS[semantic_type](value)


# -----------------------------------------------------------------------------
# Coercion for programmatic rows
# -----------------------------------------------------------------------------


def coerce_value(semantic_type: SemanticType, value: Any, *, column: str = "?") -> Any:
    """
    Coerce a Python value to the canonical representation of ``semantic_type``.

    Returns:
        Any: bool | date | Decimal | int | timedelta | str, or None for None.

    Raises:
        SchemaError: If the value does not conform to the type.
    """
    if value is None:
        return None
    if semantic_type is SemanticType.TEXT:
        return value if isinstance(value, str) else str(value)
    if semantic_type is SemanticType.BOOLEAN:
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
    elif semantic_type is SemanticType.DATE:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
    elif semantic_type is SemanticType.DECIMAL:
        if isinstance(value, Decimal):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return Decimal(str(value))
        if isinstance(value, str):
            try:
                return _parse_decimal(value)
            except ValueError:
                pass
    elif semantic_type is SemanticType.INTEGER:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif semantic_type is SemanticType.DURATION:
        if isinstance(value, timedelta) and value >= timedelta(0):
            return value
    raise SchemaError(
        f"column {column!r} expects {semantic_type.value}; got {type(value).__name__} {value!r}"
    )


# Note: polars dtypes are singleton-like objects; keep this mapping loosely typed.
POLARS_DTYPES: dict[SemanticType, object] = {
    SemanticType.BOOLEAN: pl.Boolean,
    SemanticType.DATE: pl.Date,
    SemanticType.DECIMAL: pl.Decimal(scale=6),
    SemanticType.INTEGER: pl.Int64,
    SemanticType.DURATION: pl.Duration("us"),
    SemanticType.TEXT: pl.Utf8,
}
