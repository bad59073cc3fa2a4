"""
Frame validation utilities for feedio.io.

Purpose
- Validate Polars DataFrames against table descriptors before their rows are
  appended to an in-memory Table (Table.extend_frame).
- Apply safe casts for scalar dtypes so rows coerce cleanly.

Checks performed
- When strict=True: no columns outside the descriptor's columns.
- Missing descriptor columns are allowed (cells stay null).
- Text, integer, and boolean columns are cast to Utf8/Int64/Boolean when their
  dtype differs; a cast that would lose data raises.
- Date, decimal, and duration columns are left as-is; Table.append coerces
  each value and rejects non-conforming ones.
"""

from __future__ import annotations

import polars as pl

from feedio.core.errors import SchemaError
from feedio.core.grammar import SemanticType, TableDescriptor

# Note: Polars exposes dtype singletons/classes (e.g., pl.Int64). To keep the type checker happy
# across versions, keep this mapping loosely typed.
_CAST_MAP: dict[SemanticType, object] = {
    SemanticType.TEXT: pl.Utf8,
    SemanticType.INTEGER: pl.Int64,
    SemanticType.BOOLEAN: pl.Boolean,
}


def _safe_cast(df: pl.DataFrame, col: str, target: object) -> pl.DataFrame:
    try:
        return df.with_columns(pl.col(col).cast(target, strict=True))  # type: ignore[arg-type]
    except pl.exceptions.PolarsError as exc:
        raise SchemaError(f"failed to cast column {col!r} to {target}: {exc}") from exc


def _ensure_no_extra_columns(df: pl.DataFrame, allowed: set[str]) -> None:
    extras = [c for c in df.columns if c not in allowed]
    if extras:
        raise SchemaError(f"unexpected columns present: {extras!r} (allowed={sorted(allowed)!r})")


def validate_frame_against_descriptor(
    df: pl.DataFrame,
    desc: TableDescriptor,
    *,
    strict: bool = True,
) -> pl.DataFrame:
    """
    Validate a Polars DataFrame against a TableDescriptor.

    Args:
        df (pl.DataFrame): Frame to validate.
        desc (TableDescriptor): Target table descriptor.
        strict (bool): Reject columns the descriptor does not declare when True;
            drop them when False.

    Returns:
        pl.DataFrame: Frame restricted to descriptor columns, with safe casts applied.

    Raises:
        SchemaError: If extra columns are present under strict mode or a cast fails.
    """
    allowed = set(desc.column_names)
    if strict:
        _ensure_no_extra_columns(df, allowed)
    else:
        df = df.select([c for c in df.columns if c in allowed])

    for column in desc.columns:
        if column.name not in df.columns:
            continue
        target = _CAST_MAP.get(column.type)
        if target is not None and df.schema[column.name] != target:
            df = _safe_cast(df, column.name, target)

    return df
