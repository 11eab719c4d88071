"""Convert a live query result into column names and serialisable rows.

The shaper reads cursor metadata once, decides how each column is normalised
from its declared type, then walks the rows in database order. It never
closes the result; the executor owns that.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Sequence

from sqlsandbox.core.errors import ShapingError
from sqlsandbox.core.models import CellValue

_DATE_TYPE_NAMES = frozenset({"DATE"})


class ColumnKind(str, Enum):
    DATE = "date"
    VALUE = "value"


@dataclass(frozen=True, slots=True)
class ColumnSpec:
    name: str
    type_name: str | None
    kind: ColumnKind


def describe_columns(description: Sequence[Sequence[Any]]) -> list[ColumnSpec]:
    """Build one :class:`ColumnSpec` per DB-API ``description`` entry."""

    specs = []
    for entry in description:
        type_name = _declared_type_name(entry[1] if len(entry) > 1 else None)
        kind = ColumnKind.DATE if type_name in _DATE_TYPE_NAMES else ColumnKind.VALUE
        specs.append(ColumnSpec(name=str(entry[0]), type_name=type_name, kind=kind))
    return specs


def shape_result(result: Any) -> tuple[list[str], list[tuple[CellValue, ...]]]:
    """Return ``(columns, rows)`` for a SQLAlchemy result or DB-API cursor."""

    cursor = getattr(result, "cursor", result)
    description = getattr(cursor, "description", None)
    if description is None:
        raise ShapingError("Statement did not produce a result set")

    specs = describe_columns(description)
    columns = [spec.name for spec in specs]
    rows = [_shape_row(raw, specs) for raw in result]
    return columns, rows


def normalize_cell(value: Any) -> CellValue:
    """Coerce a driver value into the closed set of cell types."""

    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, datetime):
        return value.isoformat(sep=" ")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, time):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    return str(value)


def normalize_date(value: Any) -> str | None:
    """Return *value* as an ISO ``YYYY-MM-DD`` string."""

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10]).isoformat()
        except ValueError as exc:
            raise ShapingError(f"Cannot read {value!r} as a date") from exc
    raise ShapingError(f"Cannot read {type(value).__name__} value as a date")


def _declared_type_name(type_code: Any) -> str | None:
    # SQLite reports no type codes; DuckDB-style drivers report type names.
    if isinstance(type_code, str) and type_code.strip():
        return type_code.strip().upper()
    return None


def _shape_row(raw: Sequence[Any], specs: list[ColumnSpec]) -> tuple[CellValue, ...]:
    if len(raw) != len(specs):
        raise ShapingError(f"Row has {len(raw)} values but result declares {len(specs)} columns")
    return tuple(
        normalize_date(value) if spec.kind is ColumnKind.DATE else normalize_cell(value)
        for value, spec in zip(raw, specs)
    )
