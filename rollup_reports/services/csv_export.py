"""CSV serialization for rollup result lists.

Header row of the record field names, then one line per record. Text fields
containing a comma or a double quote are quoted with inner quotes doubled
(``csv.QUOTE_MINIMAL``). Whole-number floats are written without a trailing
``.0`` so ``avg_vcr`` reads ``50`` rather than ``50.0``.
"""
from __future__ import annotations

import csv
import io
from dataclasses import asdict, fields, is_dataclass
from typing import Any, Iterable, Mapping, Optional, Sequence


def _record_to_dict(record: Any) -> dict[str, Any]:
    if is_dataclass(record) and not isinstance(record, type):
        return asdict(record)
    if isinstance(record, Mapping):
        return dict(record)
    if hasattr(record, "model_dump"):
        return record.model_dump()
    raise TypeError(f"Cannot export record of type {type(record).__name__}")


def _format_value(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def rollup_fieldnames(record_type: type) -> list[str]:
    return [f.name for f in fields(record_type)]


def rollups_to_csv(records: Iterable[Any], fieldnames: Optional[Sequence[str]] = None) -> str:
    """Render records as CSV text.

    ``fieldnames`` defaults to the keys of the first record; with no records
    and no field names the result is an empty string.
    """
    rows = [_record_to_dict(r) for r in records]
    if fieldnames is None:
        if not rows:
            return ""
        fieldnames = list(rows[0].keys())

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(fieldnames)
    for row in rows:
        writer.writerow([_format_value(row.get(name)) for name in fieldnames])
    return buffer.getvalue()


__all__ = ["rollups_to_csv", "rollup_fieldnames"]
