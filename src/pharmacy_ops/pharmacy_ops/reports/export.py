"""Delimited-text export of tabular records.

Every field is double-quoted and embedded quotes are doubled, so the output
parses back with any CSV reader. Columns come from the caller's header list
or, when none is given, from the key order of the first record.
"""

from __future__ import annotations

import csv
import dataclasses
import io
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import format_date
from ..core.constants import NOTHING_TO_EXPORT
from ..core.exceptions import NothingToExportError


@dataclass(frozen=True)
class ExportFile:
    filename: str
    content: str
    mimetype: str = "text/csv"

    def encoded(self) -> bytes:
        # BOM so spreadsheet apps pick UTF-8.
        return self.content.encode("utf-8-sig")


def _as_mapping(record: Any) -> Mapping[str, Any]:
    if isinstance(record, Mapping):
        return record
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return {f.name: getattr(record, f.name) for f in dataclasses.fields(record)}
    raise TypeError(f"Cannot export record of type {type(record).__name__}")


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (date, datetime)):
        return format_date(value)
    return str(value)


def to_delimited_text(
    records: Iterable[Any],
    headers: Optional[Sequence[str]] = None,
    *,
    labels: Optional[Mapping[str, str]] = None,
    delimiter: str = ",",
) -> str:
    rows = [_as_mapping(r) for r in records]
    if not rows:
        raise NothingToExportError(NOTHING_TO_EXPORT)

    fields = list(headers) if headers is not None else list(rows[0].keys())
    labels = labels or {}

    out = io.StringIO()
    writer = csv.writer(out, delimiter=delimiter, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow([labels.get(f, f) for f in fields])
    for row in rows:
        writer.writerow([_cell(row.get(f)) for f in fields])
    return out.getvalue()


def build_export(
    records: Iterable[Any],
    filename: str,
    headers: Optional[Sequence[str]] = None,
    *,
    labels: Optional[Mapping[str, str]] = None,
) -> ExportFile:
    name = filename if filename.lower().endswith(".csv") else f"{filename}.csv"
    return ExportFile(filename=name, content=to_delimited_text(records, headers, labels=labels))
