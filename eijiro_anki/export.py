"""
CSV output for Anki import.

Header is fixed; id and level are digit-only so they are written raw,
every other column goes through escape_csv_field.
"""

from __future__ import annotations

from typing import Iterable

from .models import Record
from .rules import CSV_ENCODING, CSV_HEADER, LINE_BREAK


def escape_csv_field(field: str) -> str:
    if any(ch in field for ch in (",", '"', "\n", "\r")):
        return '"' + field.replace('"', '""') + '"'
    return field


def record_to_row(record: Record) -> str:
    return ",".join([
        str(record.id),
        escape_csv_field(record.headword),
        escape_csv_field(LINE_BREAK.join(record.definitions)),
        escape_csv_field(record.pronunciation),
        escape_csv_field(record.kana),
        escape_csv_field(record.conjugation),
        record.level,
        escape_csv_field(record.segmentation),
    ])


def records_to_csv(records: Iterable[Record]) -> str:
    return CSV_HEADER + "\n" + "\n".join(record_to_row(r) for r in records)


def csv_bytes(records: Iterable[Record]) -> bytes:
    return records_to_csv(records).encode(CSV_ENCODING)
