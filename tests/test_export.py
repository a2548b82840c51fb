import csv
import io

import pytest

from eijiro_anki.export import csv_bytes, escape_csv_field, records_to_csv
from eijiro_anki.models import Record
from eijiro_anki.parser import parse_text
from eijiro_anki.rules import CSV_HEADER


def _read_rows(text):
    return list(csv.reader(io.StringIO(text, newline="")))


@pytest.mark.parametrize("field, expected", [
    ("plain", "plain"),
    ("", ""),
    ("a,b", '"a,b"'),
    ('say "hi"', '"say ""hi"""'),
    ("line\nbreak", '"line\nbreak"'),
])
def test_escape_csv_field(field, expected):
    assert escape_csv_field(field) == expected


@pytest.mark.parametrize("field", ["a,b", 'x "y", z', "multi\nline", '"', "ok"])
def test_escaped_field_reads_back_with_csv_module(field):
    rows = _read_rows(escape_csv_field(field) + ",end")
    assert rows == [[field, "end"]]


def test_records_to_csv_header_only():
    assert records_to_csv([]) == CSV_HEADER + "\n"
    assert CSV_HEADER == "ID,見出語,定義,発音,カタカナ発音,変化,レベル,分節"


def test_records_to_csv_rows(sample_export):
    out = records_to_csv(parse_text(sample_export))
    lines = out.split("\n")

    assert lines[0] == CSV_HEADER
    assert len(lines) == 4
    assert not out.endswith("\n")
    assert lines[3] == "3,abroad,{副} : 外国に,əbrɔ́ːd,アブロード,,1,"


def test_records_to_csv_reads_back(sample_export):
    records = parse_text(sample_export)
    rows = _read_rows(records_to_csv(records))

    assert rows[0] == CSV_HEADER.split(",")
    assert len(rows) == len(records) + 1
    for record, row in zip(records, rows[1:]):
        assert row == [
            str(record.id),
            record.headword,
            "<br>".join(record.definitions),
            record.pronunciation,
            record.kana,
            record.conjugation,
            record.level,
            record.segmentation,
        ]


def test_records_to_csv_quotes_awkward_fields():
    record = Record(
        id=7,
        headword="a",
        definitions=('{名} : "quoted"', "{動} : x, y"),
        pronunciation="p\nq",
        level="2",
    )
    rows = _read_rows(records_to_csv([record]))
    assert rows[1][2] == '{名} : "quoted"<br>{動} : x, y'
    assert rows[1][3] == "p\nq"


def test_csv_bytes_is_utf8(sample_export):
    data = csv_bytes(parse_text(sample_export))
    assert data.decode("utf-8").startswith(CSV_HEADER)
