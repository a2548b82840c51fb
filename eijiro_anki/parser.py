"""
Eijiro line parser.

Pipeline (one pass, all in memory):
- split text into trimmed, non-blank lines
- group consecutive lines by headword key
- parse each group into an Entry or a Rejection
- number accepted entries 1.. in acceptance order

Malformed groups and lines are skipped, never raised.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from typing import Iterable, List, Optional, Union

from .models import Entry, MetaInfo, ParseResult, Record, Rejection
from .rules import (
    ASCII_DIGITS,
    BRACKET_OPEN,
    CONJUGATION_MARKER,
    EXAMPLE_BREAK,
    EXAMPLE_MARKER,
    FIELD_SEPARATOR,
    FULLWIDTH_COMMA,
    GLOSS_SEPARATOR,
    GROUP_MARKER,
    KANA_MARKER,
    LEVEL_MARKER,
    PRONUNCIATION_MARKER,
    SEGMENTATION_MARKER,
)

logger = logging.getLogger(__name__)

_KEY_BOUNDARY = re.compile(r"[\s{]")


def normalize_line(line: str) -> str:
    """Headword key of a line: markers removed, cut at the first space or '{'."""
    stripped = line.replace(GROUP_MARKER, "")
    return _KEY_BOUNDARY.split(stripped, maxsplit=1)[0].strip()


def split_lines(text: str) -> List[str]:
    lines = []
    for raw in text.split("\n"):
        line = raw.strip()
        if line:
            lines.append(line)
    return lines


def group_lines(lines: Iterable[str]) -> List[List[str]]:
    """
    Partition lines into runs that share a headword key.

    A line that does not open with the group marker cannot start a new
    headword, so it continues whatever group is open (e.g. a bare metadata
    line after "■word  ..." lines).
    """
    groups: List[List[str]] = []
    current_key = ""
    buffer: List[str] = []

    for line in lines:
        if buffer and not line.startswith(GROUP_MARKER):
            key = current_key
        else:
            key = normalize_line(line)

        if key != current_key:
            if buffer:
                groups.append(buffer)
            buffer = []
            current_key = key
        buffer.append(line)

    if buffer:
        groups.append(buffer)
    return groups


def find_meta_index(lines: List[str]) -> int:
    """Index of the first line carrying the level marker, or len(lines)."""
    for i, line in enumerate(lines):
        if LEVEL_MARKER in line:
            return i
    return len(lines)


def parse_definition(line: str, headword: str) -> Optional[str]:
    if not line.startswith(GROUP_MARKER + headword):
        return None

    parts = line.split(FIELD_SEPARATOR)
    if len(parts) < 2:
        return None
    content = FIELD_SEPARATOR.join(parts[1:])

    if GLOSS_SEPARATOR not in content:
        return None
    prefix, rest = content.split(GLOSS_SEPARATOR, 1)
    gloss = rest.strip().replace(EXAMPLE_MARKER, EXAMPLE_BREAK)

    if not prefix or not gloss:
        return None
    return f"{prefix}{GLOSS_SEPARATOR}{gloss}"


def extract_definitions(lines: List[str], headword: str) -> List[str]:
    definitions = []
    for line in lines[:find_meta_index(lines)]:
        definition = parse_definition(line, headword)
        if definition is not None:
            definitions.append(definition)
    return definitions


class MetaScanner:
    """Locates bracketed marker sections on a metadata line."""

    def __init__(self, line: str):
        self.line = line or ""

    def has(self, marker: str) -> bool:
        return marker in self.line

    def digits_after(self, marker: str) -> Optional[str]:
        """Digit run right after the first occurrence of marker that has one."""
        start = self.line.find(marker)
        while start >= 0:
            pos = start + len(marker)
            end = pos
            while end < len(self.line) and self.line[end] in ASCII_DIGITS:
                end += 1
            if end > pos:
                return self.line[pos:end]
            start = self.line.find(marker, pos)
        return None

    def section(self, marker: str, terminator: str) -> Optional[str]:
        """Text after marker up to terminator (or end of line); None if absent."""
        start = self.line.find(marker)
        if start < 0:
            return None
        value = self.line[start + len(marker):]
        end = value.find(terminator)
        return value if end < 0 else value[:end]


def scan_meta(line: Optional[str]) -> Union[MetaInfo, Rejection]:
    scanner = MetaScanner(line)
    if not scanner.has(LEVEL_MARKER):
        return Rejection.NO_METADATA

    level = scanner.digits_after(LEVEL_MARKER)
    if level is None:
        return Rejection.NO_LEVEL

    kana = scanner.section(KANA_MARKER, BRACKET_OPEN) or ""
    if kana.endswith(FULLWIDTH_COMMA):
        kana = kana[:-len(FULLWIDTH_COMMA)]

    return MetaInfo(
        level=level,
        pronunciation=scanner.section(PRONUNCIATION_MARKER, FULLWIDTH_COMMA) or "",
        kana=kana,
        conjugation=scanner.section(CONJUGATION_MARKER, FULLWIDTH_COMMA) or "",
        segmentation=scanner.section(SEGMENTATION_MARKER, FULLWIDTH_COMMA) or "",
    )


def extract_meta(line: Optional[str]) -> Optional[MetaInfo]:
    meta = scan_meta(line)
    return meta if isinstance(meta, MetaInfo) else None


def parse_group(group: List[str]) -> Union[Entry, Rejection]:
    if len(group) < 2:
        return Rejection.TOO_SHORT

    headword = normalize_line(group[0])
    definitions = extract_definitions(group, headword)
    if not definitions:
        return Rejection.NO_DEFINITIONS

    meta_index = find_meta_index(group)
    meta_line = group[meta_index] if meta_index < len(group) else None
    meta = scan_meta(meta_line)
    if isinstance(meta, Rejection):
        return meta

    return Entry(headword=headword, definitions=tuple(definitions), meta=meta)


def parse_report(text: str) -> ParseResult:
    """Parse a whole export; records plus aggregate group/rejection counts."""
    lines = split_lines(text)
    records: List[Record] = []
    rejections: Counter = Counter()
    groups = 0
    next_id = 1

    for group in group_lines(lines):
        groups += 1
        outcome = parse_group(group)
        if isinstance(outcome, Rejection):
            rejections[outcome] += 1
            continue
        records.append(Record.from_entry(next_id, outcome))
        next_id += 1

    logger.debug(
        "parsed %d lines into %d groups: %d records, %d rejected",
        len(lines), groups, len(records), sum(rejections.values()),
    )
    return ParseResult(records=records, groups=groups, lines=len(lines), rejections=dict(rejections))


def parse_text(text: str) -> List[Record]:
    return parse_report(text).records
