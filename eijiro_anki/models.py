from __future__ import annotations

from enum import Enum
from typing import Dict, List, Tuple
from pydantic import BaseModel, ConfigDict, Field

from .rules import CSV_ENCODING, CSV_FILENAME


class Rejection(str, Enum):
    """Why a line group produced no record."""

    TOO_SHORT = "too_short"
    NO_DEFINITIONS = "no_definitions"
    NO_METADATA = "no_metadata"
    NO_LEVEL = "no_level"


class MetaInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: str = Field(pattern=r"^[0-9]+$")
    pronunciation: str = ""
    kana: str = ""
    conjugation: str = ""
    segmentation: str = ""


class Entry(BaseModel):
    """A parsed group that has not been numbered yet."""

    model_config = ConfigDict(frozen=True)

    headword: str
    definitions: Tuple[str, ...] = Field(min_length=1)
    meta: MetaInfo


class Record(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1)
    headword: str
    definitions: Tuple[str, ...] = Field(min_length=1)
    pronunciation: str = ""
    kana: str = ""
    conjugation: str = ""
    level: str = Field(pattern=r"^[0-9]+$")
    segmentation: str = ""

    @classmethod
    def from_entry(cls, entry_id: int, entry: Entry) -> "Record":
        return cls(
            id=entry_id,
            headword=entry.headword,
            definitions=entry.definitions,
            **entry.meta.model_dump(),
        )


class ParseResult(BaseModel):
    records: List[Record] = Field(default_factory=list)
    groups: int = 0
    lines: int = 0
    rejections: Dict[Rejection, int] = Field(default_factory=dict)

    @property
    def rejected(self) -> int:
        return sum(self.rejections.values())


class ConvertedCsv(BaseModel):
    sha256: str
    encoding: str = Field(default=CSV_ENCODING)
    filename: str = Field(default=CSV_FILENAME)
    content_b64: str


class ReportSummary(BaseModel):
    records: int = 0
    groups: int = 0
    lines: int = 0
    rejected: int = 0


class ConversionReport(BaseModel):
    summary: ReportSummary
    decoding: Dict[str, str] = Field(default_factory=dict)
    rejections: Dict[str, int] = Field(default_factory=dict)


class ConvertResponse(BaseModel):
    csv: ConvertedCsv
    records: List[Record] = Field(default_factory=list)
    report: ConversionReport


class HealthResponse(BaseModel):
    ok: bool = True
