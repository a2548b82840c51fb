"""
Bytes in, CSV envelope out.

Responsibilities:
- decode the uploaded export (BOM sniff, utf-8, cp932, charset-normalizer)
- run the parser over the decoded text
- serialize the records and report aggregate counts

Progress is reported at three milestones only: start, decoded, parsed.
"""

from __future__ import annotations

import base64
import codecs
import hashlib
import logging
from typing import Any, Callable, Dict, Optional, Tuple

from charset_normalizer import from_bytes

from .export import csv_bytes
from .parser import parse_report
from .rules import CSV_ENCODING, CSV_FILENAME, DECODE_CHAIN

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, str], None]


class DecodeError(Exception):
    """The uploaded bytes could not be turned into text."""


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def _sniff_bom(raw: bytes) -> Optional[str]:
    if raw.startswith(codecs.BOM_UTF8):
        return "utf-8-sig"
    if raw.startswith(codecs.BOM_UTF16_LE) or raw.startswith(codecs.BOM_UTF16_BE):
        return "utf-16"
    return None


def decode_bytes(raw: bytes) -> Tuple[str, str]:
    """
    Decode an export to text.

    Rules:
    - A UTF-8 or UTF-16 BOM decides the encoding outright.
    - Otherwise try each encoding in DECODE_CHAIN strictly. UTF-8 goes first
      since it rejects Shift_JIS bytes, while cp932 happily turns UTF-8 into
      mojibake.
    - Then take charset-normalizer's best guess.
    - Raise DecodeError if nothing works.
    """
    bom_encoding = _sniff_bom(raw)
    candidates = (bom_encoding,) if bom_encoding else DECODE_CHAIN

    for encoding in candidates:
        try:
            return raw.decode(encoding), encoding
        except UnicodeDecodeError:
            logger.info("decoding as %s failed, trying next encoding", encoding)

    match = from_bytes(raw).best()
    if match is not None:
        return str(match), match.encoding

    raise DecodeError("could not read file")


def convert_text(text: str) -> Dict[str, Any]:
    result = parse_report(text)
    out = csv_bytes(result.records)

    return {
        "csv": {
            "sha256": _sha256_hex(out),
            "encoding": CSV_ENCODING,
            "filename": CSV_FILENAME,
            "content_b64": base64.b64encode(out).decode("ascii"),
        },
        "records": result.records,
        "report": {
            "summary": {
                "records": len(result.records),
                "groups": result.groups,
                "lines": result.lines,
                "rejected": result.rejected,
            },
            "rejections": {reason.value: count for reason, count in result.rejections.items()},
        },
    }


def convert_bytes(raw: bytes, progress: Optional[ProgressCallback] = None) -> Dict[str, Any]:
    """
    Decode, parse and serialize an uploaded export.
    Returns a dict matching the API's response envelope.
    """
    def report(stage: str, message: str) -> None:
        logger.info(message)
        if progress is not None:
            progress(stage, message)

    report("start", f"reading {len(raw):,} bytes")
    text, encoding = decode_bytes(raw)
    report("decoded", f"decoded input as {encoding}")

    response = convert_text(text)
    response["report"]["decoding"] = {"encoding": encoding}
    report("parsed", f"parsed {response['report']['summary']['records']:,} records")
    return response
