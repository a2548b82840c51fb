"""
Convert an Eijiro export on disk into an Anki CSV.

Usage:
    eijiro-anki EIJIRO.txt
    eijiro-anki EIJIRO.txt -o cards.csv
    eijiro-anki EIJIRO.txt --json -o cards.json
"""

import argparse
import base64
import json
import logging
import sys
from pathlib import Path

from .convert import DecodeError, convert_bytes
from .models import ConvertResponse
from .rules import CSV_FILENAME, JSON_FILENAME

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Convert an Eijiro export into Anki import CSV")
    parser.add_argument("input", type=Path, help="Eijiro .txt export")
    parser.add_argument("-o", "--output", type=Path,
                        help=f"Output path (default: {CSV_FILENAME}, or {JSON_FILENAME} with --json, beside the input)")
    parser.add_argument("--json", action="store_true",
                        help="Write the full JSON envelope instead of the CSV")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    if not args.input.exists():
        logger.error("Input file not found: %s", args.input)
        return 1

    try:
        response = convert_bytes(args.input.read_bytes())
    except DecodeError as e:
        logger.error("%s: %s", args.input, e)
        return 1

    default_name = JSON_FILENAME if args.json else CSV_FILENAME
    output = args.output or args.input.with_name(default_name)
    if args.json:
        envelope = ConvertResponse.model_validate(response)
        output.write_text(
            json.dumps(envelope.model_dump(mode="json"), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
    else:
        output.write_bytes(base64.b64decode(response["csv"]["content_b64"]))

    summary = response["report"]["summary"]
    logger.info("  -> %s: %d records (%d groups skipped)", output, summary["records"], summary["rejected"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
