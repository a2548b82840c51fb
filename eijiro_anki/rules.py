"""
Fixed markers and output rules for Eijiro exports.

None of these are configurable; the parser matches them literally.
"""

GROUP_MARKER = "■"
LEVEL_MARKER = "【レベル】"
PRONUNCIATION_MARKER = "【発音】"
CONJUGATION_MARKER = "【変化】"
SEGMENTATION_MARKER = "【分節】"
KANA_MARKER = "【＠】"

FIELD_SEPARATOR = "  "
GLOSS_SEPARATOR = " : "
EXAMPLE_MARKER = "■・"
EXAMPLE_BREAK = "<br>・"
FULLWIDTH_COMMA = "、"
BRACKET_OPEN = "【"
ASCII_DIGITS = "0123456789"

LINE_BREAK = "<br>"
CSV_HEADER = "ID,見出語,定義,発音,カタカナ発音,変化,レベル,分節"
CSV_FILENAME = "anki_cards.csv"
JSON_FILENAME = "anki_cards.json"
CSV_ENCODING = "utf-8"
CSV_MEDIA_TYPE = "text/csv"

# Tried in order after BOM sniffing; charset-normalizer is the last resort.
DECODE_CHAIN = ("utf-8", "cp932")
INPUT_SUFFIX = ".txt"
