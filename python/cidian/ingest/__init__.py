"""Dictionary ingestion module.

Provides line parsers for dictionary source formats:
- CC-CEDICT data files

Usage:
    from cidian.ingest import cedict

    with cedict.load("path/to/cedict_ts.u8") as parser:
        for entry in parser:
            print(entry.traditional, entry.pinyin)
"""

from .base import LineParser
from . import cedict
from .cedict import CedictParser, parse_line

__all__ = [
    "LineParser",
    "CedictParser",
    "cedict",
    "parse_line",
]
