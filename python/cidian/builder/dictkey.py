"""Headword key index builder.

Maps "<traditional> <diacritic pinyin>" keys to the line number of the
record that defines them, for joining other word lists against the
dictionary. Proper names get an asterisk before the Pinyin. Keys produced
by more than one record map to -1 (ambiguous).

Output:
    中國 zhōngguó 1234
    台灣 *táiwān 5678
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable

from ..normalizer import entry_pronunciations
from ..schema import Entry

logger = logging.getLogger(__name__)

AMBIGUOUS = -1

PINYIN_CHARSET = re.compile(r"^[A-Za-z0-9: ]*$")
ASCII_ALNUM = re.compile(r"[A-Za-z0-9]")
XX_PINYIN = re.compile(r"^xx5?$", re.IGNORECASE)
LONE_M = re.compile(r"^m[1-5]$", re.IGNORECASE)


@dataclass
class KeyStats:
    """Statistics from a key build."""

    total_records: int = 0
    skipped: int = 0
    keys: int = 0
    ambiguous: int = 0
    skip_reasons: dict[str, int] = field(default_factory=dict)


def skip_reason(entry: Entry) -> str | None:
    """Return why a record is excluded from the key index, or None."""
    if not PINYIN_CHARSET.match(entry.pinyin):
        return "pinyin_charset"
    if ASCII_ALNUM.search(entry.traditional):
        return "ascii_headword"
    if XX_PINYIN.match(entry.pinyin):
        return "xx_pinyin"
    if any(LONE_M.match(s) for s in entry.pronunciation):
        return "lone_m"
    if entry.senses[0].glosses[0].lower().startswith("variant "):
        return "variant"
    return None


class DictKeyBuilder:
    """Builds the headword/Pinyin key index."""

    def __init__(self):
        self._keys: dict[str, int] = {}
        self.stats = KeyStats()

    def add_entry(self, entry: Entry) -> None:
        """Add every key of one record.

        Raises:
            MalformedPinyin: If the main or a Taiwan Pinyin is invalid.
        """
        self.stats.total_records += 1

        reason = skip_reason(entry)
        if reason is not None:
            self.stats.skipped += 1
            self.stats.skip_reasons[reason] = (
                self.stats.skip_reasons.get(reason, 0) + 1
            )
            return

        for pinyin in entry_pronunciations(entry):
            key = f"{entry.traditional} {pinyin.as_key()}"
            if key in self._keys:
                if self._keys[key] != AMBIGUOUS:
                    self.stats.ambiguous += 1
                self._keys[key] = AMBIGUOUS
            else:
                self._keys[key] = entry.line_number

    def add_entries(self, entries: Iterable[Entry]) -> None:
        for entry in entries:
            self.add_entry(entry)

    def lookup(self, traditional: str, pinyin: str) -> int | None:
        """Get the line number for a key, -1 if ambiguous, None if absent."""
        return self._keys.get(f"{traditional} {pinyin}")

    def build(self) -> dict[str, int]:
        """Return the key index sorted by key."""
        self.stats.keys = len(self._keys)
        logger.info(
            "%d keys from %d records (%d skipped, %d ambiguous)",
            self.stats.keys,
            self.stats.total_records,
            self.stats.skipped,
            self.stats.ambiguous,
        )
        return dict(sorted(self._keys.items()))

    @staticmethod
    def format(keys: dict[str, int]) -> list[str]:
        return [f"{key} {line}" for key, line in keys.items()]
