"""Dictionary scans for data-quality reports.

Each scan walks the parser once and returns plain data; rendering is left
to the CLI.
"""

import re
from dataclasses import dataclass
from typing import Iterable

from .exceptions import MultipleVariantPhrases
from .normalizer import entry_definition
from .schema import Entry
from .variants import count_variant_phrases, extract_from_senses

TAIWAN_MENTION = re.compile(r"Taiwan\s*pr", re.IGNORECASE)
TAIWAN_STANDARD = re.compile(r"^Taiwan\s*pr\.\s*\[([^\[\]]*)\]$", re.IGNORECASE)
TONE_DIGITS = re.compile(r"[1-9]")


@dataclass
class TaiwanReading:
    """A record whose Taiwan reading differs from the mainland one."""

    line_number: int
    mainland: str
    taiwan: str
    definition: str

    def format(self) -> str:
        return f"{self.line_number}: [{self.mainland}] [{self.taiwan}] {self.definition}"


def scan_unmatched_variants(entries: Iterable[Entry]) -> list[int]:
    """Find records that mention "variant of" without a usable reference.

    Args:
        entries: Parsed records.

    Returns:
        Line numbers of records with a "variant of" gloss but no
        detected reference.

    Raises:
        MultipleVariantPhrases: If any gloss repeats the phrase.
    """
    lines = []
    for entry in entries:
        has_variant = False
        for gloss in entry.glosses:
            count = count_variant_phrases(gloss)
            if count > 1:
                raise MultipleVariantPhrases(entry.line_number)
            if count:
                has_variant = True

        if has_variant and not extract_from_senses(entry.senses):
            lines.append(entry.line_number)
    return lines


def scan_taiwan_special(entries: Iterable[Entry]) -> list[str]:
    """List glosses that mention a Taiwan reading in a nonstandard form."""
    results = []
    for entry in entries:
        for gloss in entry.glosses:
            if TAIWAN_MENTION.search(gloss) and not TAIWAN_STANDARD.match(gloss):
                results.append(f"{entry.line_number}: [{entry.pinyin}] {gloss}")
    return results


def scan_taiwan_major(entries: Iterable[Entry]) -> list[TaiwanReading]:
    """List standard Taiwan readings that differ beyond tone numbers."""
    results = []
    for entry in entries:
        for gloss in entry.glosses:
            match = TAIWAN_STANDARD.match(gloss)
            if match is None:
                continue
            taiwan = " ".join(match.group(1).split())
            if TONE_DIGITS.sub("", taiwan) == TONE_DIGITS.sub("", entry.pinyin):
                continue
            results.append(TaiwanReading(
                line_number=entry.line_number,
                mainland=entry.pinyin,
                taiwan=taiwan,
                definition=entry_definition(entry),
            ))
    return results


def format_record(entry: Entry) -> list[str]:
    """Render one record for display."""
    lines = [
        f"Traditional: {entry.traditional}",
        f"Simplified : {entry.simplified}",
        "Pinyin     :" + "".join(f" {s}" for s in entry.pronunciation),
    ]
    for sense in entry.senses:
        lines.append("")
        lines.extend(f": {gloss}" for gloss in sense.glosses)
    return lines
