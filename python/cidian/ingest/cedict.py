"""CC-CEDICT record parser.

Format (one record per line):
    # comment
    憂鬱 忧郁 [you1 yu4] /sad/depressed; melancholy/

Traditional and simplified headwords, tone-numbered Pinyin in brackets,
then slash-delimited senses whose glosses are separated by semicolons.

Get the data file from https://www.mdbg.net/chinese/dictionary?page=cc-cedict
"""

import re
from pathlib import Path

from ..exceptions import MalformedRecord
from ..schema import Entry, Sense
from .base import LineParser

RECORD_PATTERN = re.compile(
    r"""
    ^\s*
    (\S+)           # traditional
    \s+
    (\S+)           # simplified
    \s*
    \[
    ([^\[\]]*)      # pinyin
    \]
    \s*
    /
    (.*)            # senses and glosses
    /
    \s*$
    """,
    re.VERBOSE,
)

DEFN_TRIM = re.compile(r"^[\s/]+|[\s/]+$")
SENSE_TRIM = re.compile(r"^[\s;]+|[\s;]+$")
GLOSS_BREAK = re.compile(r"\s*;[\s;]*")


def parse_definition(defn: str, line_number: int) -> tuple[Sense, ...]:
    """Split a definition field into senses.

    Args:
        defn: Text between the first and last slash of the record.
        line_number: Line number for error reports.

    Returns:
        Tuple of senses, each with at least one gloss.

    Raises:
        MalformedRecord: If nothing is left after trimming.
    """
    defn = DEFN_TRIM.sub("", defn)
    if not defn:
        raise MalformedRecord(line_number, "Empty definition")

    senses = []
    for component in defn.split("/"):
        component = SENSE_TRIM.sub("", component)
        if not component:
            continue
        component = GLOSS_BREAK.sub(";", component)
        glosses = tuple(g.strip() for g in component.split(";"))
        senses.append(Sense(glosses=glosses))

    if not senses:
        raise MalformedRecord(line_number, "Empty definition")
    return tuple(senses)


def parse_line(text: str, line_number: int) -> Entry:
    """Parse a single CC-CEDICT record line.

    Args:
        text: Line text (BOM and line break already removed).
        line_number: 1-based source line number.

    Returns:
        Parsed Entry.

    Raises:
        MalformedRecord: If the line does not have the record shape, the
            Pinyin is empty, or the definition is empty.
    """
    match = RECORD_PATTERN.match(text)
    if match is None:
        raise MalformedRecord(line_number)

    traditional, simplified, pinyin, defn = match.groups()

    syllables = tuple(pinyin.split())
    if not syllables:
        raise MalformedRecord(line_number, "Empty pinyin")

    return Entry(
        traditional=traditional,
        simplified=simplified,
        pronunciation=syllables,
        senses=parse_definition(defn, line_number),
        line_number=line_number,
    )


class CedictParser(LineParser[Entry]):
    """Parser for the CC-CEDICT data file.

    Only one entry is held in memory at a time, so the full dictionary
    (100k+ lines) can be scanned in constant memory.

    Usage:
        with CedictParser(path) as dict_:
            dict_.seek(1000)
            entry = dict_.advance()
            for entry in dict_:
                ...
    """

    def parse_line(self, text: str, line_number: int) -> Entry:
        return parse_line(text, line_number)

    @property
    def entry(self) -> Entry:
        """The currently loaded entry."""
        return self.record


def load(filepath: Path | str) -> CedictParser:
    """Open a CC-CEDICT file for parsing."""
    return CedictParser(filepath)


def read_entries(filepath: Path | str) -> list[Entry]:
    """Parse a whole CC-CEDICT file into memory.

    Args:
        filepath: Path to the data file.

    Returns:
        List of every entry in file order.
    """
    with CedictParser(filepath) as parser:
        return list(parser)
