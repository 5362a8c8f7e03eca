"""Base line parser for dictionary sources.

Concrete parsers inherit from LineParser and implement parse_line().
The base class owns the single read handle and the BOF/record/EOF state
machine, so every source format gets the same advance/seek/rewind API.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Generic, Iterator, Optional, TypeVar

from ..exceptions import MalformedRecord, ParserStateError

logger = logging.getLogger(__name__)

T = TypeVar("T")

BOM = "\ufeff"

# Parser states
_BOF = -1
_RECORD = 0
_EOF = 1


class LineParser(ABC, Generic[T]):
    """Lazy, restartable record reader over a line-oriented text file.

    Blank lines (spaces and tabs only) and comment lines (first
    non-whitespace character is the comment char) are skipped. Any other
    line is handed to parse_line(), which must either return a record or
    raise.

    Undefined behavior occurs if the file changes while a parser is open.
    """

    comment_char: str = "#"

    def __init__(self, filepath: Path | str):
        """Open the source file.

        Args:
            filepath: Path to the decompressed source file.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        self.filepath = Path(filepath)
        if not self.filepath.is_file():
            raise FileNotFoundError(f"Can't find file '{self.filepath}'")

        # Binary so only LF ends a line; each line is decoded on its own
        self._fh = open(self.filepath, "rb")
        self._state = _BOF
        self._line_number = 0
        self._record: Optional[T] = None

    @abstractmethod
    def parse_line(self, text: str, line_number: int) -> T:
        """Parse one non-blank, non-comment line.

        Args:
            text: Line text without the line break.
            line_number: 1-based line number.

        Returns:
            Parsed record.
        """

    def close(self) -> None:
        """Close the read handle."""
        self._fh.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __iter__(self) -> Iterator[T]:
        """Rewind and yield every record."""
        self.rewind()
        while True:
            record = self.advance()
            if record is None:
                return
            yield record

    @property
    def line_number(self) -> int:
        """Line of the current record, 0 at BOF, last line at EOF."""
        return self._line_number

    @property
    def record(self) -> T:
        """The currently loaded record.

        Raises:
            ParserStateError: If no record is loaded.
        """
        if self._state != _RECORD:
            raise ParserStateError("No record loaded")
        return self._record

    def rewind(self) -> None:
        """Return to the beginning of the file with no record loaded."""
        self._fh.seek(0)
        self._state = _BOF
        self._line_number = 0
        self._record = None

    def seek(self, n: int) -> None:
        """Position so the next advance() starts reading at line n.

        Lines before n are counted but not parsed. If line n is blank or a
        comment, advance() reads the next record after it. Seeking past the
        end of the file is not an error; advance() then returns None.

        Args:
            n: 1-based line number, must be positive.

        Raises:
            ValueError: If n is not a positive integer.
        """
        if isinstance(n, bool) or not isinstance(n, int) or n < 1:
            raise ValueError(f"Line number must be a positive integer: {n!r}")

        self.rewind()
        for _ in range(n - 1):
            if not self._fh.readline():
                break
            self._line_number += 1

    def _decode(self, raw: bytes) -> str:
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError:
            raise MalformedRecord(self._line_number, "Invalid UTF-8") from None
        if text.endswith("\n"):
            text = text[:-1]
        if text.endswith("\r"):
            text = text[:-1]
        return text

    def advance(self) -> Optional[T]:
        """Read and parse the next record.

        Returns:
            The record, or None at EOF. Once EOF is reached further calls
            return None until rewind() or seek().
        """
        if self._state == _EOF:
            return None

        text = None
        while True:
            raw = self._fh.readline()
            if not raw:
                break
            self._line_number += 1

            line = self._decode(raw)
            if self._line_number == 1 and line.startswith(BOM):
                line = line[len(BOM):]

            stripped = line.strip(" \t")
            if not stripped or stripped.startswith(self.comment_char):
                continue

            text = line
            break

        if text is None:
            logger.debug("EOF after line %d of %s", self._line_number, self.filepath)
            self._state = _EOF
            self._record = None
            return None

        self._record = self.parse_line(text, self._line_number)
        self._state = _RECORD
        return self._record
