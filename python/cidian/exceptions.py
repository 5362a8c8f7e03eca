"""Exception hierarchy for cidian.

Parse-time errors abort a run. Unresolved or ambiguous cross-references
are never raised; they are reported by the resolver as data.
"""

from typing import Optional


class CidianError(Exception):
    """Base exception for all cidian errors."""


class MalformedRecord(CidianError):
    """A dictionary line does not have the required record shape."""

    def __init__(self, line: int, reason: str = "Invalid record format"):
        self.line = line
        self.reason = reason
        super().__init__(f"Dictionary line {line}: {reason}")


class MalformedPinyin(CidianError):
    """A tone-numbered Pinyin token failed validation."""

    def __init__(self, token: str, line: Optional[int] = None):
        self.token = token
        self.line = line
        if line is None:
            super().__init__(f"Invalid Pinyin '{token}'")
        else:
            super().__init__(f"Line {line}: Invalid Pinyin '{token}'")


class EmptyReferenceBracket(CidianError):
    """A variant reference had a Pinyin bracket with nothing in it."""

    def __init__(self, gloss: str):
        self.gloss = gloss
        super().__init__(f"Invalid variant reference in gloss '{gloss}'")


class UnclassifiableCase(CidianError):
    """Leading Pinyin letter is neither ASCII uppercase nor lowercase."""

    def __init__(self, line: int):
        self.line = line
        super().__init__(f"Line {line}: Invalid Pinyin casing")


class MultipleVariantPhrases(CidianError):
    """A single gloss contains the phrase "variant of" more than once."""

    def __init__(self, line: int):
        self.line = line
        super().__init__(f"Line {line}: Multiple variants in single gloss")


class ParserStateError(CidianError):
    """Record accessed while the parser is before the start or at EOF."""


class ConfigError(CidianError):
    """Missing or invalid configuration."""
