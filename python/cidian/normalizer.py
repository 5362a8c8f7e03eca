"""Pinyin normalization for cidian.

Converts CC-CEDICT style ASCII tone-numbered Pinyin ("zhong1 guo2") into
the Unicode diacritic form ("zhōngguó"). Syllables are run together with
no separators, matching the storage convention of the TOCFL word lists.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional

from .exceptions import MalformedPinyin
from .schema import Entry

U_UMLAUT = "ü"

VOWELS = "aeiou" + U_UMLAUT

# Multi-vowel clusters -> index of the vowel that takes the tone mark
VOWEL_POS: dict[str, int] = {
    "ai": 0,
    "ao": 0,
    "ei": 0,
    "ia": 1,
    "iao": 1,
    "ie": 1,
    "io": 1,
    "iu": 1,
    "ou": 0,
    "ua": 1,
    "uai": 1,
    "ue": 1,
    "ui": 1,
    "uo": 1,
    U_UMLAUT + "a": 1,
    U_UMLAUT + "e": 1,
}

# Vowel -> marked forms for tones 1 through 4
VOWEL_MOD: dict[str, tuple[str, str, str, str]] = {
    "a": ("ā", "á", "ǎ", "à"),
    "e": ("ē", "é", "ě", "è"),
    "i": ("ī", "í", "ǐ", "ì"),
    "o": ("ō", "ó", "ǒ", "ò"),
    "u": ("ū", "ú", "ǔ", "ù"),
    U_UMLAUT: ("ǖ", "ǘ", "ǚ", "ǜ"),
}

TOKEN_PATTERN = re.compile(r"^[A-Za-z:]+[1-5]$")
LOWER_TOKEN_PATTERN = re.compile(rf"^([a-z{U_UMLAUT}]+)([1-5])$")
SYLLABLE_PATTERN = re.compile(
    rf"^([^{VOWELS}]*)([{VOWELS}]+)([^{VOWELS}]*)$"
)

# "Taiwan pr. [...]" anywhere inside one slash-delimited definition component
TAIWAN_PATTERN = re.compile(
    r"/[^/]*Taiwan[ \t]+pr[^/\[\]]*\[[ \t]*([A-Za-z][A-Za-z0-9: \t]*)\]",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class NormalizedPinyin:
    """Diacritic Pinyin plus the proper-name flag."""

    text: str
    proper_name: bool = False

    def as_key(self) -> str:
        """Render with a leading asterisk for proper names."""
        return f"*{self.text}" if self.proper_name else self.text


def mark_syllable(token: str) -> str:
    """Apply the tone diacritic to a single tone-numbered syllable.

    Args:
        token: One syllable such as "Zhong1" or "lu:4".

    Returns:
        Lowercase syllable with diacritic (no mark for tone 5).

    Raises:
        MalformedPinyin: If the syllable cannot be marked.
    """
    if not TOKEN_PATTERN.match(token):
        raise MalformedPinyin(token)

    lowered = token.lower().replace("u:", U_UMLAUT)
    match = LOWER_TOKEN_PATTERN.match(lowered)
    if match is None:
        raise MalformedPinyin(token)

    body = match.group(1)
    tone = int(match.group(2))
    if tone == 5:
        return body

    match = SYLLABLE_PATTERN.match(body)
    if match is None:
        raise MalformedPinyin(token)
    prefix, vowels, suffix = match.groups()

    index = 0
    if len(vowels) > 1:
        if vowels not in VOWEL_POS:
            raise MalformedPinyin(token)
        index = VOWEL_POS[vowels]

    marked = VOWEL_MOD[vowels[index]][tone - 1]
    return prefix + vowels[:index] + marked + vowels[index + 1:] + suffix


def normalize_pinyin(syllables: Iterable[str]) -> NormalizedPinyin:
    """Convert tone-numbered syllables into diacritic Pinyin.

    Args:
        syllables: Tokens like ["Tai1", "wan1"].

    Returns:
        NormalizedPinyin("tāiwān", proper_name=True).

    Raises:
        MalformedPinyin: On the first token that fails validation.
    """
    tokens = list(syllables)
    if not tokens:
        raise MalformedPinyin("")

    # Validate every token before converting any of them
    for token in tokens:
        if not TOKEN_PATTERN.match(token):
            raise MalformedPinyin(token)

    proper_name = tokens[0][0].isupper()
    text = "".join(mark_syllable(token) for token in tokens)
    return NormalizedPinyin(text=text, proper_name=proper_name)


def normalize_pinyin_string(text: str) -> NormalizedPinyin:
    """Normalize a whitespace-separated Pinyin string."""
    tokens = text.split()
    if not tokens:
        raise MalformedPinyin(text)
    return normalize_pinyin(tokens)


def try_normalize(syllables: Iterable[str]) -> Optional[NormalizedPinyin]:
    """Normalize, or return None if malformed.

    For advisory scans where a bad token should not stop the run.
    """
    try:
        return normalize_pinyin(syllables)
    except MalformedPinyin:
        return None


def find_taiwan_pinyin(definition: str) -> list[str]:
    """Find raw "Taiwan pr. [...]" syllable strings in a definition field.

    Args:
        definition: Definition text including its slash delimiters.

    Returns:
        Raw bracket contents in order of appearance.
    """
    return [m.group(1) for m in TAIWAN_PATTERN.finditer(definition)]


def entry_definition(entry: Entry) -> str:
    """Rebuild the slash-delimited definition field of an entry."""
    parts = ["; ".join(sense.glosses) for sense in entry.senses]
    return "/" + "/".join(parts) + "/"


def taiwan_pronunciations(entry: Entry) -> list[NormalizedPinyin]:
    """Normalize every Taiwan alternate pronunciation of an entry.

    Raises:
        MalformedPinyin: If an alternate fails validation; ``line`` is set
            to the entry's line number.
    """
    results = []
    for raw in find_taiwan_pinyin(entry_definition(entry)):
        try:
            results.append(normalize_pinyin_string(raw))
        except MalformedPinyin as e:
            raise MalformedPinyin(e.token, line=entry.line_number) from e
    return results


def entry_pronunciations(entry: Entry) -> list[NormalizedPinyin]:
    """Main pronunciation followed by distinct Taiwan alternates."""
    try:
        main = normalize_pinyin(entry.pronunciation)
    except MalformedPinyin as e:
        raise MalformedPinyin(e.token, line=entry.line_number) from e

    results = [main]
    for alt in taiwan_pronunciations(entry):
        if alt not in results:
            results.append(alt)
    return results
