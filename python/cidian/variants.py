"""Variant reference detection for cidian.

Scans gloss text for "variant of ..." annotations. Recognized forms
(case-insensitive):

    variant of 來|来 [lai2]     -> HanPair("來", "来", ("lai2",))
    variant of 來|来            -> HanPair("來", "来")
    variant of 憂鬱[you1 yu4]   -> HanPinyin("憂鬱", ("you1", "yu4"))
    variant of 出租車           -> HanOnly("出租車")

A phrase followed by anything else yields nothing.
"""

import re
import unicodedata
from typing import Iterable

from .exceptions import EmptyReferenceBracket
from .schema import HanOnly, HanPair, HanPinyin, ReferenceDescriptor, Sense

VARIANT_PHRASE = re.compile(r"variant\s+of\s+", re.IGNORECASE)
HAN_RUN = re.compile(r"[^\s|\[\]]+")
PINYIN_BRACKET = re.compile(r"\s*\[([^\[\]]*)\]")

# Codepoint blocks accepted as ideographs besides category Lo
IDEOGRAPH_BLOCKS = (
    (0x3000, 0x303F),   # CJK Symbols and Punctuation
    (0x25A0, 0x25FF),   # Geometric Shapes
)


def is_ideograph(char: str) -> bool:
    """Check if a character counts as an ideograph.

    Args:
        char: Single character.

    Returns:
        True for category Lo, CJK symbols and punctuation, or geometric
        shapes.
    """
    if unicodedata.category(char) == "Lo":
        return True
    cp = ord(char)
    return any(lo <= cp <= hi for lo, hi in IDEOGRAPH_BLOCKS)


def has_ideograph(text: str) -> bool:
    """Check if text contains at least one ideograph."""
    return any(is_ideograph(c) for c in text)


def _han_at(gloss: str, pos: int) -> tuple[str, int] | None:
    match = HAN_RUN.match(gloss, pos)
    if match is None or not has_ideograph(match.group()):
        return None
    return match.group(), match.end()


def _pinyin_at(gloss: str, pos: int) -> tuple[str, ...]:
    match = PINYIN_BRACKET.match(gloss, pos)
    if match is None:
        return ()
    syllables = tuple(match.group(1).split())
    if not syllables:
        raise EmptyReferenceBracket(gloss)
    return syllables


def extract_references(gloss: str) -> list[ReferenceDescriptor]:
    """Detect variant references in a single gloss.

    Args:
        gloss: Gloss text.

    Returns:
        Descriptors in order of appearance (usually zero or one).

    Raises:
        EmptyReferenceBracket: If a Pinyin bracket is present but empty.
    """
    results: list[ReferenceDescriptor] = []

    for phrase in VARIANT_PHRASE.finditer(gloss):
        first = _han_at(gloss, phrase.end())
        if first is None:
            continue
        han, end = first

        if end < len(gloss) and gloss[end] == "|":
            second = _han_at(gloss, end + 1)
            if second is not None:
                simp, pair_end = second
                pinyin = _pinyin_at(gloss, pair_end)
                results.append(HanPair(trad=han, simp=simp, pinyin=pinyin))
                continue

        pinyin = _pinyin_at(gloss, end)
        if pinyin:
            results.append(HanPinyin(han=han, pinyin=pinyin))
        else:
            results.append(HanOnly(han=han))

    return results


def extract_from_senses(senses: Iterable[Sense]) -> list[ReferenceDescriptor]:
    """Detect variant references across every gloss of every sense."""
    results: list[ReferenceDescriptor] = []
    for sense in senses:
        for gloss in sense.glosses:
            results.extend(extract_references(gloss))
    return results


def count_variant_phrases(gloss: str) -> int:
    """Count occurrences of "variant of" in a gloss."""
    return len(re.findall(r"variant\s+of", gloss, re.IGNORECASE))


def has_variant_phrase(gloss: str) -> bool:
    """Check if a gloss mentions "variant of" anywhere."""
    return count_variant_phrases(gloss) > 0
