"""Cross-reference resolution for variant references.

Resolves "variant of" references detected in glosses to the line numbers
of the records they point at.

Passes:
    1. Index build: every reference goes into index A (Pinyin given) or
       index B (no Pinyin; disambiguated by the referrer's letter case).
    2. Matching: every record looks up its own keys and registers itself
       as a target.
    3. Fallback: index A keys that found nothing are collapsed into index C
       without the Pinyin and matched again. Only runs if something
       collapsed.

A key with exactly one target is resolved. Anything else goes to the
exception report.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable

from ..exceptions import UnclassifiableCase
from ..schema import Entry, ReferenceLink
from ..variants import extract_from_senses

logger = logging.getLogger(__name__)

JAPANESE_VARIANT = re.compile(r"\s*Japanese\s+variant\s+of\s+\S+\s*", re.IGNORECASE)

ReferenceIndex = dict[tuple[str, ...], ReferenceLink]


def case_tag(entry: Entry) -> str:
    """Classify the first Pinyin syllable as uppercase or lowercase.

    Args:
        entry: Parsed record.

    Returns:
        "U" or "L".

    Raises:
        UnclassifiableCase: If the first character is not an ASCII letter.
    """
    first = entry.pronunciation[0][:1]
    if "A" <= first <= "Z":
        return "U"
    if "a" <= first <= "z":
        return "L"
    raise UnclassifiableCase(entry.line_number)


def is_japanese_variant(entry: Entry) -> bool:
    """Check if the record's only gloss is a "Japanese variant of" note."""
    if len(entry.senses) != 1 or len(entry.senses[0].glosses) != 1:
        return False
    return JAPANESE_VARIANT.fullmatch(entry.senses[0].glosses[0]) is not None


def han_forms(entry: Entry) -> list[str]:
    """Han renderings a reference may use to point at this record."""
    return entry.headwords + [f"{entry.traditional}|{entry.simplified}"]


@dataclass
class ExceptionRecord:
    """A reference key that did not resolve to exactly one record."""

    index: str                  # "A", "B" or "C"
    key: tuple[str, ...]
    sources: list[int]
    targets: list[int]

    @property
    def missing(self) -> bool:
        return not self.targets

    @property
    def ambiguous(self) -> bool:
        return len(self.targets) > 1

    def format(self) -> str:
        """Render as "[src1, src2]: t1 t2"."""
        line = "[" + ", ".join(str(s) for s in self.sources) + "]:"
        for target in self.targets:
            line += f" {target}"
        return line


@dataclass
class ResolutionResult:
    """Canonical reference map plus unresolved and ambiguous keys."""

    reference_map: dict[int, list[int]] = field(default_factory=dict)
    exceptions: list[ExceptionRecord] = field(default_factory=list)
    passes: int = 0

    def format_map(self) -> list[str]:
        """Render map lines as "<source>: <t1> <t2> ...", ascending."""
        return [
            f"{src}:" + "".join(f" {t}" for t in targets)
            for src, targets in sorted(self.reference_map.items())
        ]

    def format_exceptions(self) -> list[str]:
        return [record.format() for record in self.exceptions]


class ReferenceResolver:
    """Resolves variant references across a whole dictionary.

    Every pass reads the whole source. A CedictParser rewinds on each
    iteration; a one-shot iterator is copied into a list first. The
    indices belong to a single run() call and are discarded afterwards.
    """

    def __init__(self, source: Iterable[Entry]):
        """Initialize resolver.

        Args:
            source: Parsed entries or a parser over them.
        """
        if iter(source) is source:
            source = list(source)
        self.source = source

    def run(self) -> ResolutionResult:
        """Run all passes and build the result.

        Returns:
            ResolutionResult with the canonical map and exception report.

        Raises:
            UnclassifiableCase: If a record's Pinyin casing is needed but
                cannot be determined.
            MalformedRecord: Propagated from the parser.
        """
        index_a: ReferenceIndex = {}
        index_b: ReferenceIndex = {}

        self._build_indices(index_a, index_b)
        logger.debug(
            "Pass 1: %d pinyin keys, %d casing keys", len(index_a), len(index_b)
        )

        self._match(index_a, index_b)
        passes = 2

        index_c = self._collapse(index_a)
        if index_c:
            self._match_fallback(index_c)
            passes = 3
        logger.debug("Fallback index: %d keys", len(index_c))

        indices = (("A", index_a), ("B", index_b), ("C", index_c))
        result = ResolutionResult(
            reference_map=self._emit_map(indices),
            exceptions=self._emit_exceptions(indices),
            passes=passes,
        )
        logger.info(
            "Resolved %d referring records, %d exceptions in %d passes",
            len(result.reference_map),
            len(result.exceptions),
            passes,
        )
        return result

    def _build_indices(self, index_a: ReferenceIndex, index_b: ReferenceIndex) -> None:
        for entry in self.source:
            if is_japanese_variant(entry):
                continue

            for ref in extract_from_senses(entry.senses):
                if ref.pinyin:
                    key = (ref.forms, " ".join(ref.pinyin))
                    index = index_a
                else:
                    key = (ref.forms, case_tag(entry))
                    index = index_b

                index.setdefault(key, ReferenceLink()).add_source(entry.line_number)

    def _match(self, index_a: ReferenceIndex, index_b: ReferenceIndex) -> None:
        for entry in self.source:
            tag = case_tag(entry)
            for forms in han_forms(entry):
                link = index_a.get((forms, entry.pinyin))
                if link is not None:
                    link.add_target(entry.line_number)
                link = index_b.get((forms, tag))
                if link is not None:
                    link.add_target(entry.line_number)

    def _collapse(self, index_a: ReferenceIndex) -> ReferenceIndex:
        index_c: ReferenceIndex = {}
        missing = [key for key, link in index_a.items() if link.is_missing]
        for key in missing:
            link = index_a.pop(key)
            collapsed = index_c.setdefault(key[:1], ReferenceLink())
            for line in link.sources:
                collapsed.add_source(line)
        return index_c

    def _match_fallback(self, index_c: ReferenceIndex) -> None:
        for entry in self.source:
            for forms in han_forms(entry):
                link = index_c.get((forms,))
                if link is not None:
                    link.add_target(entry.line_number)

    @staticmethod
    def _emit_map(indices) -> dict[int, list[int]]:
        rmap: dict[int, set[int]] = {}
        for _, index in indices:
            for link in index.values():
                if not link.is_resolved:
                    continue
                target = link.targets[0]
                for src in link.sources:
                    if src != target:
                        rmap.setdefault(src, set()).add(target)
        return {src: sorted(targets) for src, targets in sorted(rmap.items())}

    @staticmethod
    def _emit_exceptions(indices) -> list[ExceptionRecord]:
        return [
            ExceptionRecord(
                index=name,
                key=key,
                sources=link.source_lines,
                targets=list(link.targets),
            )
            for name, index in indices
            for key, link in index.items()
            if not link.is_resolved
        ]


def resolve(source: Iterable[Entry]) -> ResolutionResult:
    """Convenience function to resolve references in one call."""
    return ReferenceResolver(source).run()
