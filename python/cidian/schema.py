"""Record schema and data structures for cidian.

Core concept:
    - Each dictionary line parses into one immutable Entry
    - Glosses may carry "variant of" references to other headwords
    - References are resolved to line numbers across the whole dictionary

Example:
    20: 愁 愁 [chou2] /variant of 憂鬱[you1 yu4]/
    -> HanPinyin(han="憂鬱", pinyin=("you1", "yu4"))
    -> resolved against line 10: 憂鬱 忧郁 [you1 yu4] /sad/
"""

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class Sense:
    """One slash-delimited component of a definition."""

    glosses: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"glosses": list(self.glosses)}


@dataclass(frozen=True)
class Entry:
    """A parsed dictionary record."""

    traditional: str
    simplified: str
    pronunciation: tuple[str, ...]          # ASCII tone-numbered syllables
    senses: tuple[Sense, ...]
    line_number: int = 0                    # 1-based line in source file

    @property
    def glosses(self) -> list[str]:
        """All glosses of all senses, in order."""
        return [g for sense in self.senses for g in sense.glosses]

    @property
    def pinyin(self) -> str:
        """Pronunciation with single spaces between syllables."""
        return " ".join(self.pronunciation)

    @property
    def headwords(self) -> list[str]:
        """Distinct headword renderings, traditional first."""
        if self.simplified == self.traditional:
            return [self.traditional]
        return [self.traditional, self.simplified]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "line_number": self.line_number,
            "traditional": self.traditional,
            "simplified": self.simplified,
            "pronunciation": list(self.pronunciation),
            "senses": [s.to_dict() for s in self.senses],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Entry":
        """Create from dictionary."""
        return cls(
            traditional=data["traditional"],
            simplified=data["simplified"],
            pronunciation=tuple(data["pronunciation"]),
            senses=tuple(
                Sense(glosses=tuple(s["glosses"])) for s in data["senses"]
            ),
            line_number=data.get("line_number", 0),
        )


# ---------------------------------------------------------------------------
# Variant reference descriptors
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HanPinyin:
    """Reference to a single Han rendering with Pinyin."""

    han: str
    pinyin: tuple[str, ...]

    @property
    def forms(self) -> str:
        return self.han


@dataclass(frozen=True)
class HanOnly:
    """Reference to a single Han rendering without Pinyin."""

    han: str
    pinyin: tuple[str, ...] = ()

    @property
    def forms(self) -> str:
        return self.han


@dataclass(frozen=True)
class HanPair:
    """Reference to a traditional|simplified pair.

    A pair followed by a Pinyin bracket keeps the syllables in ``pinyin``
    and is keyed as a (trad, simp, pinyin) triple.
    """

    trad: str
    simp: str
    pinyin: tuple[str, ...] = ()

    @property
    def forms(self) -> str:
        return f"{self.trad}|{self.simp}"


ReferenceDescriptor = Union[HanPinyin, HanOnly, HanPair]


# ---------------------------------------------------------------------------
# Resolution index values
# ---------------------------------------------------------------------------

@dataclass
class ReferenceLink:
    """Referring lines and resolved target lines for one index key."""

    sources: dict[int, None] = field(default_factory=dict)  # ordered set
    targets: list[int] = field(default_factory=list)

    def add_source(self, line: int) -> None:
        self.sources.setdefault(line, None)

    def add_target(self, line: int) -> None:
        self.targets.append(line)

    @property
    def source_lines(self) -> list[int]:
        return list(self.sources)

    @property
    def slot_count(self) -> int:
        """One slot for the source group plus one per matched target."""
        return 1 + len(self.targets)

    @property
    def is_resolved(self) -> bool:
        """True when exactly one record satisfied the key."""
        return self.slot_count == 2

    @property
    def is_missing(self) -> bool:
        return not self.targets

    @property
    def is_ambiguous(self) -> bool:
        return self.slot_count > 2
