"""Pluggable pronunciation transcription backends.

Renders tone-numbered CC-CEDICT Pinyin through a unified interface.

Backends:
    - pinyin: Diacritic Pinyin via cidian.normalizer (no dependencies)
    - epitran: IPA, pure Python (cmn-Latn)
    - phonemizer: IPA, wraps espeak-ng (requires system install)
    - espeak: IPA, calls espeak-ng directly (requires system install)

Usage:
    from cidian.phonetics import transcribe
    text = transcribe(["zhong1", "guo2"])              # "zhōngguó"
    ipa = transcribe(["zhong1", "guo2"], backend="epitran")

    from cidian.phonetics import register_transcriber
    register_transcriber("custom", MyTranscriberClass)
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ..exceptions import MalformedPinyin
from ..normalizer import normalize_pinyin, try_normalize

logger = logging.getLogger(__name__)

# Registry of available transcribers
_TRANSCRIBERS: dict[str, type["Transcriber"]] = {}
_DEFAULT_TRANSCRIBER: str = "pinyin"


class Transcriber(ABC):
    """Base class for transcription backends."""

    name: str = "base"

    @abstractmethod
    def transcribe(self, syllables: Sequence[str]) -> Optional[str]:
        """Transcribe one pronunciation.

        Args:
            syllables: Tone-numbered syllables, e.g. ["zhong1", "guo2"].

        Returns:
            Transcription or None if failed.
        """
        pass

    def batch_transcribe(
        self,
        pronunciations: list[Sequence[str]],
        skip_errors: bool = True
    ) -> dict[str, Optional[str]]:
        """Transcribe multiple pronunciations.

        Args:
            pronunciations: List of syllable sequences.
            skip_errors: If True, return None for failures.

        Returns:
            Dict mapping space-joined Pinyin to transcription.
        """
        results = {}
        for syllables in pronunciations:
            key = " ".join(syllables)
            try:
                results[key] = self.transcribe(syllables)
            except MalformedPinyin:
                if skip_errors:
                    logger.warning("Skipping malformed Pinyin: %s", key)
                    results[key] = None
                else:
                    raise
        return results


# =============================================================================
# Pinyin Backend
# =============================================================================

class PinyinTranscriber(Transcriber):
    """Diacritic Pinyin rendering.

    Raises MalformedPinyin on invalid input instead of returning None.
    """

    name = "pinyin"

    def transcribe(self, syllables: Sequence[str]) -> Optional[str]:
        return normalize_pinyin(syllables).text


# =============================================================================
# Epitran Backend
# =============================================================================

class EpitranTranscriber(Transcriber):
    """Epitran-based IPA transcriber.

    Pure Python.
    Install: pip install epitran
    """

    name = "epitran"
    code = "cmn-Latn"

    def __init__(self):
        self._instance = None

    def _get_instance(self):
        if self._instance is None:
            try:
                import epitran
            except ImportError as e:
                raise ImportError(
                    "epitran required. Install: pip install epitran"
                ) from e
            self._instance = epitran.Epitran(self.code)
        return self._instance

    def transcribe(self, syllables: Sequence[str]) -> Optional[str]:
        pinyin = try_normalize(syllables)
        if pinyin is None:
            return None
        try:
            epi = self._get_instance()
            return epi.transliterate(pinyin.text)
        except Exception:
            return None


# =============================================================================
# Espeak Backend
# =============================================================================

class EspeakTranscriber(Transcriber):
    """Espeak-ng based IPA transcriber.

    Requires espeak-ng system install.
    Linux: apt install espeak-ng
    macOS: brew install espeak-ng
    """

    name = "espeak"
    voice = "cmn"

    def transcribe(self, syllables: Sequence[str]) -> Optional[str]:
        try:
            result = subprocess.run(
                ["espeak-ng", "-v", self.voice, "-q", "--ipa", " ".join(syllables)],
                capture_output=True,
                text=True,
                timeout=5,
            )
            if result.returncode == 0:
                return result.stdout.strip()
            return None
        except Exception:
            return None


# =============================================================================
# Phonemizer Backend
# =============================================================================

class PhonemizerTranscriber(Transcriber):
    """Phonemizer-based IPA transcriber.

    Install: pip install phonemizer
    Requires: espeak-ng system install
    """

    name = "phonemizer"
    language = "cmn"

    def transcribe(self, syllables: Sequence[str]) -> Optional[str]:
        try:
            from phonemizer import phonemize

            result = phonemize(
                " ".join(syllables),
                language=self.language,
                backend="espeak",
                strip=True,
            )
            return result if result else None
        except Exception:
            return None


# =============================================================================
# Registry Functions
# =============================================================================

def _init_registry():
    """Initialize the transcriber registry with built-in backends."""
    _TRANSCRIBERS.clear()
    _TRANSCRIBERS.update({
        "pinyin": PinyinTranscriber,
        "epitran": EpitranTranscriber,
        "espeak": EspeakTranscriber,
        "phonemizer": PhonemizerTranscriber,
    })


_init_registry()

# Cached instances
_INSTANCES: dict[str, Transcriber] = {}


def get_transcriber(name: str) -> Transcriber:
    """Get a transcriber instance by name.

    Args:
        name: Transcriber name.

    Returns:
        Transcriber instance (cached).
    """
    if name not in _TRANSCRIBERS:
        raise ValueError(
            f"Unknown transcriber: {name}. "
            f"Available: {list(_TRANSCRIBERS.keys())}"
        )

    if name not in _INSTANCES:
        _INSTANCES[name] = _TRANSCRIBERS[name]()

    return _INSTANCES[name]


def register_transcriber(name: str, cls: type[Transcriber]) -> None:
    """Register a custom transcriber."""
    _TRANSCRIBERS[name] = cls
    _INSTANCES.pop(name, None)


def list_transcribers() -> list[str]:
    """List available transcriber names."""
    return list(_TRANSCRIBERS.keys())


def get_default_transcriber() -> str:
    """Get the default transcriber name."""
    return _DEFAULT_TRANSCRIBER


def set_default_transcriber(name: str) -> None:
    """Set the default transcriber."""
    global _DEFAULT_TRANSCRIBER
    if name not in _TRANSCRIBERS:
        raise ValueError(f"Unknown transcriber: {name}")
    _DEFAULT_TRANSCRIBER = name


# =============================================================================
# Convenience Functions
# =============================================================================

def transcribe(
    syllables: Sequence[str],
    backend: Optional[str] = None
) -> Optional[str]:
    """Transcribe a pronunciation using the default or specified backend."""
    transcriber = get_transcriber(backend or _DEFAULT_TRANSCRIBER)
    return transcriber.transcribe(syllables)


def batch_transcribe(
    pronunciations: list[Sequence[str]],
    backend: Optional[str] = None,
    skip_errors: bool = True
) -> dict[str, Optional[str]]:
    """Batch transcribe pronunciations."""
    transcriber = get_transcriber(backend or _DEFAULT_TRANSCRIBER)
    return transcriber.batch_transcribe(pronunciations, skip_errors=skip_errors)
