"""Phonetics module for cidian.

Provides pluggable transcription backends for record pronunciations.

Usage:
    from cidian.phonetics import transcribe, get_transcriber

    # Use default (diacritic pinyin)
    text = transcribe(["Tai2", "wan1"])

    # Use specific backend
    transcriber = get_transcriber("epitran")
    ipa = transcriber.transcribe(["Tai2", "wan1"])
"""

from .transcribe import (
    Transcriber,
    transcribe,
    batch_transcribe,
    get_transcriber,
    register_transcriber,
    list_transcribers,
    get_default_transcriber,
    set_default_transcriber,
)

__all__ = [
    "Transcriber",
    "transcribe",
    "batch_transcribe",
    "get_transcriber",
    "register_transcriber",
    "list_transcribers",
    "get_default_transcriber",
    "set_default_transcriber",
]
