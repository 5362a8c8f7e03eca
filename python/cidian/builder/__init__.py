"""Dictionary builder module.

Builds whole-dictionary structures from parsed records:
- Cross-reference map of variant references
- Headword/Pinyin key index
"""

from .dictkey import DictKeyBuilder, KeyStats
from .xref import ExceptionRecord, ReferenceResolver, ResolutionResult, resolve

__all__ = [
    "DictKeyBuilder",
    "KeyStats",
    "ExceptionRecord",
    "ReferenceResolver",
    "ResolutionResult",
    "resolve",
]
