"""Pytest configuration and fixtures."""

import pytest
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


SAMPLE_LINES = [
    "\ufeff# CC-CEDICT test sample",                            # 1
    "# traditional simplified [pinyin] /glosses/",              # 2
    "",                                                         # 3
    "憂鬱 忧郁 [you1 yu4] /sad/depressed; melancholy/",          # 4
    "愁 愁 [chou2] /variant of 憂鬱[you1 yu4]/",                 # 5
    "   ",                                                      # 6
    "出租車 出租车 [chu1 zu1 che1] /taxi/",                       # 7
    "的士 的士 [di1 shi4] /variant of 出租車/",                   # 8
    "垃圾 垃圾 [la1 ji1] /trash; refuse/Taiwan pr. [le4 se4]/",   # 9
    "桜 桜 [ying1] /Japanese variant of 櫻|樱/",                  # 10
    "說 说 [shuo1] /to speak/",                                 # 11
    "説 说 [shuo1] /variant of 說[shui4]/",                      # 12
    "甲 甲 [jia3] /variant of the above/",                      # 13
]

SAMPLE_RECORD_LINES = [4, 5, 7, 8, 9, 10, 11, 12, 13]


def write_dict(path: Path, lines: list[str], newline: str = "\n") -> Path:
    """Write dictionary lines to a UTF-8 file."""
    path.write_bytes((newline.join(lines) + newline).encode("utf-8"))
    return path


@pytest.fixture
def sample_lines():
    """Sample CC-CEDICT lines."""
    return list(SAMPLE_LINES)


@pytest.fixture
def sample_dict(tmp_path):
    """Sample CC-CEDICT file."""
    return write_dict(tmp_path / "cedict_ts.u8", SAMPLE_LINES)


@pytest.fixture
def make_dict(tmp_path):
    """Factory writing arbitrary dictionary lines to a file."""
    def _make(lines: list[str], newline: str = "\n", name: str = "dict.u8") -> Path:
        return write_dict(tmp_path / name, lines, newline)
    return _make
