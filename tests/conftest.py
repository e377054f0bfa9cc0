"""Shared fixtures for the test suite.

All fixtures here produce real files on disk so CLI tests exercise the actual
read / transform / write path rather than hand-crafted stubs.
"""

from pathlib import Path

import pytest
from click.testing import CliRunner


# ── CLI runner ─────────────────────────────────────────────────────────────


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


# ── Note fixtures ──────────────────────────────────────────────────────────


MIXED_NOTE = (
    "# Lecture 3\n"
    "\n"
    "We have \\(x=2\\) and so\n"
    "\\[\n"
    "x^2 = 4\n"
    "\\]\n"
    "\n"
    "```python\n"
    "print(\\(x\\))\n"
    "```\n"
)


@pytest.fixture
def note_file(tmp_path: Path) -> Path:
    """A note with one inline and one display formula plus a code block."""
    path = tmp_path / "note.md"
    path.write_text(MIXED_NOTE, encoding="utf-8")
    return path


@pytest.fixture
def clean_note_file(tmp_path: Path) -> Path:
    """A note that is already in canonical dollar form."""
    path = tmp_path / "clean.md"
    path.write_text("Already fine: $x$ and\n$$\ny=1\n$$\n", encoding="utf-8")
    return path


@pytest.fixture
def crlf_note_file(tmp_path: Path) -> Path:
    """A Windows-style note with CRLF line endings."""
    path = tmp_path / "crlf.md"
    path.write_bytes(b"Line one \\(a+b\\)\r\nLine two\r\n")
    return path
