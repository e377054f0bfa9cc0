"""Regex rewrite passes for backslash, quoted and bracket math delimiters.

Conversion table
----------------
``> \\[`` / ``> ...`` / ``> \\]``  →  ``> $$ ... $$``   (quoted display block)
``\\[ ... \\]``                  →  ``$$ ... $$``     (display math)
multi-line ``[`` / ``...`` / ``]``  →  ``$$ ... $$``     (only if it looks like maths)
single-line ``[ ... ]``          →  ``$$ ... $$``     (only if it looks like maths)
``\\( ... \\)``                  →  ``$ ... $``       (inline math)

Every pass takes a text and returns ``(new_text, ConversionStats)`` so the
caller decides how to combine the counts.  Display results always put the
math on its own lines: ``$$\\n<trimmed inner>\\n$$``.

Bracket passes are heuristic, so they skip anything overlapping math that is
already in dollar form (see ``fixmath.masking``).  Markdown links
(``[text](url)``, ``[text]: url``), wikilinks (``[[page]]``) and footnotes
(``[^1]``) are never touched.
"""

import re

from fixmath.heuristics import has_latex_command, is_mathy
from fixmath.masking import sub_unprotected
from fixmath.stats import ConversionStats


# ── Patterns ───────────────────────────────────────────────────────────────────

# > \[
# > ...
# > \]
QUOTED_DISPLAY_BLOCK = re.compile(
    r"^>[ \t]*\\\[[ \t]*\r?\n(.*?)\r?\n>[ \t]*\\\][ \t]*$",
    re.MULTILINE | re.DOTALL,
)

# > [
# > ...
# > ]
QUOTED_BRACKET_BLOCK = re.compile(
    r"^>[ \t]*\[[ \t]*\r?\n(.*?)\r?\n>[ \t]*\][ \t]*$",
    re.MULTILINE | re.DOTALL,
)

# \[ ... \]   (an escaped \\[ is left alone)
BACKSLASH_DISPLAY = re.compile(r"(?<!\\)\\\[(.*?)\\\]", re.DOTALL)

# A bare "[" line (optionally after a heading / list / quote marker), the
# content lines, then a bare "]" line.
BRACKET_BLOCK = re.compile(
    r"^[ \t]*([#>\-*+0-9.]+\s*)?\[[ \t]*\r?\n(.*?)\r?\n[ \t]*\][ \t]*$",
    re.MULTILINE | re.DOTALL,
)

INLINE_BRACKET = re.compile(r"\[([^\]]+)\]")

# \( ... \) on a single line
BACKSLASH_INLINE = re.compile(r"(?<!\\)\\\((.+?)\\\)")

_QUOTE_PREFIX = re.compile(r"^>[ \t]*")
_NEWLINE = re.compile(r"\r?\n")


# ── Helpers ────────────────────────────────────────────────────────────────────


def _display(inner: str) -> str:
    return f"$$\n{inner.strip()}\n$$"


def _unquote(inner: str) -> str:
    """Strip the ``>`` prefix from each line and join the lines with spaces."""
    return " ".join(_QUOTE_PREFIX.sub("", line) for line in _NEWLINE.split(inner)).strip()


def _bracket_is_math(inner: str) -> bool:
    if inner.startswith("^"):  # footnote
        return False
    return has_latex_command(inner) or is_mathy(inner)


# ── Passes ─────────────────────────────────────────────────────────────────────


def convert_quoted_display_blocks(text: str) -> tuple[str, ConversionStats]:
    """Quoted ``\\[ ... \\]`` block → a single ``> $$ ... $$`` line."""
    text, n = QUOTED_DISPLAY_BLOCK.subn(
        lambda m: f"> $$ {_unquote(m.group(1))} $$", text
    )
    return text, ConversionStats(block_count=n)


def collapse_quoted_bracket_blocks(text: str) -> tuple[str, ConversionStats]:
    """Quoted multi-line ``[ ... ]`` → ``> [ ... ]`` on one line.

    Nothing is counted here: the collapsed line is picked up by
    ``convert_inline_brackets``.  Blocks that pass would reject are left
    as they are so that no uncounted edit reaches the output.
    """

    def _collapse(m: re.Match) -> str:
        cleaned = _unquote(m.group(1))
        if "]" in cleaned or "$" in cleaned or not _bracket_is_math(cleaned):
            return m.group(0)
        return f"> [ {cleaned} ]"

    return QUOTED_BRACKET_BLOCK.sub(_collapse, text), ConversionStats()


def convert_backslash_display(text: str) -> tuple[str, ConversionStats]:
    """``\\[ ... \\]`` → ``$$ ... $$``."""
    text, n = BACKSLASH_DISPLAY.subn(lambda m: _display(m.group(1)), text)
    return text, ConversionStats(block_count=n)


def convert_bracket_blocks(text: str) -> tuple[str, ConversionStats]:
    """Multi-line ``[`` ... ``]`` block → ``$$ ... $$`` when the body is maths.

    A leading markdown prefix such as ``> `` or ``- `` is kept in front of
    the opening ``$$``.
    """

    def _convert(m: re.Match):
        prefix, inner = m.group(1) or "", m.group(2)
        if not is_mathy(inner):
            return None
        return prefix + _display(inner)

    text, n = sub_unprotected(BRACKET_BLOCK, _convert, text)
    return text, ConversionStats(block_count=n)


def convert_inline_brackets(text: str) -> tuple[str, ConversionStats]:
    """Single ``[ ... ]`` span → ``$$ ... $$`` when it holds maths.

    Examples: ``[ \\frac{a}{b} ]``, ``[ 2 + 2 = 4 ]``.
    """

    def _convert(m: re.Match):
        following = m.string[m.end():m.end() + 1]
        if following in ("(", ":"):
            return None  # [text](url) or [text]: url
        if m.group(0).startswith("[["):
            return None  # [[wikilink]]
        inner = m.group(1)
        if not _bracket_is_math(inner):
            return None
        return _display(inner)

    text, n = sub_unprotected(INLINE_BRACKET, _convert, text)
    return text, ConversionStats(block_count=n)


def convert_backslash_inline(text: str) -> tuple[str, ConversionStats]:
    """``\\( ... \\)`` → ``$ ... $``."""
    text, n = BACKSLASH_INLINE.subn(lambda m: f"${m.group(1).strip()}$", text)
    return text, ConversionStats(inline_count=n)
