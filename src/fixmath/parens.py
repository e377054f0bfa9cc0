"""Convert plain ``( ... )`` used as inline maths delimiters into ``$ ... $``.

Parentheses nest and mix prose with maths, so this is a manual index scan
over the parentheses, paired once up front, rather than a regex:

* ``(x\\to 1)``          → ``$x\\to 1$``
* ``(0/0)``              → ``$0/0$``
* ``(3x^{2}-3 = 0)``     → ``$3x^{2}-3 = 0$``
* ``((3x^{2}-3)' = 6x)`` → ``$((3x^{2}-3)' = 6x)$``
* ``(про (3x^{2}-3) в числителе)`` → ``(про $3x^{2}-3$ в числителе)``
* ``(and so on)``, ``f(x)``, ``(a)b`` → unchanged
"""

import re
from typing import Optional

from fixmath.delimiters import BACKSLASH_INLINE
from fixmath.heuristics import is_mathy, strip_latex_commands
from fixmath.stats import ConversionStats

# Three or more letters in a row, in any script, is a word: "про", "and".
_PROSE_WORD = re.compile(r"[^\W\d_]{3,}")

_AFTER_CLOSE = ").,;:?!"


def _pair_parens(text: str) -> dict[int, Optional[int]]:
    """Map the index of every "(" to its matching ")", or None if unmatched."""
    pairs: dict[int, Optional[int]] = {}
    stack: list[int] = []
    for j, c in enumerate(text):
        if c == "(":
            stack.append(j)
            pairs[j] = None
        elif c == ")" and stack:
            pairs[stack.pop()] = j
    return pairs


def _math_span_at(
    text: str, i: int, pairs: dict[int, Optional[int]]
) -> Optional[tuple[str, int]]:
    """Try to read inline maths in parentheses starting at ``text[i] == "("``.

    Returns the ``$...$`` replacement and the index just past the consumed
    text, or None if the "(" is ordinary text.
    """
    if i > 0 and not text[i - 1].isspace() and text[i - 1] != "(":
        return None

    close = pairs.get(i)
    if close is None:
        return None

    inner = text[i + 1:close]
    # Explicit \( \) inside: the backslash pass owns those.
    if "\\(" in inner or "\\)" in inner:
        return None

    end = close + 1
    while end < len(text) and text[end] == "'":
        end += 1
    primes = text[close + 1:end]

    # Must be followed by a delimiter, otherwise this is f(x)y-style text.
    if end < len(text) and not (text[end].isspace() or text[end] in _AFTER_CLOSE):
        return None

    if _PROSE_WORD.search(strip_latex_commands(inner)):
        return None

    if not is_mathy(inner):
        return None

    body = inner.strip()
    # Keep the outer pair when the inner text opens with its own group.
    if body.startswith("("):
        body = f"({body})"
    return f"${body}{primes}$", end


def convert_plain_parens(text: str) -> tuple[str, ConversionStats]:
    """Rewrite maths-like parenthesised spans in *text* as inline maths."""
    pairs = _pair_parens(text)
    out: list[str] = []
    count = 0
    i = 0

    while i < len(text):
        ch = text[i]

        if ch == "\\":
            # Copy an explicit \( ... \) span through untouched.
            m = BACKSLASH_INLINE.match(text, i)
            if m:
                out.append(m.group(0))
                i = m.end()
                continue

        elif ch == "(":
            span = _math_span_at(text, i, pairs)
            if span is not None:
                rendered, i = span
                out.append(rendered)
                count += 1
                continue

        # Not a match: emit one character and keep scanning, so a maths span
        # nested inside rejected prose is still found.
        out.append(ch)
        i += 1

    return "".join(out), ConversionStats(inline_count=count)
