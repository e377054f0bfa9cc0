"""Protect math that is already in canonical ``$$`` / ``$`` form.

The heuristic converters must never look inside existing math: a ``[1]``
inside ``$$ a_{[1]} $$`` is an index, not a display block, and a ``(x)``
inside ``$f(x)$`` is already inline math.  Instead of cutting the text apart
and gluing it back, callers work with a list of protected ``(start, end)``
intervals.
"""

import re
from bisect import bisect_left
from typing import Callable, Optional

# Display math first so ``$$`` is never read as an empty inline span.
_DISPLAY = r"\$\$.*?\$\$"
# Pandoc's rule: the opening $ is followed by a non-space, the closing $ is
# preceded by a non-space and not followed by a digit, so "$5 and $10" is
# currency rather than maths.
_INLINE = r"(?<![\\$])\$(?![\s$])(?:[^$\n]*?[^\s\\$])?\$(?!\d)"

_DISPLAY_ONLY = re.compile(_DISPLAY, re.DOTALL)
_DISPLAY_OR_INLINE = re.compile(f"{_DISPLAY}|{_INLINE}", re.DOTALL)


def protected_spans(text: str, inline: bool = True) -> list[tuple[int, int]]:
    """Return the sorted, non-overlapping intervals of canonical math in *text*."""
    pattern = _DISPLAY_OR_INLINE if inline else _DISPLAY_ONLY
    return [m.span() for m in pattern.finditer(text)]


def split_protected(text: str, inline: bool = True) -> list[tuple[bool, str]]:
    """Partition *text* into ``(is_protected, chunk)`` pairs, in order.

    Joining the chunks gives back *text*.  Empty unprotected chunks are
    dropped.
    """
    parts: list[tuple[bool, str]] = []
    pos = 0
    for start, end in protected_spans(text, inline=inline):
        if start > pos:
            parts.append((False, text[pos:start]))
        parts.append((True, text[start:end]))
        pos = end
    if pos < len(text):
        parts.append((False, text[pos:]))
    return parts


def sub_unprotected(
    pattern: re.Pattern,
    repl: Callable[[re.Match], Optional[str]],
    text: str,
    inline: bool = True,
) -> tuple[str, int]:
    """``re.subn`` that skips matches touching protected math.

    *repl* may return ``None`` to leave a match as it is.  The count is the
    number of matches actually rewritten.
    """
    spans = protected_spans(text, inline=inline)
    starts = [s for s, _ in spans]
    count = 0

    def _repl(m: re.Match) -> str:
        nonlocal count
        start, end = m.span()
        # Spans are sorted and disjoint: only the last one opening before
        # ``end`` can overlap the match.
        i = bisect_left(starts, end)
        if i and spans[i - 1][1] > start:
            return m.group(0)
        new = repl(m)
        if new is None:
            return m.group(0)
        count += 1
        return new

    return pattern.sub(_repl, text), count
