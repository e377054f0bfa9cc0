"""Lexical "does this look like maths?" predicates.

These are deliberately shallow: there is no LaTeX parser behind them, only
character-class cues.  ``is_mathy`` is shared by the bracket and parenthesis
converters; ``has_latex_command`` is the looser extra signal used for explicit
``[ ... ]`` spans.
"""

import re


# ── Patterns ───────────────────────────────────────────────────────────────────

# Backslash, sub/superscripts, common maths symbols, \text{...}
_EXPLICIT_MARKER = re.compile(r"[\\_^→∞±≥≤]|\\text\{")

# LaTeX digit grouping such as 123{,}456 or 1{.}234
_GROUPED_DIGITS = re.compile(r"\d+\{[,.\s]\}\d+")

_DIGIT = re.compile(r"\d")
_OPERATOR = re.compile(r"[+\-*/=<>,]")
_BARE_NUMBER = re.compile(r"^\s*-?\d+(?:\.\d+)?\s*$")

# x=y, a<b, x = y + z
_VARIABLE_RELATION = re.compile(r"^[a-zA-Z]\s*[=<>+\-*/]\s*[a-zA-Z]")

_ASCII_LETTER = re.compile(r"[a-zA-Z]")
_ASCII_WORD = re.compile(r"\b[a-zA-Z]{2,}\b", re.ASCII)

_LATEX_COMMAND = re.compile(r"\\[a-zA-Z]+")


# ── Public API ─────────────────────────────────────────────────────────────────


def is_mathy(s: str) -> bool:
    """Return True if *s* reads like a mathematical expression.

    Rules, first match wins:

    1. explicit markers: ``\\``, ``_``, ``^``, ``→ ∞ ± ≥ ≤`` or ``\\text{``
    2. grouped digits like ``123{,}456``
    3. a digit together with one of ``+ - * / = < > ,``
    4. a bare number: ``0``, ``-1``, ``3.14``
    5. a single-letter relation: ``x=y``, ``a < b``
    6. letters and operators but no word of two or more letters
       (``n(k-n)`` and ``a+b`` qualify, ``a plus b`` does not)
    """
    if _EXPLICIT_MARKER.search(s):
        return True

    if _GROUPED_DIGITS.search(s):
        return True

    has_op = bool(_OPERATOR.search(s))
    if has_op and _DIGIT.search(s):
        return True

    if _BARE_NUMBER.match(s):
        return True

    if _VARIABLE_RELATION.match(s):
        return True

    if has_op and _ASCII_LETTER.search(s) and not _ASCII_WORD.search(s):
        return True

    return False


def has_latex_command(s: str) -> bool:
    """True if *s* contains a backslash command such as ``\\frac``."""
    return bool(_LATEX_COMMAND.search(s))


def strip_latex_commands(s: str) -> str:
    """Remove ``\\name`` tokens so command names don't read as prose."""
    return _LATEX_COMMAND.sub("", s)
