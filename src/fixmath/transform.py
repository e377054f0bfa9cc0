"""Normalise the maths delimiters of a whole markdown document.

Pipeline, per prose segment (fenced code is passed through untouched):

1. quoted ``\\[ ... \\]`` blocks           → ``> $$ ... $$``
2. quoted multi-line ``[ ... ]`` blocks    → collapsed onto one line
3. ``\\[ ... \\]``                         → ``$$ ... $$``
4. multi-line ``[ ... ]`` blocks           → ``$$ ... $$``  (if maths)
5. single-line ``[ ... ]``                 → ``$$ ... $$``  (if maths)

After step 5 all display maths is in ``$$`` form and is masked from the
remaining steps:

6. plain ``( ... )``                       → ``$ ... $``    (if maths, and not
                                              inside existing ``$ ... $``)
7. ``\\( ... \\)``                         → ``$ ... $``

The order is significant: display before inline, brackets before
parentheses.  Running ``transform`` on its own output changes nothing.
"""

import logging
from typing import NamedTuple

from fixmath.delimiters import (
    collapse_quoted_bracket_blocks,
    convert_backslash_display,
    convert_backslash_inline,
    convert_bracket_blocks,
    convert_inline_brackets,
    convert_quoted_display_blocks,
)
from fixmath.masking import split_protected
from fixmath.parens import convert_plain_parens
from fixmath.segments import SegmentKind, split_by_code_fences
from fixmath.stats import ConversionStats

logger = logging.getLogger(__name__)


DISPLAY_PASSES = (
    convert_quoted_display_blocks,
    collapse_quoted_bracket_blocks,
    convert_backslash_display,
    convert_bracket_blocks,
    convert_inline_brackets,
)


class TransformResult(NamedTuple):
    text: str
    stats: ConversionStats


def convert_math(text: str) -> tuple[str, ConversionStats]:
    """Run every conversion pass over one prose segment."""
    stats = ConversionStats()

    for step in DISPLAY_PASSES:
        text, delta = step(text)
        stats += delta

    pieces: list[str] = []
    for protected, chunk in split_protected(text, inline=False):
        if not protected:
            chunk, delta = _convert_inline(chunk)
            stats += delta
        pieces.append(chunk)

    return "".join(pieces), stats


def _convert_inline(text: str) -> tuple[str, ConversionStats]:
    # Plain parentheses are heuristic and must not reach into existing $...$;
    # explicit \( ... \) is converted everywhere outside $$ ... $$.
    stats = ConversionStats()
    pieces: list[str] = []
    for protected, chunk in split_protected(text):
        if not protected:
            chunk, delta = convert_plain_parens(chunk)
            stats += delta
        pieces.append(chunk)

    text, delta = convert_backslash_inline("".join(pieces))
    return text, stats + delta


def _convert_segment(text: str) -> tuple[str, ConversionStats]:
    # A consistently CRLF segment is converted with LF endings and restored,
    # so new $$ blocks use the same line ending as their surroundings.
    crlf = text.count("\r\n")
    if crlf and crlf == text.count("\n"):
        converted, stats = convert_math(text.replace("\r\n", "\n"))
        return converted.replace("\n", "\r\n"), stats
    return convert_math(text)


def transform(document: str) -> TransformResult:
    """Rewrite all recognised maths in *document* to ``$`` / ``$$`` form.

    Fenced code blocks come back byte-identical.  The returned stats count
    the spans rewritten, split into inline and display (block) maths.
    """
    stats = ConversionStats()
    out: list[str] = []

    for index, segment in enumerate(split_by_code_fences(document)):
        if segment.kind is SegmentKind.CODE:
            logger.debug("segment %d: code block, %d chars kept", index, len(segment.content))
            out.append(segment.content)
            continue

        converted, delta = _convert_segment(segment.content)
        if delta.total:
            logger.debug(
                "segment %d: %d inline, %d block",
                index, delta.inline_count, delta.block_count,
            )
        stats += delta
        out.append(converted)

    return TransformResult("".join(out), stats)
