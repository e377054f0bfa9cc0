"""Split a markdown document into fenced-code and prose segments.

Only prose is ever handed to the converters, so everything between a pair of
code fences comes back byte-for-byte.  Fence rules follow the loosest common
convention:

* a fence line is optional indentation followed by 3+ backticks or 3+ tildes
  (anything may follow on the same line);
* a fence is closed by a later fence line of the *same* character whose run
  is at least as long as the opener;
* a fence that is never closed runs to the end of the document.
"""

import re
from dataclasses import dataclass
from enum import Enum


class SegmentKind(str, Enum):
    CODE = "code"
    TEXT = "text"


@dataclass(frozen=True)
class Segment:
    kind: SegmentKind
    content: str


# Each line keeps its own terminator so that joining segments is lossless.
_LINE = re.compile(r"[^\n]*\n|[^\n]+")
_FENCE_LINE = re.compile(r"^\s*(`{3,}|~{3,})(.*)$")


def split_by_code_fences(text: str) -> list[Segment]:
    """Return the ordered code / text segments of *text*.

    ``"".join(s.content for s in segments) == text`` always holds.
    """
    segments: list[Segment] = []
    buf: list[str] = []

    in_code = False
    fence_char = ""
    fence_len = 0

    def flush(kind: SegmentKind) -> None:
        if buf:
            segments.append(Segment(kind, "".join(buf)))
            buf.clear()

    for line in _LINE.findall(text):
        m = _FENCE_LINE.match(line.rstrip("\r\n"))
        if not m:
            buf.append(line)
            continue

        fence = m.group(1)
        if not in_code:
            flush(SegmentKind.TEXT)
            in_code = True
            fence_char, fence_len = fence[0], len(fence)
            buf.append(line)
        elif fence[0] == fence_char and len(fence) >= fence_len:
            buf.append(line)
            flush(SegmentKind.CODE)
            in_code = False
            fence_char, fence_len = "", 0
        else:
            # A different or shorter fence inside a block is plain content.
            buf.append(line)

    flush(SegmentKind.CODE if in_code else SegmentKind.TEXT)
    return segments
