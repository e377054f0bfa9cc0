"""Counters reported by a single transform call."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ConversionStats:
    inline_count: int = 0
    block_count: int = 0

    def __add__(self, other: "ConversionStats") -> "ConversionStats":
        return ConversionStats(
            inline_count=self.inline_count + other.inline_count,
            block_count=self.block_count + other.block_count,
        )

    @property
    def total(self) -> int:
        return self.inline_count + self.block_count

    def summary(self) -> str:
        """Human-readable one-liner, e.g. ``Converted 3 formulas (2 inline, 1 block)``."""
        total = self.total
        if total == 0:
            return "No changes required"

        msg = f"Converted {total} formula{'s' if total != 1 else ''}"
        if self.inline_count and self.block_count:
            msg += f" ({self.inline_count} inline, {self.block_count} block)"
        elif self.inline_count:
            msg += " (inline)"
        else:
            msg += " (block)"
        return msg
