"""Positions within a shell source file."""

from __future__ import annotations

from dataclasses import dataclass

LINE_BIT_SIZE = 18
LINE_MAX = (1 << LINE_BIT_SIZE) - 1

COL_BIT_SIZE = 32 - LINE_BIT_SIZE
COL_MAX = (1 << COL_BIT_SIZE) - 1


@dataclass(frozen=True, order=False)
class Pos:
    """A position within a shell source file.

    ``offset`` is the byte offset, starting at 0. ``line`` and ``col`` start
    at 1; a value of 0 means unknown, which is what lines or columns beyond
    the supported range turn into.
    """

    offset: int = 0
    line: int = 0
    col: int = 0

    @classmethod
    def at(cls, offset: int, line: int, col: int) -> Pos:
        """Build a position, marking out-of-range lines and columns as unknown."""
        if offset < 0:
            raise ValueError(f"negative offset: {offset}")
        if line < 0 or col < 0:
            raise ValueError(f"negative line or column: {line}:{col}")
        if line > LINE_MAX:
            line = 0
        if col > COL_MAX:
            col = 0
        return cls(offset, line, col)

    def __str__(self) -> str:
        line = str(self.line) if self.line > 0 else "?"
        col = str(self.col) if self.col > 0 else "?"
        return f"{line}:{col}"

    def is_valid(self) -> bool:
        """Report whether the position is set; parsed nodes always have valid ones."""
        return self != Pos()

    def after(self, other: Pos) -> bool:
        """Report whether this position comes after ``other``."""
        return self.offset > other.offset

    def add_col(self, n: int) -> Pos:
        """Return the position ``n`` bytes further along the same line."""
        col = self.col + n
        if col > COL_MAX or col < 0:
            col = 0
        return Pos(self.offset + n, self.line, col)


def pos_max(p1: Pos, p2: Pos) -> Pos:
    """Return whichever of the two positions comes later, preferring ``p1`` on ties."""
    return p2 if p2.after(p1) else p1