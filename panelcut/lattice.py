"""Implicit repeating grids used to tile motifs across a panel."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Literal, NamedTuple, Optional, Tuple

LatticeKind = Literal["square", "triangular", "hexagonal", "rhombic"]

SQRT3 = math.sqrt(3.0)


class LatticeCell(NamedTuple):
    row: int
    col: int
    x: float
    y: float

    @property
    def parity(self) -> int:
        return (self.row + self.col) % 2


@dataclass(frozen=True)
class Lattice:
    """Infinite grid with a cell -> world transform.

    Cell ``(row, col)`` maps to ``(col * pitch_x + shift, row * pitch_y)`` where
    ``shift = stagger * pitch_x`` on odd rows.  Only cells covering the panel
    rectangle padded by ``lead`` cells before and ``trail`` cells after are
    ever materialised; counts are ``ceil(dimension / pitch) + trail``.
    """

    kind: LatticeKind
    pitch_x: float
    pitch_y: float
    stagger: float = 0.0

    @classmethod
    def square(cls, pitch: float) -> "Lattice":
        return cls("square", pitch, pitch)

    @classmethod
    def rectangular(cls, pitch_x: float, pitch_y: float) -> "Lattice":
        return cls("square", pitch_x, pitch_y)

    @classmethod
    def triangular(cls, side: float) -> "Lattice":
        return cls("triangular", side, side * SQRT3 * 0.5, stagger=0.5)

    @classmethod
    def hexagonal(cls, column_pitch: float, row_pitch: float) -> "Lattice":
        return cls("hexagonal", column_pitch, row_pitch, stagger=0.5)

    @classmethod
    def rhombic(cls, width: float, height: float) -> "Lattice":
        return cls("rhombic", width, height * 0.5, stagger=0.5)

    def origin(self, row: int, col: int) -> Tuple[float, float]:
        shift = self.pitch_x * self.stagger if row % 2 == 1 else 0.0
        return col * self.pitch_x + shift, row * self.pitch_y

    def span(
        self,
        width: float,
        height: float,
        *,
        lead: int = 1,
        trail: int = 2,
        row_lead: Optional[int] = None,
        row_trail: Optional[int] = None,
    ) -> Tuple[range, range]:
        if row_lead is None:
            row_lead = lead
        if row_trail is None:
            row_trail = trail
        rows = range(-row_lead, math.ceil(height / self.pitch_y) + row_trail)
        cols = range(-lead, math.ceil(width / self.pitch_x) + trail)
        return rows, cols

    def cells(self, width: float, height: float, **padding: Optional[int]) -> Iterator[LatticeCell]:
        rows, cols = self.span(width, height, **padding)
        for row in rows:
            for col in cols:
                x, y = self.origin(row, col)
                yield LatticeCell(row, col, x, y)

    def cell_count(self, width: float, height: float, **padding: Optional[int]) -> int:
        rows, cols = self.span(width, height, **padding)
        return len(rows) * len(cols)


def row_fraction(index: int, count: int) -> float:
    """Position of ``index`` across ``count`` items, in [0, 1]."""

    return index / max(1, count - 1)


__all__ = ["Lattice", "LatticeCell", "LatticeKind", "SQRT3", "row_fraction"]
