from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from geobuffer.buffer.strategies import EndStrategy, Side


Point2 = Tuple[float, float]


class PieceKind(Enum):
    SEGMENT = "segment"
    JOIN = "join"
    END_CAP = "end_cap"
    CIRCLE = "circle"
    CONCAVE = "concave"


@dataclass(frozen=True)
class Piece:
    index: int
    kind: PieceKind
    points: Tuple[Point2, ...]
    origin: Tuple[Point2, ...]
    side: Side
    ring_index: int
    end_style: Optional[str] = None

    @property
    def first_point(self) -> Point2:
        return self.points[0]

    @property
    def last_point(self) -> Point2:
        return self.points[-1]


def _copy_points(points: Sequence[Point2]) -> Tuple[Point2, ...]:
    return tuple((float(p[0]), float(p[1])) for p in points)


class PieceCollection:
    """Accumulates buffer pieces, grouped into output rings in emission order.

    One collection belongs to one `buffer()` call. The assembler stores the
    resolved rings and result back on it for the second visitor pass.
    """

    def __init__(self) -> None:
        self.pieces: List[Piece] = []
        self.ring_index = -1
        self.rings: List[List[Point2]] = []
        self.result = None

    def start_new_ring(self) -> None:
        self.ring_index += 1

    def _add(self, kind: PieceKind, points: Sequence[Point2], origin: Sequence[Point2], side: Side, end_style: Optional[str] = None) -> Piece:
        if self.ring_index < 0:
            self.start_new_ring()
        piece = Piece(
            index=len(self.pieces),
            kind=kind,
            points=_copy_points(points),
            origin=_copy_points(origin),
            side=side,
            ring_index=self.ring_index,
            end_style=end_style,
        )
        self.pieces.append(piece)
        return piece

    def add_piece(self, kind: PieceKind, points: Sequence[Point2], origin: Sequence[Point2], side: Side = Side.LEFT) -> Piece:
        if len(points) < 2:
            raise ValueError(f"{kind.value} piece needs at least 2 points")
        return self._add(kind, points, origin, side)

    def add_endcap(self, end_strategy: EndStrategy, points: Sequence[Point2], reference_point: Point2, side: Side = Side.LEFT) -> Piece:
        if len(points) < 2:
            raise ValueError("end cap needs at least 2 points")
        return self._add(PieceKind.END_CAP, points, (reference_point,), side, end_style=getattr(end_strategy, "style", None))

    @property
    def ring_count(self) -> int:
        return self.ring_index + 1

    def ring_pieces(self, ring_index: int) -> List[Piece]:
        return [p for p in self.pieces if p.ring_index == ring_index]

    def ring_chain(self, ring_index: int) -> List[Point2]:
        """Concatenate the output points of one ring, dropping shared end points."""
        chain: List[Point2] = []
        for piece in self.ring_pieces(ring_index):
            pts = list(piece.points)
            if chain and pts and chain[-1] == pts[0]:
                pts = pts[1:]
            chain.extend(pts)
        return chain

    def counts(self, ring_index: Optional[int] = None) -> Dict[PieceKind, int]:
        out: Dict[PieceKind, int] = {k: 0 for k in PieceKind}
        for p in self.pieces:
            if ring_index is None or p.ring_index == ring_index:
                out[p.kind] += 1
        return out

    def summary(self) -> dict:
        return {
            "rings": int(self.ring_count),
            "pieces": len(self.pieces),
            "by_kind": {k.value: n for k, n in self.counts().items()},
        }
