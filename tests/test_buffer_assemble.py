from __future__ import annotations

import pytest
import shapely.geometry as sg

from geobuffer.buffer import (
    DistanceSymmetric,
    EndFlat,
    EndRound,
    JoinMiter,
    JoinRound,
    PieceCollection,
    PieceKind,
    ShapelyAssembler,
    buffer,
    piece_polygon,
)
from geobuffer.buffer.strategies import Side
from geobuffer.geometry.primitives import LineString, MultiPolygon, Polygon, Ring


SQUARE = Polygon(exterior=Ring(points=[(0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (0.0, 4.0), (0.0, 0.0)]))
L_LINE = LineString(points=[(0.0, 0.0), (10.0, 0.0), (10.0, 10.0)])


def test_segment_piece_polygon_covers_the_offset_strip() -> None:
    collection = PieceCollection()
    piece = collection.add_piece(PieceKind.SEGMENT, [(0.0, -1.0), (4.0, -1.0)], [(0.0, 0.0), (4.0, 0.0)], Side.LEFT)
    poly = piece_polygon(piece)
    assert poly is not None
    assert poly.area == pytest.approx(4.0)


def test_degenerate_piece_has_no_polygon() -> None:
    collection = PieceCollection()
    piece = collection.add_piece(PieceKind.CONCAVE, [(1.0, 0.0), (2.0, 0.0)], [(0.0, 0.0)], Side.LEFT)
    assert piece_polygon(piece) is None


def test_line_buffer_area_matches_shapely() -> None:
    result = buffer(L_LINE, DistanceSymmetric(1.0), JoinRound(), EndRound())
    assert len(result.polygons) == 1
    expected = sg.LineString(L_LINE.points).buffer(1.0, quad_segs=32).area
    assert result.area() == pytest.approx(expected, rel=1e-2)


def test_flat_miter_line_buffer_is_exact() -> None:
    result = buffer(L_LINE, DistanceSymmetric(1.0), JoinMiter(), EndFlat())
    # two 10 x 2 strips overlapping in a 1 x 1 corner, plus the miter square
    assert result.area() == pytest.approx(40.0)


def test_output_rings_are_oriented() -> None:
    result = buffer(SQUARE, DistanceSymmetric(1.0), JoinRound(), EndRound())
    assert result.polygons[0].exterior.signed_area() > 0.0


def test_zero_distance_returns_areal_input() -> None:
    result = buffer(SQUARE, DistanceSymmetric(0.0), JoinRound(), EndRound())
    assert result.area() == pytest.approx(16.0)
    assert buffer(L_LINE, DistanceSymmetric(0.0), JoinRound(), EndRound()).is_empty()


def test_visitor_sees_both_phases_without_changing_result() -> None:
    seen = []

    def visitor(collection: PieceCollection, phase: int) -> None:
        seen.append((phase, len(collection.pieces), len(collection.rings)))

    plain = buffer(SQUARE, DistanceSymmetric(1.0), JoinRound(), EndRound())
    visited = buffer(SQUARE, DistanceSymmetric(1.0), JoinRound(), EndRound(), visitor=visitor)
    assert [s[0] for s in seen] == [0, 1]
    assert seen[0] == (0, 8, 0)
    assert seen[1][2] == 1
    assert visited.area() == pytest.approx(plain.area())


def test_custom_assembler_is_used() -> None:
    class Recording:
        def __init__(self) -> None:
            self.calls = 0

        def assemble(self, collection, geometry, distance) -> MultiPolygon:
            self.calls += 1
            return MultiPolygon()

    rec = Recording()
    out = buffer(SQUARE, DistanceSymmetric(1.0), JoinRound(), EndRound(), assembler=rec)
    assert rec.calls == 1
    assert out.is_empty()


def test_assembler_stores_rings_on_collection() -> None:
    collection = PieceCollection()
    collection.add_piece(PieceKind.SEGMENT, [(0.0, -1.0), (4.0, -1.0)], [(0.0, 0.0), (4.0, 0.0)], Side.LEFT)
    result = ShapelyAssembler().assemble(collection, L_LINE, DistanceSymmetric(1.0))
    assert collection.result is result
    assert len(collection.rings) == 1
    assert collection.rings[0][0] == collection.rings[0][-1]


class _PlainDistance:
    def __init__(self, distance: float) -> None:
        self.distance = distance

    def apply(self, p1, p2, side) -> float:
        return abs(self.distance)

    def negative(self) -> bool:
        return self.distance < 0.0

    def simplify_distance(self) -> float:
        return 0.0


def test_distance_strategy_needs_only_apply_negative_and_simplify() -> None:
    ring = Ring(points=[(0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (0.0, 4.0)])
    grown = buffer(ring, _PlainDistance(1.0), JoinRound(), EndRound())
    assert grown.area() == pytest.approx(buffer(ring, DistanceSymmetric(1.0), JoinRound(), EndRound()).area())
    assert buffer(ring, _PlainDistance(-1.0), JoinRound(), EndRound()).area() == pytest.approx(4.0)
    assert buffer(ring, _PlainDistance(0.0), JoinRound(), EndRound()).area() == pytest.approx(16.0)
