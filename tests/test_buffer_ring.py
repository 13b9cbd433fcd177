from __future__ import annotations

import math

import pytest

from geobuffer.buffer import (
    DistanceSymmetric,
    EndRound,
    JoinMiter,
    JoinRound,
    NoRescalePolicy,
    PieceCollection,
    PieceKind,
    Side,
    buffer_geometry,
)
from geobuffer.geometry.primitives import Ring


SQUARE = [(0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (0.0, 4.0), (0.0, 0.0)]


def _run(ring: Ring, distance: float, join=None) -> PieceCollection:
    collection = PieceCollection()
    buffer_geometry(ring, collection, DistanceSymmetric(distance), join or JoinRound(), EndRound(), NoRescalePolicy())
    return collection


def _assert_closed_chain(collection: PieceCollection, ring_index: int = 0) -> None:
    pieces = collection.ring_pieces(ring_index)
    assert pieces
    for a, b in zip(pieces, pieces[1:]):
        assert a.last_point == pytest.approx(b.first_point)
    assert pieces[-1].last_point == pytest.approx(pieces[0].first_point)


def test_square_ring_outward_segments_and_convex_joins() -> None:
    collection = _run(Ring(points=SQUARE), 1.0)
    counts = collection.counts()
    assert counts[PieceKind.SEGMENT] == 4
    assert counts[PieceKind.JOIN] == 4
    assert counts[PieceKind.CONCAVE] == 0

    segments = [p for p in collection.pieces if p.kind is PieceKind.SEGMENT]
    assert segments[0].points == pytest.approx(((0.0, -1.0), (4.0, -1.0)))
    assert segments[1].points == pytest.approx(((5.0, 0.0), (5.0, 4.0)))
    assert segments[2].points == pytest.approx(((4.0, 5.0), (0.0, 5.0)))
    assert segments[3].points == pytest.approx(((-1.0, 4.0), (-1.0, 0.0)))
    assert all(p.side is Side.LEFT for p in collection.pieces)
    _assert_closed_chain(collection)


def test_square_ring_round_joins_stay_on_radius() -> None:
    collection = _run(Ring(points=SQUARE), 1.0)
    joins = [p for p in collection.pieces if p.kind is PieceKind.JOIN]
    assert [j.origin[0] for j in joins] == [(4.0, 0.0), (4.0, 4.0), (0.0, 4.0), (0.0, 0.0)]
    for j in joins:
        vx, vy = j.origin[0]
        assert len(j.points) > 2
        for x, y in j.points:
            assert math.hypot(x - vx, y - vy) == pytest.approx(1.0)


def test_miter_join_uses_offset_line_intersection() -> None:
    collection = _run(Ring(points=SQUARE), 1.0, join=JoinMiter(miter_limit=5.0))
    joins = [p for p in collection.pieces if p.kind is PieceKind.JOIN]
    assert joins[0].points == pytest.approx(((4.0, -1.0), (5.0, -1.0), (5.0, 0.0)))
    # wrap-around corner at the start point
    assert joins[-1].points == pytest.approx(((-1.0, 0.0), (-1.0, -1.0), (0.0, -1.0)))


def test_negative_distance_walks_backwards_with_concave_corners() -> None:
    collection = _run(Ring(points=SQUARE), -1.0)
    counts = collection.counts()
    assert counts[PieceKind.SEGMENT] == 4
    assert counts[PieceKind.CONCAVE] == 4
    assert counts[PieceKind.JOIN] == 0
    assert all(p.side is Side.RIGHT for p in collection.pieces)

    segments = [p for p in collection.pieces if p.kind is PieceKind.SEGMENT]
    # first edge walked is (0,0)->(0,4), offset one unit inside
    assert segments[0].origin == ((0.0, 0.0), (0.0, 4.0))
    assert segments[0].points == pytest.approx(((1.0, 0.0), (1.0, 4.0)))
    _assert_closed_chain(collection)


def test_open_ring_is_closed_before_walking() -> None:
    collection = _run(Ring(points=SQUARE[:-1]), 1.0)
    assert collection.counts()[PieceKind.SEGMENT] == 4
    assert collection.counts()[PieceKind.JOIN] == 4
    _assert_closed_chain(collection)


def test_ring_segment_count_matches_retained_points() -> None:
    n = 7
    pts = [(10.0 * math.cos(2.0 * math.pi * i / n), 10.0 * math.sin(2.0 * math.pi * i / n)) for i in range(n)]
    pts.append(pts[0])
    collection = _run(Ring(points=pts), 0.5)
    counts = collection.counts()
    assert counts[PieceKind.SEGMENT] == n
    assert counts[PieceKind.JOIN] == n
    _assert_closed_chain(collection)


def test_ring_spike_emits_single_end_cap() -> None:
    pts = [(0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (2.0, 4.0), (2.0, 6.0), (2.0, 4.0), (0.0, 4.0), (0.0, 0.0)]
    collection = _run(Ring(points=pts), 0.5)
    caps = [p for p in collection.pieces if p.kind is PieceKind.END_CAP]
    assert len(caps) == 1
    assert caps[0].origin == ((2.0, 6.0),)
    assert caps[0].end_style == "round"
    counts = collection.counts()
    assert counts[PieceKind.SEGMENT] == 7
    assert counts[PieceKind.JOIN] == 4
    assert counts[PieceKind.CONCAVE] == 2
    _assert_closed_chain(collection)


def test_ring_with_too_few_points_is_a_no_op() -> None:
    collection = _run(Ring(points=[(0.0, 0.0), (1.0, 0.0), (0.0, 0.0)]), 1.0)
    assert collection.pieces == []


def test_collinear_vertex_is_simplified_away() -> None:
    pts = [(0.0, 0.0), (2.0, 0.0), (4.0, 0.0), (4.0, 4.0), (0.0, 4.0), (0.0, 0.0)]
    collection = _run(Ring(points=pts), 1.0)
    assert collection.counts()[PieceKind.SEGMENT] == 4
