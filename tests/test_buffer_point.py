from __future__ import annotations

import math

import pytest

from geobuffer.buffer import (
    BufferSettings,
    DistanceSymmetric,
    EndRound,
    JoinRound,
    NoRescalePolicy,
    PieceCollection,
    PieceKind,
    buffer_geometry,
    circle_points,
)
from geobuffer.buffer.config import POINT_CIRCLE_VERTICES
from geobuffer.core.errors import BufferInputError
from geobuffer.geometry.primitives import MultiPoint, Point


def test_point_emits_one_closed_circle() -> None:
    collection = PieceCollection()
    buffer_geometry(Point(1.0, 2.0), collection, DistanceSymmetric(3.0), JoinRound(), EndRound(), NoRescalePolicy())
    assert len(collection.pieces) == 1
    circle = collection.pieces[0]
    assert circle.kind is PieceKind.CIRCLE
    assert len(circle.points) == POINT_CIRCLE_VERTICES + 1 == 89
    assert circle.points[0] == circle.points[-1]
    for x, y in circle.points:
        assert math.hypot(x - 1.0, y - 2.0) == pytest.approx(3.0)


def test_circle_vertex_count_is_independent_of_radius() -> None:
    small = circle_points((0.0, 0.0), 0.01, 88)
    large = circle_points((0.0, 0.0), 1000.0, 88)
    assert len(small) == len(large) == 89
    assert small[0] == pytest.approx((0.01, 0.0))


def test_circle_vertex_count_is_configurable() -> None:
    collection = PieceCollection()
    buffer_geometry(
        Point(0.0, 0.0),
        collection,
        DistanceSymmetric(1.0),
        JoinRound(),
        EndRound(),
        NoRescalePolicy(),
        BufferSettings(point_circle_vertices=16),
    )
    assert len(collection.pieces[0].points) == 17


def test_multi_point_starts_one_ring_per_point() -> None:
    collection = PieceCollection()
    mp = MultiPoint(points=[Point(0.0, 0.0), Point(10.0, 0.0)])
    buffer_geometry(mp, collection, DistanceSymmetric(1.0), JoinRound(), EndRound(), NoRescalePolicy())
    assert collection.ring_count == 2
    assert [p.ring_index for p in collection.pieces] == [0, 1]


def test_settings_reject_too_few_vertices() -> None:
    with pytest.raises(BufferInputError, match="point_circle_vertices"):
        BufferSettings(point_circle_vertices=2)
