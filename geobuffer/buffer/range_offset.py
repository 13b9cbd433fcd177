from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from geobuffer.buffer.joins import JoinKind, classify_join, offset_intersection
from geobuffer.buffer.pieces import PieceCollection, PieceKind
from geobuffer.buffer.strategies import DistanceStrategy, EndStrategy, JoinStrategy, RobustPolicy, Side
from geobuffer.geometry.predicates import left_normal
from geobuffer.geometry.tolerance import EPS_POS


Point2 = Tuple[float, float]
Perp = Tuple[Point2, Point2]


@dataclass(frozen=True)
class RangeWalk:
    """Offset end points and retained input points of one side pass."""

    first_perp: Perp
    last_perp: Perp
    first_point: Point2
    second_point: Point2
    penultimate_point: Point2
    ultimate_point: Point2
    segment_count: int


def offset_segment(p1: Point2, p2: Point2, side: Side, distance: DistanceStrategy) -> Perp:
    """Offset the edge p1->p2 to its LEFT by the distance chosen for `side`."""
    nx, ny = left_normal(p1, p2)
    d = float(distance.apply(p1, p2, side))
    return (
        (float(p1[0]) + nx * d, float(p1[1]) + ny * d),
        (float(p2[0]) + nx * d, float(p2[1]) + ny * d),
    )


def add_join(
    collection: PieceCollection,
    penultimate: Point2,
    previous: Point2,
    prev_perp: Perp,
    current: Point2,
    perp: Perp,
    side: Side,
    distance: DistanceStrategy,
    join: JoinStrategy,
    end: EndStrategy,
    phase: int = 0,
) -> JoinKind:
    """Emit the piece connecting two consecutive offset edges at `previous`."""
    kind = classify_join(penultimate, previous, current)
    ip: Optional[Point2] = None
    if kind is JoinKind.CONVEX:
        kind, ip = offset_intersection(perp, prev_perp)

    if ip is not None:
        out: List[Point2] = []
        join.apply(ip, previous, prev_perp[1], perp[0], distance.apply(previous, current, side), out)
        collection.add_piece(PieceKind.JOIN, out, [previous], side)
        return kind

    if kind is JoinKind.CONTINUE:
        return kind
    if kind is JoinKind.CONCAVE:
        collection.add_piece(PieceKind.CONCAVE, [prev_perp[1], perp[0]], [previous], side)
        return kind
    if kind is JoinKind.SPIKE:
        if phase == 0:
            out = []
            end.apply(penultimate, prev_perp[1], previous, perp[0], side, distance, out)
            collection.add_endcap(end, out, previous, side)
        else:
            # the return pass of a linestring folds onto the cap of the
            # first pass; a flat wedge keeps the chain closed
            collection.add_piece(PieceKind.CONCAVE, [prev_perp[1], perp[0]], [previous], side)
    return kind


def offset_range(
    collection: PieceCollection,
    points: Sequence[Point2],
    side: Side,
    distance: DistanceStrategy,
    join: JoinStrategy,
    end: EndStrategy,
    robust: RobustPolicy,
    phase: int = 0,
) -> Optional[RangeWalk]:
    """Walk `points` once, emitting a segment per edge and a join per corner.

    Consecutive points that are equal under `robust` are skipped. Returns
    None (and emits nothing) when fewer than two distinct points remain.
    """
    if len(points) < 2:
        return None

    it = iter(points)
    prev = next(it)
    prev_key = robust.recalculate(prev)

    first_perp: Optional[Perp] = None
    last_perp: Optional[Perp] = None
    second_point = penultimate = prev
    count = 0
    for p in it:
        key = robust.recalculate(p)
        if key == prev_key or math.hypot(p[0] - prev[0], p[1] - prev[1]) <= EPS_POS:
            continue
        perp = offset_segment(prev, p, side, distance)
        if last_perp is not None:
            add_join(collection, penultimate, prev, last_perp, p, perp, side, distance, join, end, phase=phase)
        collection.add_piece(PieceKind.SEGMENT, list(perp), [prev, p], side)
        count += 1

        if first_perp is None:
            first_perp = perp
            second_point = p
        penultimate = prev
        last_perp = perp
        prev = p
        prev_key = key

    if first_perp is None or last_perp is None:
        return None
    return RangeWalk(
        first_perp=first_perp,
        last_perp=last_perp,
        first_point=(float(points[0][0]), float(points[0][1])),
        second_point=second_point,
        penultimate_point=penultimate,
        ultimate_point=prev,
        segment_count=count,
    )
