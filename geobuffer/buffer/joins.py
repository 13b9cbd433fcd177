from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

from geobuffer.geometry.predicates import line_line_intersection, parallel_continue, side_value


Point2 = Tuple[float, float]


class JoinKind(Enum):
    CONVEX = "convex"
    CONCAVE = "concave"
    SPIKE = "spike"
    CONTINUE = "continue"


def classify_join(p0: Point2, p1: Point2, p2: Point2) -> JoinKind:
    """Classify the corner at p1 for an offset on the LEFT of p0->p1->p2.

    A right turn opens a gap between the offset edges (convex), a left turn
    makes them overlap (concave). Collinear triples either continue or fold
    back onto themselves (spike).
    """
    side = side_value(p0, p1, p2)
    if side == -1:
        return JoinKind.CONVEX
    if side == 1:
        return JoinKind.CONCAVE
    if parallel_continue(p2[0] - p1[0], p2[1] - p1[1], p1[0] - p0[0], p1[1] - p0[1]):
        return JoinKind.CONTINUE
    return JoinKind.SPIKE


def offset_intersection(
    perp: Tuple[Point2, Point2],
    prev_perp: Tuple[Point2, Point2],
) -> Tuple[JoinKind, Optional[Point2]]:
    """Intersect two offset edges of a corner already classified as convex.

    The offset edges can still come out parallel in floating point; the
    corner is then downgraded to continue or spike.
    """
    ip = line_line_intersection(perp[0], perp[1], prev_perp[0], prev_perp[1])
    if ip is not None:
        return JoinKind.CONVEX, ip
    if parallel_continue(
        perp[1][0] - perp[0][0],
        perp[1][1] - perp[0][1],
        prev_perp[1][0] - prev_perp[0][0],
        prev_perp[1][1] - prev_perp[0][1],
    ):
        return JoinKind.CONTINUE, None
    return JoinKind.SPIKE, None
