"""
Low-level 2D predicates used by the offset walk.

Sides are measured in a y-down frame (screen, SVG): LEFT of an edge heading
+x points toward -y. A counter-clockwise ring (y-up) therefore has its
exterior on the LEFT.
"""

from __future__ import annotations

import math
from typing import Optional, Tuple

from geobuffer.geometry.tolerance import EPS_PARALLEL, EPS_POS, EPS_SIDE


Point2 = Tuple[float, float]


def _orient(a: Point2, b: Point2, c: Point2) -> float:
    return (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])


def side_value(p0: Point2, p1: Point2, p2: Point2) -> int:
    """Return 1 if p2 lies LEFT of p0->p1, -1 if RIGHT, 0 if collinear."""
    d = _orient(p0, p1, p2)
    scale = math.hypot(p1[0] - p0[0], p1[1] - p0[1]) * math.hypot(p2[0] - p1[0], p2[1] - p1[1])
    if abs(d) <= EPS_SIDE * max(scale, EPS_POS):
        return 0
    return 1 if d < 0.0 else -1


def left_normal(p1: Point2, p2: Point2) -> Point2:
    dx = float(p2[0]) - float(p1[0])
    dy = float(p2[1]) - float(p1[1])
    length = math.hypot(dx, dy)
    if length <= EPS_POS:
        raise ValueError("left normal of a zero-length edge is undefined")
    return (dy / length, -dx / length)


def parallel_continue(dx1: float, dy1: float, dx2: float, dy2: float) -> bool:
    # parallel vectors continue each other when they point the same way
    return dx1 * dx2 + dy1 * dy2 > 0.0


def line_line_intersection(pi: Point2, pj: Point2, qi: Point2, qj: Point2) -> Optional[Point2]:
    """Intersect the infinite lines through (pi, pj) and (qi, qj).

    Returns None when the lines are parallel within tolerance.
    """
    rx, ry = pi[0] - pj[0], pi[1] - pj[1]
    sx, sy = qi[0] - qj[0], qi[1] - qj[1]
    den = rx * sy - ry * sx
    if abs(den) <= EPS_PARALLEL * max(math.hypot(rx, ry) * math.hypot(sx, sy), EPS_POS):
        return None
    d1 = pi[0] * pj[1] - pi[1] * pj[0]
    d2 = qi[0] * qj[1] - qi[1] * qj[0]
    x = (d1 * sx - rx * d2) / den
    y = (d1 * sy - ry * d2) / den
    return (float(x), float(y))
