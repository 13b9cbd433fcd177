from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Hashable, List, Protocol, Tuple

import numpy as np

from geobuffer.buffer.config import DEFAULT_MITER_LIMIT, POINTS_PER_CIRCLE, SIMPLIFY_FRACTION
from geobuffer.core.errors import BufferInputError
from geobuffer.geometry.tolerance import EPS_POS, EPS_WELD


Point2 = Tuple[float, float]


class Side(Enum):
    LEFT = "left"
    RIGHT = "right"

    def opposite(self) -> "Side":
        return Side.RIGHT if self is Side.LEFT else Side.LEFT


class DistanceStrategy(Protocol):
    def apply(self, p1: Point2, p2: Point2, side: Side) -> float: ...

    def negative(self) -> bool: ...

    def simplify_distance(self) -> float: ...


class JoinStrategy(Protocol):
    def apply(
        self,
        ip: Point2,
        vertex: Point2,
        perp1: Point2,
        perp2: Point2,
        distance: float,
        out: List[Point2],
    ) -> None: ...


class EndStrategy(Protocol):
    style: str

    def apply(
        self,
        penultimate: Point2,
        perp1: Point2,
        ultimate: Point2,
        perp2: Point2,
        side: Side,
        distance: DistanceStrategy,
        out: List[Point2],
    ) -> None: ...


class RobustPolicy(Protocol):
    def recalculate(self, p: Point2) -> Hashable: ...


@dataclass(frozen=True)
class DistanceSymmetric:
    distance: float
    simplify_fraction: float = SIMPLIFY_FRACTION

    def apply(self, p1: Point2, p2: Point2, side: Side) -> float:
        # walking direction is reversed for negative buffers, so only the
        # magnitude is returned then
        return abs(float(self.distance)) if self.negative() else float(self.distance)

    def negative(self) -> bool:
        return float(self.distance) < 0.0

    def simplify_distance(self) -> float:
        return abs(float(self.distance)) * float(self.simplify_fraction)


@dataclass(frozen=True)
class DistanceAsymmetric:
    left: float
    right: float
    simplify_fraction: float = SIMPLIFY_FRACTION

    def apply(self, p1: Point2, p2: Point2, side: Side) -> float:
        d = float(self.left) if side is Side.LEFT else float(self.right)
        return abs(d) if self.negative() else d

    def negative(self) -> bool:
        return float(self.left) < 0.0 and float(self.right) < 0.0

    def simplify_distance(self) -> float:
        # the narrower side bounds the features that must survive
        return min(abs(float(self.left)), abs(float(self.right))) * float(self.simplify_fraction)


def _arc_points(
    center: Point2,
    start_angle: float,
    sweep: float,
    r_start: float,
    r_end: float,
    points_per_circle: int,
) -> List[Point2]:
    # interior arc vertices only; callers add the exact end points
    n = int(points_per_circle * sweep / (2.0 * math.pi))
    if n < 2:
        return []
    t = np.arange(1, n, dtype=float) / float(n)
    angles = start_angle + sweep * t
    radii = r_start + (r_end - r_start) * t
    xs = float(center[0]) + radii * np.cos(angles)
    ys = float(center[1]) + radii * np.sin(angles)
    return [(float(x), float(y)) for x, y in zip(xs, ys)]


def _angle(center: Point2, p: Point2) -> float:
    return math.atan2(float(p[1]) - float(center[1]), float(p[0]) - float(center[0]))


@dataclass(frozen=True)
class JoinRound:
    points_per_circle: int = POINTS_PER_CIRCLE

    def __post_init__(self) -> None:
        if int(self.points_per_circle) < 4:
            raise BufferInputError("points_per_circle must be >= 4")

    def apply(
        self,
        ip: Point2,
        vertex: Point2,
        perp1: Point2,
        perp2: Point2,
        distance: float,
        out: List[Point2],
    ) -> None:
        a1 = _angle(vertex, perp1)
        sweep = (_angle(vertex, perp2) - a1) % (2.0 * math.pi)
        if sweep > math.pi:
            # a convex corner turns less than half a revolution; this is rounding
            sweep = 0.0
        r = abs(float(distance))
        out.append((float(perp1[0]), float(perp1[1])))
        out.extend(_arc_points(vertex, a1, sweep, r, r, int(self.points_per_circle)))
        out.append((float(perp2[0]), float(perp2[1])))


@dataclass(frozen=True)
class JoinMiter:
    miter_limit: float = DEFAULT_MITER_LIMIT

    def __post_init__(self) -> None:
        if float(self.miter_limit) < 1.0:
            raise BufferInputError("miter_limit must be >= 1")

    def apply(
        self,
        ip: Point2,
        vertex: Point2,
        perp1: Point2,
        perp2: Point2,
        distance: float,
        out: List[Point2],
    ) -> None:
        dx = float(ip[0]) - float(vertex[0])
        dy = float(ip[1]) - float(vertex[1])
        length = math.hypot(dx, dy)
        max_length = float(self.miter_limit) * abs(float(distance))
        p = (float(ip[0]), float(ip[1]))
        if length > max_length and length > EPS_POS:
            k = max_length / length
            p = (float(vertex[0]) + dx * k, float(vertex[1]) + dy * k)
        out.append((float(perp1[0]), float(perp1[1])))
        out.append(p)
        out.append((float(perp2[0]), float(perp2[1])))


@dataclass(frozen=True)
class EndRound:
    points_per_circle: int = POINTS_PER_CIRCLE
    style: str = "round"

    def __post_init__(self) -> None:
        if int(self.points_per_circle) < 4:
            raise BufferInputError("points_per_circle must be >= 4")

    def apply(
        self,
        penultimate: Point2,
        perp1: Point2,
        ultimate: Point2,
        perp2: Point2,
        side: Side,
        distance: DistanceStrategy,
        out: List[Point2],
    ) -> None:
        # half turn around the terminal point; radii differ for asymmetric buffers
        r1 = math.hypot(float(perp1[0]) - float(ultimate[0]), float(perp1[1]) - float(ultimate[1]))
        r2 = math.hypot(float(perp2[0]) - float(ultimate[0]), float(perp2[1]) - float(ultimate[1]))
        a1 = _angle(ultimate, perp1)
        out.append((float(perp1[0]), float(perp1[1])))
        out.extend(_arc_points(ultimate, a1, math.pi, r1, r2, int(self.points_per_circle)))
        out.append((float(perp2[0]), float(perp2[1])))


@dataclass(frozen=True)
class EndFlat:
    style: str = "flat"

    def apply(
        self,
        penultimate: Point2,
        perp1: Point2,
        ultimate: Point2,
        perp2: Point2,
        side: Side,
        distance: DistanceStrategy,
        out: List[Point2],
    ) -> None:
        out.append((float(perp1[0]), float(perp1[1])))
        out.append((float(perp2[0]), float(perp2[1])))


@dataclass(frozen=True)
class NoRescalePolicy:
    def recalculate(self, p: Point2) -> Hashable:
        return (float(p[0]), float(p[1]))


@dataclass(frozen=True)
class GridRescalePolicy:
    eps: float = EPS_WELD

    def __post_init__(self) -> None:
        if float(self.eps) <= 0.0:
            raise BufferInputError("grid eps must be > 0")

    def recalculate(self, p: Point2) -> Hashable:
        inv = 1.0 / float(self.eps)
        return (int(round(float(p[0]) * inv)), int(round(float(p[1]) * inv)))
