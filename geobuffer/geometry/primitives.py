from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple, Union


Point2 = Tuple[float, float]


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    @property
    def coords(self) -> Point2:
        return (float(self.x), float(self.y))


@dataclass(frozen=True)
class LineString:
    points: List[Point2]


@dataclass(frozen=True)
class Ring:
    """Closed ring; the closing point may be given or left implicit.

    Exterior rings are expected counter-clockwise and holes clockwise (y-up).
    """

    points: List[Point2]

    def is_closed(self) -> bool:
        return len(self.points) >= 2 and tuple(self.points[0]) == tuple(self.points[-1])

    def closed_points(self) -> List[Point2]:
        pts = [(float(x), float(y)) for x, y in self.points]
        if pts and not self.is_closed():
            pts.append(pts[0])
        return pts

    def signed_area(self) -> float:
        pts = self.closed_points()
        s = 0.0
        for i in range(len(pts) - 1):
            x1, y1 = pts[i]
            x2, y2 = pts[i + 1]
            s += x1 * y2 - x2 * y1
        return 0.5 * s


@dataclass(frozen=True)
class Polygon:
    exterior: Ring
    holes: List[Ring] = field(default_factory=list)

    def area(self) -> float:
        return abs(self.exterior.signed_area()) - sum(abs(h.signed_area()) for h in self.holes)


@dataclass(frozen=True)
class MultiPoint:
    points: List[Point] = field(default_factory=list)


@dataclass(frozen=True)
class MultiLineString:
    lines: List[LineString] = field(default_factory=list)


@dataclass(frozen=True)
class MultiPolygon:
    polygons: List[Polygon] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.polygons

    def area(self) -> float:
        return sum(p.area() for p in self.polygons)


@dataclass(frozen=True)
class GeometryCollection:
    geometries: List["Geometry"] = field(default_factory=list)


Geometry = Union[Point, LineString, Ring, Polygon, MultiPoint, MultiLineString, MultiPolygon, GeometryCollection]

AREAL_TYPES = (Ring, Polygon, MultiPolygon)
