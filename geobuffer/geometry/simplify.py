from __future__ import annotations

from typing import List, Sequence, Tuple

from shapely.geometry import LineString as ShapelyLineString


Point2 = Tuple[float, float]


def simplify_points(points: Sequence[Point2], tolerance: float) -> List[Point2]:
    # Douglas-Peucker; end points are kept so closed rings stay closed
    pts = [(float(x), float(y)) for x, y in points]
    if tolerance <= 0.0 or len(pts) < 3:
        return pts
    simplified = ShapelyLineString(pts).simplify(float(tolerance), preserve_topology=False)
    if simplified.is_empty:
        return []
    return [(float(x), float(y)) for x, y in simplified.coords]
