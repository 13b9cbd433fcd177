from __future__ import annotations

import math
from typing import List, Tuple

import numpy as np

from geobuffer.buffer.config import BufferSettings, default_settings
from geobuffer.buffer.pieces import PieceCollection, PieceKind
from geobuffer.buffer.strategies import DistanceStrategy, Side


Point2 = Tuple[float, float]


def circle_points(center: Point2, radius: float, count: int) -> List[Point2]:
    """`count` vertices on a full revolution, closed by repeating the first."""
    angles = np.arange(int(count), dtype=float) * (2.0 * math.pi / float(count))
    xs = float(center[0]) + float(radius) * np.cos(angles)
    ys = float(center[1]) + float(radius) * np.sin(angles)
    pts = [(float(x), float(y)) for x, y in zip(xs, ys)]
    pts.append(pts[0])
    return pts


def buffer_point(
    point: Point2,
    collection: PieceCollection,
    distance: DistanceStrategy,
    settings: BufferSettings | None = None,
) -> None:
    s = settings or default_settings()
    p = (float(point[0]), float(point[1]))
    collection.start_new_ring()
    radius = distance.apply(p, p, Side.LEFT)
    collection.add_piece(PieceKind.CIRCLE, circle_points(p, radius, s.point_circle_vertices), [p], Side.LEFT)
