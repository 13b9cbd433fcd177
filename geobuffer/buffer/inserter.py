from __future__ import annotations

import logging
import math
from typing import Callable, List, Optional, Sequence, Tuple

from geobuffer.buffer.assemble import Assembler, ShapelyAssembler
from geobuffer.buffer.config import BufferSettings, default_settings
from geobuffer.buffer.pieces import PieceCollection
from geobuffer.buffer.point import buffer_point
from geobuffer.buffer.range_offset import add_join, offset_range, offset_segment
from geobuffer.buffer.strategies import (
    DistanceStrategy,
    EndStrategy,
    JoinStrategy,
    NoRescalePolicy,
    RobustPolicy,
    Side,
)
from geobuffer.core.errors import BufferInputError
from geobuffer.geometry.primitives import (
    Geometry,
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    Ring,
)
from geobuffer.geometry.simplify import simplify_points
from geobuffer.geometry.tolerance import EPS_POS


logger = logging.getLogger(__name__)

Point2 = Tuple[float, float]
PieceVisitor = Callable[[PieceCollection, int], None]


def _closed(points: Sequence[Point2]) -> List[Point2]:
    pts = [(float(x), float(y)) for x, y in points]
    if pts and pts[0] != pts[-1]:
        pts.append(pts[0])
    return pts


def buffer_ring(
    points: Sequence[Point2],
    collection: PieceCollection,
    distance: DistanceStrategy,
    join: JoinStrategy,
    end: EndStrategy,
    robust: RobustPolicy,
) -> None:
    """Offset one closed ring into the current output ring of `collection`."""
    closed = _closed(points)
    if len(closed) <= 3:
        logger.debug("ring skipped: %d points", len(closed))
        return

    simplified = simplify_points(closed, distance.simplify_distance())
    if len(simplified) <= 3:
        logger.debug("ring skipped after simplification: %d points", len(simplified))
        return

    if distance.negative():
        # walk backwards; the assembler fixes the final orientation
        sequence = list(reversed(simplified))
        side = Side.RIGHT
    else:
        sequence = simplified
        side = Side.LEFT

    walk = offset_range(collection, sequence, side, distance, join, end, robust)
    if walk is None or walk.segment_count < 2:
        return

    # wrap-around corner, never seen by the walk itself
    add_join(
        collection,
        walk.penultimate_point,
        walk.ultimate_point,
        walk.last_perp,
        walk.second_point,
        walk.first_perp,
        side,
        distance,
        join,
        end,
    )


def _last_distinct(points: Sequence[Point2], robust: RobustPolicy) -> Optional[Point2]:
    last = points[-1]
    key = robust.recalculate(last)
    for p in reversed(points[:-1]):
        if robust.recalculate(p) != key and math.hypot(p[0] - last[0], p[1] - last[1]) > EPS_POS:
            return p
    return None


def buffer_linestring(
    points: Sequence[Point2],
    collection: PieceCollection,
    distance: DistanceStrategy,
    join: JoinStrategy,
    end: EndStrategy,
    robust: RobustPolicy,
) -> None:
    """Offset both sides of an open line and cap its ends: one closed output ring."""
    if len(points) <= 1:
        return
    simplified = simplify_points(points, distance.simplify_distance())
    if len(simplified) < 2:
        return
    ultimate = simplified[-1]
    penultimate = _last_distinct(simplified, robust)
    if penultimate is None:
        logger.debug("linestring skipped: all points coincide")
        return

    collection.start_new_ring()

    # opposite perpendicular at the terminus, from the last edge walked backwards
    reverse_p1 = offset_segment(ultimate, penultimate, Side.RIGHT, distance)[0]

    forward = offset_range(collection, simplified, Side.LEFT, distance, join, end, robust, phase=0)
    if forward is None:
        return
    out: List[Point2] = []
    end.apply(forward.penultimate_point, forward.last_perp[1], forward.ultimate_point, reverse_p1, Side.LEFT, distance, out)
    collection.add_endcap(end, out, forward.ultimate_point, Side.LEFT)

    backward = offset_range(collection, list(reversed(simplified)), Side.RIGHT, distance, join, end, robust, phase=1)
    if backward is None:
        return
    out = []
    end.apply(
        backward.penultimate_point,
        backward.last_perp[1],
        backward.ultimate_point,
        forward.first_perp[0],
        Side.RIGHT,
        distance,
        out,
    )
    collection.add_endcap(end, out, backward.ultimate_point, Side.RIGHT)


def buffer_polygon(
    polygon: Polygon,
    collection: PieceCollection,
    distance: DistanceStrategy,
    join: JoinStrategy,
    end: EndStrategy,
    robust: RobustPolicy,
) -> None:
    collection.start_new_ring()
    buffer_ring(polygon.exterior.points, collection, distance, join, end, robust)
    for hole in polygon.holes:
        collection.start_new_ring()
        buffer_ring(hole.points, collection, distance, join, end, robust)


def buffer_multi(
    geometries: Sequence[Geometry],
    collection: PieceCollection,
    distance: DistanceStrategy,
    join: JoinStrategy,
    end: EndStrategy,
    robust: RobustPolicy,
    settings: BufferSettings,
) -> None:
    for g in geometries:
        buffer_geometry(g, collection, distance, join, end, robust, settings)


def buffer_geometry(
    geometry: Geometry,
    collection: PieceCollection,
    distance: DistanceStrategy,
    join: JoinStrategy,
    end: EndStrategy,
    robust: RobustPolicy,
    settings: BufferSettings | None = None,
) -> None:
    """Emit the raw pieces of `geometry` into `collection`."""
    s = settings or default_settings()
    if isinstance(geometry, Point):
        buffer_point(geometry.coords, collection, distance, s)
    elif isinstance(geometry, LineString):
        buffer_linestring(geometry.points, collection, distance, join, end, robust)
    elif isinstance(geometry, Ring):
        collection.start_new_ring()
        buffer_ring(geometry.points, collection, distance, join, end, robust)
    elif isinstance(geometry, Polygon):
        buffer_polygon(geometry, collection, distance, join, end, robust)
    elif isinstance(geometry, MultiPoint):
        buffer_multi(geometry.points, collection, distance, join, end, robust, s)
    elif isinstance(geometry, MultiLineString):
        buffer_multi(geometry.lines, collection, distance, join, end, robust, s)
    elif isinstance(geometry, MultiPolygon):
        buffer_multi(geometry.polygons, collection, distance, join, end, robust, s)
    elif isinstance(geometry, GeometryCollection):
        buffer_multi(geometry.geometries, collection, distance, join, end, robust, s)
    else:
        raise BufferInputError(f"cannot buffer {type(geometry).__name__}")


def buffer(
    geometry: Geometry,
    distance: DistanceStrategy,
    join: JoinStrategy,
    end: EndStrategy,
    robust: RobustPolicy | None = None,
    visitor: PieceVisitor | None = None,
    *,
    settings: BufferSettings | None = None,
    assembler: Assembler | None = None,
) -> MultiPolygon:
    """Buffer `geometry` and return the resolved polygons.

    `visitor(collection, phase)` sees the raw pieces (phase 0) and the
    collection after assembly (phase 1); it cannot change the result.
    """
    collection = PieceCollection()
    buffer_geometry(geometry, collection, distance, join, end, robust or NoRescalePolicy(), settings)
    logger.debug("generated %d pieces in %d rings", len(collection.pieces), collection.ring_count)

    if visitor is not None:
        visitor(collection, 0)

    result = (assembler or ShapelyAssembler()).assemble(collection, geometry, distance)

    if visitor is not None:
        visitor(collection, 1)
    return result
