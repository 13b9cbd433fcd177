"""
geobuffer geometry

Plain 2D geometry types, predicates and shapely interchange helpers.
"""

from geobuffer.geometry.primitives import (
    AREAL_TYPES,
    Geometry,
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Point2,
    Polygon,
    Ring,
)

__all__ = [
    "AREAL_TYPES",
    "Geometry",
    "GeometryCollection",
    "LineString",
    "MultiLineString",
    "MultiPoint",
    "MultiPolygon",
    "Point",
    "Point2",
    "Polygon",
    "Ring",
]
