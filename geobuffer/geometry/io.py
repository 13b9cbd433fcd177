from __future__ import annotations

import json
from typing import Any, Dict, List

import shapely
import shapely.geometry as sg
from shapely import wkt as shapely_wkt
from shapely.errors import GEOSException
from shapely.geometry.base import BaseGeometry
from shapely.geometry.polygon import orient

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


def _coords(seq: Any) -> List[tuple[float, float]]:
    out: List[tuple[float, float]] = []
    for c in seq:
        if len(c) < 2:
            raise BufferInputError(f"coordinate needs x and y: {c!r}")
        out.append((float(c[0]), float(c[1])))
    return out


def _polygon_from_shapely(p: sg.Polygon) -> Polygon:
    return Polygon(
        exterior=Ring(points=_coords(p.exterior.coords)),
        holes=[Ring(points=_coords(h.coords)) for h in p.interiors],
    )


def from_shapely(geom: BaseGeometry) -> Geometry:
    if isinstance(geom, sg.Point):
        if geom.is_empty:
            raise BufferInputError("empty point")
        return Point(float(geom.x), float(geom.y))
    if isinstance(geom, sg.LinearRing):
        return Ring(points=_coords(geom.coords))
    if isinstance(geom, sg.LineString):
        return LineString(points=_coords(geom.coords))
    if isinstance(geom, sg.Polygon):
        if geom.is_empty:
            return MultiPolygon()
        return _polygon_from_shapely(geom)
    if isinstance(geom, sg.MultiPoint):
        return MultiPoint(points=[Point(float(p.x), float(p.y)) for p in geom.geoms])
    if isinstance(geom, sg.MultiLineString):
        return MultiLineString(lines=[LineString(points=_coords(g.coords)) for g in geom.geoms])
    if isinstance(geom, sg.MultiPolygon):
        return MultiPolygon(polygons=[_polygon_from_shapely(g) for g in geom.geoms])
    if isinstance(geom, sg.GeometryCollection):
        return GeometryCollection(geometries=[from_shapely(g) for g in geom.geoms])
    raise BufferInputError(f"unsupported shapely geometry: {geom.geom_type}")


def to_shapely(geom: Geometry) -> BaseGeometry:
    if isinstance(geom, Point):
        return sg.Point(geom.coords)
    if isinstance(geom, LineString):
        return sg.LineString(geom.points)
    if isinstance(geom, Ring):
        return sg.Polygon(geom.closed_points())
    if isinstance(geom, Polygon):
        return sg.Polygon(geom.exterior.closed_points(), [h.closed_points() for h in geom.holes])
    if isinstance(geom, MultiPoint):
        return sg.MultiPoint([p.coords for p in geom.points])
    if isinstance(geom, MultiLineString):
        return sg.MultiLineString([ls.points for ls in geom.lines])
    if isinstance(geom, MultiPolygon):
        return sg.MultiPolygon([to_shapely(p) for p in geom.polygons])
    if isinstance(geom, GeometryCollection):
        return sg.GeometryCollection([to_shapely(g) for g in geom.geometries])
    raise BufferInputError(f"unsupported geometry type: {type(geom).__name__}")


def polygons_from_shapely(geom: BaseGeometry) -> MultiPolygon:
    """Collect the areal parts of a shapely result, exteriors CCW and holes CW."""
    polys: List[Polygon] = []
    if geom.is_empty:
        return MultiPolygon()
    parts = getattr(geom, "geoms", [geom])
    for part in parts:
        if isinstance(part, sg.Polygon) and not part.is_empty:
            polys.append(_polygon_from_shapely(orient(part, sign=1.0)))
        elif isinstance(part, (sg.MultiPolygon, sg.GeometryCollection)):
            polys.extend(polygons_from_shapely(part).polygons)
    return MultiPolygon(polygons=polys)


def from_wkt(text: str) -> Geometry:
    try:
        geom = shapely_wkt.loads(text)
    except (GEOSException, ValueError) as exc:
        raise BufferInputError(f"invalid WKT: {exc}") from exc
    return from_shapely(geom)


def to_wkt(geom: Geometry, rounding_precision: int = 6) -> str:
    return shapely.to_wkt(to_shapely(geom), rounding_precision=rounding_precision)


def from_geojson(data: str | Dict[str, Any]) -> Geometry:
    obj = json.loads(data) if isinstance(data, str) else data
    if obj.get("type") == "Feature":
        obj = obj.get("geometry") or {}
    if obj.get("type") == "FeatureCollection":
        return GeometryCollection(geometries=[from_geojson(f) for f in obj.get("features", [])])
    try:
        geom = sg.shape(obj)
    except (GEOSException, ValueError, KeyError, TypeError, AttributeError) as exc:
        raise BufferInputError(f"invalid GeoJSON geometry: {exc}") from exc
    return from_shapely(geom)


def to_geojson(geom: Geometry) -> Dict[str, Any]:
    return dict(sg.mapping(to_shapely(geom)))
