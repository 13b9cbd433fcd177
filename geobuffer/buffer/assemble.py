from __future__ import annotations

import logging
from typing import List, Optional, Protocol

import shapely
import shapely.geometry as sg
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from geobuffer.buffer.pieces import Piece, PieceCollection, PieceKind
from geobuffer.buffer.strategies import DistanceStrategy
from geobuffer.geometry.io import polygons_from_shapely, to_shapely
from geobuffer.geometry.primitives import (
    AREAL_TYPES,
    Geometry,
    GeometryCollection,
    MultiPolygon,
)
from geobuffer.geometry.tolerance import EPS_AREA


logger = logging.getLogger(__name__)


class Assembler(Protocol):
    def assemble(self, collection: PieceCollection, geometry: Geometry, distance: DistanceStrategy) -> MultiPolygon: ...


def piece_polygon(piece: Piece) -> Optional[BaseGeometry]:
    """Area swept by one piece; None for pieces without area."""
    if piece.kind is PieceKind.SEGMENT:
        p1, p2 = piece.origin[0], piece.origin[-1]
        ring = [p1, piece.points[0], piece.points[-1], p2]
    elif piece.kind is PieceKind.CIRCLE:
        ring = list(piece.points)
    else:
        ring = [piece.origin[0], *piece.points]
    if len(ring) < 3:
        return None
    poly = sg.Polygon(ring)
    if not poly.is_valid:
        poly = shapely.make_valid(poly)
    if poly.area <= EPS_AREA:
        return None
    return poly


def _areal_part(geometry: Geometry) -> BaseGeometry:
    if isinstance(geometry, AREAL_TYPES):
        g = to_shapely(geometry)
        return g if g.is_valid else shapely.make_valid(g)
    if isinstance(geometry, GeometryCollection):
        parts = [_areal_part(g) for g in geometry.geometries]
        parts = [p for p in parts if not p.is_empty]
        return unary_union(parts) if parts else sg.Polygon()
    return sg.Polygon()


class ShapelyAssembler:
    """Resolves pieces by union with shapely.

    Positive buffers add the swept piece area to the areal input, negative
    buffers remove it. Linear and point inputs keep only the swept area.
    """

    def assemble(self, collection: PieceCollection, geometry: Geometry, distance: DistanceStrategy) -> MultiPolygon:
        polys: List[BaseGeometry] = []
        for piece in collection.pieces:
            poly = piece_polygon(piece)
            if poly is not None:
                polys.append(poly)
        swept = unary_union(polys) if polys else sg.Polygon()
        areal = _areal_part(geometry)

        # a zero distance sweeps no area, leaving the areal input as is
        if distance.negative():
            resolved = areal.difference(swept) if not areal.is_empty else sg.Polygon()
        elif swept.is_empty:
            resolved = areal
        else:
            resolved = areal.union(swept) if not areal.is_empty else swept

        result = polygons_from_shapely(resolved)
        collection.rings = []
        for poly in result.polygons:
            collection.rings.append(poly.exterior.closed_points())
            for hole in poly.holes:
                collection.rings.append(hole.closed_points())
        collection.result = result
        logger.debug("assembled %d polygons from %d pieces", len(result.polygons), len(polys))
        return result
