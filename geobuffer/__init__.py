"""
geobuffer

Distance buffering of 2D geometries built from offset pieces: segments,
joins, end caps, circles and concave wedges.
"""

from geobuffer.buffer import (
    BufferSettings,
    DistanceAsymmetric,
    DistanceSymmetric,
    EndFlat,
    EndRound,
    GridRescalePolicy,
    JoinMiter,
    JoinRound,
    NoRescalePolicy,
    PieceCollection,
    PieceKind,
    Side,
    buffer,
)
from geobuffer.core.errors import BufferInputError
from geobuffer.geometry.primitives import (
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    Ring,
)

__all__ = [
    "buffer",
    "BufferSettings",
    "BufferInputError",
    "DistanceSymmetric",
    "DistanceAsymmetric",
    "JoinRound",
    "JoinMiter",
    "EndRound",
    "EndFlat",
    "NoRescalePolicy",
    "GridRescalePolicy",
    "PieceCollection",
    "PieceKind",
    "Side",
    "Point",
    "LineString",
    "Ring",
    "Polygon",
    "MultiPoint",
    "MultiLineString",
    "MultiPolygon",
    "GeometryCollection",
]
