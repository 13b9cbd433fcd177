from .assemble import Assembler, ShapelyAssembler, piece_polygon
from .config import BufferSettings, default_settings
from .inserter import (
    buffer,
    buffer_geometry,
    buffer_linestring,
    buffer_multi,
    buffer_polygon,
    buffer_ring,
)
from .joins import JoinKind, classify_join
from .pieces import Piece, PieceCollection, PieceKind
from .point import buffer_point, circle_points
from .range_offset import RangeWalk, add_join, offset_range, offset_segment
from .strategies import (
    DistanceAsymmetric,
    DistanceSymmetric,
    EndFlat,
    EndRound,
    GridRescalePolicy,
    JoinMiter,
    JoinRound,
    NoRescalePolicy,
    Side,
)

__all__ = [
    "Assembler",
    "ShapelyAssembler",
    "piece_polygon",
    "BufferSettings",
    "default_settings",
    "buffer",
    "buffer_geometry",
    "buffer_linestring",
    "buffer_multi",
    "buffer_polygon",
    "buffer_ring",
    "buffer_point",
    "circle_points",
    "JoinKind",
    "classify_join",
    "Piece",
    "PieceCollection",
    "PieceKind",
    "RangeWalk",
    "add_join",
    "offset_range",
    "offset_segment",
    "DistanceSymmetric",
    "DistanceAsymmetric",
    "JoinRound",
    "JoinMiter",
    "EndRound",
    "EndFlat",
    "NoRescalePolicy",
    "GridRescalePolicy",
    "Side",
]
