from __future__ import annotations

from dataclasses import dataclass

from geobuffer.core.errors import BufferInputError

# Vertex count of a buffered point. Fixed, independent of the radius; 88
# avoids collinear-opposite vertices that upset turn detection.
POINT_CIRCLE_VERTICES = 88

# Simplification tolerance as a fraction of the buffer distance. Input noise
# below this scale would otherwise be blown up into spurious intersections.
SIMPLIFY_FRACTION = 0.001

# Default arc resolution of round joins and round end caps.
POINTS_PER_CIRCLE = 90

DEFAULT_MITER_LIMIT = 5.0


@dataclass(frozen=True)
class BufferSettings:
    point_circle_vertices: int = POINT_CIRCLE_VERTICES

    def __post_init__(self) -> None:
        if int(self.point_circle_vertices) < 3:
            raise BufferInputError("point_circle_vertices must be >= 3")


def default_settings() -> BufferSettings:
    return BufferSettings()
