from __future__ import annotations


class BufferInputError(ValueError):
    """Raised for geometry objects or parameters the buffer kernel cannot use."""
