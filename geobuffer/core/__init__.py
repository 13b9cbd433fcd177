from geobuffer.core.errors import BufferInputError
from geobuffer.core.logging import setup_default_logging

__all__ = ["BufferInputError", "setup_default_logging"]
