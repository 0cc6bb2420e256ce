"""maskedit — input-masking engine for single-line text fields."""

from maskedit.__version__ import __version__
from maskedit.core.cache import MaskCache
from maskedit.core.engine import DEFAULT_PLACEHOLDER, MaskEngine
from maskedit.core.events import EditKey, EditResult, EventType
from maskedit.core.filters import FilterCategory, validate
from maskedit.core.parser import compile_mask
from maskedit.errors import (
    InvalidFilterError,
    InvalidMaskError,
    InvalidPlaceholderError,
    MaskError,
)
from maskedit.handlers.edit_controller import EditController

__all__ = [
    "__version__",
    "DEFAULT_PLACEHOLDER",
    "EditController",
    "EditKey",
    "EditResult",
    "EventType",
    "FilterCategory",
    "InvalidFilterError",
    "InvalidMaskError",
    "InvalidPlaceholderError",
    "MaskCache",
    "MaskEngine",
    "MaskError",
    "compile_mask",
    "validate",
]
