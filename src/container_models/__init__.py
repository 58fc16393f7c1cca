"""
Data containers for decoded Analysis Studio content.

Pydantic models holding the raster images and spectra decoded from a file,
with numpy array fields validated on construction and assignment.
"""

from .base import Pair
from .import_result import ImportResult
from .raster_image import RasterImage
from .spectrum import Spectrum, SpectrumCollection

__all__ = [
    "ImportResult",
    "Pair",
    "RasterImage",
    "Spectrum",
    "SpectrumCollection",
]
