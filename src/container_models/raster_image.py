"""Raster image container.

::

    +--------------------------------------+
    |             RasterImage              |
    |--------------------------------------|
    | data      : HeightData (rows, cols)  |
    | x_real    : float (m)                |
    | y_real    : float (m)                |
    | x_offset  : float (m)                |
    | y_offset  : float (m)                |
    | unit      : str (value unit)         |
    | unit_xy   : str (lateral unit)       |
    | title     : str | None               |
    | metadata  : dict[str, str]           |
    +--------------------------------------+
    | width / height -> int (pixels)       |
    | extent / offset / scale -> Pair      |
    | valid_mask -> BinaryMask             |
    +--------------------------------------+

The first row of ``data`` is the top of the image. Pixels that carry no
measurement (for example the corners of an expanded rotation) are NaN.
"""

from __future__ import annotations

import numpy as np
from pydantic import BaseModel, Field

from .base import CONTAINER_CONFIG, BinaryMask, Coordinate, Extent, HeightData, Pair


class RasterImage(BaseModel):
    data: HeightData
    x_real: float = Field(..., gt=0.0, description="physical width in meters (m)")
    y_real: float = Field(..., gt=0.0, description="physical height in meters (m)")
    x_offset: float = Field(default=0.0, description="x origin in meters (m)")
    y_offset: float = Field(default=0.0, description="y origin in meters (m)")
    unit: str = "m"
    unit_xy: str = "m"
    title: str | None = None
    metadata: dict[str, str] = Field(default_factory=dict)

    model_config = CONTAINER_CONFIG

    @property
    def width(self) -> int:
        """The image width in pixels."""
        return self.data.shape[1]

    @property
    def height(self) -> int:
        """The image height in pixels."""
        return self.data.shape[0]

    @property
    def extent(self) -> Extent:
        return Pair(self.x_real, self.y_real)

    @property
    def offset(self) -> Coordinate:
        return Pair(self.x_offset, self.y_offset)

    @property
    def scale(self) -> Pair[float]:
        """The pixel size in meters (m)."""
        return Pair(self.x_real / self.width, self.y_real / self.height)

    @property
    def valid_mask(self) -> BinaryMask:
        """Mask of the pixels that carry a measurement."""
        valid_mask = ~np.isnan(self.data)
        valid_mask.setflags(write=False)
        return valid_mask

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RasterImage):
            return NotImplemented
        return (
            np.array_equal(self.data, other.data, equal_nan=True)
            and self.extent == other.extent
            and self.offset == other.offset
            and self.unit == other.unit
            and self.title == other.title
        )
