"""
Spatial Raster Mutations
========================

Mutations that change where pixels are located without changing what they
measure: mirroring, exact quarter turns and rotation by an arbitrary angle.

Angles follow the display convention of the images: the first row is the
top, and a positive angle turns the image counter-clockwise.
"""

from math import ceil, cos, isfinite, radians, sin
from typing import Final

import numpy as np
from loguru import logger
from scipy.ndimage import map_coordinates

from container_models.raster_image import RasterImage
from mutations.base import RasterMutation

# Guards the canvas size against rounding, e.g. 10.000000000001 pixels.
_PIXEL_TOLERANCE: Final[float] = 1e-9
# Largest canvas an expanding rotation may allocate.
MAX_CANVAS_PIXELS: Final[int] = 2**25


class FlipVertical(RasterMutation):
    """Mirror the image upside down."""

    def apply_on_image(self, image: RasterImage) -> RasterImage:
        return image.model_copy(update={"data": np.flipud(image.data).copy()})


class FlipHorizontal(RasterMutation):
    """Mirror the image left to right."""

    def apply_on_image(self, image: RasterImage) -> RasterImage:
        return image.model_copy(update={"data": np.fliplr(image.data).copy()})


class Rotate90(RasterMutation):
    def __init__(self, clockwise: bool = False) -> None:
        self.clockwise = clockwise

    def apply_on_image(self, image: RasterImage) -> RasterImage:
        """
        Turn the image by exactly 90 degrees.

        The pixels are permuted without interpolation and the physical
        width and height are swapped.
        """
        extent = image.extent.swapped()
        return image.model_copy(
            update={
                "data": np.rot90(image.data, k=-1 if self.clockwise else 1).copy(),
                "x_real": extent.x,
                "y_real": extent.y,
            }
        )


class RotateExpand(RasterMutation):
    def __init__(self, angle: float, order: int = 3) -> None:
        """
        Constructor for a rotation by an arbitrary angle.

        :param angle: The rotation angle in degrees, counter-clockwise.
        :param order: The spline order used for interpolation (0-5).
        """
        self.angle = angle
        self.order = order

    @property
    def skip_predicate(self) -> bool:
        return self.angle % 360.0 == 0.0

    def apply_on_image(self, image: RasterImage) -> RasterImage:
        """
        Rotate the image onto a canvas large enough to hold all of it.

        The new canvas has square pixels the size of the smallest input pixel
        and covers the bounding box of the rotated image. Canvas pixels outside
        the rotated image are NaN.

        :returns: A new `RasterImage` whose extent is the extent of the canvas.
        :raises ValueError: If the canvas has no finite size or more than
            `MAX_CANVAS_PIXELS` pixels.
        """
        theta = radians(self.angle)
        cos_t, sin_t = cos(theta), sin(theta)
        step = min(image.scale)
        new_x_real = abs(image.x_real * cos_t) + abs(image.y_real * sin_t)
        new_y_real = abs(image.x_real * sin_t) + abs(image.y_real * cos_t)
        canvas_columns, canvas_rows = new_x_real / step, new_y_real / step
        if not (isfinite(canvas_columns) and isfinite(canvas_rows)):
            raise ValueError(
                f"Rotated canvas of {new_x_real} x {new_y_real} m has no finite size"
            )
        new_width = max(1, ceil(canvas_columns - _PIXEL_TOLERANCE))
        new_height = max(1, ceil(canvas_rows - _PIXEL_TOLERANCE))
        if new_width * new_height > MAX_CANVAS_PIXELS:
            raise ValueError(
                f"Rotated canvas of {new_height}x{new_width} pixels exceeds "
                f"{MAX_CANVAS_PIXELS} pixels"
            )
        logger.debug(
            f"Rotating image by {self.angle} degrees onto a {new_height}x{new_width} canvas"
        )

        # Physical position of every canvas pixel relative to the canvas center
        rows, cols = np.mgrid[0:new_height, 0:new_width].astype(np.float64)
        x = (cols - (new_width - 1) / 2) * step
        y = (rows - (new_height - 1) / 2) * step

        # Source pixel sampled by every canvas pixel
        dx, dy = image.scale
        source_cols = (x * cos_t - y * sin_t) / dx + (image.width - 1) / 2
        source_rows = (x * sin_t + y * cos_t) / dy + (image.height - 1) / 2

        rotated = map_coordinates(
            image.data,
            [source_rows, source_cols],
            order=self.order,
            mode="nearest",
        )
        outside = (
            (source_rows < -0.5)
            | (source_rows > image.height - 0.5)
            | (source_cols < -0.5)
            | (source_cols > image.width - 0.5)
        )
        rotated[outside] = np.nan

        return image.model_copy(
            update={
                "data": rotated,
                "x_real": new_width * step,
                "y_real": new_height * step,
            }
        )
