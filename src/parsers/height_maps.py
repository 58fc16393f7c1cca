"""Raster reconstruction of height-map channels.

The samples of a channel are laid out row by row. How the grid has to be
mirrored or turned to show the sample the right way up depends on the scan
angle of the channel:

======== ============================================ ===================
angle    mutations                                    extent
======== ============================================ ===================
0        vertical flip                                (size x, size y)
180      horizontal flip                              (size x, size y)
90       quarter turn counter-clockwise, vertical flip (size y, size x)
-90      quarter turn clockwise, vertical flip        (size y, size x)
other    expanding rotation, vertical flip            rotated canvas
======== ============================================ ===================

Any other ("oblique") angle produces two rasters: the grid as stored, and the
rotated grid on an expanded canvas.
"""

from collections.abc import Callable, Sequence
from math import isfinite
from types import MappingProxyType
from typing import Final, Mapping, NamedTuple

from loguru import logger
from returns.result import Failure, ResultE, Success
from scipy.constants import micro

from container_models.base import Coordinate, Pair
from container_models.raster_image import RasterImage
from mutations import (
    FlipHorizontal,
    FlipVertical,
    RasterMutation,
    Rotate90,
    RotateExpand,
    apply_mutations,
)
from settings import Settings, get_settings

from .exceptions import AxdParserError, InvalidChannelError
from .metadata import ChannelRecord
from .samples import decode_samples

OBLIQUE_SENTINEL_OFFSET: Final[Coordinate] = Pair(1.0, 1.0)

CANONICAL_MUTATIONS: Final[Mapping[float, Callable[[], Sequence[RasterMutation]]]] = (
    MappingProxyType(
        {
            0.0: lambda: (FlipVertical(),),
            180.0: lambda: (FlipHorizontal(),),
            90.0: lambda: (Rotate90(clockwise=False), FlipVertical()),
            -90.0: lambda: (Rotate90(clockwise=True), FlipVertical()),
        }
    )
)


class HeightMapRasters(NamedTuple):
    """The raster(s) reconstructed from one channel."""

    primary: RasterImage
    rotated: RasterImage | None = None

    @property
    def is_oblique(self) -> bool:
        return self.rotated is not None


def is_canonical_angle(angle: float) -> bool:
    return angle in CANONICAL_MUTATIONS


def _unwrap(result: ResultE[RasterImage], label: str) -> RasterImage:
    match result:
        case Success(image):
            return image
        case Failure(AxdParserError() as error):
            raise error
        case Failure(error):
            raise InvalidChannelError(
                f"Channel '{label}' could not be transformed: {error}"
            ) from error
    raise TypeError(f"Unexpected result container: {result!r}")


def _centered_offset(image: RasterImage, position: Coordinate) -> Coordinate:
    """Origin of an image centered on `position` (in micrometers)."""
    return position * micro - image.extent * 0.5


def _with_offset(image: RasterImage, offset: Coordinate, title: str) -> RasterImage:
    return image.model_copy(
        update={"x_offset": offset.x, "y_offset": offset.y, "title": title}
    )


def build_raster(record: ChannelRecord) -> RasterImage:
    """
    Decode the samples of a channel into an un-transformed raster.

    Sample values are scaled by the unit prefix of the channel; the physical
    extent is the channel size converted from micrometers to meters.

    :raises InvalidChannelError: If the grid has no pixels or no finite physical
        size and position.
    :raises SampleDecodeError: If the payload does not match the grid.
    """
    if record.resolution.x <= 0 or record.resolution.y <= 0:
        raise InvalidChannelError(
            f"Channel '{record.label}' has no pixels (resolution {tuple(record.resolution)})"
        )
    if not all(map(isfinite, (*record.size, *record.position))):
        raise InvalidChannelError(
            f"Channel '{record.label}' has a non-finite size or position"
        )
    extent = record.size * micro
    if extent.x <= 0 or extent.y <= 0:
        raise InvalidChannelError(
            f"Channel '{record.label}' has no physical size ({tuple(record.size)} um)"
        )
    samples = decode_samples(
        record.sample_base64,
        record.sample_count,
        multiplier=record.unit_prefix_multiplier,
    )
    return RasterImage(
        data=samples.reshape(record.resolution.y, record.resolution.x),
        x_real=extent.x,
        y_real=extent.y,
        unit=record.unit,
        metadata=dict(record.metadata),
    )


def reconstruct_rasters(
    record: ChannelRecord, settings: Settings | None = None
) -> HeightMapRasters:
    """
    Reconstruct the raster image(s) of one height-map channel.

    :param record: The channel as read by :func:`parsers.metadata.extract_channel`.
    :param settings: Reader settings, defaults to :func:`settings.get_settings`.
    :returns: The primary raster, plus the rotated raster for an oblique scan angle.
    :raises InvalidChannelError: If the grid has no pixels, no finite physical
        size, or cannot be rotated onto a canvas.
    :raises SampleDecodeError: If the payload does not match the grid.
    """
    settings = settings or get_settings()
    raster = build_raster(record)
    angle = record.scan_angle

    if mutations := CANONICAL_MUTATIONS.get(angle):
        logger.debug(f"Channel '{record.label}' scanned at {angle} degrees")
        image = _unwrap(apply_mutations(raster, mutations()), record.label)
        return HeightMapRasters(
            primary=_with_offset(
                image, _centered_offset(image, record.position), record.label
            )
        )

    logger.debug(f"Channel '{record.label}' scanned at oblique angle {angle} degrees")
    rotated = _unwrap(
        apply_mutations(
            raster,
            (RotateExpand(angle, order=settings.rotation_spline_order), FlipVertical()),
        ),
        record.label,
    )
    primary_offset = (
        OBLIQUE_SENTINEL_OFFSET
        if settings.oblique_offset_sentinel
        else _centered_offset(raster, record.position)
    )
    return HeightMapRasters(
        primary=_with_offset(raster, primary_offset, f"{record.label} (Offset)"),
        rotated=_with_offset(
            rotated,
            _centered_offset(rotated, record.position),
            f"{record.label} (Rotated)",
        ),
    )
