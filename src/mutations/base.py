"""
Raster Mutations
================

- :class:`~container_models.raster_image.RasterImage` holds height data with
  its physical extent and offset.
- :class:`RasterMutation` is the interface for a single change to a
  ``RasterImage``. Concrete mutations live in this package.

Every mutation is a callable returning a ``returns`` ``Result``, so a chain of
mutations is built with ``bind``:

    from returns.result import Success

    result = Success(image).bind(Rotate90(clockwise=False)).bind(FlipVertical())
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from functools import reduce

from returns.result import ResultE, Success, safe

from container_models.raster_image import RasterImage


class RasterMutation(ABC):
    """
    A single mutation applied to a :class:`RasterImage`.

    The output of one mutation must be valid input for the next. All
    parameters of the mutation are provided via the constructor.
    """

    @property
    def skip_predicate(self) -> bool:
        """`True` when the mutation would not change the image."""
        return False

    @safe
    def __call__(self, image: RasterImage) -> RasterImage:
        if self.skip_predicate:
            return image
        return self.apply_on_image(image)

    @abstractmethod
    def apply_on_image(self, image: RasterImage) -> RasterImage:
        """Return a new `RasterImage` with the mutation applied."""


def apply_mutations(
    image: RasterImage, mutations: Iterable[RasterMutation]
) -> ResultE[RasterImage]:
    """Apply `mutations` in order, stopping at the first failure."""
    return reduce(
        lambda result, mutation: result.bind(mutation),
        mutations,
        Success(image),
    )
