from __future__ import annotations

from typing import Any, Final

from pydantic import BaseModel, Field

from .base import CONTAINER_CONFIG
from .raster_image import RasterImage
from .spectrum import SpectrumCollection

ROTATED_INDEX_OFFSET: Final[int] = 1_000_000
AGGREGATE_SPECTRA_INDEX: Final[int] = 0


class ImportResult(BaseModel):
    """
    Everything decoded from one file.

    Raster images are keyed by the 1-based position of their channel in the file;
    the rotated counterpart of an oblique raster lives at
    ``ROTATED_INDEX_OFFSET + index``. Spectrum collections are keyed by the
    1-based position of their entry, with the aggregate collection at index 0.
    """

    images: dict[int, RasterImage] = Field(default_factory=dict)
    spectra: dict[int, SpectrumCollection] = Field(default_factory=dict)
    valid_image_count: int = Field(default=0, ge=0)

    model_config = CONTAINER_CONFIG

    @property
    def primary_images(self) -> dict[int, RasterImage]:
        return {
            index: image
            for index, image in self.images.items()
            if index < ROTATED_INDEX_OFFSET
        }

    @property
    def rotated_images(self) -> dict[int, RasterImage]:
        return {
            index - ROTATED_INDEX_OFFSET: image
            for index, image in self.images.items()
            if index >= ROTATED_INDEX_OFFSET
        }

    @property
    def all_spectra(self) -> SpectrumCollection | None:
        return self.spectra.get(AGGREGATE_SPECTRA_INDEX)

    def as_paths(self) -> dict[str, Any]:
        """
        Flatten the result into string paths.

        ``/<n>/data``, ``/<n>/meta`` and ``/<n>/data/title`` per raster image and
        ``/sps/<n>`` per spectrum collection.
        """
        paths: dict[str, Any] = {}
        for index, image in sorted(self.images.items()):
            paths[f"/{index}/data"] = image
            paths[f"/{index}/meta"] = image.metadata
            if image.title is not None:
                paths[f"/{index}/data/title"] = image.title
        for index, collection in sorted(self.spectra.items()):
            paths[f"/sps/{index}"] = collection
        return paths
