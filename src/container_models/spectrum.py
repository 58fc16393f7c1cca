from __future__ import annotations

from typing import Final

import numpy as np
from pydantic import BaseModel, Field

from .base import CONTAINER_CONFIG, Coordinate, FloatArray1D, Pair, SpectrumData

WAVENUMBER_LABEL: Final[str] = "Wavenumber (cm^-1)"
ALL_SPECTRA_TITLE: Final[str] = "All Spectra"


class Spectrum(BaseModel):
    """
    A single 1D spectrum on a linear axis.

    The axis starts at `offset` and advances by `spacing` per sample. `length` is
    stored as ``spacing * samples``, which is one spacing longer than the span
    between the first and the last sample.
    """

    data: SpectrumData
    offset: float = 0.0
    spacing: float = 1.0
    location_x: float = Field(default=0.0, description="x location in meters (m)")
    location_y: float = Field(default=0.0, description="y location in meters (m)")
    title: str = ""
    x_label: str = WAVENUMBER_LABEL
    y_label: str = ""

    model_config = CONTAINER_CONFIG

    @property
    def size(self) -> int:
        return self.data.shape[0]

    @property
    def length(self) -> float:
        return self.spacing * self.size

    @property
    def location(self) -> Coordinate:
        return Pair(self.location_x, self.location_y)

    @property
    def wavenumbers(self) -> FloatArray1D:
        """The axis value of every sample."""
        return self.offset + self.spacing * np.arange(self.size, dtype=np.float64)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Spectrum):
            return NotImplemented
        return (
            np.array_equal(self.data, other.data, equal_nan=True)
            and self.offset == other.offset
            and self.spacing == other.spacing
            and self.location == other.location
            and self.title == other.title
        )


class SpectrumCollection(BaseModel):
    """An ordered set of spectra sharing one coordinate unit and x-axis label."""

    title: str = ""
    unit_xy: str = "m"
    x_label: str = WAVENUMBER_LABEL
    spectra: list[Spectrum] = Field(default_factory=list)

    model_config = CONTAINER_CONFIG

    def __len__(self) -> int:
        return len(self.spectra)

    def add(self, spectrum: Spectrum) -> None:
        self.spectra.append(spectrum)

    @property
    def locations(self) -> list[Coordinate]:
        return [spectrum.location for spectrum in self.spectra]
