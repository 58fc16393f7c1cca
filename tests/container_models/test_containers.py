import numpy as np
import pytest
from pydantic import ValidationError

from container_models import (
    ImportResult,
    Pair,
    RasterImage,
    Spectrum,
    SpectrumCollection,
)


@pytest.fixture
def image() -> RasterImage:
    data = np.array([[1.0, np.nan, 3.0], [4.0, 5.0, 6.0]])
    return RasterImage(
        data=data,
        x_real=3e-6,
        y_real=2e-6,
        x_offset=1e-6,
        y_offset=-1e-6,
        title="Height",
        metadata={"Units": "m"},
    )


@pytest.fixture
def spectrum() -> Spectrum:
    return Spectrum(data=np.array([1.0, 2.0, 3.0]), offset=1000.0, spacing=500.0, title="A")


class TestPair:
    def test_arithmetic(self) -> None:
        assert Pair(1.0, 2.0) + Pair(3.0, 4.0) == Pair(4.0, 6.0)
        assert Pair(3.0, 4.0) - 1.0 == Pair(2.0, 3.0)
        assert Pair(1.0, 2.0) * 2.0 == Pair(2.0, 4.0)
        assert 2.0 * Pair(1.0, 2.0) == Pair(2.0, 4.0)
        assert Pair(2.0, 4.0) / Pair(2.0, 8.0) == Pair(1.0, 0.5)

    def test_swapped(self) -> None:
        assert Pair(1, 2).swapped() == Pair(2, 1)


class TestRasterImage:
    def test_dimensions(self, image: RasterImage) -> None:
        assert (image.width, image.height) == (3, 2)
        assert image.extent == Pair(3e-6, 2e-6)
        assert image.offset == Pair(1e-6, -1e-6)
        assert image.scale == pytest.approx((1e-6, 1e-6))

    def test_valid_mask(self, image: RasterImage) -> None:
        assert image.valid_mask.tolist() == [[True, False, True], [True, True, True]]
        assert not image.valid_mask.flags.writeable

    def test_equality_with_nan(self, image: RasterImage) -> None:
        assert image == image.model_copy(update={"data": image.data.copy()})
        assert image != image.model_copy(update={"title": "Other"})

    def test_nested_lists_are_coerced(self) -> None:
        image = RasterImage(data=[[1, 2], [3, 4]], x_real=1.0, y_real=1.0)  # type: ignore

        assert image.data.dtype == np.float64

    @pytest.mark.parametrize(
        "data",
        [
            pytest.param(np.zeros(4), id="1D"),
            pytest.param(np.zeros((2, 2, 2)), id="3D"),
        ],
    )
    def test_data_must_be_2d(self, data: np.ndarray) -> None:
        with pytest.raises(ValidationError, match="expected 2 dimension"):
            RasterImage(data=data, x_real=1.0, y_real=1.0)

    @pytest.mark.parametrize("x_real", [0.0, -1.0])
    def test_extent_must_be_positive(self, x_real: float) -> None:
        with pytest.raises(ValidationError):
            RasterImage(data=np.zeros((2, 2)), x_real=x_real, y_real=1.0)

    def test_unknown_fields_are_rejected(self) -> None:
        with pytest.raises(ValidationError):
            RasterImage(data=np.zeros((2, 2)), x_real=1.0, y_real=1.0, z_real=1.0)  # type: ignore

    def test_data_serializes_to_list(self, image: RasterImage) -> None:
        dumped = image.model_dump()
        assert dumped["data"][1] == [4.0, 5.0, 6.0]


class TestSpectrum:
    def test_axis(self, spectrum: Spectrum) -> None:
        assert spectrum.size == 3
        assert spectrum.length == 1500.0
        assert spectrum.wavenumbers.tolist() == [1000.0, 1500.0, 2000.0]

    def test_data_must_be_1d(self) -> None:
        with pytest.raises(ValidationError, match="expected 1 dimension"):
            Spectrum(data=np.zeros((2, 2)))

    def test_collection(self, spectrum: Spectrum) -> None:
        collection = SpectrumCollection(title="All")
        collection.add(spectrum)
        collection.add(spectrum.model_copy(update={"location_x": 1e-6}))

        assert len(collection) == 2
        assert collection.locations == [Pair(0.0, 0.0), Pair(1e-6, 0.0)]
        assert collection.x_label == "Wavenumber (cm^-1)"


class TestImportResult:
    @pytest.fixture
    def imported(self, image: RasterImage, spectrum: Spectrum) -> ImportResult:
        rotated = image.model_copy(update={"title": "Height (Rotated)"})
        return ImportResult(
            images={1: image, 3: image.model_copy(update={"title": None}), 1_000_001: rotated},
            spectra={0: SpectrumCollection(spectra=[spectrum]), 1: SpectrumCollection(spectra=[spectrum])},
            valid_image_count=2,
        )

    def test_image_views(self, imported: ImportResult) -> None:
        assert sorted(imported.primary_images) == [1, 3]
        assert list(imported.rotated_images) == [1]
        assert imported.rotated_images[1].title == "Height (Rotated)"

    def test_all_spectra(self, imported: ImportResult) -> None:
        assert imported.all_spectra is imported.spectra[0]
        assert ImportResult().all_spectra is None

    def test_as_paths(self, imported: ImportResult, image: RasterImage) -> None:
        paths = imported.as_paths()

        assert paths["/1/data"] is imported.images[1]
        assert paths["/1/meta"] == {"Units": "m"}
        assert paths["/1/data/title"] == "Height"
        assert paths["/1000001/data/title"] == "Height (Rotated)"
        assert "/3/data" in paths
        assert "/3/data/title" not in paths
        assert sorted(key for key in paths if key.startswith("/sps/")) == ["/sps/0", "/sps/1"]

    def test_valid_image_count_is_not_negative(self) -> None:
        with pytest.raises(ValidationError):
            ImportResult(valid_image_count=-1)
