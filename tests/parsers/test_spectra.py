from xml.etree.ElementTree import Element, SubElement

import numpy as np
import pytest
from scipy.constants import micro

from container_models.base import Pair
from container_models.spectrum import ALL_SPECTRA_TITLE, WAVENUMBER_LABEL
from helper_functions import encode_samples, make_spectrum
from parsers.exceptions import InvalidSpectrumError, SizeMismatchError
from parsers.spectra import (
    SpectrumEntry,
    build_spectrum,
    extract_spectrum_entry,
    read_rendered_spectra,
)


def _section(*spectra: Element) -> Element:
    section = Element("RenderedSpectra")
    section.extend(spectra)
    return section


class TestSpectrumEntry:
    def test_fields(self) -> None:
        entry = extract_spectrum_entry(
            make_spectrum([1.0, 2.0, 3.0], label="Spot A", start=900.0, end=1800.0)
        )

        assert entry.label == "Spot A"
        assert entry.channel_label == "IR Amplitude"
        assert entry.count == 3
        assert entry.start_wavenumber == 900.0
        assert entry.end_wavenumber == 1800.0
        assert entry.location == Pair(12.0, 34.0)
        assert entry.sample_base64 == encode_samples([1.0, 2.0, 3.0])

    @pytest.mark.parametrize(
        "count, expected",
        [
            pytest.param(5, 250.0, id="inclusive span"),
            pytest.param(2, 1000.0, id="two points"),
            pytest.param(1, 1000.0, id="single point"),
        ],
    )
    def test_spacing(self, count: int, expected: float) -> None:
        entry = SpectrumEntry(start_wavenumber=1000.0, end_wavenumber=2000.0, count=count)
        assert entry.spacing == expected

    def test_only_first_payload_is_read(self) -> None:
        element = make_spectrum([1.0, 2.0])
        channels = element.find("DataChannels")
        assert channels is not None
        SubElement(channels, "SampleBase64").text = encode_samples([9.0, 9.0])

        entry = extract_spectrum_entry(element)

        assert entry.sample_base64 == encode_samples([1.0, 2.0])

    def test_empty_element_uses_defaults(self) -> None:
        assert extract_spectrum_entry(Element("IRRenderedSpectra")) == SpectrumEntry()


class TestBuildSpectrum:
    def test_axis(self) -> None:
        spectrum = build_spectrum(
            extract_spectrum_entry(make_spectrum([1.0, 2.0, 3.0, 4.0, 5.0]))
        )

        assert spectrum.offset == 1000.0
        assert spectrum.spacing == 250.0
        assert spectrum.length == 1250.0
        assert spectrum.wavenumbers.tolist() == [1000.0, 1250.0, 1500.0, 1750.0, 2000.0]
        assert spectrum.x_label == WAVENUMBER_LABEL

    def test_samples_and_labels(self) -> None:
        spectrum = build_spectrum(
            extract_spectrum_entry(make_spectrum([0.5, 1.5], data_channel="IR Phase"))
        )

        assert spectrum.data.tolist() == [0.5, 1.5]
        assert spectrum.title == "Spectrum 1"
        assert spectrum.y_label == "IR Phase"

    def test_location_is_converted_to_meters(self) -> None:
        spectrum = build_spectrum(extract_spectrum_entry(make_spectrum([1.0])))
        assert spectrum.location == pytest.approx((12.0 * micro, 34.0 * micro))

    def test_no_data_points(self) -> None:
        entry = extract_spectrum_entry(make_spectrum([], data_points=0))

        with pytest.raises(InvalidSpectrumError, match="declares 0 data points"):
            build_spectrum(entry)

    def test_payload_mismatch(self) -> None:
        entry = extract_spectrum_entry(make_spectrum([1.0, 2.0], data_points=3))

        with pytest.raises(SizeMismatchError):
            build_spectrum(entry)


class TestReadRenderedSpectra:
    def test_aggregate_exists_without_spectra(self) -> None:
        collections = read_rendered_spectra(_section())

        assert list(collections) == [0]
        assert collections[0].title == ALL_SPECTRA_TITLE
        assert len(collections[0]) == 0

    def test_each_spectrum_has_its_own_collection(self) -> None:
        collections = read_rendered_spectra(
            _section(
                make_spectrum([1.0, 2.0], label="A"),
                make_spectrum([3.0, 4.0, 5.0], label="B", location=(1.0, 2.0)),
            )
        )

        assert sorted(collections) == [0, 1, 2]
        assert [len(collections[i]) for i in (1, 2)] == [1, 1]
        assert collections[1].title == "A"
        assert collections[2].spectra[0].data.tolist() == [3.0, 4.0, 5.0]

    def test_aggregate_keeps_document_order(self) -> None:
        collections = read_rendered_spectra(
            _section(
                make_spectrum([1.0], label="A", location=(1.0, 1.0)),
                make_spectrum([2.0], label="B", location=(2.0, 2.0)),
            )
        )

        everything = collections[0]
        assert [spectrum.title for spectrum in everything.spectra] == ["A", "B"]
        assert everything.locations == [
            pytest.approx((1.0 * micro, 1.0 * micro)),
            pytest.approx((2.0 * micro, 2.0 * micro)),
        ]
        assert everything.spectra[0] == collections[1].spectra[0]

    def test_invalid_spectrum_leaves_gap(self) -> None:
        collections = read_rendered_spectra(
            _section(
                make_spectrum([1.0], label="A"),
                make_spectrum([1.0, 2.0], label="Broken", data_points=5),
                make_spectrum([3.0], label="C"),
            )
        )

        assert sorted(collections) == [0, 1, 3]
        assert [spectrum.title for spectrum in collections[0].spectra] == ["A", "C"]

    def test_invalid_spectrum_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        read_rendered_spectra(_section(make_spectrum([], data_points=0)))
        assert "Skipping spectrum 1" in caplog.text

    def test_other_elements_are_ignored(self) -> None:
        collections = read_rendered_spectra(
            _section(
                Element("Annotation"),
                make_spectrum([1.0], label="A"),
            )
        )

        assert sorted(collections) == [0, 1]
        assert np.array_equal(collections[1].spectra[0].data, [1.0])
