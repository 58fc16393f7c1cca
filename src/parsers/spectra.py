from dataclasses import dataclass
from enum import StrEnum
from typing import Final
from xml.etree.ElementTree import Element

from scipy.constants import micro

from container_models.base import Coordinate, Pair
from container_models.import_result import AGGREGATE_SPECTRA_INDEX
from container_models.spectrum import ALL_SPECTRA_TITLE, Spectrum, SpectrumCollection
from utils.conversions import element_text, local_name, to_float, to_int
from utils.logger import log_skipped

from .exceptions import AxdParserError, InvalidSpectrumError
from .samples import decode_samples

SPECTRUM_TAG: Final[str] = "IRRenderedSpectra"


class SpectrumElement(StrEnum):
    LABEL = "Label"
    DATA_POINTS = "DataPoints"
    START_WAVENUMBER = "StartWavenumber"
    END_WAVENUMBER = "EndWavenumber"
    LOCATION = "Location"
    DATA_CHANNELS = "DataChannels"


@dataclass(frozen=True)
class SpectrumEntry:
    label: str = ""
    channel_label: str = ""
    location: Coordinate = Pair(0.0, 0.0)
    start_wavenumber: float = 0.0
    end_wavenumber: float = 0.0
    count: int = 0
    sample_base64: str | None = None

    @property
    def spacing(self) -> float:
        """Wavenumber step so that `count` samples span start to end inclusive."""
        if self.count == 1:
            return self.end_wavenumber - self.start_wavenumber
        return (self.end_wavenumber - self.start_wavenumber) / (self.count - 1)


def _read_location(element: Element) -> Coordinate:
    axes = {local_name(child): to_float(element_text(child)) for child in element}
    return Pair(axes.get("X", 0.0), axes.get("Y", 0.0))


def _read_first_payload(element: Element) -> str | None:
    for child in element:
        if local_name(child) == "SampleBase64":
            return element_text(child)
    return None


def extract_spectrum_entry(element: Element) -> SpectrumEntry:
    """Read an ``IRRenderedSpectra`` element. Missing fields keep their defaults."""
    fields = {}
    for child in element:
        match local_name(child):
            case SpectrumElement.LABEL:
                fields["label"] = element_text(child)
            case SpectrumElement.DATA_POINTS:
                fields["count"] = to_int(element_text(child))
            case SpectrumElement.START_WAVENUMBER:
                fields["start_wavenumber"] = to_float(element_text(child))
            case SpectrumElement.END_WAVENUMBER:
                fields["end_wavenumber"] = to_float(element_text(child))
            case SpectrumElement.LOCATION:
                fields["location"] = _read_location(child)
            case SpectrumElement.DATA_CHANNELS:
                fields["channel_label"] = child.get("DataChannel", "")
                fields["sample_base64"] = _read_first_payload(child)
    return SpectrumEntry(**fields)


def build_spectrum(entry: SpectrumEntry) -> Spectrum:
    """
    Decode the samples of a spectrum entry.

    :raises InvalidSpectrumError: If the entry declares no data points.
    :raises SampleDecodeError: If the payload does not hold `count` samples.
    """
    if entry.count < 1:
        raise InvalidSpectrumError(
            f"Spectrum '{entry.label}' declares {entry.count} data points"
        )
    location = entry.location * micro
    return Spectrum(
        data=decode_samples(entry.sample_base64, entry.count),
        offset=entry.start_wavenumber,
        spacing=entry.spacing,
        location_x=location.x,
        location_y=location.y,
        title=entry.label,
        y_label=entry.channel_label,
    )


def read_rendered_spectra(section: Element) -> dict[int, SpectrumCollection]:
    """
    Read every spectrum of a ``RenderedSpectra`` section.

    Each decoded spectrum gets its own collection, keyed by the 1-based position
    of its entry, and is also appended to the aggregate collection at index 0.
    Entries that cannot be decoded are logged and left out.
    """
    everything = SpectrumCollection(title=ALL_SPECTRA_TITLE)
    collections = {AGGREGATE_SPECTRA_INDEX: everything}
    entries = (child for child in section if local_name(child) == SPECTRUM_TAG)
    for index, element in enumerate(entries, start=1):
        entry = extract_spectrum_entry(element)
        try:
            spectrum = build_spectrum(entry)
        except AxdParserError as error:
            log_skipped("spectrum", index, error)
            continue
        collections[index] = SpectrumCollection(title=entry.label, spectra=[spectrum])
        everything.add(spectrum)
    return collections
