from pathlib import Path
from xml.etree.ElementTree import Element

from loguru import logger
from returns.io import impure_safe

from container_models.import_result import ROTATED_INDEX_OFFSET, ImportResult
from container_models.raster_image import RasterImage
from settings import Settings, get_settings
from utils.conversions import local_name
from utils.logger import log_railway_function, log_skipped

from .document import DocumentSection, read_document, validate_document
from .exceptions import AxdParserError, NoDataError
from .height_maps import reconstruct_rasters
from .metadata import extract_channel
from .spectra import read_rendered_spectra


def read_height_maps(
    section: Element, settings: Settings
) -> tuple[dict[int, RasterImage], int]:
    """
    Reconstruct the rasters of every channel in a ``HeightMaps`` section.

    Rasters are keyed by the 1-based position of their channel; the rotated
    raster of an oblique channel is keyed ``ROTATED_INDEX_OFFSET`` higher.
    Channels that cannot be reconstructed are logged and left out.

    :returns: The rasters and the number of channels that were reconstructed.
    """
    images: dict[int, RasterImage] = {}
    valid = 0
    for index, channel in enumerate(section, start=1):
        record = extract_channel(channel)
        try:
            rasters = reconstruct_rasters(record, settings)
        except AxdParserError as error:
            log_skipped("height map", index, error)
            continue
        images[index] = rasters.primary
        if rasters.rotated is not None:
            images[ROTATED_INDEX_OFFSET + index] = rasters.rotated
        valid += 1
    return images, valid


def read_axd_document(root: Element, settings: Settings | None = None) -> ImportResult:
    """
    Decode the height maps and spectra of a parsed Analysis Studio document.

    :param root: The root element of the document.
    :param settings: Reader settings, defaults to :func:`settings.get_settings`.
    :returns: The decoded raster images and spectrum collections.
    :raises FileTypeError: If the document type or version is not supported.
    :raises NoDataError: If no height map could be decoded, regardless of spectra.
    """
    settings = settings or get_settings()
    settings.log_config()
    validate_document(root)
    result = ImportResult()
    for section in root:
        match local_name(section):
            case DocumentSection.HEIGHT_MAPS:
                images, valid = read_height_maps(section, settings)
                result.images.update(images)
                result.valid_image_count += valid
            case DocumentSection.RENDERED_SPECTRA:
                result.spectra.update(read_rendered_spectra(section))
    if result.valid_image_count == 0:
        raise NoDataError()
    logger.debug(
        f"Decoded {result.valid_image_count} height map(s) and "
        f"{len(result.spectra)} spectrum collection(s)"
    )
    return result


def read_axd_file(path: Path, settings: Settings | None = None) -> ImportResult:
    """Read and decode the Analysis Studio file at `path`."""
    return read_axd_document(read_document(path), settings)


@log_railway_function(
    "Failed to load Analysis Studio file",
    "Successfully loaded Analysis Studio file",
)
@impure_safe
def load_axd_file(path: Path, settings: Settings | None = None) -> ImportResult:
    """
    Load an Analysis Studio (.axd) file.

    Height-map values are converted to SI units and lateral dimensions to
    meters (m).

    :param path: The path to the .axd file.
    :param settings: Reader settings, defaults to :func:`settings.get_settings`.
    :returns: `IOSuccess` with the `ImportResult`, or `IOFailure` with the error.
    """
    return read_axd_file(path, settings)
