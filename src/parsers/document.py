from enum import StrEnum
from pathlib import Path
from typing import Final
from xml.etree.ElementTree import Element, ParseError, fromstring

from utils.conversions import local_name

from .exceptions import FORMAT_NAME, FileTypeError

ROOT_TAG: Final[str] = "Document"
SUPPORTED_DOC_TYPE: Final[str] = "IR"
SUPPORTED_VERSION: Final[str] = "1.0"


class DocumentSection(StrEnum):
    HEIGHT_MAPS = "HeightMaps"
    RENDERED_SPECTRA = "RenderedSpectra"


def parse_document(content: bytes) -> Element:
    """
    Parse the raw bytes of a file into an XML tree.

    The encoding is taken from the XML declaration, so UTF-16 documents are
    read as such.

    :raises FileTypeError: If the content is not well-formed XML.
    """
    try:
        return fromstring(content)
    except ParseError as error:
        raise FileTypeError(FORMAT_NAME, f"malformed XML ({error})") from error


def read_document(path: Path) -> Element:
    """Read and parse the XML tree of the file at `path`."""
    return parse_document(path.read_bytes())


def validate_document(root: Element | None) -> Element | None:
    """
    Check that a parsed document is a supported Analysis Studio document.

    Only a ``Document`` root carrying ``DocType`` or ``Version`` is checked;
    anything else passes unchecked.

    :param root: The root element of the document.
    :returns: The same root element.
    :raises FileTypeError: If the document type or version is not supported.
    """
    if root is None or local_name(root) != ROOT_TAG:
        return root
    doc_type, version = root.get("DocType"), root.get("Version")
    if doc_type is None and version is None:
        return root
    if doc_type != SUPPORTED_DOC_TYPE or version != SUPPORTED_VERSION:
        raise FileTypeError(
            FORMAT_NAME,
            f"unsupported document type {doc_type!r} version {version!r}",
        )
    return root
