"""
Readers for Anasys Instruments / Analysis Studio XML exports (.axd).

An .axd file is a UTF-16 XML document with two sections of interest:

- ``HeightMaps``: one element per data channel, holding the scan geometry,
  free-form tags and the samples as base64 encoded little-endian float32.
- ``RenderedSpectra``: one ``IRRenderedSpectra`` element per infrared
  spectrum, holding its wavenumber range, location and samples.

Loading
-------
:func:`load_axd_file` is the railway entry point and returns an ``IOResult``
holding an :class:`~container_models.import_result.ImportResult`.
:func:`read_axd_file` and :func:`read_axd_document` raise instead.

Error policy
------------
A channel or spectrum that cannot be decoded is logged and skipped. The file
as a whole fails with :class:`FileTypeError` for an unsupported document and
with :class:`NoDataError` when no height map could be decoded.

Notes
-----
- Lateral dimensions are stored in micrometers in the file and converted to
  meters (m).
- Height values are scaled by the SI prefix of their channel.
"""

from .detection import detect_score, is_axd_content
from .exceptions import (
    AxdParserError,
    FileTypeError,
    NoDataError,
    SampleDecodeError,
    SizeMismatchError,
)
from .loaders import load_axd_file, read_axd_document, read_axd_file

__all__ = (
    "AxdParserError",
    "FileTypeError",
    "NoDataError",
    "SampleDecodeError",
    "SizeMismatchError",
    "detect_score",
    "is_axd_content",
    "load_axd_file",
    "read_axd_document",
    "read_axd_file",
)
