import base64
import binascii
from typing import Final

import numpy as np

from container_models.base import FloatArray1D

from .exceptions import SampleDecodeError, SizeMismatchError

SAMPLE_DTYPE: Final[np.dtype] = np.dtype("<f4")


def decode_samples(
    encoded: str | None,
    count: int,
    multiplier: float = 1.0,
    offset: float = 0.0,
) -> FloatArray1D:
    """
    Decode a base64 payload of little-endian float32 samples.

    The samples are widened to float64 and mapped as ``value * multiplier + offset``
    in the same pass.

    :param encoded: The base64 text, as embedded in the document.
    :param count: The number of samples the payload must hold.
    :param multiplier: Factor applied to every sample.
    :param offset: Constant added to every sample after scaling.
    :returns: A 1D float64 array with `count` elements.
    :raises SizeMismatchError: If the decoded byte length is not ``4 * count``.
    :raises SampleDecodeError: If the text is not valid base64.
    """
    try:
        raw = base64.b64decode(encoded or "")
    except (binascii.Error, ValueError) as error:
        raise SampleDecodeError(f"Invalid base64 sample data: {error}") from error

    expected = count * SAMPLE_DTYPE.itemsize
    if len(raw) != expected:
        raise SizeMismatchError(expected=expected, actual=len(raw))

    samples = np.frombuffer(raw, dtype=SAMPLE_DTYPE).astype(np.float64)
    if multiplier != 1.0:
        samples *= multiplier
    if offset != 0.0:
        samples += offset
    return samples
