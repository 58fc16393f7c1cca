import math
from types import MappingProxyType
from typing import Final, Mapping

from scipy.constants import femto, micro, milli, nano, pico

NO_PREFIX_MULTIPLIER: Final[float] = 1.0

UNIT_PREFIX_MULTIPLIERS: Final[Mapping[str, float]] = MappingProxyType(
    {
        "f": femto,
        "p": pico,
        "n": nano,
        "u": micro,
        "m": milli,
    }
)


def get_prefix_multiplier(prefix: str | None) -> float:
    """
    Look up the multiplier for a single-character SI prefix.

    :param prefix: The prefix text as stored in the file, e.g. ``"n"`` or ``"u"``.
    :returns: The multiplier, or ``1.0`` for an absent or unrecognized prefix.
    """
    if not prefix:
        return NO_PREFIX_MULTIPLIER
    return UNIT_PREFIX_MULTIPLIERS.get(prefix.strip(), NO_PREFIX_MULTIPLIER)


def normalize_angle(angle: float) -> float:
    """
    Normalize an angle in degrees into the half-open range (-180, 180].

    :param angle: The angle in degrees.
    :returns: The equivalent angle in (-180, 180].
    """
    angle = math.fmod(angle, 360.0)
    if angle > 180.0:
        return angle - 360.0
    if angle <= -180.0:
        return angle + 360.0
    return angle


def parse_scan_angle(value: str | None) -> float:
    """
    Parse a scan angle tag value such as ``"45 deg"`` into normalized degrees.

    Only the leading whitespace-delimited token is read. A value without a
    numeric leading token yields ``0.0``.
    """
    if not value or not (tokens := value.split()):
        return 0.0
    try:
        angle = float(tokens[0])
    except ValueError:
        return 0.0
    if not math.isfinite(angle):
        return 0.0
    return normalize_angle(angle)
