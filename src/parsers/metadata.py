"""Metadata extraction for height-map channels.

A channel element is walked one child at a time. Every child kind has a
handler that returns a :class:`ChannelUpdate`; the updates are merged into an
immutable :class:`ChannelRecord`. Elements that are not recognized are kept
as plain string metadata, so unknown parts of the schema are carried along
rather than rejected.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from enum import StrEnum
from functools import reduce
from typing import Any, NamedTuple
from xml.etree.ElementTree import Element

from container_models.base import Coordinate, Extent, Pair, Resolution
from utils.conversions import element_text, local_name, to_float, to_int
from utils.units import NO_PREFIX_MULTIPLIER, get_prefix_multiplier, parse_scan_angle


class ChannelElement(StrEnum):
    POSITION = "Position"
    SIZE = "Size"
    RESOLUTION = "Resolution"
    UNITS = "Units"
    UNIT_PREFIX = "UnitPrefix"
    TAGS = "Tags"
    SAMPLE_BASE64 = "SampleBase64"


class ChannelAttribute(StrEnum):
    DATA_CHANNEL = "DataChannel"
    LABEL = "Label"


SCAN_ANGLE_TAG = "ScanAngle"


class ChannelUpdate(NamedTuple):
    """Partial result of reading one child element of a channel."""

    metadata: Mapping[str, str] = {}
    fields: Mapping[str, Any] = {}


@dataclass(frozen=True)
class ChannelRecord:
    """Everything read from one height-map channel element."""

    data_channel: str = ""
    label: str = ""
    metadata: Mapping[str, str] = field(default_factory=dict)
    position: Coordinate = Pair(0.0, 0.0)
    size: Extent = Pair(0.0, 0.0)
    resolution: Resolution = Pair(0, 0)
    unit: str = "m"
    unit_prefix_multiplier: float = NO_PREFIX_MULTIPLIER
    scan_angle: float = 0.0
    sample_base64: str | None = None

    @property
    def sample_count(self) -> int:
        return self.resolution.x * self.resolution.y

    def merge(self, update: ChannelUpdate) -> ChannelRecord:
        return replace(
            self, metadata={**self.metadata, **update.metadata}, **update.fields
        )


def _read_axes[T](
    element: Element, field_name: str, convert: Callable[[str], T], default: T
) -> ChannelUpdate:
    container = local_name(element)
    values = {"X": default, "Y": default}
    metadata = {}
    for child in element:
        axis, text = local_name(child), element_text(child)
        if axis in values:
            values[axis] = convert(text)
        metadata[f"{container}_{axis}"] = text
    return ChannelUpdate(
        metadata=metadata, fields={field_name: Pair(values["X"], values["Y"])}
    )


def _read_tags(element: Element) -> ChannelUpdate:
    metadata = {}
    fields = {}
    for tag in element:
        if (name := tag.get("Name")) is None:
            continue
        value = tag.get("Value", "")
        if name == SCAN_ANGLE_TAG:
            fields["scan_angle"] = parse_scan_angle(value)
        metadata[name] = value
    return ChannelUpdate(metadata=metadata, fields=fields)


def _read_passthrough(element: Element) -> ChannelUpdate:
    name = local_name(element)
    if len(element) == 0:
        return ChannelUpdate(metadata={name: element_text(element)})
    return ChannelUpdate(
        metadata={
            f"{name}_{local_name(child)}": element_text(child) for child in element
        }
    )


def read_channel_element(element: Element) -> ChannelUpdate:
    """Read one child element of a channel into a partial update."""
    match local_name(element):
        case ChannelElement.POSITION:
            return _read_axes(element, "position", to_float, 0.0)
        case ChannelElement.SIZE:
            return _read_axes(element, "size", to_float, 0.0)
        case ChannelElement.RESOLUTION:
            return _read_axes(element, "resolution", to_int, 0)
        case ChannelElement.UNITS:
            unit = element_text(element)
            return ChannelUpdate(metadata={"Units": unit}, fields={"unit": unit})
        case ChannelElement.UNIT_PREFIX:
            multiplier = get_prefix_multiplier(element_text(element))
            return ChannelUpdate(fields={"unit_prefix_multiplier": multiplier})
        case ChannelElement.TAGS:
            return _read_tags(element)
        case ChannelElement.SAMPLE_BASE64:
            return ChannelUpdate(fields={"sample_base64": element_text(element)})
        case _:
            return _read_passthrough(element)


def extract_channel(channel: Element) -> ChannelRecord:
    """
    Read a height-map channel element into a :class:`ChannelRecord`.

    Never fails on missing or malformed fields: absent numbers read as 0 and
    absent strings as empty, the unit defaults to ``"m"`` and the prefix
    multiplier to ``1.0``.

    :param channel: A child element of the ``HeightMaps`` section.
    :returns: The typed fields and the flat string metadata of the channel.
    """
    data_channel = channel.get(ChannelAttribute.DATA_CHANNEL, "")
    record = ChannelRecord(
        data_channel=data_channel,
        label=channel.get(ChannelAttribute.LABEL, ""),
        metadata={ChannelAttribute.DATA_CHANNEL.value: data_channel},
    )
    return reduce(
        ChannelRecord.merge, map(read_channel_element, channel), record
    )
