import re
from typing import Final
from xml.etree.ElementTree import Element

_LEADING_FLOAT: Final[re.Pattern[str]] = re.compile(
    r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
)
_LEADING_INT: Final[re.Pattern[str]] = re.compile(r"^\s*[+-]?\d+")


def to_float(text: str | None) -> float:
    """Read the leading decimal number of `text`, or ``0.0`` if there is none."""
    if text and (match := _LEADING_FLOAT.match(text)):
        return float(match.group())
    return 0.0


def to_int(text: str | None) -> int:
    """Read the leading integer of `text`, or ``0`` if there is none."""
    if text and (match := _LEADING_INT.match(text)):
        return int(match.group())
    return 0


def local_name(element: Element) -> str:
    """The tag of `element` without its namespace."""
    return element.tag.rpartition("}")[2]


def element_text(element: Element | None) -> str:
    """The text directly inside `element`, or an empty string."""
    if element is None:
        return ""
    return element.text or ""
