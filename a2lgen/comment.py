"""Parsing of ``a2l`` annotations embedded in source-code comments."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class A2lType(Enum):
    """Kind of A2L object an annotated variable describes."""

    MEASUREMENT = "MEASUREMENT"
    CHARACTERISTIC = "CHARACTERISTIC"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_str(cls, type_str: str) -> A2lType:
        """Pick the type named anywhere in ``type_str``, case-insensitively."""
        lowered = type_str.lower()
        if "measurement" in lowered:
            return cls.MEASUREMENT
        if "characteristic" in lowered:
            return cls.CHARACTERISTIC
        return cls.UNKNOWN


class CharacteristicType(Enum):
    """Characteristic kinds as written in an A2L file."""

    ASCII = "ASCII"
    CURVE = "CURVE"
    MAP = "MAP"
    CUBOID = "CUBOID"
    CUBE_4 = "CUBE_4"
    CUBE_5 = "CUBE_5"
    VAL_BLK = "VAL_BLK"
    VALUE = "VALUE"


_CHARACTERISTIC_NAMES = {
    "ascii": CharacteristicType.ASCII,
    "value": CharacteristicType.VALUE,
    "valblk": CharacteristicType.VAL_BLK,
}

_RE_ON = re.compile(r"a2l\s+on")
_RE_OFF = re.compile(r"a2l\s+off")
_RE_CHARACTERISTIC_TYPE = re.compile(r"a2l-characteristic-type\s+(\w+)")
_NUMBER = r"([-+]?\d*\.?\d+(?:[eE][-+]?\d+)?)"
_RE_MIN = re.compile(r"a2l-min\s+" + _NUMBER, re.ASCII)
_RE_MAX = re.compile(r"a2l-max\s+" + _NUMBER, re.ASCII)


def _text_pattern(tag: str) -> re.Pattern[str]:
    return re.compile(re.escape(tag) + r"\s+(.+)")


# Free-text tags and the attribute each one fills.
_TEXT_TAGS = {
    "a2l-description": ("description", _text_pattern("a2l-description")),
    "a2l-linear-coeffs": ("linear_coeffs", _text_pattern("a2l-linear-coeffs")),
    "a2l-rat-func-coeffs": ("rat_func_coeffs", _text_pattern("a2l-rat-func-coeffs")),
    "a2l-display-identifier": (
        "display_identifier",
        _text_pattern("a2l-display-identifier"),
    ),
    "a2l-group": ("group", _text_pattern("a2l-group")),
    "a2l-max-refresh": ("max_refresh", _text_pattern("a2l-max-refresh")),
    "a2l-unit": ("unit", _text_pattern("a2l-unit")),
}


def _lines(text: str):
    """Split on newlines, dropping a trailing carriage return from each line."""
    parts = text.split("\n")
    if parts and parts[-1] == "":
        parts.pop()
    for part in parts:
        yield part[:-1] if part.endswith("\r") else part


def _parse_number(pattern: re.Pattern[str], line: str, tag: str) -> float | None:
    match = pattern.search(line)
    if match is None:
        return None
    try:
        return float(match.group(1))
    except ValueError:
        logger.error("Failed to parse %s value", tag)
        return None


@dataclass
class A2lCodeComment:
    """A2L settings collected from the comment lines above a declaration."""

    on: bool = False
    a2l_type: A2lType = A2lType.UNKNOWN
    characteristic_type: CharacteristicType = CharacteristicType.VALUE
    description: str = ""
    min_value: float = 0.0
    max_value: float = 0.0
    linear_coeffs: str = ""
    rat_func_coeffs: str = ""
    display_identifier: str = ""
    group: str = ""
    max_refresh: str = ""
    read_only: bool = False
    read_write: bool = False
    unit: str = ""

    @classmethod
    def from_comment(cls, comment: str) -> A2lCodeComment:
        """Build the settings from a (possibly multi-line) comment text."""
        result = cls()
        for line in _lines(comment):
            if _RE_ON.search(line):
                result.on = True
            if _RE_OFF.search(line):
                result.on = False

            if "a2l-type" in line:
                result.a2l_type = A2lType.from_str(line)

            if "a2l-characteristic-type" in line:
                match = _RE_CHARACTERISTIC_TYPE.search(line)
                if match:
                    result.characteristic_type = _CHARACTERISTIC_NAMES.get(
                        match.group(1).lower(), CharacteristicType.VALUE
                    )

            if "a2l-min" in line:
                value = _parse_number(_RE_MIN, line, "a2l-min")
                if value is not None:
                    result.min_value = value

            if "a2l-max" in line:
                value = _parse_number(_RE_MAX, line, "a2l-max")
                if value is not None:
                    result.max_value = value

            for tag, (attribute, pattern) in _TEXT_TAGS.items():
                if tag in line:
                    match = pattern.search(line)
                    if match:
                        setattr(result, attribute, match.group(1))

            if "a2l-read-only" in line:
                result.read_only = True
            if "a2l-read-write" in line:
                result.read_write = True
        return result