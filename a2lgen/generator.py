"""Mapping of C types to A2L data types and creation of A2L objects."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from a2lgen.comment import CharacteristicType

logger = logging.getLogger(__name__)


class DataType(Enum):
    """A2L data types, valued by their keyword."""

    UBYTE = "UBYTE"
    SBYTE = "SBYTE"
    UWORD = "UWORD"
    SWORD = "SWORD"
    ULONG = "ULONG"
    SLONG = "SLONG"
    A_UINT64 = "A_UINT64"
    A_INT64 = "A_INT64"
    FLOAT16_IEEE = "FLOAT16_IEEE"
    FLOAT32_IEEE = "FLOAT32_IEEE"
    FLOAT64_IEEE = "FLOAT64_IEEE"


_C_TYPES = {
    "uint8_t": DataType.UBYTE,
    "int8_t": DataType.SBYTE,
    "uint8": DataType.UBYTE,
    "int8": DataType.SBYTE,
    "unsigned char": DataType.UBYTE,
    "char": DataType.SBYTE,
    "unsigned short": DataType.UWORD,
    "short": DataType.SWORD,
    "uint16_t": DataType.UWORD,
    "int16_t": DataType.SWORD,
    "uint16": DataType.UWORD,
    "int16": DataType.SWORD,
    "int": DataType.SLONG,
    "unsigned int": DataType.ULONG,
    "uint32_t": DataType.ULONG,
    "int32_t": DataType.SLONG,
    "uint32": DataType.ULONG,
    "int32": DataType.SLONG,
    "long long": DataType.A_INT64,
    "unsigned long long": DataType.A_UINT64,
    "uint64_t": DataType.A_UINT64,
    "int64_t": DataType.A_INT64,
    "uint64": DataType.A_UINT64,
    "int64": DataType.A_INT64,
    "float": DataType.FLOAT32_IEEE,
    "double": DataType.FLOAT64_IEEE,
    "long": DataType.SLONG,
}

_U16_MAX = 0xFFFF
_U32_MAX = 0xFFFF_FFFF


def c_type_to_data_type(c_type: str) -> DataType:
    """Return the A2L data type for a C type name; unknown types give UBYTE."""
    data_type = _C_TYPES.get(c_type.lower())
    if data_type is None:
        logger.warning("Type %s not found", c_type)
        return DataType.UBYTE
    return data_type


@dataclass
class Characteristic:
    """An A2L CHARACTERISTIC object."""

    name: str
    long_identifier: str
    characteristic_type: CharacteristicType
    address: int
    deposit: str
    max_diff: float
    conversion: str
    lower_limit: float
    upper_limit: float

    def __post_init__(self) -> None:
        if not 0 <= self.address <= _U32_MAX:
            raise ValueError(f"address out of range: {self.address}")


@dataclass
class Measurement:
    """An A2L MEASUREMENT object."""

    name: str
    long_identifier: str
    datatype: DataType
    conversion: str
    resolution: int
    accuracy: float
    lower_limit: float
    upper_limit: float

    def __post_init__(self) -> None:
        if not 0 <= self.resolution <= _U16_MAX:
            raise ValueError(f"resolution out of range: {self.resolution}")


class A2lCommentGenerator:
    """Builds A2L objects from the information found in annotated code."""

    def match_c_type_to_a2l_type(self, c_type: str) -> DataType:
        """Return the A2L data type for a C type name."""
        return c_type_to_data_type(c_type)

    def create_characteristic(
        self,
        name: str,
        long_identifier: str,
        characteristic_type: CharacteristicType,
        deposit: str,
        conversion: str,
        min_value: float,
        max_value: float,
    ) -> Characteristic:
        """Create a characteristic at address 0 with no allowed difference."""
        return Characteristic(
            name=name,
            long_identifier=long_identifier,
            characteristic_type=characteristic_type,
            address=0,
            deposit=deposit,
            max_diff=0.0,
            conversion=conversion,
            lower_limit=min_value,
            upper_limit=max_value,
        )

    def create_measurement(
        self,
        name: str,
        long_identifier: str,
        datatype: DataType,
        conversion: str,
        resolution: int,
        min_value: float,
        max_value: float,
    ) -> Measurement:
        """Create a measurement with zero accuracy."""
        return Measurement(
            name=name,
            long_identifier=long_identifier,
            datatype=datatype,
            conversion=conversion,
            resolution=resolution,
            accuracy=0.0,
            lower_limit=min_value,
            upper_limit=max_value,
        )