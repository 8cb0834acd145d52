"""Sized scalar kinds.

Python has one unbounded ``int`` and one ``float``. These subclasses carry the
width and signedness the schema mapper needs, both as annotations
(``bar: UInt8``) and as values (``UInt8(3)``). Plain ``int`` is the
platform-default signed integer and plain ``float`` is a 64-bit float.
"""

from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema


class _SizedInt(int):
    min_value: int = 0
    max_value: int = 0

    def __new__(cls, value: Any = 0):
        number = int(value)
        if not isinstance(value, (int, str)) and number != value:
            raise ValueError(f"{cls.__name__} requires an integral value, got {value!r}")
        if not cls.min_value <= number <= cls.max_value:
            raise ValueError(
                f"{cls.__name__} must be between {cls.min_value} and {cls.max_value}, got {number}"
            )
        return super().__new__(cls, number)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_after_validator_function(cls, core_schema.int_schema())


class _SizedFloat(float):
    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_after_validator_function(cls, core_schema.float_schema())


class Int8(_SizedInt):
    min_value = -(2**7)
    max_value = 2**7 - 1


class Int16(_SizedInt):
    min_value = -(2**15)
    max_value = 2**15 - 1


class Int32(_SizedInt):
    min_value = -(2**31)
    max_value = 2**31 - 1


class Int64(_SizedInt):
    min_value = -(2**63)
    max_value = 2**63 - 1


class UInt8(_SizedInt):
    max_value = 2**8 - 1


class UInt16(_SizedInt):
    max_value = 2**16 - 1


class UInt32(_SizedInt):
    max_value = 2**32 - 1


class UInt64(_SizedInt):
    max_value = 2**64 - 1


# Platform-default unsigned integer.
UInt = UInt32


class Float32(_SizedFloat):
    pass


class Float64(_SizedFloat):
    pass


__all__ = [
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "UInt",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "Float32",
    "Float64",
]
