"""Derive JSON Schema descriptors from Python types.

Handles:
- bool, str and the sized scalar kinds from ``kinds`` (plus plain int/float)
- Record types: dataclasses and pydantic models, recursively
- Field renaming through name annotations
- Exported-name visibility filtering

Everything else (list, dict, Optional, unions, unregistered classes) raises
UnsupportedTypeError. Kind builders live in a per-mapper registry, looked up
along the type's MRO so the most specific registered class wins.
"""

from __future__ import annotations

import dataclasses
import logging
import typing
from typing import Any, Callable, Iterator

from pydantic import BaseModel

from openapi_builder.errors import UnsupportedTypeError
from openapi_builder.schema.descriptor import SchemaDescriptor, SchemaType
from openapi_builder.schema.fields import FieldSpec, resolve_field
from openapi_builder.schema.kinds import (
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
)

logger = logging.getLogger(__name__)

# Dataclass field metadata key holding the name annotation, e.g.
# field(metadata={"json": "TheName,omitempty"})
NAME_METADATA_KEY = "json"

SchemaBuilder = Callable[[], SchemaDescriptor]


def _scalar(schema_type: SchemaType) -> SchemaBuilder:
    def build() -> SchemaDescriptor:
        return SchemaDescriptor(type=schema_type)

    return build


def _integer(minimum: int, maximum: int | None = None) -> SchemaBuilder:
    def build() -> SchemaDescriptor:
        return SchemaDescriptor(type="integer", minimum=minimum, maximum=maximum)

    return build


DEFAULT_KINDS: dict[type, SchemaBuilder] = {
    bool: _scalar("boolean"),
    Int8: _integer(-128, 127),
    Int16: _integer(-32768, 32767),
    Int32: _integer(-2147483648, 2147483647),
    int: _integer(-2147483648, 2147483647),
    Int64: _integer(-9223372036854775808, 9223372036854775807),
    UInt8: _integer(0, 255),
    UInt16: _integer(0, 65535),
    UInt32: _integer(0, 4294967295),
    # No upper bound: 2**64 - 1 does not fit a signed 64-bit maximum.
    UInt64: _integer(0),
    Float32: _scalar("string"),
    Float64: _scalar("string"),
    float: _scalar("string"),
    str: _scalar("string"),
}


def kind_name(tp: Any) -> str:
    """Short name of a type's kind for diagnostics ("list", "Union", "MyClass")."""
    origin = typing.get_origin(tp)
    if origin is not None:
        tp = origin
    return getattr(tp, "__name__", None) or getattr(tp, "_name", None) or repr(tp)


def is_record_type(tp: Any) -> bool:
    """True for dataclasses and pydantic models (classes, not instances)."""
    if not isinstance(tp, type):
        return False
    return dataclasses.is_dataclass(tp) or issubclass(tp, BaseModel)


def iter_record_fields(tp: type) -> Iterator[FieldSpec]:
    """Yield the fields of a record type in declaration order.

    Raises UnsupportedTypeError when a postponed annotation names something
    that cannot be resolved from the record's module.
    """
    if issubclass(tp, BaseModel):
        for name, info in tp.model_fields.items():
            yield resolve_field(name, info.serialization_alias or info.alias, info.annotation)
        return

    try:
        hints = typing.get_type_hints(tp)
    except NameError as exc:
        unresolved = getattr(exc, "name", None) or str(exc)
        logger.debug("unresolved annotation %s on %s", unresolved, tp.__name__)
        raise UnsupportedTypeError(unresolved) from exc
    for f in dataclasses.fields(tp):
        yield resolve_field(f.name, f.metadata.get(NAME_METADATA_KEY), hints.get(f.name, f.type))


class TypeSchemaMapper:
    """Maps Python types to SchemaDescriptors through a kind registry."""

    def __init__(self, kinds: dict[type, SchemaBuilder] | None = None):
        self._kinds = dict(DEFAULT_KINDS if kinds is None else kinds)

    def register(self, kind: type, builder: SchemaBuilder) -> None:
        """Add or replace the schema builder for ``kind`` and its subclasses."""
        self._kinds[kind] = builder

    def map_type(self, tp: Any) -> SchemaDescriptor:
        """Return the schema for ``tp``; raises UnsupportedTypeError on unmapped kinds."""
        return self._map(tp, frozenset())

    def _map(self, tp: Any, in_progress: frozenset[type]) -> SchemaDescriptor:
        if typing.get_origin(tp) is None and isinstance(tp, type):
            for base in tp.__mro__:
                builder = self._kinds.get(base)
                if builder is not None:
                    return builder()

            if is_record_type(tp):
                if tp in in_progress:
                    # Self-referential records have no finite schema.
                    kind = kind_name(tp)
                    logger.debug("recursive record %s", kind)
                    raise UnsupportedTypeError(kind)
                return self._map_record(tp, in_progress | {tp})

        kind = kind_name(tp)
        logger.debug("no schema mapping for kind %s", kind)
        raise UnsupportedTypeError(kind)

    def _map_record(self, tp: type, in_progress: frozenset[type]) -> SchemaDescriptor:
        properties: dict[str, SchemaDescriptor] = {}
        for spec in iter_record_fields(tp):
            if not spec.visible:
                logger.debug(
                    "skipping %s.%s: serialized name %r is not exported",
                    tp.__name__,
                    spec.declared_name,
                    spec.serialized_name,
                )
                continue
            properties[spec.serialized_name] = self._map(spec.annotation, in_progress)

        return SchemaDescriptor(type="object", properties=properties)


_default_mapper = TypeSchemaMapper()


def schema_from_type(tp: Any) -> SchemaDescriptor:
    """Map a type with the default mapper."""
    return _default_mapper.map_type(tp)


def get_json_schema(value: Any) -> SchemaDescriptor:
    """Map the type of ``value`` with the default mapper."""
    return _default_mapper.map_type(type(value))
