"""JSON Schema descriptor model.

Also holds the omit-empty base model shared by the document nodes: fields
listed in ``omit_empty_fields`` are dropped from serialized output when they
are empty, zero or unset.
"""

from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer

SchemaType = Literal["boolean", "integer", "string", "object"]


class OmitEmptyModel(BaseModel):
    """Base model whose serializer drops empty optional fields."""

    model_config = ConfigDict(populate_by_name=True)

    omit_empty_fields: ClassVar[frozenset[str]] = frozenset()

    @model_serializer(mode="wrap")
    def serialize_without_empty(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        fields = type(self).model_fields
        for name in self.omit_empty_fields:
            info = fields[name]
            for key in {name, info.serialization_alias or info.alias or name}:
                if key in data and not data[key]:
                    del data[key]
        return data


class SchemaDescriptor(OmitEmptyModel):
    """The JSON Schema subset produced for one type."""

    omit_empty_fields: ClassVar[frozenset[str]] = frozenset(
        {"enum", "minimum", "maximum", "properties"}
    )

    type: SchemaType
    enum: list[str] = Field(default_factory=list)
    minimum: int | None = None  # integer only
    maximum: int | None = None  # integer only
    properties: dict[str, "SchemaDescriptor"] | None = None  # object only
