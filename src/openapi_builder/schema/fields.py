"""Per-field configuration for record types.

A record field is described by the name it serializes under and whether it
is visible in the generated schema. Visibility follows the exported-name
convention: a field is visible when the first character of its *resolved*
serialized name is upper-case, so a name annotation can both hide and expose
a field.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class FieldSpec(BaseModel):
    """One record field as the schema mapper sees it."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    declared_name: str
    serialized_name: str
    visible: bool
    annotation: Any


def resolve_serialized_name(declared_name: str, name_tag: str | None) -> str:
    """Return the first comma-delimited segment of ``name_tag``, or the declared name.

    An empty tag or an empty first segment (``",omitempty"``) falls back to
    the declared identifier.
    """
    if name_tag:
        head = name_tag.split(",", 1)[0]
        if head:
            return head
    return declared_name


def resolve_field(declared_name: str, name_tag: str | None, annotation: Any) -> FieldSpec:
    serialized_name = resolve_serialized_name(declared_name, name_tag)
    return FieldSpec(
        declared_name=declared_name,
        serialized_name=serialized_name,
        visible=serialized_name[:1].isupper(),
        annotation=annotation,
    )
