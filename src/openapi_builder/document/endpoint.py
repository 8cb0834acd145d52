"""Endpoint handle returned when registering a path and method."""

from typing import TYPE_CHECKING

from openapi_builder.schema.descriptor import SchemaDescriptor

if TYPE_CHECKING:
    from openapi_builder.document.spec import OpenAPISpec, Operation, Response


class Endpoint:
    """A (path, method) pair of a document, used to attach responses.

    The handle holds no state of its own: every call goes through the
    document, so changes are visible there immediately.
    """

    def __init__(self, document: "OpenAPISpec", method: str, path: str):
        self.document = document
        self.method = method
        self.path = path

    @property
    def operation(self) -> "Operation":
        return self.document.paths[self.path][self.method]

    @property
    def responses(self) -> "dict[int, Response]":
        """The live status-code -> Response mapping in the document."""
        return self.operation.responses

    def describe(self, summary: str | None = None, description: str | None = None) -> "Endpoint":
        """Set the operation's summary and/or description."""
        operation = self.operation
        if summary is not None:
            operation.summary = summary
        if description is not None:
            operation.description = description
        return self

    def add_response(self, status_code: int, schema: SchemaDescriptor) -> None:
        """Attach ``schema`` as the JSON response body for ``status_code``."""
        self.document.add_response(self.method, self.path, status_code, schema)

    def __repr__(self) -> str:
        return f"Endpoint({self.method.upper()} {self.path})"
