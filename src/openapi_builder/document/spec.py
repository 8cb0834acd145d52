"""OpenAPI document model.

The document is a tree of pydantic models. Paths, operations, responses and
content entries are created lazily, once per key, and never replaced by a
later registration; only the ``application/json`` content entry of a
response is overwritten when a body is attached again.
"""

import json
import logging
from typing import Any, ClassVar

import yaml
from pydantic import Field, field_serializer

from openapi_builder.document.endpoint import Endpoint
from openapi_builder.schema.descriptor import OmitEmptyModel, SchemaDescriptor

logger = logging.getLogger(__name__)

OPENAPI_VERSION = "3.0.0"
JSON_CONTENT_TYPE = "application/json"


class InfoSpec(OmitEmptyModel):
    omit_empty_fields: ClassVar[frozenset[str]] = frozenset({"description"})

    title: str
    description: str = ""
    version: str


class Server(OmitEmptyModel):
    """A server entry. ``description`` goes on the wire as ``desciption``."""

    omit_empty_fields: ClassVar[frozenset[str]] = frozenset({"url", "description"})

    url: str = ""
    description: str = Field(default="", alias="desciption")


class ResponseContent(OmitEmptyModel):
    omit_empty_fields: ClassVar[frozenset[str]] = frozenset({"schema_"})

    schema_: SchemaDescriptor | None = Field(default=None, alias="schema")


class Response(OmitEmptyModel):
    omit_empty_fields: ClassVar[frozenset[str]] = frozenset({"content"})

    description: str = ""
    content: dict[str, ResponseContent] = Field(default_factory=dict)


class Operation(OmitEmptyModel):
    omit_empty_fields: ClassVar[frozenset[str]] = frozenset({"summary", "responses"})

    summary: str = ""
    description: str = ""
    responses: dict[int, Response] = Field(default_factory=dict)

    @field_serializer("responses")
    def serialize_responses(self, responses: dict[int, Response]) -> dict[str, Response]:
        return {str(code): response for code, response in responses.items()}


class OpenAPISpec(OmitEmptyModel):
    """An OpenAPI document indexed by path, method, status code and content type."""

    omit_empty_fields: ClassVar[frozenset[str]] = frozenset({"servers", "paths"})

    openapi: str = OPENAPI_VERSION
    info: InfoSpec
    servers: list[Server] = Field(default_factory=list)
    paths: dict[str, dict[str, Operation]] = Field(default_factory=dict)

    def add_server(self, url: str, description: str = "") -> Server:
        server = Server(url=url, description=description)
        self.servers.append(server)
        return server

    def add_json_endpoint(self, method: str, path: str) -> Endpoint:
        """Register ``method`` on ``path`` and return its Endpoint.

        Existing nodes are reused, so registering the same pair twice yields
        Endpoints that share one response mapping.
        """
        method = method.lower()
        self._operation(method, path)
        return Endpoint(self, method, path)

    def add_response(
        self, method: str, path: str, status_code: int, schema: SchemaDescriptor
    ) -> Response:
        """Attach ``schema`` as the JSON body of ``status_code`` (last write wins)."""
        method = method.lower()
        responses = self._operation(method, path).responses
        status_code = int(status_code)
        response = responses.get(status_code)
        if response is None:
            logger.debug("adding response %d to %s %s", status_code, method, path)
            response = responses[status_code] = Response()
        response.content[JSON_CONTENT_TYPE] = ResponseContent(schema=schema)
        return response

    def operation(self, method: str, path: str) -> Operation | None:
        """Return the registered Operation for ``method`` on ``path``, or None."""
        return self.paths.get(path, {}).get(method.lower())

    def _operation(self, method: str, path: str) -> Operation:
        methods = self.paths.setdefault(path, {})
        operation = methods.get(method)
        if operation is None:
            logger.debug("adding operation %s %s", method, path)
            operation = methods[method] = Operation()
        return operation

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible dict with empty fields omitted."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False, allow_unicode=True)


def new_document(title: str, version: str, description: str = "") -> OpenAPISpec:
    """Create an empty document with the given info block."""
    return OpenAPISpec(info=InfoSpec(title=title, description=description, version=version))
