"""Error types raised by openapi-builder."""


class OpenAPIBuilderError(Exception):
    """Base exception for openapi-builder errors"""

    pass


class UnsupportedTypeError(OpenAPIBuilderError, TypeError):
    """A type whose kind has no JSON Schema mapping (list, dict, Optional, ...)."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"unsupported type kind: {kind}")
