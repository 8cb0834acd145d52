import json
from dataclasses import dataclass
from http import HTTPStatus
from pathlib import Path

import yaml

from openapi_builder.document.spec import (
    JSON_CONTENT_TYPE,
    OpenAPISpec,
    Operation,
    Response,
    new_document,
)
from openapi_builder.schema.descriptor import SchemaDescriptor
from openapi_builder.schema.kinds import UInt8
from openapi_builder.schema.mapper import schema_from_type

FIXTURES = Path(__file__).parent / "fixtures"


@dataclass
class SimpleStructure:
    Foo: str
    Bar: UInt8


def _simple_schema() -> SchemaDescriptor:
    return schema_from_type(SimpleStructure)


class TestNewDocument:
    def test_minimal(self):
        doc = new_document("myTitle", "2.2.2")
        assert doc.openapi == "3.0.0"
        assert doc.to_dict() == {
            "openapi": "3.0.0",
            "info": {"title": "myTitle", "version": "2.2.2"},
        }

    def test_info_description(self):
        doc = new_document("t", "1", description="About")
        assert doc.to_dict()["info"] == {"title": "t", "description": "About", "version": "1"}

    def test_servers_use_wire_spelling(self):
        doc = new_document("t", "1")
        doc.add_server("https://api.example.com", description="prod")
        doc.add_server("https://staging.example.com")
        assert doc.to_dict()["servers"] == [
            {"url": "https://api.example.com", "desciption": "prod"},
            {"url": "https://staging.example.com"},
        ]


class TestAddJsonEndpoint:
    def test_method_lowercased(self):
        doc = new_document("t", "1")
        doc.add_json_endpoint("GET", "/foo")
        assert list(doc.paths["/foo"]) == ["get"]

    def test_registration_is_idempotent(self):
        doc = new_document("t", "1")
        first = doc.add_json_endpoint("GET", "/foo")
        second = doc.add_json_endpoint("get", "/foo")
        assert first.responses is second.responses
        assert first.responses is doc.paths["/foo"]["get"].responses

    def test_sibling_methods_kept(self):
        doc = new_document("t", "1")
        doc.add_json_endpoint("GET", "/foo")
        doc.add_json_endpoint("POST", "/foo")
        doc.add_json_endpoint("GET", "/bar")
        assert set(doc.paths["/foo"]) == {"get", "post"}
        assert set(doc.paths) == {"/foo", "/bar"}

    def test_reregistration_keeps_responses(self):
        doc = new_document("t", "1")
        doc.add_json_endpoint("GET", "/foo").add_response(200, SchemaDescriptor(type="string"))
        doc.add_json_endpoint("GET", "/foo")
        assert 200 in doc.paths["/foo"]["get"].responses

    def test_empty_responses_omitted(self):
        doc = new_document("t", "1")
        doc.add_json_endpoint("DELETE", "/foo")
        assert doc.to_dict()["paths"] == {"/foo": {"delete": {"description": ""}}}


class TestAddResponse:
    def test_creates_json_content(self):
        doc = new_document("t", "1")
        schema = SchemaDescriptor(type="string")
        response = doc.add_response("GET", "/foo", 200, schema)
        assert isinstance(response, Response)
        assert response.description == ""
        assert response.content[JSON_CONTENT_TYPE].schema_ is schema

    def test_last_write_wins(self):
        doc = new_document("t", "1")
        endpoint = doc.add_json_endpoint("GET", "/foo")
        schema_a = SchemaDescriptor(type="string")
        schema_b = SchemaDescriptor(type="boolean")
        endpoint.add_response(200, schema_a)
        endpoint.add_response(200, schema_b)

        content = endpoint.responses[200].content
        assert list(content) == [JSON_CONTENT_TYPE]
        assert content[JSON_CONTENT_TYPE].schema_ is schema_b

    def test_other_status_codes_untouched(self):
        doc = new_document("t", "1")
        endpoint = doc.add_json_endpoint("GET", "/foo")
        not_found = SchemaDescriptor(type="string")
        endpoint.add_response(404, not_found)
        endpoint.add_response(200, SchemaDescriptor(type="boolean"))
        endpoint.add_response(200, SchemaDescriptor(type="integer", minimum=0))
        assert endpoint.responses[404].content[JSON_CONTENT_TYPE].schema_ is not_found

    def test_existing_response_node_reused(self):
        doc = new_document("t", "1")
        endpoint = doc.add_json_endpoint("GET", "/foo")
        endpoint.add_response(200, SchemaDescriptor(type="string"))
        node = endpoint.responses[200]
        node.description = "OK"
        endpoint.add_response(200, SchemaDescriptor(type="boolean"))
        assert endpoint.responses[200] is node
        assert node.description == "OK"

    def test_http_status_normalized(self):
        doc = new_document("t", "1")
        doc.add_json_endpoint("GET", "/foo").add_response(HTTPStatus.OK, SchemaDescriptor(type="string"))
        (code,) = doc.paths["/foo"]["get"].responses
        assert type(code) is int
        assert code == 200

    def test_without_prior_registration(self):
        doc = new_document("t", "1")
        doc.add_response("Put", "/items", 201, SchemaDescriptor(type="string"))
        assert isinstance(doc.paths["/items"]["put"], Operation)


class TestSerialization:
    def test_end_to_end_matches_fixture(self):
        doc = new_document("myTitle", "2.2.2")
        doc.add_json_endpoint("GET", "/foo").add_response(HTTPStatus.OK, _simple_schema())

        expected = yaml.safe_load((FIXTURES / "foo_document.yaml").read_text(encoding="utf-8"))
        assert doc.to_dict() == expected

    def test_json_status_keys_are_strings(self):
        doc = new_document("myTitle", "2.2.2")
        doc.add_json_endpoint("GET", "/foo").add_response(200, _simple_schema())

        data = json.loads(doc.to_json())
        schema = data["paths"]["/foo"]["get"]["responses"]["200"]["content"]["application/json"]["schema"]
        assert schema == {
            "type": "object",
            "properties": {
                "Bar": {"type": "integer", "maximum": 255},
                "Foo": {"type": "string"},
            },
        }

    def test_yaml_round_trip(self):
        doc = new_document("myTitle", "2.2.2")
        doc.add_json_endpoint("GET", "/foo").add_response(200, _simple_schema())
        assert yaml.safe_load(doc.to_yaml()) == doc.to_dict()

    def test_json_indent(self):
        doc = new_document("t", "1")
        assert doc.to_json(indent=2).startswith('{\n  "openapi": "3.0.0"')

    def test_model_dump_json_agrees(self):
        doc = new_document("t", "1")
        doc.add_json_endpoint("GET", "/foo").add_response(200, SchemaDescriptor(type="string"))
        assert json.loads(doc.model_dump_json(by_alias=True)) == doc.to_dict()

    def test_summary_and_description(self):
        doc = new_document("t", "1")
        doc.add_json_endpoint("GET", "/foo").describe(summary="List foos", description="All of them")
        assert doc.to_dict()["paths"]["/foo"]["get"] == {
            "summary": "List foos",
            "description": "All of them",
        }

    def test_constructed_directly(self):
        doc = OpenAPISpec(info={"title": "t", "version": "1"})
        assert doc.to_dict() == {"openapi": "3.0.0", "info": {"title": "t", "version": "1"}}
