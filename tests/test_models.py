"""Tests for specmap.models -- field mapping, defaults, and immutability."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from specmap.models import (
    API,
    Info,
    Item,
    Method,
    Parameter,
    Property,
    RequestBody,
    Response,
    Schema,
    Server,
    Type,
)


# ---------------------------------------------------------------------------
# Alias mapping
# ---------------------------------------------------------------------------


class TestAliases:
    """JSON key names map onto Python attribute names."""

    def test_ref_alias(self) -> None:
        item = Item.model_validate({"$ref": "#/components/schemas/Pet"})
        assert item.ref == "#/components/schemas/Pet"

    def test_parameter_in_and_schema_aliases(self) -> None:
        param = Parameter.model_validate(
            {"name": "id", "in": "path", "schema": {"type": "string"}}
        )
        assert param.location == "path"
        assert param.schema_ == Schema(type="string")

    def test_method_camel_case_aliases(self) -> None:
        method = Method.model_validate(
            {"operationId": "getPet", "requestBody": {"required": True}}
        )
        assert method.operation_id == "getPet"
        assert method.request_body == RequestBody(required=True)

    def test_api_openapi_alias(self) -> None:
        assert API.model_validate({"openapi": "3.1.0"}).version == "3.1.0"

    def test_populate_by_field_name(self) -> None:
        param = Parameter(name="q", location="query", schema_=Schema(type="string"))
        assert param.location == "query"
        assert param.schema_.type == "string"


# ---------------------------------------------------------------------------
# Defaults for absent fields
# ---------------------------------------------------------------------------


class TestDefaults:
    """Absent fields take their empty or absent value."""

    def test_empty_api(self) -> None:
        api = API.model_validate({})
        assert api.version is None
        assert api.info == Info()
        assert api.servers == []
        assert api.paths == {}
        assert api.components == {}

    def test_method_without_body(self) -> None:
        method = Method.model_validate({})
        assert method.request_body is None
        assert method.tags == []
        assert method.parameters == []
        assert method.responses == {}
        assert method.summary is None
        assert method.description is None
        assert method.operation_id is None

    def test_property_defaults(self) -> None:
        prop = Property.model_validate({})
        assert prop.type is None
        assert prop.ref is None
        assert prop.items is None
        assert prop.format is None
        assert prop.nullable is False
        assert prop.enum == []

    def test_type_defaults(self) -> None:
        component = Type.model_validate({})
        assert component.required == []
        assert component.type is None
        assert component.properties == {}

    def test_empty_string_is_kept_distinct_from_absent(self) -> None:
        assert Info.model_validate({"title": ""}).title == ""
        assert Info.model_validate({}).title is None

    def test_response_and_request_body_content_default(self) -> None:
        assert Response.model_validate({}).content == {}
        assert RequestBody.model_validate({}).content == {}
        assert RequestBody.model_validate({}).required is False

    @pytest.mark.parametrize(
        ("model", "data", "field", "expected"),
        [
            (API, {"servers": None}, "servers", []),
            (API, {"paths": None}, "paths", {}),
            (API, {"components": None}, "components", {}),
            (API, {"info": None}, "info", Info()),
            (Method, {"tags": None}, "tags", []),
            (Method, {"parameters": None}, "parameters", []),
            (Method, {"responses": None}, "responses", {}),
            (Method, {"requestBody": None}, "request_body", None),
            (Parameter, {"required": None}, "required", False),
            (Parameter, {"schema": None}, "schema_", None),
            (RequestBody, {"required": None, "content": None}, "required", False),
            (RequestBody, {"content": None}, "content", {}),
            (Response, {"content": None}, "content", {}),
            (Type, {"required": None}, "required", []),
            (Type, {"properties": None}, "properties", {}),
            (Property, {"nullable": None}, "nullable", False),
            (Property, {"enum": None}, "enum", []),
            (Schema, {"items": None, "enum": None}, "enum", []),
            (Item, {"enum": None}, "enum", []),
        ],
    )
    def test_null_reads_as_absent(self, model, data, field, expected) -> None:
        assert getattr(model.model_validate(data), field) == expected

    def test_null_entity_in_list_is_empty(self) -> None:
        method = Method.model_validate({"parameters": [None, {"name": "a"}]})
        assert method.parameters == [Parameter(), Parameter(name="a")]


# ---------------------------------------------------------------------------
# Leaf shapes
# ---------------------------------------------------------------------------


class TestLeafShapes:
    """Property, Schema and Item keep their own field sets."""

    def test_property_with_type_and_ref_keeps_both(self) -> None:
        prop = Property.model_validate({"type": "object", "$ref": "#/x"})
        assert prop.type == "object"
        assert prop.ref == "#/x"

    def test_enum_accepts_json_scalars(self) -> None:
        item = Item.model_validate({"enum": ["a", 1, 2.5, True, None]})
        assert item.enum == ["a", 1, 2.5, True, None]

    def test_enum_rejects_containers(self) -> None:
        with pytest.raises(ValidationError):
            Item.model_validate({"enum": [{"a": 1}]})

    def test_schema_is_array_with_item_type(self) -> None:
        schema = Schema.model_validate({"type": "array", "items": {"type": "string"}})
        assert schema.is_array

    def test_schema_is_array_with_item_ref(self) -> None:
        schema = Schema.model_validate({"items": {"$ref": "#/components/schemas/Pet"}})
        assert schema.is_array

    def test_schema_without_items_is_not_array(self) -> None:
        assert not Schema.model_validate({"type": "string"}).is_array

    def test_schema_with_empty_items_is_not_array(self) -> None:
        assert not Schema.model_validate({"items": {"enum": ["a"]}}).is_array

    def test_property_items_is_schema(self) -> None:
        prop = Property.model_validate(
            {"type": "array", "items": {"type": "string", "enum": ["x", "y"]}}
        )
        assert isinstance(prop.items, Schema)
        assert prop.items.enum == ["x", "y"]

    def test_item_ignores_nested_items(self) -> None:
        item = Item.model_validate({"type": "array", "items": {"type": "string"}})
        assert item == Item(type="array")


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


class TestPaths:
    """Object-valued keys of a path item decode as operations."""

    def test_path_level_keys_are_skipped(self) -> None:
        api = API.model_validate({
            "paths": {
                "/a": {
                    "summary": "collection",
                    "parameters": [{"name": "id", "in": "path"}],
                    "servers": [{"url": "https://alt"}],
                    "x-owner": "team",
                    "get": {"operationId": "getA"},
                }
            }
        })
        assert list(api.paths["/a"]) == ["get"]

    def test_all_http_methods_are_kept(self) -> None:
        methods = ["get", "put", "post", "delete", "options", "head", "patch", "trace"]
        api = API.model_validate({"paths": {"/a": {m: {} for m in methods}}})
        assert list(api.paths["/a"]) == methods

    def test_method_keys_are_kept_as_written(self) -> None:
        api = API.model_validate({
            "paths": {"/a": {"GET": {"operationId": "upper"}, "query": {"operationId": "q"}}}
        })
        assert api.paths["/a"]["GET"].operation_id == "upper"
        assert api.paths["/a"]["query"].operation_id == "q"

    def test_non_object_values_are_skipped(self) -> None:
        api = API.model_validate({"paths": {"/a": {"get": "nope", "$ref": "#/x"}}})
        assert api.paths["/a"] == {}

    def test_null_path_item_has_no_operations(self) -> None:
        assert API.model_validate({"paths": {"/a": None}}).paths == {"/a": {}}

    def test_non_object_path_item_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            API.model_validate({"paths": {"/a": ["get"]}})

    def test_operations_in_document_order(self) -> None:
        api = API.model_validate({
            "paths": {
                "/b": {"post": {"operationId": "p"}, "get": {"operationId": "g"}},
                "/a": {"delete": {"operationId": "d"}},
            }
        })
        assert [(p, m, op.operation_id) for p, m, op in api.operations()] == [
            ("/b", "post", "p"),
            ("/b", "get", "g"),
            ("/a", "delete", "d"),
        ]


# ---------------------------------------------------------------------------
# Flags
# ---------------------------------------------------------------------------


class TestFlags:
    """Boolean fields take JSON booleans only."""

    @pytest.mark.parametrize(
        ("model", "field"),
        [(Property, "nullable"), (Parameter, "required"), (RequestBody, "required")],
    )
    @pytest.mark.parametrize("value", ["yes", "no", "true", 0, 1])
    def test_non_boolean_is_rejected(self, model, field, value) -> None:
        with pytest.raises(ValidationError):
            model.model_validate({field: value})

    def test_boolean_is_kept(self) -> None:
        assert Property.model_validate({"nullable": True}).nullable is True
        assert Parameter.model_validate({"required": False}).required is False


# ---------------------------------------------------------------------------
# Immutability and equality
# ---------------------------------------------------------------------------


class TestFrozen:
    """Entities are read-only and compare structurally."""

    def test_assignment_is_rejected(self) -> None:
        server = Server(url="https://a")
        with pytest.raises(ValidationError):
            server.url = "https://b"

    def test_structural_equality(self) -> None:
        data = {"tags": ["a"], "responses": {"200": {"description": "ok"}}}
        assert Method.model_validate(data) == Method.model_validate(data)
