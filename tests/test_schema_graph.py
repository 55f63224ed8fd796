"""Tests for the schema graph adapter and the extension slot accessor."""

from oapi_codegen_validator.models.extensions import ExtensionMetadata
from oapi_codegen_validator.models.schema_graph import (
    RefResolver,
    iter_children,
    iter_component_nodes,
)
from oapi_codegen_validator.utils.traversal import pre_order


def make_document():
    return {
        "openapi": "3.0.3",
        "components": {
            "schemas": {
                "User": {
                    "type": "object",
                    "required": ["name"],
                    "properties": {
                        "name": {"type": "string"},
                        "address": {"$ref": "#/components/schemas/Address"},
                        "ghost": {"$ref": "#/components/schemas/Missing"},
                        "remote": {"$ref": "other.yaml#/Thing"},
                    },
                },
                "Address": {
                    "type": "object",
                    "properties": {"street": {"type": "string", "minLength": 1}},
                },
                "Alias": {"$ref": "#/components/schemas/Address"},
            }
        },
    }


def test_walk_names_and_order():
    document = make_document()
    names = [node.name for node in pre_order(iter_component_nodes(document), iter_children)]
    assert names == [
        "User",
        "User.name",
        "User.address",
        "User.address.street",
        "Address",
        "Address.street",
        "Alias",
        "Alias.street",
    ]


def test_references_are_inlined_as_copies_of_the_concrete_schema():
    document = make_document()
    list(pre_order(iter_component_nodes(document), iter_children))

    schemas = document["components"]["schemas"]
    address = schemas["User"]["properties"]["address"]
    assert "$ref" not in address
    assert address == schemas["Address"]
    assert address is not schemas["Address"]
    assert address["properties"]["street"] is not schemas["Address"]["properties"]["street"]
    assert schemas["Alias"] == schemas["Address"]
    assert schemas["Alias"] is not schemas["Address"]


def recursive_document():
    return {
        "components": {
            "schemas": {
                "Node": {
                    "type": "object",
                    "properties": {
                        "label": {"type": "string"},
                        "child": {"$ref": "#/components/schemas/Node"},
                    },
                },
                "Tree": {
                    "type": "object",
                    "properties": {"root": {"$ref": "#/components/schemas/Node"}},
                },
            }
        }
    }


def test_recursive_reference_is_left_in_place():
    document = recursive_document()
    names = [node.name for node in pre_order(iter_component_nodes(document), iter_children)]

    assert names == ["Node", "Node.label", "Tree", "Tree.root", "Tree.root.label"]
    schemas = document["components"]["schemas"]
    assert schemas["Node"]["properties"]["child"] == {"$ref": "#/components/schemas/Node"}
    assert schemas["Tree"]["properties"]["root"]["properties"]["child"] == {"$ref": "#/components/schemas/Node"}


def test_mutually_recursive_references_terminate():
    document = {
        "components": {
            "schemas": {
                "A": {"type": "object", "properties": {"b": {"$ref": "#/components/schemas/B"}}},
                "B": {"type": "object", "properties": {"a": {"$ref": "#/components/schemas/A"}}},
            }
        }
    }
    names = [node.name for node in pre_order(iter_component_nodes(document), iter_children)]
    assert names == ["A", "A.b", "B", "B.a", "B.a.b"]


def test_unresolvable_references_yield_no_node_and_stay_untouched():
    document = make_document()
    user = next(iter_component_nodes(document))
    keys = [child.key for child in iter_children(user)]

    assert keys == ["name", "address"]
    properties = document["components"]["schemas"]["User"]["properties"]
    assert properties["ghost"] == {"$ref": "#/components/schemas/Missing"}
    assert properties["remote"] == {"$ref": "other.yaml#/Thing"}


def test_yaml_path_points_at_concrete_schema():
    document = make_document()
    paths = {node.name: node.yaml_path for node in pre_order(iter_component_nodes(document), iter_children)}
    assert paths["User.name"] == "/components/schemas/User/properties/name"
    assert paths["User.address"] == "/components/schemas/Address"
    assert paths["User.address.street"] == "/components/schemas/Address/properties/street"


def test_custom_separator():
    document = make_document()
    names = [node.name for node in pre_order(iter_component_nodes(document, separator="/"), iter_children)]
    assert "User/address/street" in names


def test_document_without_components():
    assert list(iter_component_nodes({"openapi": "3.0.0"})) == []


def test_resolver_follows_chains_and_rejects_loops():
    document = {
        "components": {
            "schemas": {
                "A": {"$ref": "#/components/schemas/B"},
                "B": {"type": "string"},
                "Loop1": {"$ref": "#/components/schemas/Loop2"},
                "Loop2": {"$ref": "#/components/schemas/Loop1"},
                "a/b": {"type": "integer"},
            }
        }
    }
    resolver = RefResolver(document)
    schema, path = resolver.resolve({"$ref": "#/components/schemas/A"}, "/x")
    assert schema == {"type": "string"}
    assert path == "/components/schemas/B"
    assert resolver.resolve({"$ref": "#/components/schemas/Loop1"}, "/x") is None
    assert resolver.resolve({"$ref": "#/components/schemas/a~1b"}, "/x")[0] == {"type": "integer"}


class TestExtensionMetadata:
    def test_read_missing_slot(self):
        assert ExtensionMetadata({}).read_rules() == []

    def test_write_then_read(self):
        schema = {}
        extensions = ExtensionMetadata(schema)
        extensions.write_rules(["required", "min=1"])
        assert schema == {"x-oapi-codegen-extra-tags": {"validate": "required,min=1"}}
        assert extensions.read_rules() == ["required", "min=1"]

    def test_clear_keeps_other_tags(self):
        schema = {"x-oapi-codegen-extra-tags": {"validate": "email", "json": "mail"}}
        ExtensionMetadata(schema).clear_rules()
        assert schema == {"x-oapi-codegen-extra-tags": {"json": "mail"}}

    def test_clear_removes_empty_outer_mapping(self):
        schema = {"type": "string", "x-oapi-codegen-extra-tags": {"validate": "email"}}
        ExtensionMetadata(schema).clear_rules()
        assert schema == {"type": "string"}

    def test_custom_keys(self):
        schema = {"x-go-tags": {"binding": "min=1"}}
        assert ExtensionMetadata(schema, "x-go-tags", "binding").read_rules() == ["min=1"]
