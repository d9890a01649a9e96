"""Tests for the document schema validator."""

import pytest

from yamlskript.errors import MissingRequiredField, ParseFailure, TypeMismatch, UnknownSchemaType
from yamlskript.schema import (
    DOCUMENT_SCHEMA,
    SchemaValidator,
    describe_type,
    load_document,
    load_schema,
    parse_and_validate,
    validate,
)


class TestRequiredFields:
    """Presence checks."""

    def test_missing_required_field_reports_key(self):
        with pytest.raises(MissingRequiredField) as excinfo:
            validate({"name": {"type": "string", "required": True}}, {})
        assert excinfo.value.field_path == "name"
        assert str(excinfo.value) == "Missing required field: name"

    def test_optional_field_may_be_absent(self):
        assert validate({"name": {"type": "string"}}, {}) is True

    def test_nested_path_includes_index(self):
        document = {"functions": [{"name": "ok", "parameters": [], "body": []}, {"parameters": [], "body": []}]}
        with pytest.raises(MissingRequiredField) as excinfo:
            validate(DOCUMENT_SCHEMA, document)
        assert excinfo.value.field_path == "functions[1].name"

    def test_component_requires_jsx(self):
        document = {"components": [{"type": "function", "name": "App"}]}
        with pytest.raises(MissingRequiredField) as excinfo:
            validate(DOCUMENT_SCHEMA, document)
        assert excinfo.value.field_path == "components[0].jsx"


class TestTypeChecks:
    """Shape checks against declared types."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, "null"),
            (True, "boolean"),
            (3, "number"),
            (1.5, "number"),
            ("x", "string"),
            ([], "array"),
            ({}, "object"),
        ],
    )
    def test_describe_type(self, value, expected):
        assert describe_type(value) == expected

    def test_boolean_is_not_a_number(self):
        with pytest.raises(TypeMismatch) as excinfo:
            validate({"count": {"type": "number"}}, {"count": True})
        assert excinfo.value.expected == "number"
        assert excinfo.value.actual == "boolean"

    def test_any_matches_everything(self):
        schema = {"value": {"type": "any"}}
        for value in (None, 1, "x", [], {}):
            assert validate(schema, {"value": value})

    def test_mismatch_message(self):
        with pytest.raises(TypeMismatch) as excinfo:
            validate(DOCUMENT_SCHEMA, {"css": "./app.css"})
        assert str(excinfo.value) == 'Type mismatch for key "css". Expected: array, Actual: string'

    def test_array_elements_are_checked(self):
        with pytest.raises(TypeMismatch) as excinfo:
            validate(DOCUMENT_SCHEMA, {"libraries": ["lodash", 4]})
        assert excinfo.value.field_path == "libraries[1]"

    def test_non_mapping_document(self):
        with pytest.raises(TypeMismatch):
            SchemaValidator().validate(DOCUMENT_SCHEMA, ["not", "a", "mapping"])

    def test_unknown_schema_type(self):
        with pytest.raises(UnknownSchemaType):
            validate({"value": {"type": "tuple"}}, {"value": 1})

    def test_unknown_ref(self):
        with pytest.raises(UnknownSchemaType):
            validate({"value": {"type": "object", "ref": "missing"}}, {"value": {}})


class TestNodeDefinitions:
    """Statement and expression nodes are validated through their variants."""

    def test_try_statement_requires_handler(self):
        document = {
            "functions": [
                {
                    "name": "load",
                    "parameters": [],
                    "body": [{"type": "tryStatement", "block": {"body": []}}],
                }
            ]
        }
        with pytest.raises(MissingRequiredField) as excinfo:
            validate(DOCUMENT_SCHEMA, document)
        assert excinfo.value.field_path == "functions[0].body[0].handler"

    def test_statement_requires_type_tag(self):
        document = {"functions": [{"name": "f", "parameters": [], "body": [{"argument": "x"}]}]}
        with pytest.raises(MissingRequiredField) as excinfo:
            validate(DOCUMENT_SCHEMA, document)
        assert excinfo.value.field_path == "functions[0].body[0].type"

    def test_nested_expression_is_validated(self):
        body = [
            {
                "type": "returnStatement",
                "argument": {"type": "binaryExpression", "left": "a", "right": "b"},
            }
        ]
        with pytest.raises(MissingRequiredField) as excinfo:
            validate(DOCUMENT_SCHEMA, {"functions": [{"name": "f", "parameters": [], "body": body}]})
        assert excinfo.value.field_path == "functions[0].body[0].argument.operator"

    def test_unknown_kinds_pass_validation(self):
        body = [{"type": "gotoStatement", "target": "end"}]
        assert validate(DOCUMENT_SCHEMA, {"functions": [{"name": "f", "parameters": [], "body": body}]})

    def test_untagged_names_in_name_positions(self):
        body = [
            {
                "type": "labeledStatement",
                "label": {"name": "outer"},
                "body": {"type": "breakStatement", "label": {"name": "outer"}},
            },
            {"type": "functionDeclaration", "id": {"name": "inner"}, "body": []},
        ]
        assert validate(DOCUMENT_SCHEMA, {"functions": [{"name": "f", "parameters": [], "body": body}]})

    def test_untagged_name_requires_name(self):
        body = [{"type": "labeledStatement", "label": {"text": "outer"}, "body": {"type": "emptyStatement"}}]
        with pytest.raises(MissingRequiredField) as excinfo:
            validate(DOCUMENT_SCHEMA, {"functions": [{"name": "f", "parameters": [], "body": body}]})
        assert excinfo.value.field_path == "functions[0].body[0].label.name"

    def test_tagged_names_use_expression_variants(self):
        body = [{"type": "labeledStatement", "label": {"type": "identifier"}, "body": {"type": "emptyStatement"}}]
        with pytest.raises(MissingRequiredField) as excinfo:
            validate(DOCUMENT_SCHEMA, {"functions": [{"name": "f", "parameters": [], "body": body}]})
        assert excinfo.value.field_path == "functions[0].body[0].label.name"

    def test_expression_positions_still_require_type_tag(self):
        body = [{"type": "returnStatement", "argument": {"name": "x"}}]
        with pytest.raises(MissingRequiredField) as excinfo:
            validate(DOCUMENT_SCHEMA, {"functions": [{"name": "f", "parameters": [], "body": body}]})
        assert excinfo.value.field_path == "functions[0].body[0].argument.type"

    def test_raw_strings_allowed_in_expression_positions(self):
        body = [{"type": "ifStatement", "test": "x > 1", "consequent": [{"type": "returnStatement", "argument": "x"}]}]
        assert validate(DOCUMENT_SCHEMA, {"functions": [{"name": "f", "parameters": ["x"], "body": body}]})


class TestLoading:
    """Deserialization entry points."""

    def test_empty_text_is_empty_document(self):
        assert load_document("") == {}

    def test_invalid_yaml(self):
        with pytest.raises(ParseFailure) as excinfo:
            load_document("modules: [unclosed", source="broken.yml")
        assert excinfo.value.path == "broken.yml"

    def test_scalar_document_rejected(self):
        with pytest.raises(TypeMismatch):
            load_document("just text")

    def test_parse_and_validate_sets_source(self):
        with pytest.raises(MissingRequiredField) as excinfo:
            parse_and_validate("functions:\n  - body: []\n    parameters: []\n", source="app.yml")
        assert excinfo.value.path == "app.yml"
        assert "app.yml" in excinfo.value.format()

    def test_alternate_schema_from_file(self, tmp_path):
        schema_file = tmp_path / "schema.yml"
        schema_file.write_text("title:\n  type: string\n  required: true\n", encoding="utf-8")
        schema = load_schema(schema_file)
        assert validate(schema, {"title": "ok"})
        with pytest.raises(MissingRequiredField):
            validate(schema, {})
