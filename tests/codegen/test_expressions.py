"""Tests for expression emission."""

import pytest

from yamlskript.schema.document import EXPRESSION_VARIANTS


def ident(name):
    return {"type": "identifier", "name": name}


class TestSimpleExpressions:
    """Operators, literals and member access."""

    def test_raw_string_is_verbatim(self, expressions):
        assert expressions.emit("items.length > 0") == "items.length > 0"

    def test_binary_operator_token_is_not_validated(self, expressions):
        node = {"type": "binaryExpression", "left": ident("a"), "operator": "**", "right": {"type": "literal", "value": 2}}
        assert expressions.emit(node) == "a ** 2"

    def test_logical_and_assignment(self, expressions):
        logical = {"type": "logicalExpression", "left": "a", "operator": "??", "right": "b"}
        assignment = {"type": "assignmentExpression", "left": "total", "operator": "+=", "right": "1"}
        assert expressions.emit(logical) == "a ?? b"
        assert expressions.emit(assignment) == "total += 1"

    def test_literal_prefers_raw(self, expressions):
        assert expressions.emit({"type": "literal", "value": "hi"}) == '"hi"'
        assert expressions.emit({"type": "literal", "raw": "'hi'"}) == "'hi'"
        assert expressions.emit({"type": "literal", "value": None}) == "null"

    def test_ternary(self, expressions):
        node = {"type": "conditionalExpression", "test": "ok", "consequent": "'yes'", "alternate": "'no'"}
        assert expressions.emit(node) == "ok ? 'yes' : 'no'"

    @pytest.mark.parametrize(
        "operator, expected",
        [("!", "!flag"), ("-", "-flag"), ("typeof", "typeof flag"), ("void", "void flag")],
    )
    def test_unary(self, expressions, operator, expected):
        node = {"type": "unaryExpression", "operator": operator, "argument": "flag"}
        assert expressions.emit(node) == expected

    def test_nested_unary_does_not_fuse_into_update(self, expressions):
        negate = {"type": "unaryExpression", "operator": "-", "argument": {"type": "unaryExpression", "operator": "-", "argument": ident("x")}}
        plus = {"type": "unaryExpression", "operator": "+", "argument": {"type": "updateExpression", "operator": "++", "argument": "i", "prefix": True}}
        double_not = {"type": "unaryExpression", "operator": "!", "argument": {"type": "unaryExpression", "operator": "!", "argument": "ok"}}
        assert expressions.emit(negate) == "- -x"
        assert expressions.emit(plus) == "+ ++i"
        assert expressions.emit(double_not) == "!!ok"

    def test_update_prefix_and_postfix(self, expressions):
        assert expressions.emit({"type": "updateExpression", "operator": "++", "argument": "i", "prefix": True}) == "++i"
        assert expressions.emit({"type": "updateExpression", "operator": "--", "argument": "i"}) == "i--"

    def test_member_access(self, expressions):
        dotted = {"type": "memberExpression", "object": "user", "property": ident("name")}
        computed = {"type": "memberExpression", "object": "items", "property": "0", "computed": True}
        optional = {"type": "optionalMemberExpression", "object": "user", "property": "address"}
        assert expressions.emit(dotted) == "user.name"
        assert expressions.emit(computed) == "items[0]"
        assert expressions.emit(optional) == "user?.address"

    def test_call_and_new(self, expressions):
        call = {"type": "callExpression", "callee": "fetch", "arguments": ["url", {"type": "objectExpression", "properties": []}]}
        new = {"type": "newExpression", "callee": ident("Map"), "arguments": []}
        assert expressions.emit(call) == "fetch(url, {})"
        assert expressions.emit(new) == "new Map()"

    def test_await_and_yield(self, expressions):
        assert expressions.emit({"type": "awaitExpression", "argument": "load()"}) == "await load()"
        assert expressions.emit({"type": "yieldExpression", "argument": "x", "delegate": True}) == "yield* x"
        assert expressions.emit({"type": "yieldExpression"}) == "yield"

    def test_sequence_is_parenthesized(self, expressions):
        assert expressions.emit({"type": "sequenceExpression", "expressions": ["a", "b"]}) == "(a, b)"

    def test_this_super_and_meta_property(self, expressions):
        assert expressions.emit({"type": "thisExpression"}) == "this"
        assert expressions.emit({"type": "super"}) == "super"
        assert expressions.emit({"type": "metaProperty", "meta": "import", "property": "meta"}) == "import.meta"

    def test_dynamic_import(self, expressions):
        node = {"type": "importExpression", "source": {"type": "literal", "raw": "'./page.js'"}}
        assert expressions.emit(node) == "import('./page.js')"


class TestCollections:
    """Arrays, objects, patterns and spreads."""

    def test_array_with_spread(self, expressions):
        node = {"type": "arrayExpression", "elements": ["1", {"type": "spreadElement", "argument": "rest"}]}
        assert expressions.emit(node) == "[1, ...rest]"

    def test_object_properties(self, expressions):
        node = {
            "type": "objectExpression",
            "properties": [
                {"type": "property", "key": ident("id"), "value": "1"},
                {"type": "property", "key": "name", "shorthand": True},
                {"type": "property", "key": "key", "value": "v", "computed": True},
            ],
        }
        assert expressions.emit(node) == "{ id: 1, name, [key]: v }"

    def test_object_pattern_with_default(self, expressions):
        node = {
            "type": "objectPattern",
            "properties": [
                {
                    "type": "property",
                    "key": "size",
                    "shorthand": True,
                    "value": {"type": "assignmentPattern", "left": "size", "right": "10"},
                },
                {"type": "restElement", "argument": "others"},
            ],
        }
        assert expressions.emit(node) == "{ size = 10, ...others }"


class TestTemplates:
    """Template literals alternate quasis and expressions."""

    def test_template_alternation(self, expressions):
        node = {
            "type": "templateLiteral",
            "quasis": [{"value": {"raw": "Hello, "}}, {"value": {"raw": "! You have "}}, {"value": {"raw": " items"}}],
            "expressions": ["name", "count"],
        }
        assert expressions.emit(node) == "`Hello, ${name}! You have ${count} items`"

    def test_tagged_template_has_single_backticks(self, expressions):
        node = {
            "type": "taggedTemplateExpression",
            "tag": "css",
            "quasi": {"type": "templateLiteral", "quasis": ["color: ", ";"], "expressions": ["color"]},
        }
        assert expressions.emit(node) == "css`color: ${color};`"


class TestFunctions:
    """Function bodies are delegated to the statement emitter."""

    def test_concise_arrow(self, expressions):
        node = {"type": "arrowFunctionExpression", "params": ["a", "b"], "body": "a + b"}
        assert expressions.emit(node) == "(a, b) => a + b"

    def test_arrow_returning_object_is_parenthesized(self, expressions):
        body = {"type": "objectExpression", "properties": [{"key": "ok", "value": "true"}]}
        node = {"type": "arrowFunctionExpression", "params": [], "body": body}
        assert expressions.emit(node) == "() => ({ ok: true })"

    def test_block_arrow_indentation(self, expressions):
        node = {
            "type": "arrowFunctionExpression",
            "async": True,
            "params": [ident("event")],
            "body": [{"type": "returnStatement", "argument": "event.target"}],
        }
        assert expressions.emit(node, 1) == "async (event) => {\n        return event.target;\n    }"

    def test_empty_function_body(self, expressions):
        node = {"type": "functionExpression", "params": [], "body": []}
        assert expressions.emit(node) == "function() {}"

    def test_generator_function_expression(self, expressions):
        node = {
            "type": "functionExpression",
            "id": "ids",
            "generator": True,
            "params": [],
            "body": [{"type": "expressionStatement", "expression": {"type": "yieldExpression", "argument": "1"}}],
        }
        assert expressions.emit(node) == "function* ids() {\n    yield 1;\n}"

    def test_immediately_invoked_function(self, expressions):
        callee = {"type": "arrowFunctionExpression", "params": [], "body": "1"}
        assert expressions.emit({"type": "callExpression", "callee": callee, "arguments": []}) == "(() => 1)()"


class TestClasses:
    """Class expressions and members."""

    def test_class_members_on_separate_lines(self, expressions):
        node = {
            "type": "classExpression",
            "id": "Store",
            "superClass": "Base",
            "body": [
                {"type": "classProperty", "key": "items", "value": "[]"},
                {
                    "type": "classMethod",
                    "kind": "method",
                    "key": "add",
                    "params": ["item"],
                    "body": [{"type": "expressionStatement", "expression": "this.items.push(item)"}],
                },
                {"type": "classMethod", "kind": "get", "key": "size", "params": [], "body": [{"type": "returnStatement", "argument": "this.items.length"}]},
            ],
        }
        assert expressions.emit(node) == (
            "class Store extends Base {\n"
            "    items = [];\n"
            "    add(item) {\n"
            "        this.items.push(item);\n"
            "    }\n"
            "    get size() {\n"
            "        return this.items.length;\n"
            "    }\n"
            "}"
        )

    def test_static_async_method_definition(self, expressions):
        node = {
            "type": "methodDefinition",
            "key": "load",
            "static": True,
            "value": {"async": True, "params": [], "body": []},
        }
        assert expressions.emit(node) == "static async load() {}"

    def test_empty_class(self, expressions):
        assert expressions.emit({"type": "classExpression", "body": []}) == "class {}"


class TestModules:
    """Import and export specifiers."""

    def test_import_groups_named_specifiers(self, expressions):
        node = {
            "type": "importDeclaration",
            "specifiers": [
                {"type": "importDefaultSpecifier", "local": "React"},
                {"type": "importSpecifier", "local": "useState"},
                {"type": "importSpecifier", "imported": "default", "local": "Other"},
            ],
            "source": {"value": "react"},
        }
        assert expressions.emit(node) == "import React, { useState, default as Other } from 'react'"

    def test_namespace_and_side_effect_imports(self, expressions):
        namespace = {
            "type": "importDeclaration",
            "specifiers": [{"type": "importNamespaceSpecifier", "local": "utils"}],
            "source": "./utils",
        }
        side_effect = {"type": "importDeclaration", "specifiers": [], "source": "./styles.css"}
        assert expressions.emit(namespace) == "import * as utils from './utils'"
        assert expressions.emit(side_effect) == "import './styles.css'"

    def test_export_specifiers_alias(self, expressions):
        node = {
            "type": "exportNamedDeclaration",
            "specifiers": [{"type": "exportSpecifier", "local": "a", "exported": "b"}, {"type": "exportSpecifier", "local": "c"}],
            "source": "./mod",
        }
        assert expressions.emit(node) == "export { a as b, c } from './mod'"

    def test_export_all(self, expressions):
        assert expressions.emit({"type": "exportAllDeclaration", "source": "./lib"}) == "export * from './lib'"
        aliased = {"type": "exportAllDeclaration", "source": "./lib", "exported": "lib"}
        assert expressions.emit(aliased) == "export * as lib from './lib'"


class TestJsxExpressions:
    """Markup nodes inside expressions."""

    def test_attribute_renaming(self, expressions):
        node = {
            "type": "jsxElement",
            "openingElement": {
                "type": "jsxOpeningElement",
                "name": {"type": "jsxIdentifier", "name": "label"},
                "attributes": [
                    {"type": "jsxAttribute", "name": "class", "value": {"type": "literal", "raw": '"field"'}},
                    {"type": "jsxAttribute", "name": "for", "value": "email"},
                ],
            },
            "children": [{"type": "jsxText", "value": "Email"}],
        }
        assert expressions.emit(node) == '<label className="field" htmlFor="email">Email</label>'

    def test_expression_container_and_fragment(self, expressions):
        node = {
            "type": "jsxFragment",
            "children": [{"type": "jsxExpressionContainer", "expression": "user.name"}],
        }
        assert expressions.emit(node) == "<>{user.name}</>"

    def test_self_closing_with_spread(self, expressions):
        node = {
            "type": "jsxElement",
            "openingElement": {"name": "Input", "attributes": [{"type": "jsxSpreadAttribute", "argument": "props"}]},
            "children": [],
        }
        assert expressions.emit(node) == "<Input {...props} />"


class TestUnhandledExpressions:
    """Unknown kinds are reported, not raised."""

    def test_unknown_kind_emits_nothing(self, expressions, diagnostics):
        assert expressions.emit({"type": "pipelineExpression"}) == ""
        assert [item.kind for item in diagnostics] == ["pipelineExpression"]
        assert diagnostics.items[0].category == "expression"

    def test_unknown_argument_does_not_stop_call(self, expressions, diagnostics):
        node = {"type": "callExpression", "callee": "f", "arguments": ["a", {"type": "mystery"}, "b"]}
        assert expressions.emit(node) == "f(a, , b)"
        assert len(diagnostics) == 1


class TestDeclaredKinds:
    """Every schema expression kind has an emission rule."""

    def test_every_variant_has_a_handler(self, expressions):
        assert set(EXPRESSION_VARIANTS) <= expressions.kinds

    def test_decorated_class_property(self, expressions):
        node = {
            "type": "classProperty",
            "key": "count",
            "value": "0",
            "decorators": [{"type": "decorator", "expression": "observable"}],
        }
        assert expressions.emit(node) == "@observable count = 0"

    def test_private_name_member(self, expressions):
        node = {"type": "memberExpression", "object": {"type": "thisExpression"}, "property": {"type": "privateName", "id": {"name": "secret"}}}
        assert expressions.emit(node) == "this.#secret"

    def test_do_expression_block(self, expressions):
        node = {"type": "doExpression", "body": [{"type": "expressionStatement", "expression": "compute()"}]}
        assert expressions.emit(node) == "do {\n    compute();\n}"

    def test_parenthesized_expression(self, expressions):
        assert expressions.emit({"type": "parenthesizedExpression", "expression": "a + b"}) == "(a + b)"

    def test_chain_expression(self, expressions):
        member = {"type": "memberExpression", "object": "user", "property": "name", "optional": True}
        assert expressions.emit({"type": "chainExpression", "expression": member}) == "user?.name"

    def test_optional_call(self, expressions):
        node = {"type": "optionalCallExpression", "callee": "onChange", "arguments": ["value"]}
        assert expressions.emit(node) == "onChange?.(value)"

    def test_jsx_namespaced_attribute(self, expressions):
        node = {
            "type": "jsxAttribute",
            "name": {"type": "jsxNamespacedName", "namespace": "xlink", "name": "href"},
            "value": "#icon",
        }
        assert expressions.emit(node) == 'xlink:href="#icon"'

    def test_jsx_member_element(self, expressions):
        node = {
            "type": "jsxElement",
            "openingElement": {"type": "jsxOpeningElement", "name": {"type": "jsxMemberExpression", "object": "Menu", "property": "Item"}},
            "children": [],
        }
        assert expressions.emit(node) == "<Menu.Item />"

    def test_jsx_closing_element(self, expressions):
        assert expressions.emit({"type": "jsxClosingElement", "name": {"name": "Menu"}}) == "</Menu>"

    def test_object_method_and_property(self, expressions):
        node = {
            "type": "objectExpression",
            "properties": [
                {"type": "objectProperty", "key": "id", "value": "42"},
                {
                    "type": "objectMethod",
                    "key": "total",
                    "params": ["a", "b"],
                    "body": [{"type": "returnStatement", "argument": "a + b"}],
                },
            ],
        }
        assert expressions.emit(node) == "{ id: 42, total(a, b) {\n    return a + b;\n} }"
