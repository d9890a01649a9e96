"""
Declarative schema for yamlskript documents.

Everything in this module is inert data: nested dictionaries of field
descriptors that can be serialized, diffed and versioned independently of
the validator.  A field descriptor has the keys:

``type``
    One of ``string``, ``number``, ``boolean``, ``array``, ``object``, ``any``.
``required``
    Whether the key must be present (defaults to ``False``).
``schema``
    For ``object`` fields, a nested field map; for ``array`` fields, the
    descriptor every element must satisfy.
``ref``
    Name of an entry in :data:`NODE_DEFINITIONS`.  Mapping values are
    validated against the definition; other values only against ``type``.

A node definition carries a ``schema`` shared by every node of the category
plus ``variants``: one field map per ``type`` tag.  Tags without a variant
are left for the emitters, which report them as unhandled kinds.  A
definition may also carry ``untagged``, the field map for mappings without a
``type`` tag, such as the bare ``{name: ...}`` accepted wherever a binding,
label or key name is expected.
"""

from __future__ import annotations

from typing import Any, Dict

Schema = Dict[str, Dict[str, Any]]

STATEMENT = "statement"
EXPRESSION = "expression"
MARKUP = "markup"
NAME = "name"

# Reusable descriptors
_STATEMENTS = {"type": "array", "schema": {"type": "object", "ref": STATEMENT}}
_EXPRESSIONS = {"type": "array", "schema": {"type": "any", "ref": EXPRESSION}}
_PARAMETERS = {"type": "array", "required": True, "schema": {"type": "any", "ref": EXPRESSION}}
_STRINGS = {"type": "array", "schema": {"type": "string"}}


def _required(descriptor: Dict[str, Any]) -> Dict[str, Any]:
    return {**descriptor, "required": True}


def _expr(required: bool = True) -> Dict[str, Any]:
    return {"type": "any", "required": required, "ref": EXPRESSION}


def _name(required: bool = True) -> Dict[str, Any]:
    return {"type": "any", "required": required, "ref": NAME}


def _stmt(required: bool = True) -> Dict[str, Any]:
    return {"type": "object", "required": required, "ref": STATEMENT}


_BLOCK = {"type": "object", "schema": {"body": _required(_STATEMENTS)}}

_FUNCTION_SCHEMA = {
    "name": {"type": "string", "required": True},
    "parameters": _PARAMETERS,
    "body": _required(_STATEMENTS),
    "async": {"type": "boolean"},
}

_METHOD_SCHEMA = {
    "name": {"type": "string", "required": True},
    "parameters": _PARAMETERS,
    "body": _required(_STATEMENTS),
    "async": {"type": "boolean"},
    "static": {"type": "boolean"},
}


STATEMENT_VARIANTS: Schema = {
    "variableDeclaration": {
        "kind": {"type": "string", "required": True},
        "declarations": {
            "type": "array",
            "required": True,
            "schema": {
                "type": "object",
                "schema": {"id": _name(), "init": _expr(False)},
            },
        },
    },
    "returnStatement": {"argument": _expr(False)},
    "expressionStatement": {"expression": _expr()},
    "ifStatement": {
        "test": _expr(),
        "consequent": _STATEMENTS,
        "alternate": _STATEMENTS,
    },
    "forStatement": {
        "init": _expr(False),
        "test": _expr(False),
        "update": _expr(False),
        "body": _required(_STATEMENTS),
    },
    "forInStatement": {"left": _expr(), "right": _expr(), "body": _required(_STATEMENTS)},
    "forOfStatement": {
        "left": _expr(),
        "right": _expr(),
        "body": _required(_STATEMENTS),
        "await": {"type": "boolean"},
    },
    "whileStatement": {"test": _expr(), "body": _required(_STATEMENTS)},
    "doWhileStatement": {"test": _expr(), "body": _required(_STATEMENTS)},
    "tryStatement": {
        "block": _required(_BLOCK),
        "handler": {
            "type": "object",
            "required": True,
            "schema": {"param": _name(), "body": _required(_STATEMENTS)},
        },
        "finalizer": _BLOCK,
    },
    "blockStatement": {"body": _required(_STATEMENTS)},
    "breakStatement": {"label": _name(False)},
    "continueStatement": {"label": _name(False)},
    "debuggerStatement": {},
    "emptyStatement": {},
    "labeledStatement": {"label": _name(), "body": _stmt()},
    "switchStatement": {
        "discriminant": _expr(),
        "cases": {
            "type": "array",
            "required": True,
            "schema": {
                "type": "object",
                "schema": {"test": _expr(False), "consequent": _STATEMENTS},
            },
        },
    },
    "throwStatement": {"argument": _expr()},
    "withStatement": {"object": _expr(), "body": _stmt()},
    "functionDeclaration": {
        "id": _name(),
        "params": _EXPRESSIONS,
        "body": {"type": "any", "required": True},
        "async": {"type": "boolean"},
        "generator": {"type": "boolean"},
    },
    "classDeclaration": {
        "id": _name(),
        "superClass": _expr(False),
        "body": {"type": "any", "required": True},
    },
    "importDeclaration": {"specifiers": _EXPRESSIONS, "source": {"type": "any", "required": True}},
    "exportNamedDeclaration": {
        "specifiers": _EXPRESSIONS,
        "declaration": {"type": "any"},
        "source": {"type": "any"},
    },
    "exportDefaultDeclaration": {"declaration": {"type": "any", "required": True}},
    "exportAllDeclaration": {"source": {"type": "any", "required": True}, "exported": _name(False)},
}


_OPERATION = {"left": _expr(), "operator": {"type": "string", "required": True}, "right": _expr()}
_FUNCTION_LIKE = {
    "params": _EXPRESSIONS,
    "body": {"type": "any", "required": True},
    "async": {"type": "boolean"},
}
_METHOD_LIKE = {
    "key": _name(),
    "kind": {"type": "string"},
    "params": _EXPRESSIONS,
    "body": {"type": "any", "required": True},
    "static": {"type": "boolean"},
    "computed": {"type": "boolean"},
}

EXPRESSION_VARIANTS: Schema = {
    "identifier": {"name": {"type": "string", "required": True}},
    "literal": {"raw": {"type": "string"}, "value": {"type": "any"}},
    "callExpression": {"callee": _expr(), "arguments": _EXPRESSIONS, "optional": {"type": "boolean"}},
    "optionalCallExpression": {"callee": _expr(), "arguments": _EXPRESSIONS},
    "memberExpression": {
        "object": _expr(),
        "property": _name(),
        "computed": {"type": "boolean"},
        "optional": {"type": "boolean"},
    },
    "optionalMemberExpression": {"object": _expr(), "property": _name(), "computed": {"type": "boolean"}},
    "awaitExpression": {"argument": _expr()},
    "binaryExpression": _OPERATION,
    "logicalExpression": _OPERATION,
    "assignmentExpression": _OPERATION,
    "arrowFunctionExpression": _FUNCTION_LIKE,
    "functionExpression": {**_FUNCTION_LIKE, "id": _name(False), "generator": {"type": "boolean"}},
    "arrayExpression": {"elements": _required(_EXPRESSIONS)},
    "objectExpression": {"properties": _required(_EXPRESSIONS)},
    "unaryExpression": {"operator": {"type": "string", "required": True}, "argument": _expr()},
    "updateExpression": {
        "operator": {"type": "string", "required": True},
        "argument": _expr(),
        "prefix": {"type": "boolean"},
    },
    "conditionalExpression": {"test": _expr(), "consequent": _expr(), "alternate": _expr()},
    "newExpression": {"callee": _expr(), "arguments": _EXPRESSIONS},
    "sequenceExpression": {"expressions": _required(_EXPRESSIONS)},
    "templateLiteral": {
        "quasis": {"type": "array", "required": True, "schema": {"type": "any"}},
        "expressions": _EXPRESSIONS,
    },
    "taggedTemplateExpression": {"tag": _expr(), "quasi": _expr()},
    "yieldExpression": {"argument": _expr(False), "delegate": {"type": "boolean"}},
    "classExpression": {"id": _name(False), "superClass": _expr(False), "body": {"type": "any", "required": True}},
    "metaProperty": {"meta": _name(), "property": _name()},
    "importExpression": {"source": _expr()},
    "chainExpression": {"expression": _expr()},
    "jsxElement": {
        "openingElement": {"type": "object", "required": True, "ref": EXPRESSION},
        "children": _EXPRESSIONS,
        "closingElement": {"type": "object", "ref": EXPRESSION},
    },
    "jsxFragment": {"children": _EXPRESSIONS},
    "jsxExpressionContainer": {"expression": _expr()},
    "jsxText": {"value": {"type": "string", "required": True}},
    "jsxOpeningElement": {"name": _name(), "attributes": _EXPRESSIONS, "selfClosing": {"type": "boolean"}},
    "jsxClosingElement": {"name": _name()},
    "jsxAttribute": {"name": _name(), "value": _expr(False)},
    "jsxSpreadAttribute": {"argument": _expr()},
    "jsxNamespacedName": {"namespace": _name(), "name": _name()},
    "jsxMemberExpression": {"object": _name(), "property": _name()},
    "objectPattern": {"properties": _required(_EXPRESSIONS)},
    "arrayPattern": {"elements": _required(_EXPRESSIONS)},
    "restElement": {"argument": _expr()},
    "spreadElement": {"argument": _expr()},
    "assignmentPattern": {"left": _expr(), "right": _expr()},
    "property": {"key": _name(), "value": _expr(), "computed": {"type": "boolean"}},
    "objectProperty": {"key": _name(), "value": _expr(), "computed": {"type": "boolean"}},
    "methodDefinition": {
        "key": _name(),
        "kind": {"type": "string"},
        "value": {
            "type": "object",
            "required": True,
            "schema": {"params": _EXPRESSIONS, "body": {"type": "any", "required": True}},
        },
        "static": {"type": "boolean"},
    },
    "objectMethod": _METHOD_LIKE,
    "classMethod": _METHOD_LIKE,
    "classProperty": {"key": _name(), "value": _expr(False), "static": {"type": "boolean"}},
    "importSpecifier": {"local": _name(), "imported": _name(False)},
    "importDefaultSpecifier": {"local": _name()},
    "importNamespaceSpecifier": {"local": _name()},
    "exportSpecifier": {"local": _name(), "exported": _name(False)},
    "privateName": {"id": _name()},
    "decorator": {"expression": _expr()},
    "doExpression": {"body": _required(_STATEMENTS)},
    "parenthesizedExpression": {"expression": _expr()},
    "thisExpression": {},
    "super": {},
}

MARKUP_SCHEMA: Schema = {
    "type": {"type": "string", "required": True},
    "props": {"type": "object"},
    "children": {"type": "array", "schema": {"type": "any", "ref": MARKUP}},
}

NODE_DEFINITIONS: Dict[str, Dict[str, Any]] = {
    STATEMENT: {
        "schema": {"type": {"type": "string", "required": True}},
        "variants": STATEMENT_VARIANTS,
    },
    EXPRESSION: {
        "schema": {"type": {"type": "string", "required": True}},
        "variants": EXPRESSION_VARIANTS,
    },
    NAME: {
        "untagged": {"name": {"type": "string", "required": True}},
        "variants": EXPRESSION_VARIANTS,
    },
    MARKUP: {"schema": MARKUP_SCHEMA},
}


DOCUMENT_SCHEMA: Schema = {
    "modules": {
        "type": "array",
        "schema": {
            "type": "object",
            "schema": {
                "type": {"type": "string", "required": True},
                "alias": {"type": "string", "required": True},
                "path": {"type": "string", "required": True},
            },
        },
    },
    "css": _STRINGS,
    "libraries": _STRINGS,
    "variables": {"type": "object"},
    "objects": {"type": "object"},
    "arrays": {"type": "object"},
    "classes": {
        "type": "array",
        "schema": {
            "type": "object",
            "schema": {
                "name": {"type": "string", "required": True},
                "extends": {"type": "string"},
                "constructor": {
                    "type": "object",
                    "schema": {
                        "parameters": _PARAMETERS,
                        "body": _required(_STATEMENTS),
                    },
                },
                "methods": {
                    "type": "array",
                    "schema": {"type": "object", "schema": _METHOD_SCHEMA},
                },
            },
        },
    },
    "functions": {
        "type": "array",
        "schema": {"type": "object", "schema": _FUNCTION_SCHEMA},
    },
    "conditions": {
        "type": "array",
        "schema": {
            "type": "object",
            "schema": {
                "if": {"type": "string"},
                "execute": _STATEMENTS,
                "else": {
                    "type": "object",
                    "schema": {"execute": _required(_STATEMENTS)},
                },
            },
        },
    },
    "loops": {
        "type": "object",
        "schema": {
            "for": {
                "type": "object",
                "schema": {
                    "initializer": {"type": "string", "required": True},
                    "condition": {"type": "string", "required": True},
                    "increment": {"type": "string", "required": True},
                    "body": _required(_STATEMENTS),
                },
            },
            "while": {
                "type": "object",
                "schema": {
                    "condition": {"type": "string", "required": True},
                    "body": _required(_STATEMENTS),
                },
            },
            "doWhile": {
                "type": "object",
                "schema": {
                    "condition": {"type": "string", "required": True},
                    "body": _required(_STATEMENTS),
                },
            },
        },
    },
    "exceptions": {
        "type": "array",
        "schema": {
            "type": "object",
            "schema": {
                "try": {
                    "type": "object",
                    "required": True,
                    "schema": {"body": _required(_STATEMENTS)},
                },
                "catch": {
                    "type": "object",
                    "required": True,
                    "schema": {
                        "parameter": {"type": "string", "required": True},
                        "body": _required(_STATEMENTS),
                    },
                },
            },
        },
    },
    "components": {
        "type": "array",
        "schema": {
            "type": "object",
            "schema": {
                "type": {"type": "string", "required": True},
                "name": {"type": "string", "required": True},
                "hooks": {
                    "type": "array",
                    "schema": {
                        "type": "object",
                        "schema": {
                            "name": {"type": "string", "required": True},
                            "params": {"type": "array", "required": True, "schema": {"type": "string"}},
                            "initial": {"type": "any"},
                            "body": _STATEMENTS,
                            "dependencies": _STRINGS,
                        },
                    },
                },
                "functions": {
                    "type": "array",
                    "schema": {"type": "object", "schema": _FUNCTION_SCHEMA},
                },
                "jsx": {
                    "type": "array",
                    "required": True,
                    "schema": {"type": "any", "ref": MARKUP},
                },
                "state": {"type": "object"},
                "methods": {
                    "type": "array",
                    "schema": {"type": "object", "schema": _METHOD_SCHEMA},
                },
            },
        },
    },
}


__all__ = [
    "Schema",
    "STATEMENT",
    "EXPRESSION",
    "MARKUP",
    "NAME",
    "DOCUMENT_SCHEMA",
    "NODE_DEFINITIONS",
    "STATEMENT_VARIANTS",
    "EXPRESSION_VARIANTS",
    "MARKUP_SCHEMA",
]
