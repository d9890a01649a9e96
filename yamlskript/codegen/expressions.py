"""
Expression emission.

:class:`ExpressionEmitter` turns one expression node into JavaScript source
text.  Plain strings in expression positions are raw source text and are
emitted unchanged.  Function-valued expressions delegate their bodies to a
bound :class:`~yamlskript.codegen.statements.StatementEmitter`, one
indentation level deeper than the expression itself.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Callable, Dict, FrozenSet, Iterable, List, Mapping, Optional

from yamlskript.config import EmitOptions

from .base import EmitterBase
from .diagnostics import Diagnostics
from .markup import format_attribute, normalize_attribute_name

if TYPE_CHECKING:
    from .statements import StatementEmitter

Node = Mapping[str, Any]

FUNCTION_KINDS = frozenset({"arrowFunctionExpression", "functionExpression"})
METHOD_MODIFIERS = frozenset({"get", "set"})


def block_statements(body: Any) -> List[Any]:
    """Return the statement list of a body given as a list or a ``{body: [...]}`` block."""
    if isinstance(body, list):
        return body
    if isinstance(body, Mapping) and isinstance(body.get("body"), list):
        return body["body"]
    return []


def _is_block(body: Any) -> bool:
    if isinstance(body, list):
        return True
    return isinstance(body, Mapping) and (
        body.get("type") == "blockStatement" or ("type" not in body and isinstance(body.get("body"), list))
    )


def _kind(node: Any) -> Optional[str]:
    return node.get("type") if isinstance(node, Mapping) else None


class ExpressionEmitter(EmitterBase):
    """Emit expression nodes as single expressions of source text."""

    category = "expression"

    def __init__(
        self,
        options: Optional[EmitOptions] = None,
        diagnostics: Optional[Diagnostics] = None,
        statements: Optional["StatementEmitter"] = None,
    ):
        super().__init__(options, diagnostics)
        self.statements = statements
        self._handlers: Dict[str, Callable[[Node, int], str]] = {
            "identifier": self._identifier,
            "literal": self._literal,
            "callExpression": self._call,
            "optionalCallExpression": self._optional_call,
            "memberExpression": self._member,
            "optionalMemberExpression": self._optional_member,
            "awaitExpression": self._await,
            "binaryExpression": self._operation,
            "logicalExpression": self._operation,
            "assignmentExpression": self._operation,
            "arrowFunctionExpression": self._arrow_function,
            "functionExpression": self._function,
            "arrayExpression": self._array,
            "objectExpression": self._object,
            "unaryExpression": self._unary,
            "updateExpression": self._update,
            "conditionalExpression": self._conditional,
            "newExpression": self._new,
            "sequenceExpression": self._sequence,
            "templateLiteral": self._template_literal,
            "taggedTemplateExpression": self._tagged_template,
            "yieldExpression": self._yield,
            "classExpression": self.class_text,
            "thisExpression": lambda node, level: "this",
            "super": lambda node, level: "super",
            "metaProperty": self._meta_property,
            "importExpression": self._import_expression,
            "chainExpression": self._chain,
            "jsxElement": self._jsx_element,
            "jsxFragment": self._jsx_fragment,
            "jsxExpressionContainer": self._jsx_expression_container,
            "jsxText": lambda node, level: str(node.get("value", "")),
            "jsxIdentifier": self._identifier,
            "jsxOpeningElement": self._jsx_opening_element,
            "jsxClosingElement": self._jsx_closing_element,
            "jsxAttribute": self._jsx_attribute,
            "jsxSpreadAttribute": self._jsx_spread_attribute,
            "jsxNamespacedName": self._jsx_namespaced_name,
            "jsxMemberExpression": self._jsx_member,
            "objectPattern": self._object,
            "arrayPattern": self._array,
            "restElement": self._spread,
            "spreadElement": self._spread,
            "assignmentPattern": self._assignment_pattern,
            "property": self._property,
            "objectProperty": self._property,
            "methodDefinition": self._method_definition,
            "objectMethod": self._method,
            "classMethod": self._method,
            "classProperty": self._class_property,
            "importSpecifier": self._import_specifier,
            "importDefaultSpecifier": lambda node, level: self.name_of(node.get("local"), level),
            "importNamespaceSpecifier": lambda node, level: f"* as {self.name_of(node.get('local'), level)}",
            "exportSpecifier": self._export_specifier,
            "privateName": lambda node, level: f"#{self.name_of(node.get('id'), level)}",
            "decorator": lambda node, level: f"@{self.emit(node.get('expression'), level)}",
            "doExpression": lambda node, level: f"do {self.block(node.get('body'), level)}",
            "parenthesizedExpression": lambda node, level: f"({self.emit(node.get('expression'), level)})",
            "variableDeclaration": self.variable_declaration,
            "variableDeclarator": self._variable_declarator,
            "functionDeclaration": self._function,
            "classDeclaration": self.class_text,
            "importDeclaration": self.import_declaration,
            "exportNamedDeclaration": self.export_named,
            "exportDefaultDeclaration": self.export_default,
            "exportAllDeclaration": self.export_all,
        }

    @property
    def kinds(self) -> FrozenSet[str]:
        return frozenset(self._handlers)

    def emit(self, node: Any, level: int = 0) -> str:
        """Emit ``node``; unknown kinds produce a diagnostic and empty text."""
        if node is None:
            return ""
        if isinstance(node, str):
            return node
        if isinstance(node, (bool, int, float)):
            return json.dumps(node)
        if not isinstance(node, Mapping):
            return self.unhandled(type(node).__name__)
        handler = self._handlers.get(node.get("type"))
        if handler is None:
            return self.unhandled(node.get("type"))
        return handler(node, level)

    def join(self, nodes: Optional[Iterable[Any]], level: int, separator: str = ", ") -> str:
        return separator.join(self.emit(node, level) for node in nodes or [])

    def name_of(self, value: Any, level: int = 0) -> str:
        """Accept a bare name, an identifier node, or any other expression."""
        if isinstance(value, Mapping) and value.get("type") in (None, "identifier", "jsxIdentifier") and "name" in value:
            return str(value["name"])
        return self.emit(value, level)

    def source_of(self, value: Any) -> str:
        """Render a module source given as a string or a ``{value}`` literal."""
        if isinstance(value, Mapping):
            if "value" in value:
                return self.quote(str(value["value"]))
            if "raw" in value:
                return str(value["raw"])
        return self.quote(str(value))

    def block(self, body: Any, level: int) -> str:
        """Emit ``{ ... }`` with statements at ``level + 1`` and the brace closed at ``level``."""
        statements = block_statements(body)
        if not statements:
            return "{}"
        if self.statements is None:
            raise RuntimeError("ExpressionEmitter has no StatementEmitter bound")
        return "{\n" + self.statements.emit(statements, level + 1) + self.indent(level) + "}"

    def params(self, params: Optional[Iterable[Any]], level: int) -> str:
        return self.join(params, level)

    # Simple expressions

    def _identifier(self, node: Node, level: int) -> str:
        return str(node.get("name", ""))

    def _literal(self, node: Node, level: int) -> str:
        if "raw" in node:
            return str(node["raw"])
        return json.dumps(node.get("value"), ensure_ascii=False)

    def _callee(self, node: Node, level: int) -> str:
        callee = node.get("callee")
        text = self.emit(callee, level)
        if _kind(callee) in FUNCTION_KINDS:
            return f"({text})"
        return text

    def _call(self, node: Node, level: int) -> str:
        optional = "?." if node.get("optional") else ""
        return f"{self._callee(node, level)}{optional}({self.join(node.get('arguments'), level)})"

    def _optional_call(self, node: Node, level: int) -> str:
        optional = "?." if node.get("optional", True) else ""
        return f"{self._callee(node, level)}{optional}({self.join(node.get('arguments'), level)})"

    def _member_text(self, node: Node, level: int, optional: bool) -> str:
        target = self.emit(node.get("object"), level)
        if node.get("computed"):
            prop = self.emit(node.get("property"), level)
            return f"{target}?.[{prop}]" if optional else f"{target}[{prop}]"
        prop = self.name_of(node.get("property"), level)
        return f"{target}?.{prop}" if optional else f"{target}.{prop}"

    def _member(self, node: Node, level: int) -> str:
        return self._member_text(node, level, bool(node.get("optional")))

    def _optional_member(self, node: Node, level: int) -> str:
        return self._member_text(node, level, bool(node.get("optional", True)))

    def _await(self, node: Node, level: int) -> str:
        return f"await {self.emit(node.get('argument'), level)}"

    def _operation(self, node: Node, level: int) -> str:
        return f"{self.emit(node.get('left'), level)} {node.get('operator')} {self.emit(node.get('right'), level)}"

    def _unary(self, node: Node, level: int) -> str:
        operator = str(node.get("operator", ""))
        argument = self.emit(node.get("argument"), level)
        # `- -x` must not fuse into `--x`
        if operator.isalpha() or (operator in ("+", "-") and argument.startswith(operator)):
            return f"{operator} {argument}"
        return f"{operator}{argument}"

    def _update(self, node: Node, level: int) -> str:
        operator = node.get("operator", "")
        argument = self.emit(node.get("argument"), level)
        if node.get("prefix"):
            return f"{operator}{argument}"
        return f"{argument}{operator}"

    def _conditional(self, node: Node, level: int) -> str:
        test = self.emit(node.get("test"), level)
        consequent = self.emit(node.get("consequent"), level)
        alternate = self.emit(node.get("alternate"), level)
        return f"{test} ? {consequent} : {alternate}"

    def _new(self, node: Node, level: int) -> str:
        return f"new {self.emit(node.get('callee'), level)}({self.join(node.get('arguments'), level)})"

    def _sequence(self, node: Node, level: int) -> str:
        return f"({self.join(node.get('expressions'), level)})"

    def _array(self, node: Node, level: int) -> str:
        return f"[{self.join(node.get('elements'), level)}]"

    def _object(self, node: Node, level: int) -> str:
        properties = []
        for prop in node.get("properties") or []:
            if isinstance(prop, Mapping) and "type" not in prop:
                properties.append(f"{self.name_of(prop.get('key'), level)}: {self.emit(prop.get('value'), level)}")
            else:
                properties.append(self.emit(prop, level))
        if not properties:
            return "{}"
        return "{ " + ", ".join(properties) + " }"

    def _spread(self, node: Node, level: int) -> str:
        return f"...{self.emit(node.get('argument'), level)}"

    def _assignment_pattern(self, node: Node, level: int) -> str:
        return f"{self.emit(node.get('left'), level)} = {self.emit(node.get('right'), level)}"

    def _property_key(self, node: Node, level: int) -> str:
        key = self.name_of(node.get("key"), level)
        return f"[{key}]" if node.get("computed") else key

    def _property(self, node: Node, level: int) -> str:
        key = self._property_key(node, level)
        if node.get("shorthand"):
            value = node.get("value")
            if _kind(value) == "assignmentPattern":
                return self.emit(value, level)
            return key
        return f"{key}: {self.emit(node.get('value'), level)}"

    def _meta_property(self, node: Node, level: int) -> str:
        return f"{self.name_of(node.get('meta'), level)}.{self.name_of(node.get('property'), level)}"

    def _import_expression(self, node: Node, level: int) -> str:
        return f"import({self.emit(node.get('source'), level)})"

    def _chain(self, node: Node, level: int) -> str:
        return self.emit(node.get("expression"), level)

    # Templates

    def _quasi_text(self, quasi: Any) -> str:
        if isinstance(quasi, str):
            return quasi
        if isinstance(quasi, Mapping):
            value = quasi.get("value", quasi)
            if isinstance(value, Mapping):
                text = value.get("raw", value.get("cooked"))
                return "" if text is None else str(text)
            return str(value)
        return str(quasi)

    def _template_literal(self, node: Node, level: int) -> str:
        quasis = list(node.get("quasis") or [])
        expressions = list(node.get("expressions") or [])
        parts = ["`"]
        for index in range(max(len(quasis), len(expressions))):
            if index < len(quasis):
                parts.append(self._quasi_text(quasis[index]))
            if index < len(expressions):
                parts.append("${" + self.emit(expressions[index], level) + "}")
        parts.append("`")
        return "".join(parts)

    def _tagged_template(self, node: Node, level: int) -> str:
        quasi = node.get("quasi")
        text = self.emit(quasi, level)
        if _kind(quasi) != "templateLiteral":
            text = f"`{text}`"
        return f"{self.emit(node.get('tag'), level)}{text}"

    def _yield(self, node: Node, level: int) -> str:
        keyword = "yield*" if node.get("delegate") else "yield"
        argument = node.get("argument")
        if argument is None:
            return keyword
        return f"{keyword} {self.emit(argument, level)}"

    # Functions, methods and classes

    def _decorators(self, node: Node, level: int) -> str:
        return "".join(f"{self.emit(item, level)} " for item in node.get("decorators") or [])

    def _arrow_function(self, node: Node, level: int) -> str:
        prefix = "async " if node.get("async") else ""
        params = self.params(node.get("params"), level)
        body = node.get("body")
        if _is_block(body):
            return f"{prefix}({params}) => {self.block(body, level)}"
        text = self.emit(body, level)
        if _kind(body) == "objectExpression":
            text = f"({text})"
        return f"{prefix}({params}) => {text}"

    def _function(self, node: Node, level: int) -> str:
        head = "async function" if node.get("async") else "function"
        if node.get("generator"):
            head += "*"
        name = node.get("id")
        if name:
            head += f" {self.name_of(name, level)}"
        return f"{head}({self.params(node.get('params'), level)}) {self.block(node.get('body'), level)}"

    def method_text(self, node: Node, function: Node, level: int) -> str:
        """Emit a method whose params/body/flags live on ``function``."""
        prefix = self._decorators(node, level)
        if node.get("static"):
            prefix += "static "
        if function.get("async"):
            prefix += "async "
        kind = node.get("kind")
        if kind in METHOD_MODIFIERS:
            prefix += f"{kind} "
        if function.get("generator"):
            prefix += "*"
        key = self._property_key(node, level)
        params = self.params(function.get("params"), level)
        return f"{prefix}{key}({params}) {self.block(function.get('body'), level)}"

    def _method(self, node: Node, level: int) -> str:
        return self.method_text(node, node, level)

    def _method_definition(self, node: Node, level: int) -> str:
        value = node.get("value")
        return self.method_text(node, value if isinstance(value, Mapping) else {}, level)

    def _class_property(self, node: Node, level: int) -> str:
        prefix = self._decorators(node, level)
        if node.get("static"):
            prefix += "static "
        key = self._property_key(node, level)
        if node.get("value") is None:
            return f"{prefix}{key}"
        return f"{prefix}{key} = {self.emit(node.get('value'), level)}"

    def class_text(self, node: Node, level: int) -> str:
        """Emit a class with one member per line at ``level + 1``."""
        head = f"{self._decorators(node, level)}class"
        if node.get("id"):
            head += f" {self.name_of(node.get('id'), level)}"
        if node.get("superClass"):
            head += f" extends {self.emit(node.get('superClass'), level)}"
        lines = []
        for member in block_statements(node.get("body")):
            text = self.emit(member, level + 1)
            if not text:
                continue
            if _kind(member) == "classProperty":
                text += ";"
            lines.append(f"{self.indent(level + 1)}{text}")
        if not lines:
            return f"{head} {{}}"
        return f"{head} {{\n" + "\n".join(lines) + f"\n{self.indent(level)}}}"

    # Declarations in expression position

    def variable_declaration(self, node: Node, level: int) -> str:
        declarations = []
        for declaration in node.get("declarations") or []:
            if _kind(declaration) == "variableDeclarator" or not isinstance(declaration, Mapping):
                declarations.append(self.emit(declaration, level))
            else:
                declarations.append(self._variable_declarator(declaration, level))
        return f"{node.get('kind', 'let')} {', '.join(declarations)}"

    def _variable_declarator(self, node: Node, level: int) -> str:
        target = self.name_of(node.get("id"), level)
        if node.get("init") is None:
            return target
        return f"{target} = {self.emit(node.get('init'), level)}"

    # Modules

    def _import_specifier(self, node: Node, level: int) -> str:
        local = self.name_of(node.get("local"), level)
        imported = node.get("imported")
        imported = self.name_of(imported, level) if imported is not None else local
        if imported == local:
            return local
        return f"{imported} as {local}"

    def _export_specifier(self, node: Node, level: int) -> str:
        local = self.name_of(node.get("local"), level)
        exported = node.get("exported")
        exported = self.name_of(exported, level) if exported is not None else local
        if exported == local:
            return local
        return f"{local} as {exported}"

    def import_declaration(self, node: Node, level: int) -> str:
        clauses: List[str] = []
        named: List[str] = []
        for specifier in node.get("specifiers") or []:
            if _kind(specifier) in ("importDefaultSpecifier", "importNamespaceSpecifier"):
                clauses.append(self.emit(specifier, level))
            else:
                named.append(self.emit(specifier, level))
        if named:
            clauses.append("{ " + ", ".join(named) + " }")
        source = self.source_of(node.get("source"))
        if not clauses:
            return f"import {source}"
        return f"import {', '.join(clauses)} from {source}"

    def export_named(self, node: Node, level: int) -> str:
        declaration = node.get("declaration")
        if declaration:
            return f"export {self.emit(declaration, level)}"
        specifiers = self.join(node.get("specifiers"), level)
        text = f"export {{ {specifiers} }}" if specifiers else "export {}"
        if node.get("source"):
            text += f" from {self.source_of(node.get('source'))}"
        return text

    def export_default(self, node: Node, level: int) -> str:
        return f"export default {self.emit(node.get('declaration'), level)}"

    def export_all(self, node: Node, level: int) -> str:
        exported = node.get("exported")
        alias = f" as {self.name_of(exported, level)}" if exported else ""
        return f"export *{alias} from {self.source_of(node.get('source'))}"

    # JSX

    def _jsx_name(self, value: Any, level: int) -> str:
        return self.name_of(value, level)

    def _jsx_children(self, node: Node, level: int) -> str:
        return "".join(self.emit(child, level) for child in node.get("children") or [])

    def _jsx_attributes(self, opening: Node, level: int) -> str:
        return "".join(f" {self.emit(attribute, level)}" for attribute in opening.get("attributes") or [])

    def _jsx_element(self, node: Node, level: int) -> str:
        opening = node.get("openingElement") or {}
        name = self._jsx_name(opening.get("name"), level)
        attributes = self._jsx_attributes(opening, level)
        if not node.get("children"):
            return f"<{name}{attributes} />"
        return f"<{name}{attributes}>{self._jsx_children(node, level)}</{name}>"

    def _jsx_fragment(self, node: Node, level: int) -> str:
        return f"<>{self._jsx_children(node, level)}</>"

    def _jsx_expression_container(self, node: Node, level: int) -> str:
        expression = node.get("expression")
        if _kind(expression) == "jsxEmptyExpression":
            return "{}"
        return f"{{{self.emit(expression, level)}}}"

    def _jsx_opening_element(self, node: Node, level: int) -> str:
        closing = " />" if node.get("selfClosing") else ">"
        return f"<{self._jsx_name(node.get('name'), level)}{self._jsx_attributes(node, level)}{closing}"

    def _jsx_closing_element(self, node: Node, level: int) -> str:
        return f"</{self._jsx_name(node.get('name'), level)}>"

    def _jsx_attribute(self, node: Node, level: int) -> str:
        name = normalize_attribute_name(self._jsx_name(node.get("name"), level))
        value = node.get("value")
        if value is None:
            return name
        if not isinstance(value, Mapping):
            return format_attribute(name, value)
        if _kind(value) == "literal":
            return f"{name}={self._literal(value, level)}"
        if _kind(value) == "jsxExpressionContainer":
            return f"{name}={self._jsx_expression_container(value, level)}"
        return f"{name}={{{self.emit(value, level)}}}"

    def _jsx_spread_attribute(self, node: Node, level: int) -> str:
        return f"{{...{self.emit(node.get('argument'), level)}}}"

    def _jsx_namespaced_name(self, node: Node, level: int) -> str:
        return f"{self.name_of(node.get('namespace'), level)}:{self.name_of(node.get('name'), level)}"

    def _jsx_member(self, node: Node, level: int) -> str:
        return f"{self._jsx_name(node.get('object'), level)}.{self.name_of(node.get('property'), level)}"


__all__ = ["ExpressionEmitter", "block_statements", "FUNCTION_KINDS"]
