"""
Document generation: top-level sections to JavaScript source.

The generator turns each section of a validated document into statement
nodes and hands them to the statement emitter.  React components are
assembled from hooks, inner functions and a markup tree.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from yamlskript.config import EmitOptions

from .base import render_value
from .diagnostics import Diagnostics
from .statements import create_emitters

logger = logging.getLogger(__name__)

Document = Mapping[str, Any]
Node = Dict[str, Any]

REACT_MODULE = "react"
REACT_HOOKS = (
    "useState",
    "useEffect",
    "useLayoutEffect",
    "useInsertionEffect",
    "useContext",
    "useReducer",
    "useCallback",
    "useMemo",
    "useRef",
    "useId",
    "useTransition",
    "useDeferredValue",
    "useImperativeHandle",
    "useSyncExternalStore",
)
EFFECT_HOOKS = frozenset({"useEffect", "useLayoutEffect", "useInsertionEffect"})
MEMO_HOOKS = frozenset({"useMemo", "useCallback"})
CLASS_COMPONENT_BASE = "React.Component"


# Node builders


def identifier(name: str) -> Node:
    return {"type": "identifier", "name": name}


def parameters(values: Optional[Iterable[Any]]) -> List[Any]:
    return [identifier(value) if isinstance(value, str) else value for value in values or []]


def import_declaration(specifiers: List[Node], source: str) -> Node:
    return {"type": "importDeclaration", "specifiers": specifiers, "source": {"value": source}}


def function_declaration(name: str, params: Iterable[Any], body: List[Any], is_async: bool = False) -> Node:
    return {
        "type": "functionDeclaration",
        "id": identifier(name),
        "params": parameters(params),
        "body": list(body or []),
        "async": bool(is_async),
    }


def class_method(name: str, params: Iterable[Any], body: List[Any], **flags: Any) -> Node:
    node = {
        "type": "classMethod",
        "kind": "constructor" if name == "constructor" else "method",
        "key": identifier(name),
        "params": parameters(params),
        "body": list(body or []),
    }
    node.update({key: value for key, value in flags.items() if value})
    return node


def expression_statement(expression: Any) -> Node:
    return {"type": "expressionStatement", "expression": expression}


def const(target: Any, init: Any) -> Node:
    return {"type": "variableDeclaration", "kind": "const", "declarations": [{"id": target, "init": init}]}


class DocumentGenerator:
    """
    Emit a whole validated document.

    Sections are emitted in a fixed order (imports first, components last),
    separated by one blank line.  Absent or empty sections emit nothing.
    """

    def __init__(self, options: Optional[EmitOptions] = None, diagnostics: Optional[Diagnostics] = None):
        self.options = options if options is not None else EmitOptions()
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.statements, self.expressions, self.markup = create_emitters(self.options, self.diagnostics)
        self._sections: List[Callable[[Document], str]] = [
            self.imports,
            self.bindings,
            self.classes,
            self.functions,
            self.conditions,
            self.loops,
            self.exceptions,
            self.components,
        ]

    def indent(self, level: int) -> str:
        return self.options.indent_unit * level

    def generate(self, document: Document) -> str:
        chunks = [section(document) for section in self._sections]
        return "\n".join(chunk for chunk in chunks if chunk)

    # Imports

    def module_import(self, module: Mapping[str, Any]) -> Optional[Node]:
        kind = module.get("type")
        alias = module.get("alias", "")
        path = module.get("path", "")
        if kind == "default":
            return import_declaration([{"type": "importDefaultSpecifier", "local": identifier(alias)}], path)
        if kind == "namespace":
            return import_declaration([{"type": "importNamespaceSpecifier", "local": identifier(alias)}], path)
        if kind == "named":
            specifiers = []
            for name in (part.strip() for part in alias.split(",")):
                if not name:
                    continue
                imported, _, local = (piece.strip() for piece in name.partition(" as "))
                specifiers.append(
                    {"type": "importSpecifier", "imported": identifier(imported), "local": identifier(local or imported)}
                )
            return import_declaration(specifiers, path)
        self.diagnostics.unhandled("module", kind)
        return None

    def imports(self, document: Document) -> str:
        nodes: List[Node] = []
        modules = document.get("modules") or []
        react = self.react_import(document, modules)
        if react is not None:
            nodes.append(react)
        for module in modules:
            node = self.module_import(module)
            if node is not None:
                nodes.append(node)
        for entry in list(document.get("css") or []) + list(document.get("libraries") or []):
            nodes.append(import_declaration([], entry))
        return self.statements.emit(nodes, 0)

    def react_import(self, document: Document, modules: Iterable[Mapping[str, Any]]) -> Optional[Node]:
        components = document.get("components") or []
        if not components:
            return None
        if any(module.get("path") == REACT_MODULE for module in modules):
            return None
        if REACT_MODULE in (document.get("libraries") or []):
            return None
        used: List[str] = []
        for component in components:
            if component.get("type") != "function":
                continue
            for hook in component.get("hooks") or []:
                name = hook.get("name")
                if name in REACT_HOOKS and name not in used:
                    used.append(name)
        specifiers: List[Node] = [{"type": "importDefaultSpecifier", "local": identifier("React")}]
        specifiers.extend({"type": "importSpecifier", "local": identifier(name)} for name in used)
        return import_declaration(specifiers, REACT_MODULE)

    # Values

    def bindings(self, document: Document) -> str:
        nodes: List[Node] = []
        for section, kind in (("variables", "let"), ("objects", "const"), ("arrays", "const")):
            for name, value in (document.get(section) or {}).items():
                nodes.append(
                    {
                        "type": "variableDeclaration",
                        "kind": kind,
                        "declarations": [{"id": identifier(str(name)), "init": render_value(value)}],
                    }
                )
        return self.statements.emit(nodes, 0)

    # Declarations

    def class_declaration(self, spec: Mapping[str, Any]) -> Node:
        members: List[Node] = []
        constructor = spec.get("constructor")
        if constructor:
            members.append(class_method("constructor", constructor.get("parameters"), constructor.get("body")))
        for method in spec.get("methods") or []:
            members.append(
                class_method(
                    method["name"],
                    method.get("parameters"),
                    method.get("body"),
                    **{"async": method.get("async"), "static": method.get("static")},
                )
            )
        node: Node = {"type": "classDeclaration", "id": identifier(spec["name"]), "body": members}
        if spec.get("extends"):
            node["superClass"] = spec["extends"]
        return node

    def classes(self, document: Document) -> str:
        nodes = [self.class_declaration(spec) for spec in document.get("classes") or []]
        return self.statements.emit(nodes, 0)

    def functions(self, document: Document) -> str:
        nodes = [
            function_declaration(spec["name"], spec.get("parameters"), spec.get("body"), spec.get("async", False))
            for spec in document.get("functions") or []
        ]
        return self.statements.emit(nodes, 0)

    # Control flow

    def condition(self, spec: Mapping[str, Any]) -> Node:
        execute = list(spec.get("execute") or [])
        if spec.get("if") is None:
            if spec.get("else"):
                logger.warning("Condition without 'if' ignores its 'else' branch")
            return {"type": "blockStatement", "body": execute}
        node: Node = {"type": "ifStatement", "test": spec["if"], "consequent": execute}
        otherwise = spec.get("else")
        if otherwise:
            node["alternate"] = list(otherwise.get("execute") or [])
        return node

    def conditions(self, document: Document) -> str:
        nodes = [self.condition(spec) for spec in document.get("conditions") or []]
        return self.statements.emit(nodes, 0)

    def loops(self, document: Document) -> str:
        loops = document.get("loops") or {}
        nodes: List[Node] = []
        if loops.get("for"):
            spec = loops["for"]
            nodes.append(
                {
                    "type": "forStatement",
                    "init": spec.get("initializer"),
                    "test": spec.get("condition"),
                    "update": spec.get("increment"),
                    "body": spec.get("body"),
                }
            )
        if loops.get("while"):
            spec = loops["while"]
            nodes.append({"type": "whileStatement", "test": spec.get("condition"), "body": spec.get("body")})
        if loops.get("doWhile"):
            spec = loops["doWhile"]
            nodes.append({"type": "doWhileStatement", "test": spec.get("condition"), "body": spec.get("body")})
        return self.statements.emit(nodes, 0)

    def exceptions(self, document: Document) -> str:
        nodes = [
            {
                "type": "tryStatement",
                "block": {"body": spec["try"].get("body")},
                "handler": {"param": spec["catch"].get("parameter"), "body": spec["catch"].get("body")},
            }
            for spec in document.get("exceptions") or []
        ]
        return self.statements.emit(nodes, 0)

    # Components

    def components(self, document: Document) -> str:
        chunks = []
        for component in document.get("components") or []:
            kind = component.get("type")
            if kind == "function":
                chunks.append(self.function_component(component))
            elif kind == "class":
                chunks.append(self.class_component(component))
            else:
                self.diagnostics.unhandled("component", kind)
        return "\n".join(chunk for chunk in chunks if chunk)

    def hook(self, hook: Mapping[str, Any]) -> Node:
        name = hook["name"]
        params = list(hook.get("params") or [])
        args: List[Any] = []
        if name in EFFECT_HOOKS or name in MEMO_HOOKS or (hook.get("body") is not None and "initial" not in hook):
            args.append({"type": "arrowFunctionExpression", "params": [], "body": list(hook.get("body") or [])})
        elif "initial" in hook:
            args.append(render_value(hook["initial"]))
        if hook.get("dependencies") is not None:
            args.append({"type": "arrayExpression", "elements": list(hook["dependencies"])})
        call = {"type": "callExpression", "callee": identifier(name), "arguments": args}

        if name in EFFECT_HOOKS or not params:
            return expression_statement(call)
        if name == "useState" or len(params) > 1:
            return const({"type": "arrayPattern", "elements": [identifier(param) for param in params]}, call)
        return const(identifier(params[0]), call)

    def render_markup(self, jsx: List[Any], level: int) -> str:
        """
        Emit ``return (<markup>);`` with the markup one level deeper.

        Anything but a single element root is wrapped in a fragment.
        """
        if not jsx:
            return f"{self.indent(level)}return null;\n"
        if len(jsx) == 1 and isinstance(jsx[0], Mapping):
            markup = self.markup.emit(jsx, level + 1)
        else:
            markup = self.markup.fragment(jsx, level + 1)
        return f"{self.indent(level)}return (\n{markup}{self.indent(level)});\n"

    def function_component(self, component: Mapping[str, Any]) -> str:
        name = component["name"]
        body = self.statements.emit([self.hook(hook) for hook in component.get("hooks") or []], 1)
        inner = list(component.get("functions") or []) + list(component.get("methods") or [])
        body += self.statements.emit(
            [function_declaration(spec["name"], spec.get("parameters"), spec.get("body"), spec.get("async", False)) for spec in inner],
            1,
        )
        body += self.render_markup(component.get("jsx") or [], 1)
        return f"export function {name}(props) {{\n{body}}}\n"

    def class_component(self, component: Mapping[str, Any]) -> str:
        name = component["name"]
        if component.get("hooks"):
            logger.warning("Hooks are not supported in class component %s; skipping them", name)
        members: List[str] = []
        if component.get("state") is not None:
            constructor = class_method(
                "constructor",
                ["props"],
                [
                    expression_statement("super(props)"),
                    expression_statement(f"this.state = {render_value(component['state'])}"),
                ],
            )
            members.append(self.indent(1) + self.expressions.emit(constructor, 1) + "\n")
        methods = list(component.get("methods") or []) + list(component.get("functions") or [])
        for spec in methods:
            method = class_method(
                spec["name"],
                spec.get("parameters"),
                spec.get("body"),
                **{"async": spec.get("async"), "static": spec.get("static")},
            )
            members.append(self.indent(1) + self.expressions.emit(method, 1) + "\n")
        render = self.render_markup(component.get("jsx") or [], 2)
        members.append(f"{self.indent(1)}render() {{\n{render}{self.indent(1)}}}\n")
        return f"export class {name} extends {CLASS_COMPONENT_BASE} {{\n" + "".join(members) + "}\n"


def generate(document: Document, options: Optional[EmitOptions] = None, diagnostics: Optional[Diagnostics] = None) -> str:
    """Emit ``document`` with a fresh :class:`DocumentGenerator`."""
    return DocumentGenerator(options, diagnostics).generate(document)


__all__ = ["DocumentGenerator", "generate", "REACT_HOOKS"]
