"""
JSX emission for component markup trees.

A markup tree is a list of nodes.  Each node is either a string leaf or a
mapping with ``type`` (the tag name), optional ``props`` and optional
``children``.  String leaves and prop values of the form ``{{expr}}`` are
dynamic expressions and are emitted inside JSX braces.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, Mapping

from .base import EmitterBase, dynamic_expression

RESERVED_ATTRIBUTES = {
    "class": "className",
    "for": "htmlFor",
}


def normalize_attribute_name(name: str) -> str:
    """Rewrite HTML attribute names that are reserved words in JSX."""
    return RESERVED_ATTRIBUTES.get(name, name)


def format_attribute(name: str, value: Any) -> str:
    name = normalize_attribute_name(name)
    if isinstance(value, str):
        expression = dynamic_expression(value)
        if expression is not None:
            return f"{name}={{{expression}}}"
        return f'{name}="{value}"'
    encoded = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return f"{name}={{{encoded}}}"


class MarkupEmitter(EmitterBase):
    """Emit a markup tree as indented JSX, one node per line."""

    category = "markup"

    def emit(self, nodes: Iterable[Any], level: int = 0) -> str:
        return "".join(self.emit_node(node, level) for node in nodes or [])

    def emit_node(self, node: Any, level: int) -> str:
        indent = self.indent(level)
        if isinstance(node, str):
            expression = dynamic_expression(node)
            if expression is not None:
                return f"{indent}{{{expression}}}\n"
            return f"{indent}{node}\n"
        if isinstance(node, (int, float)) and not isinstance(node, bool):
            return f"{indent}{node}\n"
        if isinstance(node, Mapping) and isinstance(node.get("type"), str):
            return self._element(node, level)
        return self.unhandled(node.get("type") if isinstance(node, Mapping) else type(node).__name__)

    def _element(self, node: Mapping[str, Any], level: int) -> str:
        indent = self.indent(level)
        tag = node["type"]
        props = node.get("props") or {}
        attributes = "".join(f" {format_attribute(str(key), value)}" for key, value in props.items())
        children = node.get("children") or []
        if not children:
            return f"{indent}<{tag}{attributes} />\n"
        return (
            f"{indent}<{tag}{attributes}>\n"
            f"{self.emit(children, level + 1)}"
            f"{indent}</{tag}>\n"
        )

    def fragment(self, nodes: Iterable[Any], level: int = 0) -> str:
        """Wrap sibling root nodes in a ``<>...</>`` fragment."""
        indent = self.indent(level)
        return f"{indent}<>\n{self.emit(nodes, level + 1)}{indent}</>\n"


__all__ = [
    "RESERVED_ATTRIBUTES",
    "MarkupEmitter",
    "format_attribute",
    "normalize_attribute_name",
]
