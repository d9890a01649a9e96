"""Helpers shared by the expression, statement and markup emitters."""

from __future__ import annotations

import json
import re
from typing import Any, Mapping, Optional

from yamlskript.config import EmitOptions

from .diagnostics import Diagnostics

DYNAMIC_EXPRESSION = re.compile(r"^\{\{(.+)\}\}$", re.DOTALL)
IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def dynamic_expression(text: str) -> Optional[str]:
    """Return the expression text of a ``{{expr}}`` string, or ``None``."""
    match = DYNAMIC_EXPRESSION.match(text)
    return match.group(1) if match else None


def render_key(key: Any) -> str:
    text = str(key)
    if IDENTIFIER.match(text):
        return text
    return json.dumps(text, ensure_ascii=False)


def render_value(value: Any) -> str:
    """
    Render a free-form document value as a JavaScript literal.

    Strings of the form ``{{expr}}`` are emitted as the raw expression so
    document values can reference other bindings.
    """
    if isinstance(value, str):
        expression = dynamic_expression(value)
        if expression is not None:
            return expression
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, list):
        return "[" + ", ".join(render_value(item) for item in value) + "]"
    if isinstance(value, Mapping):
        if not value:
            return "{}"
        pairs = ", ".join(f"{render_key(key)}: {render_value(item)}" for key, item in value.items())
        return "{ " + pairs + " }"
    return json.dumps(value, ensure_ascii=False, default=str)


class EmitterBase:
    """Indentation and diagnostics plumbing for an emitter."""

    category = "node"

    def __init__(self, options: Optional[EmitOptions] = None, diagnostics: Optional[Diagnostics] = None):
        self.options = options if options is not None else EmitOptions()
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()

    def indent(self, level: int) -> str:
        return self.options.indent_unit * level

    def quote(self, text: str) -> str:
        mark = self.options.quote
        return f"{mark}{text}{mark}"

    def unhandled(self, kind: Any) -> str:
        self.diagnostics.unhandled(self.category, kind if isinstance(kind, str) else repr(kind))
        return ""


__all__ = [
    "DYNAMIC_EXPRESSION",
    "IDENTIFIER",
    "EmitterBase",
    "dynamic_expression",
    "render_key",
    "render_value",
]
