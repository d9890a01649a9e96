"""
Statement emission.

:class:`StatementEmitter` emits an ordered statement sequence as an indented
block: every statement of the sequence at ``level`` and every nested
sequence at ``level + 1``.  Expression positions are delegated to the bound
:class:`~yamlskript.codegen.expressions.ExpressionEmitter`.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

from yamlskript.config import EmitOptions

from .base import EmitterBase
from .diagnostics import Diagnostics
from .expressions import ExpressionEmitter, block_statements
from .markup import MarkupEmitter

Node = Mapping[str, Any]

# Source that would parse as a block or declaration at statement start
_AMBIGUOUS_STATEMENT_START = re.compile(r"\{|(?:async\s+)?function\b|class\b")
_BLOCK_DECLARATIONS = frozenset({"functionDeclaration", "classDeclaration"})
DEFAULT_CASE = "default"


class StatementEmitter(EmitterBase):
    """Emit statement sequences as indented source lines."""

    category = "statement"

    def __init__(
        self,
        options: Optional[EmitOptions] = None,
        diagnostics: Optional[Diagnostics] = None,
        expressions: Optional[ExpressionEmitter] = None,
    ):
        super().__init__(options, diagnostics)
        self.expressions = expressions
        self._handlers: Dict[str, Callable[[Node, int], str]] = {
            "variableDeclaration": self._variable_declaration,
            "returnStatement": self._return,
            "expressionStatement": self._expression_statement,
            "ifStatement": self._if,
            "forStatement": self._for,
            "forInStatement": self._for_in,
            "forOfStatement": self._for_of,
            "whileStatement": self._while,
            "doWhileStatement": self._do_while,
            "tryStatement": self._try,
            "blockStatement": self._block,
            "breakStatement": self._break,
            "continueStatement": self._continue,
            "debuggerStatement": lambda node, level: self.line("debugger;", level),
            "emptyStatement": lambda node, level: self.line(";", level),
            "labeledStatement": self._labeled,
            "switchStatement": self._switch,
            "throwStatement": self._throw,
            "withStatement": self._with,
            "functionDeclaration": self._declaration,
            "classDeclaration": self._declaration,
            "importDeclaration": self._import,
            "exportNamedDeclaration": self._export_named,
            "exportDefaultDeclaration": self._export_default,
            "exportAllDeclaration": self._export_all,
        }

    @property
    def kinds(self) -> FrozenSet[str]:
        return frozenset(self._handlers)

    def emit(self, statements: Optional[Iterable[Any]], level: int = 0) -> str:
        """Emit ``statements`` in order at ``level``."""
        return "".join(self.emit_statement(statement, level) for statement in statements or [])

    def emit_statement(self, statement: Any, level: int) -> str:
        if not isinstance(statement, Mapping):
            return self.unhandled(type(statement).__name__)
        handler = self._handlers.get(statement.get("type"))
        if handler is None:
            return self.unhandled(statement.get("type"))
        return handler(statement, level)

    def line(self, text: str, level: int) -> str:
        return f"{self.indent(level)}{text}\n"

    def expr(self, node: Any, level: int) -> str:
        if self.expressions is None:
            raise RuntimeError("StatementEmitter has no ExpressionEmitter bound")
        return self.expressions.emit(node, level)

    def _braced(self, header: str, body: Any, level: int, footer: str = "}") -> str:
        return (
            self.line(f"{header} {{", level)
            + self.emit(block_statements(body), level + 1)
            + self.line(footer, level)
        )

    def _variable_declaration(self, node: Node, level: int) -> str:
        return self.line(f"{self.expressions.variable_declaration(node, level)};", level)

    def _return(self, node: Node, level: int) -> str:
        if node.get("argument") is None:
            return self.line("return;", level)
        return self.line(f"return {self.expr(node.get('argument'), level)};", level)

    def _expression_statement(self, node: Node, level: int) -> str:
        expression = node.get("expression")
        text = self.expr(expression, level)
        if _AMBIGUOUS_STATEMENT_START.match(text):
            text = f"({text})"
        return self.line(f"{text};", level)

    def _if(self, node: Node, level: int) -> str:
        text = self.line(f"if ({self.expr(node.get('test'), level)}) {{", level)
        if node.get("consequent"):
            text += self.emit(node["consequent"], level + 1)
        if node.get("alternate") is not None:
            text += self.line("} else {", level)
            text += self.emit(node["alternate"], level + 1)
        return text + self.line("}", level)

    def _for(self, node: Node, level: int) -> str:
        init = self.expr(node.get("init"), level)
        test = self.expr(node.get("test"), level)
        update = self.expr(node.get("update"), level)
        return self._braced(f"for ({init}; {test}; {update})", node.get("body"), level)

    def _for_each(self, node: Node, level: int, keyword: str) -> str:
        head = "for await" if node.get("await") else "for"
        left = self.expr(node.get("left"), level)
        right = self.expr(node.get("right"), level)
        return self._braced(f"{head} ({left} {keyword} {right})", node.get("body"), level)

    def _for_in(self, node: Node, level: int) -> str:
        return self._for_each(node, level, "in")

    def _for_of(self, node: Node, level: int) -> str:
        return self._for_each(node, level, "of")

    def _while(self, node: Node, level: int) -> str:
        return self._braced(f"while ({self.expr(node.get('test'), level)})", node.get("body"), level)

    def _do_while(self, node: Node, level: int) -> str:
        footer = f"}} while ({self.expr(node.get('test'), level)});"
        return self._braced("do", node.get("body"), level, footer)

    def _try(self, node: Node, level: int) -> str:
        handler = node.get("handler") or {}
        text = self.line("try {", level) + self.emit(block_statements(node.get("block")), level + 1)
        if handler:
            param = handler.get("param")
            clause = f"}} catch ({self.expr(param, level)}) {{" if param is not None else "} catch {"
            text += self.line(clause, level) + self.emit(block_statements(handler.get("body")), level + 1)
        finalizer = node.get("finalizer")
        if finalizer:
            text += self.line("} finally {", level) + self.emit(block_statements(finalizer), level + 1)
        return text + self.line("}", level)

    def _block(self, node: Node, level: int) -> str:
        return self.line("{", level) + self.emit(node.get("body"), level + 1) + self.line("}", level)

    def _jump(self, keyword: str, node: Node, level: int) -> str:
        label = node.get("label")
        if label:
            return self.line(f"{keyword} {self.expressions.name_of(label, level)};", level)
        return self.line(f"{keyword};", level)

    def _break(self, node: Node, level: int) -> str:
        return self._jump("break", node, level)

    def _continue(self, node: Node, level: int) -> str:
        return self._jump("continue", node, level)

    def _labeled(self, node: Node, level: int) -> str:
        label = self.expressions.name_of(node.get("label"), level)
        return self.line(f"{label}:", level) + self.emit([node.get("body")], level)

    def _switch(self, node: Node, level: int) -> str:
        text = self.line(f"switch ({self.expr(node.get('discriminant'), level)}) {{", level)
        for case in node.get("cases") or []:
            test = case.get("test")
            if test is None or test == DEFAULT_CASE:
                text += self.line("default:", level)
            else:
                text += self.line(f"case {self.expr(test, level)}:", level)
            text += self.emit(case.get("consequent"), level + 1)
        return text + self.line("}", level)

    def _throw(self, node: Node, level: int) -> str:
        return self.line(f"throw {self.expr(node.get('argument'), level)};", level)

    def _with(self, node: Node, level: int) -> str:
        body = node.get("body")
        if isinstance(body, Mapping) and body.get("type") == "blockStatement":
            statements = body.get("body")
        else:
            statements = [body]
        return (
            self.line(f"with ({self.expr(node.get('object'), level)}) {{", level)
            + self.emit(statements, level + 1)
            + self.line("}", level)
        )

    def _declaration(self, node: Node, level: int) -> str:
        return self.line(self.expr(node, level), level)

    def _import(self, node: Node, level: int) -> str:
        return self.line(f"{self.expressions.import_declaration(node, level)};", level)

    def _terminated(self, text: str, declaration: Any) -> str:
        if isinstance(declaration, Mapping) and declaration.get("type") in _BLOCK_DECLARATIONS:
            return text
        return f"{text};"

    def _export_named(self, node: Node, level: int) -> str:
        text = self.expressions.export_named(node, level)
        return self.line(self._terminated(text, node.get("declaration")), level)

    def _export_default(self, node: Node, level: int) -> str:
        text = self.expressions.export_default(node, level)
        return self.line(self._terminated(text, node.get("declaration")), level)

    def _export_all(self, node: Node, level: int) -> str:
        return self.line(f"{self.expressions.export_all(node, level)};", level)


def create_emitters(
    options: Optional[EmitOptions] = None,
    diagnostics: Optional[Diagnostics] = None,
) -> Tuple[StatementEmitter, ExpressionEmitter, MarkupEmitter]:
    """Build a statement/expression/markup emitter set sharing options and diagnostics."""
    options = options if options is not None else EmitOptions()
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    expressions = ExpressionEmitter(options, diagnostics)
    statements = StatementEmitter(options, diagnostics, expressions=expressions)
    expressions.statements = statements
    return statements, expressions, MarkupEmitter(options, diagnostics)


__all__ = ["StatementEmitter", "create_emitters", "DEFAULT_CASE"]
