"""Code generation: expression, statement and markup emitters."""

from .diagnostics import Diagnostics, UnhandledNodeKind
from .document import DocumentGenerator, generate
from .expressions import ExpressionEmitter
from .markup import MarkupEmitter, normalize_attribute_name
from .statements import StatementEmitter, create_emitters

__all__ = [
    "Diagnostics",
    "UnhandledNodeKind",
    "DocumentGenerator",
    "generate",
    "ExpressionEmitter",
    "StatementEmitter",
    "MarkupEmitter",
    "create_emitters",
    "normalize_attribute_name",
]
