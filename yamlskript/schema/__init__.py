"""Document schema and validation."""

from .document import DOCUMENT_SCHEMA, EXPRESSION, MARKUP, NAME, NODE_DEFINITIONS, STATEMENT, Schema
from .validator import (
    SchemaValidator,
    describe_type,
    load_document,
    load_schema,
    parse_and_validate,
    validate,
)

__all__ = [
    "DOCUMENT_SCHEMA",
    "NODE_DEFINITIONS",
    "STATEMENT",
    "EXPRESSION",
    "MARKUP",
    "NAME",
    "Schema",
    "SchemaValidator",
    "describe_type",
    "load_document",
    "load_schema",
    "parse_and_validate",
    "validate",
]
