"""Generic recursive validator for yamlskript document schemas."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from yamlskript.errors import MissingRequiredField, ParseFailure, TypeMismatch, UnknownSchemaType

from .document import DOCUMENT_SCHEMA, NODE_DEFINITIONS, Schema

logger = logging.getLogger(__name__)

ROOT_PATH = "<document>"


def describe_type(value: Any) -> str:
    """Return the schema type name that describes ``value``."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return type(value).__name__


def _join(parent: str, key: str) -> str:
    return f"{parent}.{key}" if parent else key


class SchemaValidator:
    """
    Validate parsed documents against a declarative schema.

    Validation is depth-first and stops at the first violation.  The
    validator carries no knowledge of any particular schema; node
    definitions referenced through ``ref`` are supplied at construction.
    """

    def __init__(self, definitions: Optional[Dict[str, Dict[str, Any]]] = None):
        self.definitions = NODE_DEFINITIONS if definitions is None else definitions

    def check_type(self, value: Any, expected: str) -> bool:
        if expected == "string":
            return isinstance(value, str)
        if expected == "number":
            return isinstance(value, (int, float)) and not isinstance(value, bool)
        if expected == "boolean":
            return isinstance(value, bool)
        if expected == "array":
            return isinstance(value, list)
        if expected == "object":
            return isinstance(value, Mapping)
        if expected == "any":
            return True
        raise UnknownSchemaType(str(expected))

    def validate(self, schema: Schema, data: Any, path: str = "") -> bool:
        """
        Validate ``data`` against the field map ``schema``.

        Returns ``True`` or raises :class:`MissingRequiredField`,
        :class:`TypeMismatch` or :class:`UnknownSchemaType`.
        """
        if not isinstance(data, Mapping):
            raise TypeMismatch(path or ROOT_PATH, "object", describe_type(data))
        for key, descriptor in schema.items():
            field_path = _join(path, key)
            if key not in data:
                if descriptor.get("required", False):
                    raise MissingRequiredField(field_path)
                continue
            self.validate_value(descriptor, data[key], field_path)
        return True

    def validate_value(self, descriptor: Mapping[str, Any], value: Any, path: str) -> None:
        """Validate one value against a single field descriptor."""
        expected = descriptor.get("type", "any")
        if not self.check_type(value, expected):
            raise TypeMismatch(path, expected, describe_type(value))

        nested = descriptor.get("schema")
        if nested is not None:
            if expected == "object":
                self.validate(nested, value, path)
            elif expected == "array":
                for index, item in enumerate(value):
                    self.validate_value(nested, item, f"{path}[{index}]")

        ref = descriptor.get("ref")
        if ref is not None and isinstance(value, Mapping):
            self.validate_node(ref, value, path)

    def validate_node(self, ref: str, node: Mapping[str, Any], path: str) -> None:
        """Validate a node against the named definition and its kind variant."""
        definition = self.definitions.get(ref)
        if definition is None:
            raise UnknownSchemaType(f"ref:{ref}")
        self.validate(definition.get("schema", {}), node, path)
        kind = node.get("type")
        if kind is None and "untagged" in definition:
            self.validate(definition["untagged"], node, path)
            return
        variants = definition.get("variants")
        if not variants:
            return
        variant = variants.get(kind)
        if variant is None:
            # Left for the emitters, which report the kind as unhandled.
            logger.debug("No schema variant for %s node %r at %s", ref, kind, path or ROOT_PATH)
            return
        self.validate(variant, node, path)


def load_document(raw_text: str, *, source: Optional[str] = None) -> Dict[str, Any]:
    """Deserialize YAML (or JSON) text into a document value."""
    try:
        data = yaml.safe_load(raw_text)
    except yaml.YAMLError as exc:
        raise ParseFailure(f"Invalid YAML: {exc}", path=source) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TypeMismatch(ROOT_PATH, "object", describe_type(data), path=source)
    return data


def validate(schema: Schema, data: Any, definitions=None) -> bool:
    """Validate ``data`` against ``schema`` using the default node definitions."""
    return SchemaValidator(definitions).validate(schema, data)


def parse_and_validate(
    raw_text: str,
    schema: Optional[Schema] = None,
    definitions=None,
    *,
    source: Optional[str] = None,
) -> Dict[str, Any]:
    """Parse serialized document text and validate it before returning it."""
    data = load_document(raw_text, source=source)
    validator = SchemaValidator(definitions)
    try:
        validator.validate(DOCUMENT_SCHEMA if schema is None else schema, data)
    except (MissingRequiredField, TypeMismatch) as exc:
        if source and not exc.path:
            exc.path = source
        logger.error("Validation failed for %s: %s", source or ROOT_PATH, exc.message)
        raise
    return data


def load_schema(path) -> Schema:
    """Load an alternate schema from a YAML or JSON file."""
    text = Path(path).read_text(encoding="utf-8")
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ParseFailure(f"Invalid schema file: {exc}", path=str(path)) from exc
    if not isinstance(loaded, dict):
        raise TypeMismatch(ROOT_PATH, "object", describe_type(loaded), path=str(path))
    return loaded


__all__ = [
    "ROOT_PATH",
    "SchemaValidator",
    "describe_type",
    "load_document",
    "load_schema",
    "parse_and_validate",
    "validate",
]
