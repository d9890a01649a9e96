"""Unified error model for yamlskript."""

from __future__ import annotations

from typing import Optional


class YSKError(Exception):
    """Base class for all compiler errors surfaced to users."""

    code: Optional[str] = None
    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        if code is not None:
            self.code = code
        if hint is not None:
            self.hint = hint

    def format(self) -> str:
        components = [self.message]
        meta_parts = []
        if self.path:
            meta_parts.append(self.path)
        if self.code:
            meta_parts.append(self.code)
        if meta_parts:
            components[-1] = f"{components[-1]} ({'; '.join(meta_parts)})"
        if self.hint:
            components.append(f"Hint: {self.hint}")
        return " ".join(part for part in components if part)


class ParseFailure(YSKError):
    """Raised when the raw document text cannot be deserialized."""

    code = "YSK_PARSE"


class SchemaValidationError(YSKError):
    """Raised when a document does not conform to the schema.

    ``field_path`` is the dotted/indexed location of the offending field,
    e.g. ``classes[0].methods[1].name``.
    """

    code = "YSK_SCHEMA"

    def __init__(self, message: str, field_path: str, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.field_path = field_path


class MissingRequiredField(SchemaValidationError):
    """A field declared ``required`` is absent."""

    def __init__(self, field_path: str, **kwargs) -> None:
        super().__init__(f"Missing required field: {field_path}", field_path, **kwargs)


class TypeMismatch(SchemaValidationError):
    """A field is present but its runtime shape does not match the schema."""

    def __init__(self, field_path: str, expected: str, actual: str, **kwargs) -> None:
        super().__init__(
            f'Type mismatch for key "{field_path}". Expected: {expected}, Actual: {actual}',
            field_path,
            **kwargs,
        )
        self.expected = expected
        self.actual = actual


class UnknownSchemaType(YSKError):
    """The schema declares a type (or node reference) the validator does not know."""

    code = "YSK_SCHEMA_DEFINITION"

    def __init__(self, schema_type: str, **kwargs) -> None:
        kwargs.setdefault("hint", "The schema and validator versions do not match")
        super().__init__(f"Unknown schema type: {schema_type}", **kwargs)
        self.schema_type = schema_type


class ConfigError(YSKError):
    """Raised when the project manifest is missing or malformed."""

    code = "YSK_CONFIG"


class EntryNotFoundError(YSKError):
    """Raised when a manifest entry path does not exist."""

    code = "YSK_ENTRY_NOT_FOUND"


class StrictModeViolation(YSKError):
    """Raised by strict builds when emission reported unhandled node kinds."""

    code = "YSK_STRICT"

    def __init__(self, message: str, diagnostics=None, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.diagnostics = list(diagnostics or [])


__all__ = [
    "YSKError",
    "ParseFailure",
    "SchemaValidationError",
    "MissingRequiredField",
    "TypeMismatch",
    "UnknownSchemaType",
    "ConfigError",
    "EntryNotFoundError",
    "StrictModeViolation",
]
