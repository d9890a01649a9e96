"""
Error handling for the ysk command line.

Compiler errors (:class:`yamlskript.errors.YSKError`) carry their own
``format()``; CLI-level failures use the :class:`CLIError` hierarchy, which
adds a machine-readable code, an optional hint and free-form context.
"""

import os
import sys
import traceback
from typing import Any, Dict, Optional


# Maximum length for traceback output in CLI
_CLI_TRACE_LIMIT = 4000


class CLIError(Exception):
    """
    Base exception for all CLI operations.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code
        hint: Optional suggestion for resolving the error
        context: Additional metadata about the error
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        hint: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.hint = hint
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class CLIConfigError(CLIError):
    """The project manifest is missing, unreadable or incomplete."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_CONFIG_ERROR')
        super().__init__(message, **kwargs)


class CLIValidationError(CLIError):
    """Invalid command arguments or options."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_VALIDATION_ERROR')
        super().__init__(message, **kwargs)


class CLIRuntimeError(CLIError):
    """Failures during command execution."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_RUNTIME_ERROR')
        super().__init__(message, **kwargs)


class CLIBuildError(CLIRuntimeError):
    """
    Build command failures.

    Raised when:
    - A document fails to parse or validate
    - A strict build reports unhandled node kinds
    - The output tree cannot be written
    """

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_BUILD_ERROR')
        super().__init__(message, **kwargs)


class CLIInstallError(CLIRuntimeError):
    """The package manager could not be started or exited with an error."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_INSTALL_ERROR')
        super().__init__(message, **kwargs)


def format_cli_error(
    exc: BaseException,
    *,
    verbose: bool = False,
    include_traceback: bool = False
) -> str:
    """
    Format exception for CLI display with context and hints.

    Examples:
        >>> print(format_cli_error(CLIValidationError("Bad option", hint="Try --help")))
        Error [CLI_VALIDATION_ERROR]: Bad option
        Hint: Try --help
    """
    lines = []

    if isinstance(exc, CLIError):
        lines.append(f"Error [{exc.code}]: {exc.message}")
        if exc.hint:
            lines.append(f"Hint: {exc.hint}")
        if verbose and exc.context:
            lines.append("\nContext:")
            for key, value in exc.context.items():
                lines.append(f"  {key}: {value}")
    else:
        formatter = getattr(exc, "format", None)
        if callable(formatter):
            lines.append(f"Error: {formatter()}")
        else:
            lines.append(f"Error: {exc.__class__.__name__}: {exc}")

    if include_traceback:
        lines.append("\nTraceback:")
        lines.append(format_traceback_excerpt())

    return "\n".join(lines)


def format_traceback_excerpt() -> str:
    """
    Format current exception traceback with size limit.

    Should only be called within an exception handler context.
    """
    trace = traceback.format_exc().strip()
    if len(trace) <= _CLI_TRACE_LIMIT:
        return trace
    return f"{trace[:_CLI_TRACE_LIMIT - 3]}..."


def wrap_exception(
    exc: BaseException,
    *,
    message: str,
    error_class: type = CLIRuntimeError,
    **kwargs
) -> CLIError:
    """Wrap a compiler or OS exception as a CLI error, keeping it as context."""
    context = kwargs.get('context', {})
    context['original_exception'] = str(exc)
    context['original_type'] = exc.__class__.__name__
    hint = getattr(exc, 'hint', None)
    if hint:
        kwargs.setdefault('hint', hint)
    kwargs['context'] = context

    return error_class(message, **kwargs)


def _env_flag(name: str) -> bool:
    val = os.getenv(name)
    if val is None:
        return False
    return val.strip().lower() in {"1", "true", "yes", "on"}


def cli_verbose_enabled(verbose_flag: bool = False) -> bool:
    """Verbose output is on for ``--verbose``, ``YSK_VERBOSE`` or ``YSK_DEBUG``."""
    return verbose_flag or _env_flag("YSK_VERBOSE") or _env_flag("YSK_DEBUG")


def cli_reraise_enabled() -> bool:
    """Re-raise instead of exiting when ``YSK_RERAISE`` or ``YSK_DEBUG`` is set."""
    return _env_flag("YSK_RERAISE") or _env_flag("YSK_DEBUG")


def handle_cli_exception(
    exc: BaseException,
    *,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """
    Print ``exc`` to stderr and exit with ``exit_code``.

    This function calls sys.exit() and does not return.
    """
    verbose_effective = cli_verbose_enabled(verbose)
    if cli_reraise_enabled():
        raise exc

    error_message = format_cli_error(
        exc,
        verbose=verbose_effective,
        include_traceback=verbose_effective
    )
    print(error_message, file=sys.stderr)

    sys.exit(exit_code)


__all__ = [
    "CLIError",
    "CLIConfigError",
    "CLIValidationError",
    "CLIRuntimeError",
    "CLIBuildError",
    "CLIInstallError",
    "format_cli_error",
    "format_traceback_excerpt",
    "wrap_exception",
    "cli_verbose_enabled",
    "cli_reraise_enabled",
    "handle_cli_exception",
]
