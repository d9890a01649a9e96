"""
Build command implementation.

This module handles the 'build' subcommand, which compiles every YAML
document listed in ``package.yml`` into JavaScript under the configured
output directory.
"""

import argparse
import dataclasses
import logging
from pathlib import Path

from yamlskript.compiler import Compiler
from yamlskript.config import load_project_config
from yamlskript.errors import ConfigError, StrictModeViolation, YSKError

from ..errors import CLIBuildError, CLIConfigError, handle_cli_exception, wrap_exception
from ..output import print_build_report, print_success

logger = logging.getLogger(__name__)


def _project_root(args: argparse.Namespace) -> Path:
    return Path(getattr(args, "project", None) or Path.cwd()).resolve()


def cmd_build(args: argparse.Namespace) -> None:
    """
    Handle the 'build' subcommand.

    Args:
        args: Parsed command-line arguments containing:
            - project: Project root holding package.yml (optional)
            - out: Output directory override (optional)
            - strict: Fail on unhandled node kinds (optional)

    Raises:
        SystemExit: On any error during the build
    """
    verbose = getattr(args, "verbose", False)
    try:
        root = _project_root(args)
        try:
            project = load_project_config(root)
        except ConfigError as exc:
            raise wrap_exception(exc, message=exc.format(), error_class=CLIConfigError) from exc

        out = getattr(args, "out", None)
        if out:
            project = dataclasses.replace(project, output=(root / out).resolve())

        strict = True if getattr(args, "strict", False) else None
        try:
            report = Compiler(project).build(strict=strict)
        except StrictModeViolation as exc:
            context = {"diagnostics": "; ".join(item.format() for item in exc.diagnostics)}
            raise wrap_exception(exc, message=exc.format(), error_class=CLIBuildError, context=context) from exc
        except YSKError as exc:
            raise wrap_exception(exc, message=exc.format(), error_class=CLIBuildError) from exc
        except OSError as exc:
            raise wrap_exception(exc, message=f"Cannot write build output: {exc}", error_class=CLIBuildError) from exc

        print_build_report(report, root=root)
        if report.compiled:
            print_success(f"Build completed in {project.output}")
    except Exception as exc:
        handle_cli_exception(exc, verbose=verbose)
