"""
Install command implementation.

Installs the JavaScript packages listed under ``dependencies`` in
``package.yml`` with npm, or with the command configured as
``tools.install``.
"""

import argparse
import logging
import shlex
import subprocess
from pathlib import Path
from typing import List

from yamlskript.config import ProjectConfig, load_project_config
from yamlskript.errors import ConfigError

from ..errors import CLIConfigError, CLIInstallError, CLIValidationError, handle_cli_exception, wrap_exception
from ..output import print_success

logger = logging.getLogger(__name__)

DEFAULT_INSTALL_COMMAND = "npm install"


def install_command(project: ProjectConfig) -> List[str]:
    """Build the argv used to install ``project.dependencies``."""
    if not project.dependencies:
        raise CLIValidationError(
            "No dependencies defined in package.yml",
            hint="List packages under a top-level 'dependencies' key",
        )
    command = project.tools.install or DEFAULT_INSTALL_COMMAND
    return shlex.split(command) + list(project.dependencies)


def cmd_install(args: argparse.Namespace) -> None:
    """
    Handle the 'install' subcommand.

    Raises:
        SystemExit: When the manifest is unusable, nothing is listed, or the
            package manager fails
    """
    verbose = getattr(args, "verbose", False)
    try:
        root = Path(getattr(args, "project", None) or Path.cwd()).resolve()
        try:
            project = load_project_config(root, require_build=False)
        except ConfigError as exc:
            raise wrap_exception(exc, message=exc.format(), error_class=CLIConfigError) from exc

        argv = install_command(project)
        logger.info("Running: %s", " ".join(argv))
        try:
            completed = subprocess.run(argv, cwd=project.root, check=False)
        except OSError as exc:
            raise wrap_exception(
                exc,
                message=f"Cannot run '{argv[0]}'",
                error_class=CLIInstallError,
                hint="Make sure the package manager is installed and on PATH",
            ) from exc
        if completed.returncode != 0:
            raise CLIInstallError(
                f"'{' '.join(argv)}' exited with status {completed.returncode}",
                context={"cwd": str(project.root)},
            )
        print_success(f"Installed {len(project.dependencies)} dependencies")
    except Exception as exc:
        handle_cli_exception(exc, verbose=verbose)
