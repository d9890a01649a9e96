"""Subcommand handlers for the ysk CLI."""

from .build import cmd_build
from .install import cmd_install

__all__ = ["cmd_build", "cmd_install"]
