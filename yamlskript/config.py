"""Project configuration support for the yamlskript compiler."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from yamlskript.errors import ConfigError

logger = logging.getLogger(__name__)

MANIFEST_NAME = "package.yml"
MANIFEST_SECTION = "yamlSkript"
SOURCE_SUFFIXES = (".yml", ".yaml")


@dataclass
class EmitOptions:
    """Options shared by every emitter for one compile."""

    indent_size: int = 4
    indent_style: str = "spaces"
    quote: str = "'"
    strict: bool = False

    @property
    def indent_unit(self) -> str:
        if self.indent_style == "tabs":
            return "\t"
        return " " * self.indent_size


@dataclass
class ToolsConfig:
    """Configured external commands."""

    lint: Optional[str] = None
    install: Optional[str] = None


@dataclass
class ProjectConfig:
    """Resolved project manifest."""

    root: Path
    manifest: Path
    entry: List[Path]
    output: Path
    dependencies: List[str] = field(default_factory=list)
    tools: ToolsConfig = field(default_factory=ToolsConfig)
    emit: EmitOptions = field(default_factory=EmitOptions)
    raw: Dict[str, Any] = field(default_factory=dict)


def _read_manifest(path: Path) -> Dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read {path.name}: {exc}", path=str(path)) from exc
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Error parsing {path.name} file: {exc}", path=str(path)) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path.name} must contain a mapping", path=str(path))
    return data


def _as_list(value: Any, name: str, path: Path) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    raise ConfigError(f"'{name}' must be a string or a list of strings", path=str(path))


def _emit_options(section: Dict[str, Any], path: Path) -> EmitOptions:
    options = EmitOptions()
    indent = section.get("indent")
    if indent is not None:
        if indent == "tab":
            options.indent_style = "tabs"
        elif isinstance(indent, int) and not isinstance(indent, bool) and indent > 0:
            options.indent_size = indent
        else:
            raise ConfigError("'indent' must be a positive integer or 'tab'", path=str(path))
    strict = section.get("strict")
    if strict is not None:
        options.strict = bool(strict)
    return options


def load_project_config(
    root: Path,
    manifest: Optional[Path] = None,
    *,
    require_build: bool = True,
) -> ProjectConfig:
    """
    Load ``package.yml`` from ``root``.

    The manifest must carry a ``yamlSkript`` section with ``entry`` (a path
    or list of paths) and ``output``.  ``dependencies`` and ``tools`` are
    optional.  With ``require_build=False`` (used by ``ysk install``) the
    ``yamlSkript`` section may be absent.
    """
    root = root.resolve()
    manifest_path = (manifest or root / MANIFEST_NAME).resolve()
    if not manifest_path.exists():
        raise ConfigError(
            f"Cannot find {MANIFEST_NAME} file in the current directory: {root}",
            hint=f"Create a {MANIFEST_NAME} with a '{MANIFEST_SECTION}' section",
        )
    data = _read_manifest(manifest_path)
    section = data.get(MANIFEST_SECTION)
    if not require_build and section is None:
        section = {"entry": [], "output": "build"}
    incomplete = isinstance(section, dict) and not (section.get("entry") and section.get("output"))
    if not isinstance(section, dict) or (require_build and incomplete):
        raise ConfigError(
            f"The '{MANIFEST_SECTION}' section is missing or 'entry' and 'output' are not defined in {MANIFEST_NAME}.",
            path=str(manifest_path),
        )

    entries = _as_list(section.get("entry"), "entry", manifest_path)
    output = section.get("output") or "build"
    if not isinstance(output, str):
        raise ConfigError("'output' must be a path string", path=str(manifest_path))

    tools_section = data.get("tools") or {}
    if not isinstance(tools_section, dict):
        raise ConfigError("'tools' must be a mapping", path=str(manifest_path))
    tools = ToolsConfig(lint=tools_section.get("lint"), install=tools_section.get("install"))

    config = ProjectConfig(
        root=root,
        manifest=manifest_path,
        entry=[(root / item).resolve() for item in entries],
        output=(root / output).resolve(),
        dependencies=_as_list(data.get("dependencies"), "dependencies", manifest_path),
        tools=tools,
        emit=_emit_options(section, manifest_path),
        raw=data,
    )
    logger.debug("Loaded project config from %s", manifest_path)
    return config


__all__ = [
    "MANIFEST_NAME",
    "MANIFEST_SECTION",
    "SOURCE_SUFFIXES",
    "EmitOptions",
    "ToolsConfig",
    "ProjectConfig",
    "load_project_config",
]
