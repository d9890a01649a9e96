"""
yamlskript: compile declarative YAML documents into JavaScript.

A yamlskript document describes a program as data: imports, variables,
classes, functions, control flow, exception handling and React component
trees.  The compiler validates each document against a declarative schema
and then emits equivalent JavaScript source, including JSX markup for
component trees.

The code is organised into several modules:

* ``schema`` – the document schema (plain data) and the generic recursive
  validator that enforces it before any code is generated.
* ``codegen`` – the expression, statement and markup emitters, plus the
  document generator that walks the top-level sections.
* ``compiler`` – the per-document pipeline and the project build that
  discovers inputs from ``package.yml`` and writes the output tree.
* ``cli`` – the ``ysk`` command line interface.
"""

import re
from pathlib import Path
from importlib import metadata as _metadata


def _local_version() -> str | None:
    root = Path(__file__).resolve().parents[1]
    pyproject = root / "pyproject.toml"
    if not pyproject.exists():
        return None
    try:
        text = pyproject.read_text(encoding="utf-8")
    except OSError:  # pragma: no cover - IO errors should not break imports
        return None
    match = re.search(r"^version\s*=\s*\"([^\"]+)\"", text, flags=re.MULTILINE)
    if match:
        return match.group(1)
    return None


try:  # pragma: no cover - metadata fallback for editable installs
    __version__ = _metadata.version("yamlskript")
except _metadata.PackageNotFoundError:  # pragma: no cover - source tree
    __version__ = _local_version() or "0.1.0"

__all__ = ["__version__"]
