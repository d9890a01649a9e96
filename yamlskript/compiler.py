"""
Compiler pipeline.

One document is compiled in three steps: validate against the schema,
emit source through the document generator, then normalize the text with
the formatter.  :class:`Compiler` drives a whole project described by
``package.yml``: it discovers inputs, compiles each document independently
and writes the output tree.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from yamlskript.codegen.diagnostics import Diagnostics, UnhandledNodeKind
from yamlskript.codegen.document import DocumentGenerator
from yamlskript.config import SOURCE_SUFFIXES, EmitOptions, ProjectConfig
from yamlskript.errors import EntryNotFoundError, StrictModeViolation, YSKError
from yamlskript.formatting import SourceFormatter
from yamlskript.schema import DOCUMENT_SCHEMA, NODE_DEFINITIONS, SchemaValidator, load_document

logger = logging.getLogger(__name__)

OUTPUT_SUFFIX = ".js"


@dataclass
class CompileResult:
    """Emitted source for one document plus its non-fatal diagnostics."""

    code: str
    diagnostics: List[UnhandledNodeKind] = field(default_factory=list)
    source: Optional[str] = None

    @property
    def ok(self) -> bool:
        return not self.diagnostics


def _enforce_strict(result: CompileResult, options: EmitOptions) -> CompileResult:
    if options.strict and result.diagnostics:
        where = f" in {result.source}" if result.source else ""
        raise StrictModeViolation(
            f"{len(result.diagnostics)} unhandled node kind(s){where}",
            diagnostics=result.diagnostics,
            path=result.source,
            hint="Remove or correct the unsupported nodes, or build without --strict",
        )
    return result


def compile_document(
    document: Mapping[str, Any],
    options: Optional[EmitOptions] = None,
    *,
    schema: Optional[Dict[str, Any]] = None,
    definitions: Optional[Dict[str, Any]] = None,
    formatter: Optional[SourceFormatter] = None,
    source: Optional[str] = None,
) -> CompileResult:
    """Validate ``document`` and emit it as JavaScript source."""
    options = options if options is not None else EmitOptions()
    SchemaValidator(definitions if definitions is not None else NODE_DEFINITIONS).validate(
        schema if schema is not None else DOCUMENT_SCHEMA, document
    )
    diagnostics = Diagnostics(source)
    code = DocumentGenerator(options, diagnostics).generate(document)
    formatted = (formatter or SourceFormatter()).format(code)
    result = CompileResult(code=formatted.formatted_text, diagnostics=diagnostics.items, source=source)
    return _enforce_strict(result, options)


def compile_text(raw_text: str, options: Optional[EmitOptions] = None, *, source: Optional[str] = None, **kwargs) -> CompileResult:
    """Parse YAML text and compile the resulting document."""
    document = load_document(raw_text, source=source)
    try:
        return compile_document(document, options, source=source, **kwargs)
    except YSKError as exc:
        if source and not exc.path:
            exc.path = source
        raise


def compile_file(path: Path, options: Optional[EmitOptions] = None, **kwargs) -> CompileResult:
    """Compile one ``.yml``/``.yaml`` file."""
    text = Path(path).read_text(encoding="utf-8")
    return compile_text(text, options, source=str(path), **kwargs)


@dataclass
class BuildReport:
    """Summary of one project build."""

    compiled: List[Tuple[Path, Path]] = field(default_factory=list)
    copied: List[Tuple[Path, Path]] = field(default_factory=list)
    diagnostics: List[UnhandledNodeKind] = field(default_factory=list)
    created_dirs: List[Path] = field(default_factory=list)


def _is_source(path: Path) -> bool:
    return path.suffix.lower() in SOURCE_SUFFIXES


class Compiler:
    """Build every document named by a project's ``package.yml``."""

    def __init__(self, project: ProjectConfig, *, formatter: Optional[SourceFormatter] = None):
        self.project = project
        self.formatter = formatter or SourceFormatter()

    def discover(self) -> Tuple[List[Tuple[Path, Path]], List[Tuple[Path, Path]]]:
        """
        Return ``(inputs, others)``.

        ``inputs`` pairs each YAML document with the entry it was found
        under; ``others`` pairs every other file to copy verbatim the same
        way.  The manifest itself is never an input.
        """
        inputs: List[Tuple[Path, Path]] = []
        others: List[Tuple[Path, Path]] = []
        manifest = self.project.manifest.resolve()
        for entry in self.project.entry:
            if not entry.exists():
                raise EntryNotFoundError(f"Cannot find input path: {entry}", path=str(entry))
            if entry.is_dir():
                candidates = sorted(path for path in entry.rglob("*") if path.is_file())
                base = entry
            else:
                candidates = [entry]
                base = entry.parent
            for path in candidates:
                if _is_source(path):
                    if path.resolve() != manifest:
                        inputs.append((path, base))
                else:
                    others.append((path, base))
        return inputs, others

    def _ensure_dir(self, directory: Path, report: BuildReport) -> None:
        if not directory.exists():
            directory.mkdir(parents=True, exist_ok=True)
            report.created_dirs.append(directory)
            logger.info("Created directory: %s", directory)

    def output_path(self, source: Path, base: Path) -> Path:
        relative = source.relative_to(base)
        return self.project.output / relative.with_suffix(OUTPUT_SUFFIX)

    def copy_path(self, source: Path, base: Path) -> Path:
        """Output path for a copied file: project-relative, or entry-relative outside the project."""
        try:
            relative = source.resolve().relative_to(self.project.root)
        except ValueError:
            relative = source.relative_to(base)
        return self.project.output / relative

    def build(self, *, strict: Optional[bool] = None) -> BuildReport:
        """Compile all inputs and copy other files into the output directory."""
        options = self.project.emit
        if strict is not None:
            options = EmitOptions(
                indent_size=options.indent_size,
                indent_style=options.indent_style,
                quote=options.quote,
                strict=strict,
            )
        report = BuildReport()
        inputs, others = self.discover()
        if not inputs:
            logger.warning("No YAML files found to compile.")
            return report

        self._ensure_dir(self.project.output, report)
        for source, base in inputs:
            result = compile_file(source, options, formatter=self.formatter)
            target = self.output_path(source, base)
            self._ensure_dir(target.parent, report)
            target.write_text(result.code, encoding="utf-8")
            self.run_lint(target)
            report.compiled.append((source, target))
            report.diagnostics.extend(result.diagnostics)
            logger.info("Compiled %s to %s", source, target)

        for path, base in others:
            target = self.copy_path(path, base)
            self._ensure_dir(target.parent, report)
            shutil.copyfile(path, target)
            report.copied.append((path, target))
            logger.info("Copied %s to %s", path, target)
        return report

    def run_lint(self, target: Path) -> bool:
        """Run the configured lint/fix command on ``target``; never fatal."""
        command = self.project.tools.lint
        if not command:
            return True
        if "{file}" in command:
            args = [part.replace("{file}", str(target)) for part in shlex.split(command)]
        else:
            args = shlex.split(command) + [str(target)]
        try:
            completed = subprocess.run(args, cwd=self.project.root, capture_output=True, text=True, check=False)
        except OSError as exc:
            logger.warning("Lint command failed to start for %s: %s", target, exc)
            return False
        if completed.returncode != 0:
            logger.warning("Lint command exited with %s for %s: %s", completed.returncode, target, completed.stderr.strip())
            return False
        return True


__all__ = [
    "CompileResult",
    "BuildReport",
    "Compiler",
    "compile_document",
    "compile_text",
    "compile_file",
]
