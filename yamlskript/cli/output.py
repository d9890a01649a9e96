"""Console output helpers for ysk commands."""

from pathlib import Path
from typing import Iterable, Optional, Tuple

from rich.console import Console
from rich.table import Table

from yamlskript.codegen.diagnostics import UnhandledNodeKind
from yamlskript.compiler import BuildReport


def _console(console: Optional[Console]) -> Console:
    return console if console is not None else Console()


def print_success(message: str) -> None:
    """
    Print success message with checkmark prefix.

    Examples:
        >>> print_success("Build completed successfully")
        ✓ Build completed successfully
    """
    print(f"✓ {message}")


def _relative(path: Path, root: Optional[Path]) -> str:
    if root is not None:
        try:
            return str(path.relative_to(root))
        except ValueError:
            pass
    return str(path)


def _file_rows(table: Table, rows: Iterable[Tuple[Path, Path]], action: str, root: Optional[Path]) -> None:
    for source, target in rows:
        table.add_row(action, _relative(source, root), _relative(target, root))


def print_build_report(report: BuildReport, *, root: Optional[Path] = None, console: Optional[Console] = None) -> None:
    """Render compiled and copied files, then any diagnostics."""
    console = _console(console)
    if not report.compiled and not report.copied:
        console.print("[yellow]Nothing to build.[/yellow]")
        return

    table = Table(title=f"Build Summary ({len(report.compiled)} compiled, {len(report.copied)} copied)")
    table.add_column("Action", style="bold blue")
    table.add_column("Source", style="white")
    table.add_column("Output", style="green")
    _file_rows(table, report.compiled, "compiled", root)
    _file_rows(table, report.copied, "copied", root)
    console.print(table)

    if report.diagnostics:
        print_diagnostics(report.diagnostics, console=console)


def print_diagnostics(diagnostics: Iterable[UnhandledNodeKind], *, console: Optional[Console] = None) -> None:
    console = _console(console)
    table = Table(title="Unhandled Node Kinds")
    table.add_column("Document", style="cyan")
    table.add_column("Category", style="magenta")
    table.add_column("Kind", style="bold yellow")
    for item in diagnostics:
        table.add_row(item.source or "-", item.category, str(item.kind))
    console.print(table)


__all__ = [
    "print_success",
    "print_build_report",
    "print_diagnostics",
]
