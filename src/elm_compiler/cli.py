"""Typer-based CLI for elm_compiler."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .compilation import (
    CompilerError,
    Mode,
    compile,
    compile_to_module,
    compile_to_module_string,
    compile_to_string,
)
from .config import AppConfig, load_config
from .environment import EnvironmentReport, detect_environment
from .logging import configure_logging

app = typer.Typer(add_completion=False)
console = Console(stderr=True)


def _load(config_path: Optional[Path], verbose: bool) -> AppConfig:
    config = load_config(config_path)
    configure_logging("verbose" if verbose else config.verbosity)  # type: ignore[arg-type]
    return config


def _build_options(
    config: AppConfig,
    *,
    output: Optional[str] = None,
    mode: Optional[Mode] = None,
    report: Optional[str] = None,
    docs: Optional[Path] = None,
    elm: Optional[str] = None,
    cwd: Optional[Path] = None,
    verbose: bool = False,
) -> dict[str, Any]:
    options = config.compile_options()
    overrides: dict[str, Any] = {
        "output": output,
        "mode": mode,
        "report": report,
        "docs": docs,
        "path_to_elm": elm,
        "cwd": cwd,
    }
    options.update({key: value for key, value in overrides.items() if value is not None})
    if verbose:
        options["verbose"] = True
    return options


def _fail(exc: CompilerError) -> None:
    console.print(f"[red]{escape(str(exc))}")
    raise typer.Exit(code=1)


@app.command()
def make(
    sources: list[Path] = typer.Argument(..., help="Elm source files to compile"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output file (.js or .html)"),
    mode: Optional[Mode] = typer.Option(None, "--mode", help="Execution mode"),
    report: Optional[str] = typer.Option(None, "--report", help="Error report style, e.g. json"),
    docs: Optional[Path] = typer.Option(None, "--docs", help="Write package docs to this path"),
    elm: Optional[str] = typer.Option(None, "--elm", help="Path to the elm executable"),
    cwd: Optional[Path] = typer.Option(None, "--cwd", help="Working directory for the compiler"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log the compiler command line"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config TOML"),
) -> None:
    """Run elm make with the compiler's own output on this terminal."""

    config = _load(config_path, verbose)
    options = _build_options(
        config, output=output, mode=mode, report=report, docs=docs, elm=elm, cwd=cwd, verbose=verbose
    )
    try:
        compile([str(s) for s in sources], options)
    except CompilerError as exc:
        _fail(exc)


@app.command("to-string")
def to_string(
    sources: list[Path] = typer.Argument(..., help="Elm source files to compile"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output file name, selects .js or .html"),
    mode: Optional[Mode] = typer.Option(None, "--mode", help="Execution mode"),
    elm: Optional[str] = typer.Option(None, "--elm", help="Path to the elm executable"),
    cwd: Optional[Path] = typer.Option(None, "--cwd", help="Working directory for the compiler"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log the compiler command line"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config TOML"),
) -> None:
    """Compile and print the generated code to stdout."""

    config = _load(config_path, verbose)
    options = _build_options(config, output=output, mode=mode, elm=elm, cwd=cwd, verbose=verbose)
    try:
        compiled = compile_to_string([str(s) for s in sources], options)
    except CompilerError as exc:
        _fail(exc)
    else:
        typer.echo(compiled, nl=False)


@app.command("to-module")
def to_module(
    sources: list[Path] = typer.Argument(..., help="Elm source files to compile"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Module file to write (default elm.js)"),
    mode: Optional[Mode] = typer.Option(None, "--mode", help="Execution mode"),
    elm: Optional[str] = typer.Option(None, "--elm", help="Path to the elm executable"),
    cwd: Optional[Path] = typer.Option(None, "--cwd", help="Working directory for the compiler"),
    print_only: bool = typer.Option(False, "--print", help="Print the module instead of writing it"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log the compiler command line"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config TOML"),
) -> None:
    """Compile into an ES module exporting Elm."""

    config = _load(config_path, verbose)
    options = _build_options(config, output=output, mode=mode, elm=elm, cwd=cwd, verbose=verbose)
    sources_list = [str(s) for s in sources]
    try:
        if print_only:
            typer.echo(compile_to_module_string(sources_list, options))
        else:
            compile_to_module(sources_list, options)
            console.print(f"[green]Wrote {escape(output or 'elm.js')}")
    except CompilerError as exc:
        _fail(exc)


@app.command("env")
def env_check(
    config_path: Optional[Path] = typer.Option(None, "--config", help="Path to config TOML"),
) -> None:
    """Run environment diagnostics."""

    config = _load(config_path, verbose=False)
    report = detect_environment(config)
    _render_env_report(report)
    if report.issues:
        raise typer.Exit(code=1)


def _render_env_report(report: EnvironmentReport) -> None:
    console.rule("Environment Report")
    table = Table(title="Tooling")
    table.add_column("Tool")
    table.add_column("Status")
    table.add_column("Details")
    for tool in report.tools:
        status = "[green]OK" if tool.available else "[red]Missing"
        details = tool.version or tool.details or (str(tool.path) if tool.path else "")
        table.add_row(tool.name, status, details)
    console.print(table)
    console.print(f"Python: {report.python_version}")

    if report.issues:
        console.print("[red]Blocking issues detected:")
        for issue in report.issues:
            console.print(f"  • {issue}")

    if report.notes:
        console.print("[cyan]Notes:")
        for note in report.notes:
            console.print(f"  • {note}")


def run() -> None:
    app()
