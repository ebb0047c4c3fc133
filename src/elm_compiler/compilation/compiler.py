"""Drive the ``elm`` executable.

Supports three ways of running ``elm make``:

- :func:`compile` - the compiler writes wherever ``output`` points and its
  own output goes straight to the caller's terminal.
- :func:`compile_to_string` - the compiler writes into a temporary directory
  and the produced file is returned as text.
- :func:`compile_to_module_string` / :func:`compile_to_module` - as above,
  with the self-invoking script rewritten into an ES module.
"""

from __future__ import annotations

import logging
import subprocess
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .arguments import prepare_process_args, validate_options
from .errors import CompilerError, ExitStatusError, OutputReadError, StderrNonEmptyError, launch_error
from .options import CompileOptions, Sources, prepare_options, prepare_sources
from .process import require_launcher, spawn_elm_process

_LOGGER = logging.getLogger(__name__)

DEFAULT_OUTPUT = "elm.js"

SCRIPT_PROLOGUE = "(function(scope){"
SCRIPT_EPILOGUE = ";}(this));"
INIT_PROLOGUE = "function init(scope){"
INIT_EPILOGUE = ";}"
MODULE_FOOTER = "const moduleScope = {};\ninit(moduleScope);\nexport default moduleScope.Elm;"

Options = Mapping[str, Any] | CompileOptions | None


def compile(sources: Sources, options: Options = None) -> None:
    """Run ``elm make`` with inherited stdio.

    Raises:
        ConfigurationError: On malformed options or sources.
        LaunchError: If the compiler could not be started.
        ExitStatusError: If the compiler exited with a non-zero status.
    """

    opts = prepare_options(options)
    path_to_elm = opts.path_to_elm
    args = prepare_process_args(sources, opts)

    process = spawn_elm_process(args, opts)
    with process:
        try:
            code = process.wait()
        except Exception as exc:
            raise launch_error(exc, path_to_elm) from exc

    if code != 0:
        raise ExitStatusError(path_to_elm, code)


def compile_to_string(sources: Sources, options: Options = None) -> str:
    """Compile *sources* and return the produced file as text.

    The compiler writes into a temporary directory that is removed before
    this function returns or raises. Anything written to standard error is
    treated as a failure; a non-zero exit status on its own is only logged.

    Raises:
        ConfigurationError: On malformed options or sources.
        LaunchError: If the compiler could not be started.
        StderrNonEmptyError: If the compiler wrote to standard error.
        OutputReadError: If the output file is missing or not UTF-8.
    """

    opts = prepare_options(options)
    prepare_sources(sources)
    validate_options(opts)
    require_launcher(opts)
    path_to_elm = opts.path_to_elm

    with tempfile.TemporaryDirectory(prefix="elm-compiler-") as tmpdir:
        output_path = Path(tmpdir) / Path(opts.output or DEFAULT_OUTPUT).name
        process_opts = {
            **(opts.process_opts or {}),
            "stdout": subprocess.PIPE,
            "stderr": subprocess.PIPE,
        }
        run_opts = opts.model_copy(update={"output": output_path, "process_opts": process_opts})
        args = prepare_process_args(sources, run_opts)

        process = spawn_elm_process(args, run_opts)
        with process:
            try:
                _stdout, stderr = process.communicate()
            except Exception as exc:
                raise launch_error(exc, path_to_elm) from exc
            code = process.returncode

        standard_error = _decode_stream(stderr)
        if standard_error:
            raise StderrNonEmptyError(standard_error)

        if code:
            _LOGGER.warning("Elm compiler %s exited with code %s", path_to_elm, code)

        return _read_output(output_path)


def compile_to_module_string(sources: Sources, options: Options = None) -> str:
    """Compile *sources* into the text of an ES module exporting ``Elm``."""

    opts = prepare_options(options)
    compiled = compile_to_string(sources, opts.model_copy(update={"output": opts.output or DEFAULT_OUTPUT}))
    return wrap_as_module(compiled)


def compile_to_module(sources: Sources, options: Options = None) -> None:
    """Compile *sources* into an ES module written to the ``output`` path."""

    opts = prepare_options(options)
    output_path = Path(opts.output or DEFAULT_OUTPUT)
    result = compile_to_module_string(sources, opts)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(result, encoding="utf-8")
    except OSError as exc:
        raise CompilerError(f"Cannot write module to '{output_path}': {exc}") from exc
    _LOGGER.debug("Wrote module %s", output_path)


def wrap_as_module(compiled: str) -> str:
    """Turn the compiler's self-invoking script into an ES module."""

    body = compiled.replace(SCRIPT_PROLOGUE, INIT_PROLOGUE, 1).replace(SCRIPT_EPILOGUE, INIT_EPILOGUE, 1)
    return f"{body}\n{MODULE_FOOTER}"


def _decode_stream(data: bytes | str | None) -> str:
    if not data:
        return ""
    if isinstance(data, str):
        return data
    return data.decode("utf-8", errors="replace")


def _read_output(output_path: Path) -> str:
    try:
        data = output_path.read_bytes()
    except OSError as exc:
        raise OutputReadError(f"Cannot read compiled output '{output_path}': {exc}") from exc

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise OutputReadError(f"Compiled output '{output_path}' is not valid UTF-8: {exc}") from exc


__all__ = [
    "DEFAULT_OUTPUT",
    "compile",
    "compile_to_module",
    "compile_to_module_string",
    "compile_to_string",
    "wrap_as_module",
]
