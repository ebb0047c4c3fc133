"""Compilation module for driving the Elm compiler."""

from .arguments import compiler_args_from_options, prepare_process_args
from .compiler import (
    compile,
    compile_to_module,
    compile_to_module_string,
    compile_to_string,
    wrap_as_module,
)
from .errors import (
    BinaryNotFoundError,
    CompilerError,
    ConfigurationError,
    ExitStatusError,
    LaunchError,
    OutputReadError,
    PermissionDeniedError,
    StderrNonEmptyError,
)
from .options import CompileOptions, Mode, prepare_options, prepare_sources
from .process import ProcessHandle, ProcessLauncher

__all__ = [
    "BinaryNotFoundError",
    "CompileOptions",
    "CompilerError",
    "ConfigurationError",
    "ExitStatusError",
    "LaunchError",
    "Mode",
    "OutputReadError",
    "PermissionDeniedError",
    "ProcessHandle",
    "ProcessLauncher",
    "StderrNonEmptyError",
    "compile",
    "compile_to_module",
    "compile_to_module_string",
    "compile_to_string",
    "compiler_args_from_options",
    "prepare_options",
    "prepare_process_args",
    "prepare_sources",
    "wrap_as_module",
]
