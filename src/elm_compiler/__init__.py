"""elm_compiler - Python wrapper around the Elm compiler executable."""

from importlib.metadata import PackageNotFoundError, version

from .compilation import (
    BinaryNotFoundError,
    CompileOptions,
    CompilerError,
    ConfigurationError,
    ExitStatusError,
    LaunchError,
    Mode,
    OutputReadError,
    PermissionDeniedError,
    StderrNonEmptyError,
    compile,
    compile_to_module,
    compile_to_module_string,
    compile_to_string,
)

__all__ = [
    "__version__",
    "BinaryNotFoundError",
    "CompileOptions",
    "CompilerError",
    "ConfigurationError",
    "ExitStatusError",
    "LaunchError",
    "Mode",
    "OutputReadError",
    "PermissionDeniedError",
    "StderrNonEmptyError",
    "compile",
    "compile_to_module",
    "compile_to_module_string",
    "compile_to_string",
]

try:  # pragma: no cover - metadata probe
    __version__ = version("elm-compiler")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.1.0"
