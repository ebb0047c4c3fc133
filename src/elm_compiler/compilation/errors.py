"""Error taxonomy for Elm compiler invocations.

Every failure surfaces as a :class:`CompilerError` subclass carrying a
human-readable message:

- :class:`ConfigurationError` - unknown or retired option keys, malformed
  values, or a launcher that is not callable. Raised before any process is
  spawned.
- :class:`LaunchError` - the operating system refused to start the compiler
  (:class:`BinaryNotFoundError`, :class:`PermissionDeniedError`) or the
  launcher raised.
- :class:`ExitStatusError` - the compiler exited with a non-zero status.
- :class:`StderrNonEmptyError` - the compiler wrote to standard error while
  its output was being captured.
- :class:`OutputReadError` - the compiled output could not be read back.
"""

from __future__ import annotations

import errno
import json


class CompilerError(Exception):
    """Base class for every error raised while driving the Elm compiler."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(CompilerError):
    """Raised when compile options are malformed."""


class LaunchError(CompilerError):
    """Raised when the compiler process could not be started or awaited."""

    def __init__(self, message: str, path_to_elm: str = "") -> None:
        super().__init__(message)
        self.path_to_elm = path_to_elm


class BinaryNotFoundError(LaunchError):
    """Raised when the configured compiler executable does not exist."""


class PermissionDeniedError(LaunchError):
    """Raised when the compiler executable may not be run."""


class ExitStatusError(CompilerError):
    """Raised when the compiler exits with a non-zero status."""

    def __init__(self, path_to_elm: str, code: int) -> None:
        super().__init__(f"{_generic_message(path_to_elm)} (exit code {code})")
        self.path_to_elm = path_to_elm
        self.code = code


class StderrNonEmptyError(CompilerError):
    """Raised when a captured compile wrote anything to standard error.

    ``str(error)`` is the captured text, unchanged.
    """

    def __init__(self, stderr: str) -> None:
        super().__init__(stderr)
        self.stderr = stderr


class OutputReadError(CompilerError):
    """Raised when the compiled output file cannot be read or decoded."""


def _generic_message(path_to_elm: str) -> str:
    return f"Exception thrown when attempting to run Elm compiler {json.dumps(path_to_elm)}"


def _os_error_kind(err: BaseException) -> str | None:
    if isinstance(err, FileNotFoundError):
        return "not_found"
    if isinstance(err, PermissionError):
        return "permission"
    if isinstance(err, OSError) and err.errno is not None:
        if err.errno == errno.ENOENT:
            return "not_found"
        if err.errno == errno.EACCES:
            return "permission"
        return "other"
    return None


def compiler_error_to_string(err: BaseException, path_to_elm: str) -> str:
    """Describe a launch-time exception in terms a user can act on."""

    kind = _os_error_kind(err)
    if kind == "not_found":
        return f'Could not find Elm compiler "{path_to_elm}". Is it installed?'
    if kind == "permission":
        return (
            f'Elm compiler "{path_to_elm}" did not have permission to run. '
            "Do you need to give it executable permissions?"
        )
    if kind == "other":
        return f'Error attempting to run Elm compiler "{path_to_elm}":\n{err}'

    message = str(err)
    if message:
        return json.dumps(message)
    return _generic_message(path_to_elm)


def launch_error(err: BaseException, path_to_elm: str) -> LaunchError:
    """Classify *err* into the matching :class:`LaunchError` subclass."""

    message = compiler_error_to_string(err, path_to_elm)
    kind = _os_error_kind(err)
    if kind == "not_found":
        return BinaryNotFoundError(message, path_to_elm)
    if kind == "permission":
        return PermissionDeniedError(message, path_to_elm)
    return LaunchError(message, path_to_elm)


__all__ = [
    "BinaryNotFoundError",
    "CompilerError",
    "ConfigurationError",
    "ExitStatusError",
    "LaunchError",
    "OutputReadError",
    "PermissionDeniedError",
    "StderrNonEmptyError",
    "compiler_error_to_string",
    "launch_error",
]
