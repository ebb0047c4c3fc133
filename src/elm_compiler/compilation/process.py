"""Launching the Elm compiler as a child process."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from typing import IO, Any, Protocol, runtime_checkable

from .errors import ConfigurationError, launch_error
from .options import CompileOptions

_LOGGER = logging.getLogger(__name__)

FORCED_LOCALE = {"LANG": "en_US.UTF-8"}


@runtime_checkable
class ProcessHandle(Protocol):
    """A running compiler process.

    :class:`subprocess.Popen` satisfies this protocol. Leaving the context
    manager releases the process' pipes and reaps it.
    """

    returncode: int | None
    stdout: IO[bytes] | None
    stderr: IO[bytes] | None

    def wait(self) -> int:
        ...

    def communicate(self) -> tuple[bytes | None, bytes | None]:
        ...

    def __enter__(self) -> ProcessHandle:
        ...

    def __exit__(self, *exc_info: Any) -> Any:
        ...


@runtime_checkable
class ProcessLauncher(Protocol):
    """Callable that starts a process, e.g. :class:`subprocess.Popen`."""

    def __call__(self, args: Sequence[str], **kwargs: Any) -> ProcessHandle:
        ...


def prepare_process_opts(options: CompileOptions) -> dict[str, Any]:
    """Build the keyword arguments passed to the launcher.

    The inherited environment gets a forced UTF-8 locale; caller supplied
    ``process_opts`` are applied last, and an ``env`` mapping among them is
    merged over the base environment.
    """

    env = {**os.environ, **FORCED_LOCALE}
    overrides = dict(options.process_opts or {})
    if "env" in overrides:
        env.update(overrides.pop("env") or {})

    process_opts: dict[str, Any] = {
        "env": env,
        "cwd": os.fspath(options.cwd) if options.cwd else None,
        "stdout": None,
        "stderr": None,
    }
    process_opts.update(overrides)
    return process_opts


def require_launcher(options: CompileOptions) -> ProcessLauncher:
    launcher = options.launcher
    if not callable(launcher):
        raise ConfigurationError(
            f"options.launcher was a(n) {type(launcher).__name__} instead of a callable."
        )
    return launcher


def spawn_elm_process(args: Sequence[str], options: CompileOptions) -> ProcessHandle:
    """Start ``<path_to_elm> <args...>`` and return the live process.

    Raises:
        ConfigurationError: If the configured launcher is not callable.
        LaunchError: If starting the process failed.
    """

    launcher = require_launcher(options)
    path_to_elm = options.path_to_elm
    cmd = [path_to_elm, *args]
    process_opts = prepare_process_opts(options)

    if options.verbose:
        _LOGGER.info("Running %s", " ".join(cmd))
    else:
        _LOGGER.debug("Running %s", " ".join(cmd))

    try:
        return launcher(cmd, **process_opts)
    except Exception as exc:
        raise launch_error(exc, path_to_elm) from exc


__all__ = [
    "FORCED_LOCALE",
    "ProcessHandle",
    "ProcessLauncher",
    "prepare_process_opts",
    "require_launcher",
    "spawn_elm_process",
]
