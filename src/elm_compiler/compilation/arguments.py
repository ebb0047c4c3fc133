"""Translate compile options into ``elm make`` arguments."""

from __future__ import annotations

import os
from typing import Any, Callable

from .errors import ConfigurationError
from .options import CompileOptions, Mode, Sources, prepare_sources

SUBCOMMAND = "make"

_RETIRED_OPTIONS: dict[str, str] = {
    "yes": (
        "elm_compiler received the `yes` option, but that was removed in Elm 0.19. "
        "Try re-running without passing the `yes` option."
    ),
    "warn": (
        "elm_compiler received the `warn` option, but that was removed in Elm 0.19. "
        "Try re-running without passing the `warn` option."
    ),
    "pathToMake": (
        "elm_compiler received the `pathToMake` option, but that was renamed to `pathToElm` in Elm 0.19. "
        "Try re-running after renaming the parameter to `pathToElm`."
    ),
}
_RETIRED_OPTIONS["path_to_make"] = _RETIRED_OPTIONS["pathToMake"]

_MODE_FLAGS: dict[Mode, list[str]] = {
    Mode.NO_MODE: [],
    Mode.DEBUG: ["--debug"],
    Mode.OPTIMIZE: ["--optimize"],
}


def _path(value: Any) -> str:
    return os.fspath(value) if isinstance(value, os.PathLike) else str(value)


# Emission order of the flags; each entry maps a truthy option value to tokens.
_FLAG_TABLE: list[tuple[str, Callable[[Any], list[str]]]] = [
    ("help", lambda _value: ["--help"]),
    ("output", lambda value: ["--output", _path(value)]),
    ("report", lambda value: ["--report", str(value)]),
    ("mode", lambda value: list(_MODE_FLAGS[Mode(value)])),
    ("docs", lambda value: ["--docs", _path(value)]),
    ("runtime_options", lambda value: ["+RTS", str(value), "-RTS"]),
]


def validate_options(options: CompileOptions) -> None:
    """Raise :class:`ConfigurationError` for the first unrecognized option key."""

    for key in options.unknown_keys():
        if key in _RETIRED_OPTIONS:
            raise ConfigurationError(_RETIRED_OPTIONS[key])
        raise ConfigurationError(f"elm_compiler was given an unrecognized Elm compiler option: {key}")


def compiler_args_from_options(options: CompileOptions) -> list[str]:
    """Convert *options* into the flag part of an ``elm make`` command line."""

    validate_options(options)

    args: list[str] = []
    for name, to_tokens in _FLAG_TABLE:
        value = getattr(options, name)
        if value:
            args.extend(to_tokens(value))
    return args


def prepare_process_args(sources: Sources, options: CompileOptions) -> list[str]:
    """Return ``["make", *sources, *flags]`` for one invocation."""

    return [SUBCOMMAND, *prepare_sources(sources), *compiler_args_from_options(options)]


__all__ = ["SUBCOMMAND", "compiler_args_from_options", "prepare_process_args", "validate_options"]
