"""Compile option modelling and normalization."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping, Sequence
from enum import Enum
from pathlib import Path
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError

ELM_BINARY_NAME = "elm"

Sources = Union[str, os.PathLike, Sequence[Union[str, os.PathLike]]]


class Mode(str, Enum):
    """Execution mode of the compiler. Exactly one is active per invocation."""

    NO_MODE = "no_mode"
    DEBUG = "debug"
    OPTIMIZE = "optimize"


class CompileOptions(BaseModel):
    """Options for a single compiler invocation.

    Keys that are not fields are kept in ``model_extra`` so that argument
    building can reject them with a precise message instead of dropping them.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, arbitrary_types_allowed=True)

    launcher: Any = Field(default=subprocess.Popen, alias="run")
    mode: Mode = Mode.NO_MODE
    path_to_elm: str = Field(default=ELM_BINARY_NAME, alias="pathToElm")
    cwd: str | Path | None = None
    help: Any = None
    output: str | Path | None = None
    report: str | None = None
    verbose: bool = False
    process_opts: dict[str, Any] | None = Field(default=None, alias="processOpts")
    docs: str | Path | None = None
    runtime_options: str | None = Field(default=None, alias="runtimeOptions")

    @field_validator("cwd", "help", "output", "report", "docs", "runtime_options", mode="before")
    @classmethod
    def falsy_flag_is_unset(cls, v: Any) -> Any:
        """Treat any falsy value (``False``, ``""``, ``0``) as not given."""
        return v if v else None

    @field_validator("mode", mode="before")
    @classmethod
    def falsy_mode_is_no_mode(cls, v: Any) -> Any:
        return v if v else Mode.NO_MODE

    @field_validator("verbose", mode="before")
    @classmethod
    def falsy_verbose_is_off(cls, v: Any) -> Any:
        return v if v else False

    def unknown_keys(self) -> list[str]:
        return list(self.model_extra or {})


def prepare_options(options: Mapping[str, Any] | CompileOptions | None = None) -> CompileOptions:
    """Overlay user supplied options onto the defaults.

    Unknown keys are preserved; a known key with a value of the wrong shape
    raises :class:`ConfigurationError`.
    """

    if options is None:
        return CompileOptions()
    if isinstance(options, CompileOptions):
        return options.model_copy()
    if not isinstance(options, Mapping):
        raise ConfigurationError(
            f"Elm compiler options must be a mapping, got {type(options).__name__} instead."
        )

    try:
        return CompileOptions.model_validate(dict(options))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid Elm compiler options:\n{exc}") from exc


def prepare_sources(sources: Sources) -> list[str]:
    """Normalize *sources* into an ordered list of path strings."""

    if isinstance(sources, (str, os.PathLike)):
        return [os.fspath(sources)]

    if isinstance(sources, Sequence) and all(isinstance(s, (str, os.PathLike)) for s in sources):
        if not sources:
            raise ConfigurationError("compile() received an empty list of sources.")
        return [os.fspath(s) for s in sources]

    raise ConfigurationError("compile() received neither a list nor a string for its sources argument.")


__all__ = ["CompileOptions", "ELM_BINARY_NAME", "Mode", "Sources", "prepare_options", "prepare_sources"]
