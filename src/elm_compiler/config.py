"""Configuration loading and modelling."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .compilation.options import ELM_BINARY_NAME, Mode

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "default_config.toml"
USER_CONFIG_PATH = Path("~/.config/elm-compiler/config.toml").expanduser()
ELM_PATH_ENV = "ELM_COMPILER_PATH"


class CompilerSettings(BaseModel):
    path_to_elm: str = ELM_BINARY_NAME
    mode: Mode = Mode.NO_MODE
    report: str | None = None
    verbose: bool = False
    cwd: Path | None = None


class OutputSettings(BaseModel):
    verbosity: str = "normal"


class AppConfig(BaseModel):
    compiler: CompilerSettings = Field(default_factory=CompilerSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    raw: dict[str, Any] = Field(default_factory=dict)

    @property
    def verbosity(self) -> str:
        return self.output.verbosity

    def compile_options(self) -> dict[str, Any]:
        """Return the configured defaults as compile options."""

        options: dict[str, Any] = {
            "path_to_elm": self.compiler.path_to_elm,
            "mode": self.compiler.mode,
            "verbose": self.compiler.verbose,
        }
        if self.compiler.report:
            options["report"] = self.compiler.report
        if self.compiler.cwd:
            options["cwd"] = self.compiler.cwd
        return options


def _load_toml(path: Path) -> dict[str, Any]:
    import tomllib

    with path.open("rb") as fh:
        return tomllib.load(fh)


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load configuration from defaults and optional user overrides."""

    load_dotenv()

    data: dict[str, Any] = {}
    if DEFAULT_CONFIG_PATH.exists():
        data = _merge(data, _load_toml(DEFAULT_CONFIG_PATH))

    resolved_path = config_path
    if resolved_path is None and USER_CONFIG_PATH.exists():
        resolved_path = USER_CONFIG_PATH

    if resolved_path and resolved_path.exists():
        data = _merge(data, _load_toml(resolved_path))

    config = AppConfig(raw=data)

    if "compiler" in data:
        config.compiler = CompilerSettings.model_validate(data["compiler"])
    if "output" in data:
        config.output = OutputSettings.model_validate(data["output"])

    # Environment override for the compiler binary.
    env_path = os.getenv(ELM_PATH_ENV)
    if env_path:
        config.compiler.path_to_elm = env_path

    return config
