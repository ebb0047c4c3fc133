"""Environment detection and verification."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path

from ..compilation.process import FORCED_LOCALE
from ..config import ELM_PATH_ENV, AppConfig


@dataclass(slots=True)
class ToolCheck:
    name: str
    command: str | None
    available: bool
    version: str | None = None
    path: Path | None = None
    details: str | None = None


@dataclass(slots=True)
class EnvironmentReport:
    python_version: str
    tools: list[ToolCheck] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)

    def missing_tools(self) -> list[str]:
        return [t.name for t in self.tools if not t.available]


def _check_command(name: str, command: str) -> ToolCheck:
    path = shutil.which(command)
    if not path:
        return ToolCheck(name=name, command=command, available=False)
    version = _probe_version(path)
    return ToolCheck(name=name, command=command, available=True, version=version, path=Path(path))


def _probe_version(command: str) -> str | None:
    try:
        output = subprocess.check_output(
            [command, "--version"],
            stderr=subprocess.STDOUT,
            timeout=10,
            env={**os.environ, **FORCED_LOCALE},
        )
    except (OSError, subprocess.CalledProcessError, subprocess.TimeoutExpired):
        return None
    lines = output.decode(errors="replace").splitlines()
    return lines[0].strip() if lines else None


def detect_environment(config: AppConfig) -> EnvironmentReport:
    report = EnvironmentReport(python_version=sys.version.split()[0])

    path_to_elm = config.compiler.path_to_elm
    elm = _check_command("elm", path_to_elm)
    report.tools.append(elm)

    if not elm.available:
        report.issues.append(f'Could not find Elm compiler "{path_to_elm}". Is it installed?')
        report.notes.append(f"Set {ELM_PATH_ENV} or compiler.path_to_elm to point at the elm binary.")
    elif elm.version is None:
        report.notes.append(f"{path_to_elm} did not report a version; it may not be the Elm compiler.")

    if config.compiler.cwd and not Path(config.compiler.cwd).is_dir():
        report.issues.append(f"Configured working directory does not exist: {config.compiler.cwd}")

    return report


__all__ = ["EnvironmentReport", "ToolCheck", "detect_environment"]
