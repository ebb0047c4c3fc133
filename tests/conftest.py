"""Shared pytest fixtures for elm_compiler tests."""

from __future__ import annotations

import stat
import sys
from pathlib import Path
from typing import Any, Sequence

import pytest

from elm_compiler.config import AppConfig, CompilerSettings, OutputSettings


# ============================================================================
# Compiled Output Fixtures
# ============================================================================

# Shape of what `elm make --output elm.js` produces, trimmed to the wrapper.
COMPILED_ELM = """\
(function(scope){
'use strict';

function F(arity, fun, wrapper) {
  wrapper.a = arity;
  wrapper.f = fun;
  return wrapper;
}

var $author$project$Main$main = _VirtualDom_text('Hello');
_Platform_export({'Main':{'init':_VirtualDom_init($author$project$Main$main)(0)(0)}});}(this));
"""


@pytest.fixture
def compiled_elm() -> str:
    """Return a sample of compiler output."""
    return COMPILED_ELM


@pytest.fixture
def main_elm(tmp_path: Path) -> Path:
    """Create an Elm source file for testing."""
    source = tmp_path / "src" / "Main.elm"
    source.parent.mkdir(parents=True, exist_ok=True)
    source.write_text('module Main exposing (main)\n\nimport Html\n\nmain = Html.text "Hello"\n')
    return source


# ============================================================================
# Fake Process Fixtures
# ============================================================================

class FakeProcess:
    """Stand-in for subprocess.Popen that never starts anything."""

    def __init__(
        self,
        returncode: int = 0,
        stdout: bytes | None = b"",
        stderr: bytes | None = b"",
        error: Exception | None = None,
    ):
        self.returncode: int | None = None
        self.stdout = None
        self.stderr = None
        self._final_returncode = returncode
        self._stdout_data = stdout
        self._stderr_data = stderr
        self._error = error
        self.closed = False
        self.waited = False
        self.communicated = False

    def wait(self) -> int:
        self.waited = True
        if self._error is not None:
            raise self._error
        self.returncode = self._final_returncode
        return self.returncode

    def communicate(self) -> tuple[bytes | None, bytes | None]:
        self.communicated = True
        if self._error is not None:
            raise self._error
        self.returncode = self._final_returncode
        return self._stdout_data, self._stderr_data

    def __enter__(self) -> "FakeProcess":
        return self

    def __exit__(self, *exc_info: Any) -> bool:
        self.closed = True
        return False


class FakeLauncher:
    """Records launches and writes *compiled* to the ``--output`` path."""

    def __init__(
        self,
        process: FakeProcess | None = None,
        compiled: str | None = COMPILED_ELM,
        error: Exception | None = None,
    ):
        self.process = process or FakeProcess()
        self.compiled = compiled
        self.error = error
        self.calls: list[tuple[list[str], dict[str, Any]]] = []

    def __call__(self, args: Sequence[str], **kwargs: Any) -> FakeProcess:
        self.calls.append((list(args), kwargs))
        if self.error is not None:
            raise self.error
        if self.compiled is not None and "--output" in args:
            output = Path(args[list(args).index("--output") + 1])
            output.write_text(self.compiled, encoding="utf-8")
        return self.process

    @property
    def last_args(self) -> list[str]:
        return self.calls[-1][0]

    @property
    def last_kwargs(self) -> dict[str, Any]:
        return self.calls[-1][1]

    def output_path(self, index: int = -1) -> Path:
        args = self.calls[index][0]
        return Path(args[args.index("--output") + 1])


@pytest.fixture
def fake_process() -> FakeProcess:
    """Return a process that exits cleanly with no output."""
    return FakeProcess()


@pytest.fixture
def fake_launcher(fake_process: FakeProcess) -> FakeLauncher:
    """Return a launcher that produces COMPILED_ELM."""
    return FakeLauncher(process=fake_process)


# ============================================================================
# Fake Compiler Executable Fixtures
# ============================================================================

FAKE_ELM_SCRIPT = """\
import os
import sys

args = sys.argv[1:]
if os.environ.get("FAKE_ELM_STDERR"):
    sys.stderr.write(os.environ["FAKE_ELM_STDERR"])
if "--output" in args:
    with open(args[args.index("--output") + 1], "w", encoding="utf-8") as fh:
        fh.write(os.environ.get("FAKE_ELM_OUTPUT", {compiled!r}))
if os.environ.get("FAKE_ELM_ARGS_FILE"):
    with open(os.environ["FAKE_ELM_ARGS_FILE"], "w", encoding="utf-8") as fh:
        fh.write("\\n".join(args))
if os.environ.get("FAKE_ELM_CWD_FILE"):
    with open(os.environ["FAKE_ELM_CWD_FILE"], "w", encoding="utf-8") as fh:
        fh.write(os.getcwd() + "\\n" + os.environ.get("LANG", ""))
sys.exit(int(os.environ.get("FAKE_ELM_EXIT", "0")))
"""


@pytest.fixture
def fake_elm(tmp_path: Path) -> Path:
    """Create an executable that behaves like `elm make` for the tests' purposes."""
    if sys.platform == "win32":
        pytest.skip("fake compiler relies on a POSIX shebang")
    script = tmp_path / "bin" / "elm"
    script.parent.mkdir(parents=True, exist_ok=True)
    script.write_text(f"#!{sys.executable}\n" + FAKE_ELM_SCRIPT.format(compiled=COMPILED_ELM))
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def test_config(tmp_path: Path) -> AppConfig:
    """Return a configuration pointing at a non-existent compiler."""
    config = AppConfig()
    config.compiler = CompilerSettings(path_to_elm=str(tmp_path / "no-such-elm"))
    config.output = OutputSettings(verbosity="quiet")
    return config


@pytest.fixture
def minimal_config() -> AppConfig:
    """Return minimal configuration for unit tests."""
    return AppConfig()
