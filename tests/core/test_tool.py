from __future__ import annotations

import io
import subprocess
import sys
import threading
import time
from pathlib import Path
from types import SimpleNamespace

import pytest

import jdktools.core.providers as providers_mod
import jdktools.core.tool as tool_mod
from jdktools.core.config import ToolsConfig
from jdktools.core.errors import (
    ExecutableNotFoundError,
    ProviderNotFoundError,
    ToolCancelledError,
    ToolTimeoutError,
)
from jdktools.core.providers import ProviderRegistry
from jdktools.core.tool import ProviderTool, SubprocessTool, Tool, default_tool


def _python_tool(**options) -> SubprocessTool:
    return Tool.of_subprocess("python", sys.executable, **options)


def test_provider_tool_passes_tokens_and_streams() -> None:
    registry = ProviderRegistry()
    seen: list[list[str]] = []

    def handler(stdout, stderr, arguments) -> int:
        seen.append(list(arguments))
        stdout.write("out")
        stderr.write("err")
        return 4

    registry.register_function("demo", handler)
    out, err = io.StringIO(), io.StringIO()

    status = ProviderTool("demo", registry=registry).run(["--a", "1"], stdout=out, stderr=err)

    assert status == 4
    assert seen == [["--a", "1"]]
    assert out.getvalue() == "out"
    assert err.getvalue() == "err"


def test_provider_tool_defaults_to_process_streams(capsys: pytest.CaptureFixture[str]) -> None:
    registry = ProviderRegistry()
    registry.register_function("demo", lambda stdout, stderr, args: stdout.write("hello\n") and 0)

    assert ProviderTool("demo", registry=registry).run([]) == 0
    assert capsys.readouterr().out == "hello\n"


def test_provider_tool_missing_provider() -> None:
    tool = ProviderTool("missing", registry=ProviderRegistry(), discover=False)
    with pytest.raises(ProviderNotFoundError):
        tool.run(["--x"])


def test_provider_tool_discovers_entry_points(monkeypatch: pytest.MonkeyPatch) -> None:
    def jdeps(stdout, stderr, arguments) -> int:
        stdout.write("jdeps " + " ".join(arguments))
        return 0

    monkeypatch.setattr(
        providers_mod.metadata,
        "entry_points",
        lambda *, group: [SimpleNamespace(name="jdeps", load=lambda: jdeps)],
    )
    registry = ProviderRegistry()
    out = io.StringIO()

    assert ProviderTool("jdeps", registry=registry).run(["--list-deps"], stdout=out) == 0
    assert out.getvalue() == "jdeps --list-deps"
    assert "jdeps" in registry


def test_provider_tool_skips_broken_entry_points(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken():
        raise ImportError("plugin dependency missing")

    monkeypatch.setattr(
        providers_mod.metadata,
        "entry_points",
        lambda *, group: [SimpleNamespace(name="jdeps", load=broken)],
    )
    with pytest.raises(ProviderNotFoundError):
        ProviderTool("jdeps", registry=ProviderRegistry()).run([])


def test_provider_tool_rejects_cancellation() -> None:
    registry = ProviderRegistry()
    registry.register_function("demo", lambda *_: 0)
    with pytest.raises(ValueError):
        ProviderTool("demo", registry=registry).run([], timeout=1.0)


def test_provider_tool_resolution_is_lazy() -> None:
    registry = ProviderRegistry()
    tool = ProviderTool("late", registry=registry, discover=False)
    registry.register_function("late", lambda *_: 0)
    assert tool.run([]) == 0


def test_subprocess_tool_returns_exit_code() -> None:
    tool = _python_tool()
    assert tool.run(["-c", "import sys; sys.exit(3)"]) == 3
    assert tool.run(["-c", "pass"]) == 0


def test_subprocess_tool_preserves_token_boundaries() -> None:
    out = io.StringIO()
    script = "import sys, json; print(json.dumps(sys.argv[1:]))"

    status = _python_tool().run(["-c", script, "a b", "", "--x=1,2"], stdout=out)

    assert status == 0
    assert out.getvalue().strip() == '["a b", "", "--x=1,2"]'


def test_subprocess_tool_captures_stderr() -> None:
    err = io.StringIO()
    status = _python_tool().run(["-c", "import sys; sys.stderr.write('bad'); sys.exit(1)"], stderr=err)
    assert status == 1
    assert err.getvalue() == "bad"


def test_subprocess_tool_tolerates_undecodable_output() -> None:
    out = io.StringIO()
    script = "import sys; sys.stdout.buffer.write(b'\\xff\\xfe ok\\n')"

    status = _python_tool().run(["-c", script], stdout=out)

    assert status == 0
    assert out.getvalue().endswith(" ok\n")


def test_subprocess_tool_missing_executable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(tool_mod.shutil, "which", lambda *args, **kwargs: None)
    tool = SubprocessTool("jpackage", search_paths=(Path("/nonexistent"),))
    with pytest.raises(ExecutableNotFoundError) as excinfo:
        tool.run(["--version"])
    assert excinfo.value.tool_name == "jpackage"


def test_subprocess_tool_missing_explicit_path(tmp_path: Path) -> None:
    tool = SubprocessTool("jlink", executable=str(tmp_path / "bin" / "jlink"))
    with pytest.raises(ExecutableNotFoundError):
        tool.resolve()


def test_subprocess_tool_falls_back_to_search_paths(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls: list[tuple[str, str | None]] = []

    def fake_which(name: str, path: str | None = None) -> str | None:
        calls.append((name, path))
        if path == str(tmp_path / "bin"):
            return str(tmp_path / "bin" / name)
        return None

    monkeypatch.setattr(tool_mod.shutil, "which", fake_which)
    tool = SubprocessTool("javap", search_paths=(tmp_path / "bin",))

    assert tool.resolve() == str(tmp_path / "bin" / "javap")
    assert calls == [("javap", None), ("javap", str(tmp_path / "bin"))]


def test_subprocess_tool_cancellation_terminates_child() -> None:
    cancel = threading.Event()
    timer = threading.Timer(0.2, cancel.set)
    timer.start()
    started = time.monotonic()
    try:
        with pytest.raises(ToolCancelledError) as excinfo:
            _python_tool(poll_interval_secs=0.05).run(["-c", "import time; time.sleep(30)"], cancel=cancel)
    finally:
        timer.cancel()
    assert not isinstance(excinfo.value, ToolTimeoutError)
    assert time.monotonic() - started < 15


def test_subprocess_tool_timeout() -> None:
    with pytest.raises(ToolTimeoutError) as excinfo:
        _python_tool(poll_interval_secs=0.05).run(["-c", "import time; time.sleep(30)"], timeout=0.3)
    assert excinfo.value.timeout == 0.3


def test_subprocess_tool_interrupt_terminates_child(monkeypatch: pytest.MonkeyPatch) -> None:
    real_communicate = subprocess.Popen.communicate
    interrupted: list[subprocess.Popen] = []

    def communicate(self, input=None, timeout=None):
        if not interrupted:
            interrupted.append(self)
            raise KeyboardInterrupt
        return real_communicate(self, input, timeout)

    monkeypatch.setattr(subprocess.Popen, "communicate", communicate)

    with pytest.raises(KeyboardInterrupt):
        _python_tool().run(["-c", "import time; time.sleep(30)"])

    process = interrupted[0]
    assert process.poll() is not None
    assert process.returncode != 0


def test_subprocess_tool_finishes_before_timeout() -> None:
    out = io.StringIO()
    status = _python_tool().run(["-c", "print('done')"], stdout=out, timeout=30)
    assert status == 0
    assert out.getvalue().strip() == "done"


def test_handles_are_immutable() -> None:
    tool = SubprocessTool("javap")
    with pytest.raises(AttributeError):
        tool.name = "jlink"  # type: ignore[misc]


def test_default_tool_follows_backend() -> None:
    config = ToolsConfig(java_home="/opt/jdk", executables={"jlink": "/custom/jlink"}, terminate_grace_secs=1.0)

    subprocess_tool = default_tool("jlink", config)
    assert isinstance(subprocess_tool, SubprocessTool)
    assert subprocess_tool.executable == "/custom/jlink"
    assert subprocess_tool.search_paths == (Path("/opt/jdk") / "bin",)
    assert subprocess_tool.terminate_grace_secs == 1.0

    registry = ProviderRegistry()
    provider_tool = default_tool("jlink", ToolsConfig(backend="provider", load_entry_points=False), registry=registry)
    assert isinstance(provider_tool, ProviderTool)
    assert provider_tool.registry is registry
    assert provider_tool.discover is False
