from __future__ import annotations

import subprocess
import sys
import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from jdktools.core.arguments import ToolArguments
from jdktools.core.errors import ExitStatusError, ProviderNotFoundError
from jdktools.core.providers import ProviderRegistry
from jdktools.core.result import ToolResult
from jdktools.core.runner import ToolRunner
from jdktools.core.tool import ProviderTool, SubprocessTool


class RecordingProvider:
    def __init__(self, status: int = 0) -> None:
        self.status = status
        self.calls: list[list[str]] = []

    def __call__(self, stdout, stderr, arguments) -> int:
        self.calls.append(list(arguments))
        return self.status


def _provider_tool(name: str, provider: RecordingProvider) -> ProviderTool:
    registry = ProviderRegistry()
    registry.register_function(name, provider)
    return ProviderTool(name, registry=registry, discover=False)


def test_provider_observes_exact_tokens() -> None:
    provider = RecordingProvider()
    runner = ToolRunner(_provider_tool("packager", provider))
    runner.add("--name").add("foo").add("--verbose")

    result = runner.run()

    assert provider.calls == [["--name", "foo", "--verbose"]]
    assert result == ToolResult(tool_name="packager", status=0, arguments=("--name", "foo", "--verbose"))
    assert result.ok


def test_non_zero_status_raises_with_code_and_name() -> None:
    runner = ToolRunner(_provider_tool("packager", RecordingProvider(status=1)))

    with pytest.raises(ExitStatusError) as excinfo:
        runner.run()

    assert excinfo.value.status == 1
    assert excinfo.value.tool_name == "packager"


def test_execute_reports_status_without_raising() -> None:
    runner = ToolRunner(_provider_tool("packager", RecordingProvider(status=7)))

    result = runner.execute()

    assert result.status == 7
    assert not result.ok
    with pytest.raises(ExitStatusError):
        result.check()


def test_missing_provider_raises_before_invocation() -> None:
    registry = ProviderRegistry()
    runner = ToolRunner(ProviderTool("absent", registry=registry, discover=False), ToolArguments(["--x"]))

    with pytest.raises(ProviderNotFoundError):
        runner.run()
    assert runner.arguments.tokens() == ["--x"]


def test_building_a_runner_has_no_side_effects(monkeypatch: pytest.MonkeyPatch) -> None:
    def fail_popen(*args, **kwargs):
        raise AssertionError("no process may be spawned")

    monkeypatch.setattr(subprocess, "Popen", fail_popen)
    provider = RecordingProvider()

    provider_runner = ToolRunner(_provider_tool("packager", provider)).add_all("--name", "foo")
    subprocess_runner = ToolRunner(SubprocessTool("definitely-not-installed")).add("--help")

    assert provider_runner.arguments.tokens() == ["--name", "foo"]
    assert subprocess_runner.arguments.tokens() == ["--help"]
    assert provider.calls == []


def test_rerun_uses_tokens_present_at_call_time() -> None:
    provider = RecordingProvider()
    runner = ToolRunner(_provider_tool("packager", provider)).add("--a")
    runner.run()
    runner.add("--b")
    runner.run()

    assert provider.calls == [["--a"], ["--a", "--b"]]


def test_delegation_returns_runner_for_chaining() -> None:
    runner = ToolRunner(_provider_tool("packager", RecordingProvider()))

    assert runner.add("x") is runner
    assert runner.option("--dest", "out") is runner
    assert runner.tokens() == ["x", "--dest", "out"]
    with pytest.raises(AttributeError):
        runner.no_such_option()


def test_configure_and_class_helpers() -> None:
    provider = RecordingProvider()
    tool = _provider_tool("packager", provider)

    runner = ToolRunner.runner(tool, configure=lambda arguments: arguments.add_all("--name", "foo"))
    assert runner.arguments.tokens() == ["--name", "foo"]

    result = ToolRunner.run_with(tool, ToolArguments(["--version"]))
    assert result.ok
    assert provider.calls == [["--version"]]


def test_runner_requires_a_tool_without_default_name() -> None:
    with pytest.raises(TypeError):
        ToolRunner()


def test_shared_handle_runs_concurrently_without_crosstalk() -> None:
    registry = ProviderRegistry()
    seen: dict[str, list[str]] = {}
    lock = threading.Lock()

    def handler(stdout, stderr, arguments) -> int:
        time.sleep(0.05)
        with lock:
            seen[arguments[0]] = list(arguments)
        return 0 if arguments[0] == "first" else 2

    registry.register_function("shared", handler)
    tool = ProviderTool("shared", registry=registry, discover=False)
    first = ToolRunner(tool).add_all("first", "--a", "1")
    second = ToolRunner(tool).add_all("second", "--b", "2", "--c")

    with ThreadPoolExecutor(max_workers=2) as pool:
        results = list(pool.map(lambda runner: runner.execute(), [first, second]))

    assert [result.status for result in results] == [0, 2]
    assert seen == {
        "first": ["first", "--a", "1"],
        "second": ["second", "--b", "2", "--c"],
    }


def test_subprocess_runner_end_to_end() -> None:
    tool = SubprocessTool("python", executable=sys.executable)

    ToolRunner(tool).add_all("-c", "pass").run()
    with pytest.raises(ExitStatusError) as excinfo:
        ToolRunner(tool).add_all("-c", "import sys; sys.exit(5)").run()
    assert excinfo.value.status == 5
    assert excinfo.value.tool_name == "python"
