"""Runnable tool handles: in-process providers and external executables."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar, Iterable, Mapping, TextIO

from jdktools.core.config import ToolsConfig, load_config
from jdktools.core.errors import (
    ExecutableNotFoundError,
    ProviderNotFoundError,
    ToolCancelledError,
    ToolTimeoutError,
)
from jdktools.core.providers import ProviderRegistry, ToolProvider, default_registry
from jdktools.core.streams import synchronized, write_block

logger = logging.getLogger(__name__)


class Tool(ABC):
    """A tool that can be run with an argument vector, yielding a status code."""

    kind: ClassVar[str]
    name: str

    @abstractmethod
    def run(
        self,
        arguments: Iterable[str],
        *,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        cancel: threading.Event | None = None,
        timeout: float | None = None,
    ) -> int:
        """Run the tool to completion and return its status code."""

    @staticmethod
    def of_provider(name: str, registry: ProviderRegistry | None = None) -> "ProviderTool":
        return ProviderTool(name=name, registry=registry)

    @staticmethod
    def of_subprocess(name: str, executable: str | os.PathLike[str] | None = None, **options) -> "SubprocessTool":
        return SubprocessTool(
            name=name,
            executable=None if executable is None else os.fspath(executable),
            **options,
        )


@dataclass(frozen=True)
class ProviderTool(Tool):
    """Tool implemented by a provider registered in this process."""

    kind: ClassVar[str] = "provider"

    name: str
    registry: ProviderRegistry | None = field(default=None, compare=False)
    discover: bool = True

    def resolve(self) -> ToolProvider:
        registry = self.registry if self.registry is not None else default_registry()
        provider = registry.find(self.name)
        if provider is None and self.discover:
            registry.load_entry_points()
            provider = registry.find(self.name)
        if provider is None:
            raise ProviderNotFoundError(self.name)
        return provider

    def run(
        self,
        arguments: Iterable[str],
        *,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        cancel: threading.Event | None = None,
        timeout: float | None = None,
    ) -> int:
        if cancel is not None or timeout is not None:
            raise ValueError(f"In-process tool '{self.name}' cannot be cancelled or timed out")
        provider = self.resolve()
        tokens = list(arguments)
        logger.debug("Invoking provider %s with %s", self.name, tokens)
        out = synchronized(stdout, default="stdout")
        err = synchronized(stderr, default="stderr")
        status = provider.run(out, err, tokens)
        logger.debug("Provider %s returned %s", self.name, status)
        return status


@dataclass(frozen=True)
class SubprocessTool(Tool):
    """Tool run by spawning an external executable."""

    kind: ClassVar[str] = "subprocess"

    name: str
    executable: str | None = None
    search_paths: tuple[Path, ...] = ()
    cwd: Path | None = None
    env: Mapping[str, str] | None = field(default=None, compare=False)
    terminate_grace_secs: float = 5.0
    poll_interval_secs: float = 0.1

    def resolve(self) -> str:
        """Return the absolute path of the executable to spawn."""
        candidate = self.executable or self.name
        if os.path.dirname(candidate):
            path = Path(candidate).expanduser()
            if path.is_file() and os.access(path, os.X_OK):
                return str(path)
            raise ExecutableNotFoundError(self.name, candidate)
        found = shutil.which(candidate)
        if found:
            return found
        for directory in self.search_paths:
            found = shutil.which(candidate, path=os.fspath(directory))
            if found:
                return found
        raise ExecutableNotFoundError(self.name, candidate)

    def run(
        self,
        arguments: Iterable[str],
        *,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        cancel: threading.Event | None = None,
        timeout: float | None = None,
    ) -> int:
        tokens = list(arguments)
        executable = self.resolve()
        capture = stdout is not None or stderr is not None
        env = {**os.environ, **self.env} if self.env else None
        logger.debug("Spawning %s with %s", executable, tokens)
        try:
            process = subprocess.Popen(  # noqa: S603
                [executable, *tokens],
                stdout=subprocess.PIPE if stdout is not None else None,
                stderr=subprocess.PIPE if stderr is not None else None,
                text=capture,
                errors="replace" if capture else None,
                cwd=self.cwd,
                env=env,
            )
        except FileNotFoundError as exc:
            raise ExecutableNotFoundError(self.name, executable) from exc

        output, errors = self._wait(process, cancel=cancel, timeout=timeout)
        if stdout is not None:
            write_block(stdout, output or "")
        if stderr is not None:
            write_block(stderr, errors or "")
        logger.debug("Process %s exited with %s", executable, process.returncode)
        return process.returncode

    def _wait(
        self,
        process: subprocess.Popen,
        *,
        cancel: threading.Event | None,
        timeout: float | None,
    ) -> tuple[str | None, str | None]:
        deadline = None if timeout is None else time.monotonic() + timeout
        try:
            if cancel is None and deadline is None:
                return process.communicate()
            while True:
                if cancel is not None and cancel.is_set():
                    self._terminate(process)
                    raise ToolCancelledError(self.name)
                wait_for = self.poll_interval_secs
                if deadline is not None:
                    remaining = deadline - time.monotonic()
                    if remaining <= 0:
                        self._terminate(process)
                        raise ToolTimeoutError(self.name, timeout)
                    wait_for = min(wait_for, remaining)
                try:
                    return process.communicate(timeout=wait_for)
                except subprocess.TimeoutExpired:
                    continue
        except KeyboardInterrupt:
            self._terminate(process)
            raise

    def _terminate(self, process: subprocess.Popen) -> None:
        if process.poll() is not None:
            return
        logger.debug("Terminating process %s", process.pid)
        process.terminate()
        try:
            process.communicate(timeout=self.terminate_grace_secs)
        except subprocess.TimeoutExpired:
            process.kill()
            process.communicate()


def default_tool(
    name: str,
    config: ToolsConfig | None = None,
    *,
    registry: ProviderRegistry | None = None,
) -> Tool:
    """Build the handle for ``name`` according to the configured backend."""
    if config is None:
        config = load_config()
    if config.backend == "provider":
        return ProviderTool(name=name, registry=registry, discover=config.load_entry_points)
    return SubprocessTool(
        name=name,
        executable=config.executables.get(name),
        search_paths=config.search_paths(),
        terminate_grace_secs=config.terminate_grace_secs,
        poll_interval_secs=config.poll_interval_secs,
    )


__all__ = ["ProviderTool", "SubprocessTool", "Tool", "default_tool"]
