"""Binding of a tool handle to the arguments it will be run with."""

from __future__ import annotations

import functools
import logging
import threading
from typing import Any, Callable, ClassVar, Generic, TextIO, TypeVar

from typing_extensions import Self

from jdktools.core.arguments import ToolArguments
from jdktools.core.result import ToolResult
from jdktools.core.tool import Tool, default_tool

logger = logging.getLogger(__name__)

A = TypeVar("A", bound=ToolArguments)


class ToolRunner(Generic[A]):
    """Configures and runs one tool.

    Option methods of the arguments object are available directly on the
    runner; calls that return the arguments object return the runner instead,
    so a whole invocation can be written as one chain::

        JPackage(tool).name("foo").type("app-image").run()

    ``execute`` reports the status as a ``ToolResult``; ``run`` raises
    ``ExitStatusError`` for any non-zero status.
    """

    tool_name: ClassVar[str | None] = None
    arguments_type: ClassVar[type[ToolArguments]] = ToolArguments

    def __init__(self, tool: Tool | str | None = None, arguments: A | None = None) -> None:
        if tool is None:
            if self.tool_name is None:
                raise TypeError(f"{type(self).__name__} requires a tool")
            tool = default_tool(self.tool_name)
        elif isinstance(tool, str):
            tool = default_tool(tool)
        self._tool: Tool = tool
        self._arguments: A = arguments if arguments is not None else self.arguments_type()  # type: ignore[assignment]

    @classmethod
    def runner(
        cls,
        tool: Tool | str | None = None,
        arguments: A | None = None,
        configure: Callable[[A], Any] | None = None,
    ) -> Self:
        instance = cls(tool, arguments)
        if configure is not None:
            instance.configure(configure)
        return instance

    @classmethod
    def run_with(
        cls,
        tool: Tool | str | None = None,
        arguments: A | None = None,
        configure: Callable[[A], Any] | None = None,
        **options: Any,
    ) -> ToolResult:
        return cls.runner(tool, arguments, configure).run(**options)

    @property
    def tool(self) -> Tool:
        return self._tool

    @property
    def arguments(self) -> A:
        return self._arguments

    def configure(self, configure: Callable[[A], Any]) -> Self:
        configure(self._arguments)
        return self

    def execute(
        self,
        *,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        cancel: threading.Event | None = None,
        timeout: float | None = None,
    ) -> ToolResult:
        tokens = self._arguments.tokens()
        status = self._tool.run(tokens, stdout=stdout, stderr=stderr, cancel=cancel, timeout=timeout)
        logger.debug("Tool %s finished with status %s", self._tool.name, status)
        return ToolResult(tool_name=self._tool.name, status=status, arguments=tuple(tokens))

    def run(
        self,
        *,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        cancel: threading.Event | None = None,
        timeout: float | None = None,
    ) -> ToolResult:
        return self.execute(stdout=stdout, stderr=stderr, cancel=cancel, timeout=timeout).check()

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        arguments = self.__dict__.get("_arguments")
        if arguments is None:
            raise AttributeError(name)
        attribute = getattr(arguments, name)
        if not callable(attribute):
            return attribute

        @functools.wraps(attribute)
        def delegate(*args: Any, **kwargs: Any) -> Any:
            result = attribute(*args, **kwargs)
            return self if result is arguments else result

        return delegate

    def __repr__(self) -> str:
        return f"{type(self).__name__}(tool={self._tool!r}, arguments={self._arguments!r})"


__all__ = ["ToolRunner"]
