"""Error types raised while resolving and running tools."""

from __future__ import annotations


class ToolError(RuntimeError):
    """Base error for tool invocation failures."""


class ToolResolutionError(ToolError):
    """Raised when a tool cannot be located; nothing was invoked."""

    def __init__(self, tool_name: str, message: str) -> None:
        super().__init__(message)
        self.tool_name = tool_name


class ProviderNotFoundError(ToolResolutionError):
    """Raised when no in-process provider is registered under a name."""

    def __init__(self, tool_name: str) -> None:
        super().__init__(tool_name, f"No tool provider named '{tool_name}'")


class ExecutableNotFoundError(ToolResolutionError):
    """Raised when an external executable cannot be resolved."""

    def __init__(self, tool_name: str, executable: str) -> None:
        super().__init__(tool_name, f"Executable '{executable}' for tool '{tool_name}' not found")
        self.executable = executable


class ProviderAlreadyRegisteredError(ToolError):
    """Raised when attempting to register a provider with a duplicate name."""


class ExitStatusError(ToolError):
    """Raised when a tool ran to completion with a non-zero status."""

    def __init__(self, tool_name: str, status: int) -> None:
        super().__init__(f"Tool '{tool_name}' exited with status {status}")
        self.tool_name = tool_name
        self.status = status

    def __reduce__(self):
        return (type(self), (self.tool_name, self.status))


class ToolCancelledError(ToolError):
    """Raised when a running subprocess tool was terminated by the caller."""

    def __init__(self, tool_name: str, message: str | None = None) -> None:
        super().__init__(message or f"Tool '{tool_name}' was cancelled")
        self.tool_name = tool_name


class ToolTimeoutError(ToolCancelledError):
    """Raised when a subprocess tool exceeded its timeout and was terminated."""

    def __init__(self, tool_name: str, timeout: float) -> None:
        super().__init__(tool_name, f"Tool '{tool_name}' timed out after {timeout} seconds")
        self.timeout = timeout


__all__ = [
    "ExecutableNotFoundError",
    "ExitStatusError",
    "ProviderAlreadyRegisteredError",
    "ProviderNotFoundError",
    "ToolCancelledError",
    "ToolError",
    "ToolResolutionError",
    "ToolTimeoutError",
]
