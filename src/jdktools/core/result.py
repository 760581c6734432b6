"""Outcome of a single tool execution."""

from __future__ import annotations

from dataclasses import dataclass

from jdktools.core.errors import ExitStatusError


@dataclass(frozen=True, slots=True)
class ToolResult:
    """Represents the status reported by a finished tool."""

    tool_name: str
    status: int
    arguments: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.status == 0

    def check(self) -> "ToolResult":
        """Return ``self`` on success, otherwise raise ``ExitStatusError``."""
        if self.status != 0:
            raise ExitStatusError(self.tool_name, self.status)
        return self


__all__ = ["ToolResult"]
