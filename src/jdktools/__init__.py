"""Typed argument builders and runners for JDK command-line tools."""

from jdktools.core import (
    ExitStatusError,
    ProviderTool,
    SubprocessTool,
    Tool,
    ToolArguments,
    ToolResult,
    ToolRunner,
)
from jdktools.tools import JarSigner, Javap, JLink, JPackage

__all__ = [
    "ExitStatusError",
    "JarSigner",
    "Javap",
    "JLink",
    "JPackage",
    "ProviderTool",
    "SubprocessTool",
    "Tool",
    "ToolArguments",
    "ToolResult",
    "ToolRunner",
]
