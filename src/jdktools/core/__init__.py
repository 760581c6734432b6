"""Core tool invocation services for jdktools."""

from .arguments import ToolArguments, join_arguments, to_argument_string
from .config import (
    DEFAULT_CONFIG_DIR,
    ConfigManager,
    ConfigurationError,
    ToolsConfig,
    load_config,
)
from .errors import (
    ExecutableNotFoundError,
    ExitStatusError,
    ProviderAlreadyRegisteredError,
    ProviderNotFoundError,
    ToolCancelledError,
    ToolError,
    ToolResolutionError,
    ToolTimeoutError,
)
from .providers import ProviderRegistry, ToolProvider, default_registry
from .result import ToolResult
from .runner import ToolRunner
from .tool import ProviderTool, SubprocessTool, Tool, default_tool

__all__ = [
    "ToolArguments",
    "join_arguments",
    "to_argument_string",
    "DEFAULT_CONFIG_DIR",
    "ConfigManager",
    "ConfigurationError",
    "ToolsConfig",
    "load_config",
    "ExecutableNotFoundError",
    "ExitStatusError",
    "ProviderAlreadyRegisteredError",
    "ProviderNotFoundError",
    "ToolCancelledError",
    "ToolError",
    "ToolResolutionError",
    "ToolTimeoutError",
    "ProviderRegistry",
    "ToolProvider",
    "default_registry",
    "ToolResult",
    "ToolRunner",
    "ProviderTool",
    "SubprocessTool",
    "Tool",
    "default_tool",
]
