"""CLI package for jdktools."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from importlib import metadata
from pathlib import Path
from typing import Optional

import tomli_w
import typer
from rich.markup import escape

from jdktools.core import (
    ConfigManager,
    ConfigurationError,
    ExitStatusError,
    ProviderTool,
    SubprocessTool,
    ToolArguments,
    ToolCancelledError,
    ToolResolutionError,
    ToolRunner,
    ToolsConfig,
    default_tool,
    load_config,
)
from jdktools.core.config import DEFAULT_CONFIG_DIR

from .branding import themed_console

logger = logging.getLogger(__name__)

EXIT_RESOLUTION_FAILED = 127
EXIT_CANCELLED = 130
EXIT_USAGE = 2

app = typer.Typer(help="Run JDK command-line tools in-process or as subprocesses", no_args_is_help=True)

CLI_CONSOLE = themed_console(highlight=False)


@dataclass
class CLIState:
    verbose: bool = False
    config_path: Path | None = None


def styled_echo(message: str = "", *, nl: bool = True, markup: bool = True) -> None:
    """Print using the jdktools themed console."""
    CLI_CONSOLE.print(message, end="" if not nl else "\n", markup=markup, soft_wrap=True)


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() not in {"", "0", "false", "no"}


def _configure_logging(verbose: bool, log_dir: Path | None) -> None:
    root_logger = logging.getLogger()
    if verbose:
        if not root_logger.handlers:
            logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
        root_logger.setLevel(logging.DEBUG)
    else:
        if root_logger.handlers:
            root_logger.setLevel(logging.WARNING)
        else:
            logging.basicConfig(level=logging.WARNING, format="%(message)s")
    if verbose and log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_dir / "jdktools.log", encoding="utf-8")
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logging.getLogger().addHandler(handler)


def _shell_status(status: int) -> int:
    # POSIX children killed by signal N report -N
    return 128 - status if status < 0 else status


def _load_config(state: CLIState, backend: str | None = None) -> ToolsConfig:
    try:
        config = load_config(state.config_path)
        if backend is not None:
            config = ToolsConfig(**{**config.model_dump(), "backend": backend})
    except (ConfigurationError, ValueError) as exc:
        styled_echo(f"[jdktools.error]Invalid configuration:[/] {escape(str(exc))}")
        raise typer.Exit(code=EXIT_USAGE) from exc
    return config


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),  # noqa: B008
    config: Optional[Path] = typer.Option(None, "--config", help="Use an alternate config file and skip project overrides"),  # noqa: B008
) -> None:
    verbose = verbose or _env_flag("JDKTOOLS_DEBUG")
    log_dir = DEFAULT_CONFIG_DIR / "logs" if _env_flag("JDKTOOLS_LOG_FILE") else None
    _configure_logging(verbose, log_dir)
    ctx.obj = CLIState(verbose=verbose, config_path=config)


@app.command(
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True, "allow_interspersed_args": False}
)
def run(
    ctx: typer.Context,
    tool: str = typer.Argument(..., help="Tool name, e.g. javap or jpackage"),  # noqa: B008
    arguments: Optional[list[str]] = typer.Argument(None, help="Arguments passed to the tool unchanged"),  # noqa: B008
    backend: Optional[str] = typer.Option(None, "--backend", help="Override the configured backend (subprocess|provider)"),  # noqa: B008
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Terminate a subprocess tool after this many seconds"),  # noqa: B008
) -> None:
    """Run TOOL with ARGUMENTS and exit with the tool's status code."""
    state: CLIState = ctx.obj or CLIState()
    config = _load_config(state, backend)
    handle = default_tool(tool, config)
    if timeout is not None and not isinstance(handle, SubprocessTool):
        styled_echo("[jdktools.error]--timeout is only supported for subprocess tools[/]")
        raise typer.Exit(code=EXIT_USAGE)
    runner = ToolRunner(handle, ToolArguments(arguments or []))
    logger.debug("Running %s via %s backend", tool, config.backend)
    try:
        runner.run(timeout=timeout)
    except ExitStatusError as exc:
        logger.debug("%s", exc)
        raise typer.Exit(code=_shell_status(exc.status)) from exc
    except ToolResolutionError as exc:
        styled_echo(f"[jdktools.error]{escape(str(exc))}[/]")
        raise typer.Exit(code=EXIT_RESOLUTION_FAILED) from exc
    except ToolCancelledError as exc:
        styled_echo(f"[jdktools.warning]{escape(str(exc))}[/]")
        raise typer.Exit(code=EXIT_CANCELLED) from exc


@app.command()
def which(
    ctx: typer.Context,
    tool: str = typer.Argument(..., help="Tool name to resolve"),  # noqa: B008
    backend: Optional[str] = typer.Option(None, "--backend", help="Override the configured backend (subprocess|provider)"),  # noqa: B008
) -> None:
    """Show where TOOL would be run from."""
    state: CLIState = ctx.obj or CLIState()
    handle = default_tool(tool, _load_config(state, backend))
    try:
        if isinstance(handle, SubprocessTool):
            location = handle.resolve()
        elif isinstance(handle, ProviderTool):
            provider = handle.resolve()
            location = f"provider:{provider.name}"
        else:  # pragma: no cover - only two handle kinds exist
            location = repr(handle)
    except ToolResolutionError as exc:
        styled_echo(f"[jdktools.error]{escape(str(exc))}[/]")
        raise typer.Exit(code=EXIT_RESOLUTION_FAILED) from exc
    styled_echo(f"[jdktools.tool]{tool}[/] [jdktools.path]{location}[/]")


@app.command("config")
def show_config(
    ctx: typer.Context,
    init: bool = typer.Option(False, "--init", help="Write the default configuration file"),  # noqa: B008
) -> None:
    """Print the effective configuration."""
    state: CLIState = ctx.obj or CLIState()
    if init:
        manager = ConfigManager(config_dir=Path(os.environ.get("JDKTOOLS_HOME", DEFAULT_CONFIG_DIR)))
        if manager.config_path.exists():
            styled_echo(f"[jdktools.warning]Config already exists at {manager.config_path}[/]")
            raise typer.Exit(code=1)
        path = manager.save(ToolsConfig())
        styled_echo(f"[jdktools.success]Configuration written to {path}[/]")
        return
    config = _load_config(state)
    styled_echo(tomli_w.dumps(config.model_dump(exclude_none=True)), nl=False, markup=False)


@app.command()
def version() -> None:
    """Show CLI version."""
    try:
        pkg_version = metadata.version("jdktools")
    except metadata.PackageNotFoundError:
        pkg_version = "0.0.0"
    styled_echo(f"jdktools version {pkg_version}")


def main() -> None:
    """Console script entrypoint."""
    app()


__all__ = ["app", "main"]
