"""Registry of tools that run inside the current process."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from importlib import metadata
from typing import Callable, Sequence, TextIO

from jdktools.core.errors import ProviderAlreadyRegisteredError, ProviderNotFoundError

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "jdktools.providers"

ProviderHandler = Callable[[TextIO, TextIO, Sequence[str]], int]


@dataclass(frozen=True, slots=True)
class ToolProvider:
    """An in-process implementation of a command-line tool."""

    name: str
    handler: ProviderHandler
    description: str = ""

    def run(self, stdout: TextIO, stderr: TextIO, arguments: Sequence[str]) -> int:
        return int(self.handler(stdout, stderr, list(arguments)))


class ProviderRegistry:
    """Stores tool providers keyed by tool name."""

    def __init__(self, providers: list[ToolProvider] | None = None) -> None:
        self._providers: dict[str, ToolProvider] = {}
        self._lock = threading.RLock()
        if providers:
            for provider in providers:
                self.register(provider)

    def register(self, provider: ToolProvider, *, overwrite: bool = False) -> None:
        with self._lock:
            if not overwrite and provider.name in self._providers:
                raise ProviderAlreadyRegisteredError(
                    f"Tool provider '{provider.name}' already registered"
                )
            self._providers[provider.name] = provider
        logger.debug("Registered tool provider: %s", provider.name)

    def register_function(
        self,
        name: str,
        handler: ProviderHandler,
        *,
        description: str = "",
        overwrite: bool = False,
    ) -> ToolProvider:
        provider = ToolProvider(name=name, handler=handler, description=description)
        self.register(provider, overwrite=overwrite)
        return provider

    def unregister(self, name: str) -> None:
        with self._lock:
            self._providers.pop(name, None)

    def find(self, name: str) -> ToolProvider | None:
        with self._lock:
            return self._providers.get(name)

    def get(self, name: str) -> ToolProvider:
        provider = self.find(name)
        if provider is None:
            raise ProviderNotFoundError(name)
        return provider

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._providers

    def available_providers(self) -> dict[str, ToolProvider]:
        with self._lock:
            return dict(self._providers)

    def load_entry_points(self, group: str = ENTRY_POINT_GROUP) -> list[str]:
        """Register providers advertised by installed distributions.

        Each entry point must load to either a ``ToolProvider`` or a handler
        callable; the entry point name is used as the tool name for the latter.
        Names that are already registered are left untouched, and entry points
        that fail to load are skipped.
        """
        loaded: list[str] = []
        for entry_point in metadata.entry_points(group=group):
            if entry_point.name in self:
                continue
            try:
                target = entry_point.load()
            except Exception as exc:  # noqa: BLE001
                logger.debug("Skipping provider entry point %s: %s", entry_point.name, exc)
                continue
            if isinstance(target, ToolProvider):
                provider = target
            else:
                provider = ToolProvider(name=entry_point.name, handler=target)
            try:
                self.register(provider)
            except ProviderAlreadyRegisteredError:
                continue
            loaded.append(provider.name)
        return loaded


_DEFAULT_REGISTRY = ProviderRegistry()


def default_registry() -> ProviderRegistry:
    """Return the process-wide provider registry."""
    return _DEFAULT_REGISTRY


__all__ = [
    "ENTRY_POINT_GROUP",
    "ProviderHandler",
    "ProviderRegistry",
    "ToolProvider",
    "default_registry",
]
