"""Ordered argument vectors handed to tools."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from typing_extensions import Self


def to_argument_string(value: Any) -> str:
    """Render a single option value as one token; ``None`` becomes ``""``."""
    return "" if value is None else str(value)


def join_arguments(values: Iterable[Any], separator: str) -> str:
    return separator.join(to_argument_string(value) for value in values)


def flatten_values(values: tuple[Any, ...]) -> list[Any]:
    """Accept either ``f(a, b)`` or ``f([a, b])`` for list-valued options."""
    if len(values) == 1 and isinstance(values[0], Iterable) and not isinstance(values[0], (str, bytes)):
        return list(values[0])
    return list(values)


class ToolArguments:
    """Accumulates the exact token sequence passed to a tool."""

    def __init__(self, tokens: Iterable[Any] | None = None) -> None:
        self._tokens: list[str] = []
        if tokens is not None:
            for token in tokens:
                self.add(token)

    def add(self, token: Any) -> Self:
        self._tokens.append(to_argument_string(token))
        return self

    def add_all(self, *tokens: Any) -> Self:
        for token in flatten_values(tokens):
            self.add(token)
        return self

    def flag(self, flag: str) -> Self:
        return self.add(flag)

    def option(self, flag: str, value: Any) -> Self:
        """Append ``flag`` followed by its value token."""
        self._tokens.append(flag)
        self._tokens.append(to_argument_string(value))
        return self

    def joined_option(self, flag: str, values: Iterable[Any], separator: str) -> Self:
        """Append ``flag`` and a single token joining ``values``."""
        self._tokens.append(flag)
        self._tokens.append(join_arguments(values, separator))
        return self

    def tokens(self) -> list[str]:
        return list(self._tokens)

    def copy(self) -> Self:
        return type(self)(self._tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._tokens))

    def __len__(self) -> int:
        return len(self._tokens)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ToolArguments):
            return self._tokens == other._tokens
        if isinstance(other, list):
            return self._tokens == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._tokens!r})"


__all__ = ["ToolArguments", "flatten_values", "join_arguments", "to_argument_string"]
