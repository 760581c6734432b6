"""Console styling for the jdktools CLI."""

from __future__ import annotations

from rich.console import Console
from rich.theme import Theme

JDKTOOLS_THEME = Theme(
    {
        "jdktools.tool": "bold #38BDF8",
        "jdktools.path": "#E6FFFA",
        "jdktools.success": "bold #14F195",
        "jdktools.warning": "bold #FACC15",
        "jdktools.error": "bold #F87171",
        "jdktools.muted": "#94A3B8",
    }
)


def themed_console(**kwargs: object) -> Console:
    """Return a Console configured with the jdktools theme."""
    return Console(theme=JDKTOOLS_THEME, **kwargs)


__all__ = ["JDKTOOLS_THEME", "themed_console"]
