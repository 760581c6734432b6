"""Argument catalogs and runners for the JDK command-line tools."""

from .jarsigner import JarSigner, JarSignerArguments
from .javap import Javap, JavapArguments
from .jlink import JLink, JLinkArguments
from .jpackage import JPackage, JPackageArguments

DEFAULT_RUNNERS = {
    runner.tool_name: runner
    for runner in (Javap, JPackage, JLink, JarSigner)
}

__all__ = [
    "DEFAULT_RUNNERS",
    "JarSigner",
    "JarSignerArguments",
    "Javap",
    "JavapArguments",
    "JLink",
    "JLinkArguments",
    "JPackage",
    "JPackageArguments",
]
