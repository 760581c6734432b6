"""Arguments and runner for ``javap``, the class file disassembler."""

from __future__ import annotations

import os
from typing import Any

from typing_extensions import Self

from jdktools.core.arguments import ToolArguments, flatten_values, to_argument_string
from jdktools.core.runner import ToolRunner


class JavapArguments(ToolArguments):
    """Builder for ``javap`` command lines."""

    def help(self) -> Self:
        return self.flag("--help")

    def question(self) -> Self:
        return self.flag("-?")

    def version(self) -> Self:
        return self.flag("-version")

    def verbose(self) -> Self:
        return self.flag("-verbose")

    def v(self) -> Self:
        return self.flag("-v")

    def l(self) -> Self:  # noqa: E743
        """Print line number and local variable tables."""
        return self.flag("-l")

    def public(self) -> Self:
        return self.flag("-public")

    def protected(self) -> Self:
        return self.flag("-protected")

    def package(self) -> Self:
        return self.flag("-package")

    def private(self) -> Self:
        return self.flag("-private")

    def p(self) -> Self:
        return self.flag("-p")

    def c(self) -> Self:
        """Disassemble the code."""
        return self.flag("-c")

    def s(self) -> Self:
        """Print internal type signatures."""
        return self.flag("-s")

    def sysinfo(self) -> Self:
        return self.flag("-sysinfo")

    def verify(self) -> Self:
        return self.flag("-verify")

    def constants(self) -> Self:
        return self.flag("-constants")

    def module(self, module: Any) -> Self:
        return self.option("--module", module)

    def m(self, module: Any) -> Self:
        return self.option("-m", module)

    def module_path(self, *paths: Any) -> Self:
        return self.joined_option("--module-path", flatten_values(paths), os.pathsep)

    def system(self, jdk: Any) -> Self:
        return self.option("--system", jdk)

    def class_path(self, *paths: Any) -> Self:
        return self.joined_option("--class-path", flatten_values(paths), os.pathsep)

    def classpath(self, *paths: Any) -> Self:
        return self.joined_option("-classpath", flatten_values(paths), os.pathsep)

    def cp(self, *paths: Any) -> Self:
        return self.joined_option("-cp", flatten_values(paths), os.pathsep)

    def bootclasspath(self, *paths: Any) -> Self:
        return self.joined_option("-bootclasspath", flatten_values(paths), os.pathsep)

    def multi_release(self, version: Any) -> Self:
        return self.option("--multi-release", version)

    def j(self, flag: Any) -> Self:
        """Pass ``flag`` to the runtime as ``-J<flag>``."""
        return self.add("-J" + to_argument_string(flag))

    def classes(self, *class_names: Any) -> Self:
        """Append each class name, file or URL as its own token."""
        return self.add_all(*flatten_values(class_names))


class Javap(ToolRunner[JavapArguments]):
    tool_name = "javap"
    arguments_type = JavapArguments


__all__ = ["Javap", "JavapArguments"]
