"""Arguments and runner for ``jlink``, the runtime image linker."""

from __future__ import annotations

import os
from typing import Any

from typing_extensions import Self

from jdktools.core.arguments import ToolArguments, flatten_values, to_argument_string
from jdktools.core.runner import ToolRunner


class JLinkArguments(ToolArguments):
    """Builder for ``jlink`` command lines.

    Module lists are joined with commas; module paths use the platform path
    separator, as ``jlink`` expects.
    """

    def argument_file(self, filename: Any) -> Self:
        return self.add("@" + to_argument_string(filename))

    def add_modules(self, *modules: Any) -> Self:
        return self.joined_option("--add-modules", flatten_values(modules), ",")

    def bind_services(self) -> Self:
        return self.flag("--bind-services")

    def compress(self, level: Any) -> Self:
        return self.option("--compress", level)

    def disable_plugin(self, plugin_name: Any) -> Self:
        return self.option("--disable-plugin", plugin_name)

    def endian(self, byte_order: Any) -> Self:
        return self.option("--endian", byte_order)

    def help(self) -> Self:
        return self.flag("--help")

    def h(self) -> Self:
        return self.flag("-h")

    def ignore_signing_information(self) -> Self:
        return self.flag("--ignore-signing-information")

    def launcher(self, command: Any, module: Any, main_class: Any = None) -> Self:
        """Add ``--launcher <command>=<module>[/<main class>]``."""
        target = to_argument_string(module)
        if main_class is not None:
            target += "/" + to_argument_string(main_class)
        return self.option("--launcher", to_argument_string(command) + "=" + target)

    def limit_modules(self, *modules: Any) -> Self:
        return self.joined_option("--limit-modules", flatten_values(modules), ",")

    def list_plugins(self) -> Self:
        return self.flag("--list-plugins")

    def module_path(self, *paths: Any) -> Self:
        return self.joined_option("--module-path", flatten_values(paths), os.pathsep)

    def p(self, *paths: Any) -> Self:
        return self.joined_option("-p", flatten_values(paths), os.pathsep)

    def no_header_files(self) -> Self:
        return self.flag("--no-header-files")

    def no_man_pages(self) -> Self:
        return self.flag("--no-man-pages")

    def output(self, path: Any) -> Self:
        return self.option("--output", path)

    def save_opts(self, filename: Any) -> Self:
        return self.option("--save-opts", filename)

    def strip_debug(self) -> Self:
        return self.flag("--strip-debug")

    def strip_native_commands(self) -> Self:
        return self.flag("--strip-native-commands")

    def generate_cds_archive(self) -> Self:
        return self.flag("--generate-cds-archive")

    def include_locales(self, *locales: Any) -> Self:
        return self.add("--include-locales=" + ",".join(to_argument_string(value) for value in flatten_values(locales)))

    def dedup_legal_notices(self, mode: Any = "error-if-not-same-content") -> Self:
        return self.add("--dedup-legal-notices=" + to_argument_string(mode))

    def suggest_providers(self, *names: Any) -> Self:
        # Names are optional for this flag.
        self.flag("--suggest-providers")
        values = flatten_values(names)
        if values:
            self.add(",".join(to_argument_string(value) for value in values))
        return self

    def verbose(self) -> Self:
        return self.flag("--verbose")

    def v(self) -> Self:
        return self.flag("-v")

    def version(self) -> Self:
        return self.flag("--version")


class JLink(ToolRunner[JLinkArguments]):
    tool_name = "jlink"
    arguments_type = JLinkArguments


__all__ = ["JLink", "JLinkArguments"]
