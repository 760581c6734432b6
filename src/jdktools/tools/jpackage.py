"""Arguments and runner for ``jpackage``, the native application packager."""

from __future__ import annotations

from typing import Any, Callable

from typing_extensions import Self

from jdktools.core.arguments import ToolArguments, flatten_values, to_argument_string
from jdktools.core.runner import ToolRunner
from jdktools.tools.jlink import JLinkArguments


class JPackageArguments(ToolArguments):
    """Builder for ``jpackage`` command lines.

    Path and module lists are joined into a single comma separated token;
    ``main_arguments`` and ``jlink_options`` join with spaces. Options that
    ``jpackage`` accepts more than once may simply be called again.
    """

    # Generic options

    def argument_file(self, filename: Any) -> Self:
        """Read options from ``@filename``."""
        return self.add("@" + to_argument_string(filename))

    def type(self, package_type: Any) -> Self:
        """Package type, e.g. ``app-image``, ``dmg``, ``deb``."""
        return self.option("--type", package_type)

    def t(self, package_type: Any) -> Self:
        return self.option("-t", package_type)

    def app_version(self, version: Any) -> Self:
        return self.option("--app-version", version)

    def copyright(self, copyright_text: Any) -> Self:
        return self.option("--copyright", copyright_text)

    def description(self, description: Any) -> Self:
        return self.option("--description", description)

    def help(self) -> Self:
        return self.flag("--help")

    def h(self) -> Self:
        return self.flag("-h")

    def icon(self, file_path: Any) -> Self:
        return self.option("--icon", file_path)

    def name(self, name: Any) -> Self:
        return self.option("--name", name)

    def n(self, name: Any) -> Self:
        return self.option("-n", name)

    def dest(self, destination_path: Any) -> Self:
        return self.option("--dest", destination_path)

    def d(self, destination_path: Any) -> Self:
        return self.option("-d", destination_path)

    def temp(self, directory_path: Any) -> Self:
        return self.option("--temp", directory_path)

    def vendor(self, vendor: Any) -> Self:
        return self.option("--vendor", vendor)

    def verbose(self) -> Self:
        return self.flag("--verbose")

    def version(self) -> Self:
        return self.flag("--version")

    # Runtime image

    def add_modules(self, *modules: Any) -> Self:
        return self.joined_option("--add-modules", flatten_values(modules), ",")

    def module_path(self, *paths: Any) -> Self:
        return self.joined_option("--module-path", flatten_values(paths), ",")

    def p(self, *paths: Any) -> Self:
        return self.joined_option("-p", flatten_values(paths), ",")

    def jlink_options(self, arguments: JLinkArguments | Callable[[JLinkArguments], Any]) -> Self:
        """Pass ``jlink`` options as one space separated token.

        Accepts a prepared ``JLinkArguments`` or a callable that configures a
        fresh one.
        """
        if not isinstance(arguments, JLinkArguments):
            configure = arguments
            arguments = JLinkArguments()
            configure(arguments)
        return self.joined_option("--jlink-options", arguments, " ")

    def runtime_image(self, directory_path: Any) -> Self:
        return self.option("--runtime-image", directory_path)

    # Application image

    def input(self, directory_path: Any) -> Self:
        return self.option("--input", directory_path)

    def i(self, directory_path: Any) -> Self:
        return self.option("-i", directory_path)

    def app_content(self, *paths: Any) -> Self:
        return self.joined_option("--app-content", flatten_values(paths), ",")

    # Application launchers

    def add_launcher(self, launcher_name: Any, file_path: Any) -> Self:
        return self.option("--add-launcher", to_argument_string(launcher_name) + "=" + to_argument_string(file_path))

    def main_arguments(self, *arguments: Any) -> Self:
        """Default arguments for the main class (``--arguments``)."""
        return self.joined_option("--arguments", flatten_values(arguments), " ")

    def java_options(self, options: Any) -> Self:
        return self.option("--java-options", options)

    def main_class(self, class_name: Any) -> Self:
        return self.option("--main-class", class_name)

    def main_jar(self, jar_file: Any) -> Self:
        return self.option("--main-jar", jar_file)

    def module(self, *modules: Any) -> Self:
        return self.joined_option("--module", flatten_values(modules), ",")

    def m(self, *modules: Any) -> Self:
        return self.joined_option("-m", flatten_values(modules), ",")

    # macOS

    def mac_package_identifier(self, identifier: Any) -> Self:
        return self.option("--mac-package-identifier", identifier)

    def mac_package_name(self, name: Any) -> Self:
        return self.option("--mac-package-name", name)

    def mac_package_signing_prefix(self, prefix: Any) -> Self:
        return self.option("--mac-package-signing-prefix", prefix)

    def mac_sign(self) -> Self:
        return self.flag("--mac-sign")

    def mac_signing_keychain(self, keychain_name: Any) -> Self:
        return self.option("--mac-signing-keychain", keychain_name)

    def mac_signing_key_user_name(self, team_name: Any) -> Self:
        return self.option("--mac-signing-key-user-name", team_name)

    def mac_app_image_sign_identity(self, identity: Any) -> Self:
        return self.option("--mac-app-image-sign-identity", identity)

    def mac_installer_sign_identity(self, identity: Any) -> Self:
        return self.option("--mac-installer-sign-identity", identity)

    def mac_app_store(self) -> Self:
        return self.flag("--mac-app-store")

    def mac_entitlements(self, file_path: Any) -> Self:
        return self.option("--mac-entitlements", file_path)

    def mac_app_category(self, category: Any) -> Self:
        return self.option("--mac-app-category", category)

    def mac_dmg_content(self, *paths: Any) -> Self:
        return self.joined_option("--mac-dmg-content", flatten_values(paths), ",")

    # Application package

    def about_url(self, url: Any) -> Self:
        return self.option("--about-url", url)

    def app_image(self, directory_path: Any) -> Self:
        return self.option("--app-image", directory_path)

    def file_associations(self, file_path: Any) -> Self:
        return self.option("--file-associations", file_path)

    def install_dir(self, directory_path: Any) -> Self:
        return self.option("--install-dir", directory_path)

    def license_file(self, file_path: Any) -> Self:
        return self.option("--license-file", file_path)

    def resource_dir(self, directory_path: Any) -> Self:
        return self.option("--resource-dir", directory_path)

    def launcher_as_service(self) -> Self:
        return self.flag("--launcher-as-service")

    # Linux

    def linux_package_name(self, name: Any) -> Self:
        return self.option("--linux-package-name", name)

    def linux_deb_maintainer(self, email: Any) -> Self:
        return self.option("--linux-deb-maintainer", email)

    def linux_menu_group(self, group: Any) -> Self:
        return self.option("--linux-menu-group", group)

    def linux_package_deps(self, dependencies: Any) -> Self:
        return self.option("--linux-package-deps", dependencies)

    def linux_rpm_license_type(self, license_type: Any) -> Self:
        return self.option("--linux-rpm-license-type", license_type)

    def linux_app_release(self, release: Any) -> Self:
        return self.option("--linux-app-release", release)

    def linux_app_category(self, category: Any) -> Self:
        return self.option("--linux-app-category", category)

    def linux_shortcut(self) -> Self:
        return self.flag("--linux-shortcut")

    # Windows

    def win_console(self) -> Self:
        return self.flag("--win-console")

    def win_dir_chooser(self) -> Self:
        return self.flag("--win-dir-chooser")

    def win_help_url(self, url: Any) -> Self:
        return self.option("--win-help-url", url)

    def win_menu(self) -> Self:
        return self.flag("--win-menu")

    def win_menu_group(self, group: Any) -> Self:
        return self.option("--win-menu-group", group)

    def win_per_user_install(self) -> Self:
        return self.flag("--win-per-user-install")

    def win_shortcut(self) -> Self:
        return self.flag("--win-shortcut")

    def win_shortcut_prompt(self) -> Self:
        return self.flag("--win-shortcut-prompt")

    def win_update_url(self, url: Any) -> Self:
        return self.option("--win-update-url", url)

    def win_upgrade_uuid(self, uuid: Any) -> Self:
        return self.option("--win-upgrade-uuid", uuid)


class JPackage(ToolRunner[JPackageArguments]):
    tool_name = "jpackage"
    arguments_type = JPackageArguments


__all__ = ["JPackage", "JPackageArguments"]
