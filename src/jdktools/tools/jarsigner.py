"""Arguments and runner for ``jarsigner``, the JAR signing and verification tool."""

from __future__ import annotations

import os
from typing import Any

from typing_extensions import Self

from jdktools.core.arguments import ToolArguments, flatten_values, to_argument_string
from jdktools.core.runner import ToolRunner


class JarSignerArguments(ToolArguments):
    """Builder for ``jarsigner`` command lines.

    Options come first; finish with ``jar_file`` and optionally ``alias``::

        JarSignerArguments().keystore("ks.p12").storepass("secret").jar_file("app.jar").alias("me")
    """

    def keystore(self, url: Any) -> Self:
        return self.option("-keystore", url)

    def storepass(self, password: Any) -> Self:
        return self.option("-storepass", password)

    def storetype(self, store_type: Any) -> Self:
        return self.option("-storetype", store_type)

    def keypass(self, password: Any) -> Self:
        return self.option("-keypass", password)

    def certchain(self, file: Any) -> Self:
        return self.option("-certchain", file)

    def sigfile(self, file: Any) -> Self:
        return self.option("-sigfile", file)

    def signedjar(self, file: Any) -> Self:
        return self.option("-signedjar", file)

    def digestalg(self, algorithm: Any) -> Self:
        return self.option("-digestalg", algorithm)

    def sigalg(self, algorithm: Any) -> Self:
        return self.option("-sigalg", algorithm)

    def verify(self) -> Self:
        return self.flag("-verify")

    def version(self) -> Self:
        return self.flag("-version")

    def verbose(self, suboptions: Any = None) -> Self:
        """``-verbose`` or ``-verbose:<all|grouped|summary>`` as one token."""
        if suboptions is None:
            return self.flag("-verbose")
        return self.add("-verbose:" + to_argument_string(suboptions))

    def certs(self) -> Self:
        return self.flag("-certs")

    def rev_check(self) -> Self:
        return self.flag("-revCheck")

    def tsa(self, url: Any) -> Self:
        return self.option("-tsa", url)

    def tsacert(self, alias: Any) -> Self:
        return self.option("-tsacert", alias)

    def tsapolicyid(self, oid: Any) -> Self:
        return self.option("-tsapolicyid", oid)

    def tsadigestalg(self, algorithm: Any) -> Self:
        return self.option("-tsadigestalg", algorithm)

    def internalsf(self) -> Self:
        return self.flag("-internalsf")

    def sectionsonly(self) -> Self:
        return self.flag("-sectionsonly")

    def protected(self) -> Self:
        return self.flag("-protected")

    def provider_name(self, name: Any) -> Self:
        return self.option("-providerName", name)

    def add_provider(self, name: Any, provider_arg: Any = None) -> Self:
        self.option("-addprovider", name)
        if provider_arg is not None:
            self.option("-providerArg", provider_arg)
        return self

    def provider_class(self, class_name: Any, provider_arg: Any = None) -> Self:
        self.option("-providerClass", class_name)
        if provider_arg is not None:
            self.option("-providerArg", provider_arg)
        return self

    def provider_path(self, *paths: Any) -> Self:
        return self.joined_option("-providerPath", flatten_values(paths), os.pathsep)

    def strict(self) -> Self:
        return self.flag("-strict")

    def conf(self, url: Any) -> Self:
        return self.option("-conf", url)

    def help(self) -> Self:
        return self.flag("--help")

    def jar_file(self, path: Any) -> Self:
        return self.add(path)

    def alias(self, *aliases: Any) -> Self:
        return self.add_all(*flatten_values(aliases))


class JarSigner(ToolRunner[JarSignerArguments]):
    tool_name = "jarsigner"
    arguments_type = JarSignerArguments


__all__ = ["JarSigner", "JarSignerArguments"]
