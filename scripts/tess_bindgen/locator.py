"""
Library locator

Finds tesseract headers and link artifacts. One strategy is chosen per run:

    PackageManagerStrategy  Windows, vcpkg (or explicit env overrides)
    PkgConfigStrategy       macOS / Linux / FreeBSD
    BundledStrategy         prebuilt copy shipped under resources/libs/
    UnknownStrategy         anything else, link only

Each strategy emits its link directives to the toolchain before returning the
include paths the header parser needs.
"""

import os
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from . import pkgconfig, vcpkg
from .errors import DiscoveryError
from .toolchain import Toolchain

# Bundled engine release this code is built and tested against
TESSERACT_VERSION = '5.3.4'
LIBS_PATH = 'resources/libs/'

LIBRARY_NAME = 'tesseract'
PACKAGE_NAME = 'tesseract'
MIN_VERSION = '4.1'

ENV_INCLUDE_PATHS = 'TESSERACT_INCLUDE_PATHS'
ENV_LINK_PATHS = 'TESSERACT_LINK_PATHS'
ENV_LINK_LIBS = 'TESSERACT_LINK_LIBS'


class Platform(Enum):
    WINDOWS = 'windows'
    MACOS = 'macos'
    LINUX = 'linux'
    FREEBSD = 'freebsd'
    OTHER = 'other'

    @classmethod
    def detect(cls, name: Optional[str] = None) -> 'Platform':
        """Map sys.platform (or an explicit name) to a platform"""
        name = (name or sys.platform).lower()
        if name in ('win32', 'windows'):
            return cls.WINDOWS
        if name in ('darwin', 'macos'):
            return cls.MACOS
        if name.startswith('linux'):
            return cls.LINUX
        if name.startswith('freebsd'):
            return cls.FREEBSD
        return cls.OTHER


@dataclass
class DiscoveryResult:
    """Where the headers are and what was handed to the linker"""
    include_paths: list[str] = field(default_factory=list)
    link_search_paths: list[str] = field(default_factory=list)
    link_libraries: list[str] = field(default_factory=list)


class LocatorStrategy(ABC):
    """Base class for discovery strategies"""

    @abstractmethod
    def locate(self, toolchain: Toolchain) -> DiscoveryResult:
        pass

    @staticmethod
    def _link(toolchain: Toolchain, search_paths: list[str], libs: list[str],
              kind: str = 'native') -> tuple[list[str], list[str]]:
        for path in search_paths:
            toolchain.link_search(path, kind)
        for lib in libs:
            toolchain.link_lib(lib)
        return list(search_paths), list(libs)


class PackageManagerStrategy(LocatorStrategy):
    """vcpkg, unless all three TESSERACT_* overrides are set"""

    def __init__(self, env: Optional[dict] = None, delimiter: str = ','):
        self.env = os.environ if env is None else env
        self.delimiter = delimiter

    def _split(self, var: str) -> Optional[list[str]]:
        value = self.env.get(var)
        if value is None:
            return None
        return [part for part in value.split(self.delimiter) if part]

    def overrides(self) -> Optional[tuple[list[str], list[str], list[str]]]:
        """Explicit (include, link path, link lib) lists, or None unless all are set"""
        include_paths = self._split(ENV_INCLUDE_PATHS)
        link_paths = self._split(ENV_LINK_PATHS)
        link_libs = self._split(ENV_LINK_LIBS)
        if include_paths is None or link_paths is None or link_libs is None:
            return None
        return include_paths, link_paths, link_libs

    def locate(self, toolchain: Toolchain) -> DiscoveryResult:
        for var in (ENV_INCLUDE_PATHS, ENV_LINK_PATHS, ENV_LINK_LIBS):
            toolchain.rerun_if_env_changed(var)

        overrides = self.overrides()
        if overrides is not None:
            include_paths, link_paths, link_libs = overrides
            # Verbatim: no kind prefix on the search path
            search, libs = self._link(toolchain, link_paths, link_libs, kind='')
            return DiscoveryResult(include_paths, search, libs)

        lib = vcpkg.find_package(PACKAGE_NAME, env=self.env)
        search, libs = self._link(toolchain, lib.link_paths, lib.libs)
        return DiscoveryResult(list(lib.include_paths), search, libs)


def trim_include_path(path: str, folder: str = 'include') -> str:
    """Drop the last path component unless it already is `folder`

    pkg-config metadata sometimes points one level below the include root
    (e.g. /usr/include/leptonica) while sources include <leptonica/...>.
    """
    p = Path(path)
    if p.name == folder:
        return str(p)
    return str(p.parent)


class PkgConfigStrategy(LocatorStrategy):
    """pkg-config probe with a minimum version"""

    def __init__(self, env: Optional[dict] = None, min_version: str = MIN_VERSION,
                 trim_includes: bool = True, include_folder: str = 'include'):
        self.env = env
        self.min_version = min_version
        self.trim_includes = trim_includes
        self.include_folder = include_folder

    def locate(self, toolchain: Toolchain) -> DiscoveryResult:
        lib = pkgconfig.probe(PACKAGE_NAME, atleast_version=self.min_version, env=self.env)

        search_paths = lib.link_paths[:1]
        search, libs = self._link(toolchain, search_paths, [LIBRARY_NAME])

        include_paths = lib.include_paths
        if self.trim_includes:
            include_paths = [trim_include_path(p, self.include_folder) for p in include_paths]
        return DiscoveryResult(include_paths, search, libs)


def bundled_paths(base: str, version: str = TESSERACT_VERSION) -> tuple[Path, Path]:
    """Return (lib, include) directories of a bundled copy

    bundled_paths('resources/libs/', '5.3.4')
        -> resources/libs/tesseract/5.3.4/lib, resources/libs/tesseract/5.3.4/include
    """
    tesseract_dir = Path(base) / 'tesseract' / version
    return tesseract_dir / 'lib', tesseract_dir / 'include'


class BundledStrategy(LocatorStrategy):
    """Version-pinned prebuilt copy shipped with this project"""

    def __init__(self, root: Optional[str] = None, base: str = LIBS_PATH,
                 version: str = TESSERACT_VERSION):
        self.root = Path(root) if root is not None else Path.cwd()
        self.base = base
        self.version = version

    def paths(self) -> tuple[Path, Path]:
        return bundled_paths(str(self.root / self.base), self.version)

    def locate(self, toolchain: Toolchain) -> DiscoveryResult:
        lib_dir, include_dir = self.paths()
        version_dir = lib_dir.parent
        if not version_dir.is_dir():
            raise DiscoveryError(
                f'bundled tesseract {self.version} not found at {version_dir}')
        for sub in (lib_dir, include_dir):
            if not sub.is_dir():
                raise DiscoveryError(
                    f'bundled tesseract {self.version} is incomplete: missing {sub}')

        search, libs = self._link(toolchain, [str(lib_dir)], [LIBRARY_NAME])
        return DiscoveryResult([str(include_dir)], search, libs)


class UnknownStrategy(LocatorStrategy):
    """Assume the library is on the default linker path"""

    def locate(self, toolchain: Toolchain) -> DiscoveryResult:
        search, libs = self._link(toolchain, [], [LIBRARY_NAME])
        return DiscoveryResult([], search, libs)


def system_strategy(platform: Platform, env: Optional[dict] = None) -> LocatorStrategy:
    """Pick the system discovery strategy for a platform"""
    if platform is Platform.WINDOWS:
        return PackageManagerStrategy(env=env)
    if platform in (Platform.MACOS, Platform.LINUX, Platform.FREEBSD):
        return PkgConfigStrategy(env=env)
    return UnknownStrategy()


def locate(platform: Platform, toolchain: Toolchain, env: Optional[dict] = None) -> DiscoveryResult:
    """Locate an installed tesseract using the platform's system strategy"""
    return system_strategy(platform, env).locate(toolchain)
