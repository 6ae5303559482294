"""
pkg-config probing

Thin wrapper around the pkg-config binary. Set PKG_CONFIG to use a different
binary and PKG_CONFIG_PATH to point at a non-standard install prefix, e.g.

    export PKG_CONFIG_PATH=/opt/tesseract/lib/pkgconfig
"""

import os
import shlex
import subprocess
from dataclasses import dataclass, field
from typing import Optional

from .errors import DiscoveryError


@dataclass
class PkgConfigLibrary:
    """What pkg-config reports for a package"""
    name: str
    version: str
    include_paths: list[str] = field(default_factory=list)
    link_paths: list[str] = field(default_factory=list)
    libs: list[str] = field(default_factory=list)


def _run(args: list[str], env: dict) -> str:
    binary = env.get('PKG_CONFIG', 'pkg-config')
    try:
        result = subprocess.run([binary, *args], capture_output=True, text=True, env=env)
    except FileNotFoundError:
        raise DiscoveryError(f'{binary} not found; install pkg-config or set PKG_CONFIG') from None
    if result.returncode != 0:
        message = (result.stderr or result.stdout).strip()
        raise DiscoveryError(f'`{binary} {" ".join(args)}` failed: {message}')
    return result.stdout.strip()


def probe(package: str, atleast_version: Optional[str] = None,
          env: Optional[dict] = None) -> PkgConfigLibrary:
    """Query pkg-config for a package

    Raises DiscoveryError if the package is unknown or older than
    atleast_version.
    """
    env = dict(os.environ if env is None else env)

    if atleast_version:
        try:
            _run(['--print-errors', '--atleast-version', atleast_version, package], env)
        except DiscoveryError as e:
            raise DiscoveryError(
                f'{package} >= {atleast_version} not found via pkg-config ({e})') from None
    else:
        _run(['--print-errors', '--exists', package], env)

    version = _run(['--modversion', package], env)
    flags = shlex.split(_run(['--cflags', '--libs', package], env))

    lib = PkgConfigLibrary(name=package, version=version)
    for flag in flags:
        if flag.startswith('-I'):
            lib.include_paths.append(flag[2:])
        elif flag.startswith('-L'):
            lib.link_paths.append(flag[2:])
        elif flag.startswith('-l'):
            lib.libs.append(flag[2:])
    return lib
