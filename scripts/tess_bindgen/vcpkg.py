"""
vcpkg package lookup

Reads vcpkg's installed-package database directly:

    <root>/installed/vcpkg/status          base database
    <root>/installed/vcpkg/updates/*       incremental updates, applied in order
    <root>/installed/vcpkg/info/*.list     files installed by each package
    <root>/installed/<triplet>/include
    <root>/installed/<triplet>/lib

The root comes from VCPKG_ROOT (or VCPKG_INSTALLATION_ROOT, which CI images
set) and the triplet from VCPKG_DEFAULT_TRIPLET.
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .errors import DiscoveryError

DEFAULT_TRIPLET = 'x64-windows'


@dataclass
class VcpkgLibrary:
    """Include/link information for a package and its dependencies"""
    name: str
    triplet: str
    include_paths: list[str] = field(default_factory=list)
    link_paths: list[str] = field(default_factory=list)
    libs: list[str] = field(default_factory=list)


def find_root(env: dict) -> Path:
    for var in ('VCPKG_ROOT', 'VCPKG_INSTALLATION_ROOT'):
        value = env.get(var)
        if value:
            return Path(value)
    raise DiscoveryError('vcpkg root not found; set VCPKG_ROOT')


def _parse_paragraphs(text: str) -> list[dict[str, str]]:
    """Parse control-file style paragraphs separated by blank lines"""
    paragraphs = []
    current: dict[str, str] = {}
    key = None
    for line in text.splitlines():
        if not line.strip():
            if current:
                paragraphs.append(current)
            current, key = {}, None
        elif line[0] in ' \t' and key:
            # Continuation line
            current[key] += ' ' + line.strip()
        else:
            key, _, value = line.partition(':')
            key = key.strip()
            current[key] = value.strip()
    if current:
        paragraphs.append(current)
    return paragraphs


def load_status(root: Path) -> dict[tuple[str, str], dict[str, str]]:
    """Load installed packages keyed by (package, triplet)"""
    db_dir = root / 'installed' / 'vcpkg'
    status_file = db_dir / 'status'
    if not status_file.is_file():
        raise DiscoveryError(f'vcpkg status database not found at {status_file}')

    files = [status_file]
    updates = db_dir / 'updates'
    if updates.is_dir():
        files.extend(sorted(p for p in updates.iterdir() if p.is_file()))

    packages: dict[tuple[str, str], dict[str, str]] = {}
    for path in files:
        for para in _parse_paragraphs(path.read_text(encoding='utf-8')):
            if 'Package' not in para or 'Feature' in para:
                continue
            key = (para['Package'], para.get('Architecture', ''))
            if para.get('Status', '').endswith(' installed'):
                packages[key] = para
            else:
                packages.pop(key, None)
    return packages


def _split_depends(depends: str) -> list[str]:
    names = []
    for dep in depends.split(','):
        # "zlib", "vcpkg-cmake:x64-windows", "libarchive (windows)"
        dep = re.sub(r'\(.*?\)', '', dep).strip()
        if dep:
            names.append(dep.split(':')[0].strip())
    return names


def _lib_names(root: Path, para: dict[str, str], triplet: str) -> list[str]:
    info = root / 'installed' / 'vcpkg' / 'info'
    pattern = f'{para["Package"]}_*_{triplet}.list'
    lists = sorted(info.glob(pattern)) if info.is_dir() else []
    names = []
    for list_file in lists:
        for line in list_file.read_text(encoding='utf-8').splitlines():
            line = line.strip()
            if not line.startswith(f'{triplet}/lib/') or line.count('/') != 2:
                continue
            filename = line.rsplit('/', 1)[1]
            if filename.endswith('.lib'):
                names.append(filename[:-4])
            elif filename.endswith('.a'):
                stem = filename[:-2]
                names.append(stem[3:] if stem.startswith('lib') else stem)
    return names


def find_package(name: str, env: Optional[dict] = None) -> VcpkgLibrary:
    """Find an installed vcpkg package and its transitive dependencies"""
    env = dict(os.environ if env is None else env)
    root = find_root(env)
    triplet = env.get('VCPKG_DEFAULT_TRIPLET') or DEFAULT_TRIPLET
    packages = load_status(root)

    if (name, triplet) not in packages:
        raise DiscoveryError(
            f'vcpkg package {name}:{triplet} is not installed under {root} '
            f'(try `vcpkg install {name}:{triplet}`)')

    installed = root / 'installed' / triplet
    lib = VcpkgLibrary(
        name=name,
        triplet=triplet,
        include_paths=[str(installed / 'include')],
        link_paths=[str(installed / 'lib')],
    )

    # Walk the dependency closure; host-only tools may be missing for this triplet
    seen = set()
    pending = [name]
    while pending:
        pkg = pending.pop(0)
        if pkg in seen:
            continue
        seen.add(pkg)
        para = packages.get((pkg, triplet))
        if para is None:
            continue
        for lib_name in _lib_names(root, para, triplet):
            if lib_name not in lib.libs:
                lib.libs.append(lib_name)
        pending.extend(_split_depends(para.get('Depends', '')))

    return lib
