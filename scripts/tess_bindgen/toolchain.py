"""
Build toolchain directives

Discovery strategies talk to the surrounding build through directives:
prefixed key=value lines on stdout, e.g.

    build:link-search=native=/opt/tesseract/lib
    build:link-lib=tesseract

Lines without the prefix are progress output and are ignored by the build.
"""

import sys
from dataclasses import dataclass
from typing import Optional, TextIO

DIRECTIVE_PREFIX = 'build:'


@dataclass(frozen=True)
class Directive:
    """A single build directive"""
    key: str
    value: str

    def __str__(self) -> str:
        return f'{self.key}={self.value}'


class Toolchain:
    """Emits directives; the emitted ones are kept in `directives`"""

    def __init__(self, prefix: str = DIRECTIVE_PREFIX, stream: Optional[TextIO] = None):
        self.prefix = prefix
        self.stream = stream
        self.directives: list[Directive] = []

    def emit(self, key: str, value: str):
        directive = Directive(key, value)
        self.directives.append(directive)
        print(f'{self.prefix}{directive}', file=self.stream or sys.stdout)

    def link_search(self, path: str, kind: str = 'native'):
        """Add a directory to the linker search path"""
        path = str(path)
        self.emit('link-search', f'{kind}={path}' if kind else path)

    def link_lib(self, name: str):
        """Link against a library by name"""
        self.emit('link-lib', name)

    def rerun_if_env_changed(self, var: str):
        self.emit('rerun-if-env-changed', var)

