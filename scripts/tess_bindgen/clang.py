"""
Header parsing through clang's JSON AST dump

    clang++ -x c -Xclang -ast-dump=json -fsyntax-only -I <dir> header.h

Set CLANGPP to use a specific clang++ binary.
"""

import json
import os
import subprocess
from pathlib import Path
from typing import Optional

from .errors import ParseError
from .ir import IR


class ClangAstParser:
    """Runs clang on a header and reads the AST into IR"""

    def __init__(self, clangpp: Optional[str] = None, std: str = 'c++17'):
        self.clangpp = clangpp or os.environ.get('CLANGPP', 'clang++')
        self.std = std

    def command(self, header: str, include_dirs: list[str], cpp: bool = False) -> list[str]:
        cmd = [self.clangpp, '-x', 'c++' if cpp else 'c']
        if cpp:
            cmd.append(f'-std={self.std}')
        cmd += ['-Xclang', '-ast-dump=json', '-fsyntax-only']
        for path in include_dirs:
            cmd.append(f'-I{path}')
        cmd.append(str(header))
        return cmd

    def dump_ast(self, header: str, include_dirs: list[str], cpp: bool = False) -> dict:
        """Run clang and return the TranslationUnitDecl as a dict"""
        if not Path(header).is_file():
            raise ParseError(f'header not found: {header}')

        cmd = self.command(header, include_dirs, cpp)
        try:
            result = subprocess.run(cmd, capture_output=True)
        except FileNotFoundError:
            raise ParseError(f'{self.clangpp} not found; install clang or set CLANGPP') from None
        if result.returncode != 0:
            errors = result.stderr.decode('utf-8', errors='replace').strip()
            raise ParseError(f'clang failed to parse {header}:\n{errors}')

        try:
            return json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise ParseError(f'unreadable AST for {header}: {e}') from None

    def parse(self, header: str, include_dirs: list[str], cpp: bool = False) -> IR:
        """Parse a header into IR"""
        return IR.from_ast(self.dump_ast(header, include_dirs, cpp))
