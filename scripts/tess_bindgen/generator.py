"""
Main generator module

Runs the whole pipeline once: discovery, then both bindings, then the writes.
Both artifacts are generated in memory first and only then written, each
through a temporary file and a rename, so a failed run leaves neither behind.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

from .capi import generate_capi_bindings
from .clang import ClangAstParser
from .config import BindingPolicy, GeneratorConfig
from .locator import DiscoveryResult, LocatorStrategy, Platform
from .public_types import generate_enum_bindings
from .toolchain import Toolchain


class Generator:
    """Main binding generator"""

    def __init__(self, out_dir: str, platform: Platform,
                 toolchain: Optional[Toolchain] = None,
                 parser: Optional[ClangAstParser] = None):
        self.out_dir = Path(out_dir)
        self.platform = platform
        self.toolchain = toolchain or Toolchain()
        self.parser = parser or ClangAstParser()
        self.header_dir: Optional[str] = None
        self.precomputed: Optional[str] = None
        self.capi: Optional[BindingPolicy] = None
        self.public_types: Optional[BindingPolicy] = None

    def artifacts(self) -> list[Path]:
        return [self.out_dir / p.output for p in (self.capi, self.public_types) if p]

    def prepare(self):
        """Create the output directory and drop artifacts of earlier runs"""
        print('=== Generating tesseract bindings:')
        if self.capi is None or self.public_types is None:
            raise ValueError('generator is not configured')
        self.out_dir.mkdir(parents=True, exist_ok=True)
        for path in self.artifacts():
            if path.exists():
                path.unlink()

    def generate_all(self, strategy: LocatorStrategy) -> DiscoveryResult:
        """Locate the library and write both bindings"""
        self.prepare()

        discovery = strategy.locate(self.toolchain)
        print(f'  include paths: {", ".join(discovery.include_paths) or "(none)"}')

        capi_config = GeneratorConfig.build(self.capi, discovery.include_paths, self.header_dir)
        print(f'  {capi_config.header_path} => {self.capi.output}')
        capi_text = generate_capi_bindings(capi_config, self.parser, discovery)

        types_config = GeneratorConfig.build(
            self.public_types, discovery.include_paths, self.header_dir)
        print(f'  {types_config.header_path} => {self.public_types.output}')
        types_text = generate_enum_bindings(
            types_config, self.parser, self.platform, self.precomputed)

        self._write_all([
            (self.out_dir / self.capi.output, capi_text),
            (self.out_dir / self.public_types.output, types_text),
        ])
        return discovery

    def _write_all(self, outputs: list[tuple[Path, str]]):
        staged = []
        try:
            for path, text in outputs:
                fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f'.{path.name}.', suffix='.tmp')
                staged.append((tmp, path))
                with os.fdopen(fd, 'wb') as f:
                    f.write(text.encode('utf-8'))
            for tmp, path in staged:
                os.replace(tmp, path)
        except BaseException:
            for tmp, path in staged:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                if path.exists():
                    path.unlink()
            raise
