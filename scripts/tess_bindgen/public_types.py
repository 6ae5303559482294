"""
Public enum binding generation

Exposes the engine's public configuration enums (tesseract/publictypes.h) as
enum.IntEnum classes. Names are generated namespace-qualified
(tesseract_PageSegMode) and the namespace token is then stripped from the whole
text, leaving PageSegMode.

macOS clang cannot evaluate the constexpr constants in that header, so on
macOS the committed, hand-maintained module is used verbatim instead.
"""

from pathlib import Path
from typing import TYPE_CHECKING

from .codegen import CodeGen, mangle
from .enum import EnumGenerator
from .errors import ParseError
from .locator import Platform

if TYPE_CHECKING:
    from .clang import ClangAstParser
    from .config import GeneratorConfig
    from .ir import IR

# Platforms whose system clang cannot parse the header
PRECOMPUTED_PLATFORMS = (Platform.MACOS,)


class PublicTypesGenerator:
    """Generates the public enum module from parsed IR"""

    def __init__(self, config: 'GeneratorConfig', ir: 'IR'):
        self.config = config
        self.ir = ir
        self.enum_gen = EnumGenerator(prefix_items=True)

    def _in_namespace(self, name: str) -> bool:
        namespace = self.config.policy.namespace
        return not namespace or name.startswith(namespace + '::')

    def generate(self) -> str:
        policy = self.config.policy
        missing = [name for name in policy.native_enums if name not in self.ir.enums]
        if missing:
            raise ParseError(
                f'enums {", ".join(missing)} not found in {self.config.header_path}')

        gen = CodeGen()
        header_name = self.config.header_path.replace('\\', '/').rsplit('/', 1)[-1]
        gen.line(f'# machine generated by tess_bindgen from {header_name}, do not edit')
        gen.line('import enum')
        gen.line()
        gen.line()

        consts = [v for name, v in self.ir.vars.items()
                  if v.is_constexpr and self._in_namespace(name)
                  and not self.config.blocks_item(name)]
        unevaluated = [v.name for v in consts if v.value is None]
        if unevaluated:
            raise ParseError(
                f'constants {", ".join(unevaluated)} could not be evaluated in {self.config.header_path}')
        if consts:
            for var in consts:
                gen.line(f'{mangle(var.name)} = {var.value}')
            gen.line()
            gen.line()

        for name, enum in self.ir.enums.items():
            if not self._in_namespace(name) or self.config.blocks_item(name):
                continue
            if name in policy.native_enums:
                self.enum_gen.generate_native(enum, gen)
            else:
                self.enum_gen.generate_consts(enum, gen, 'int')
                gen.line()

        text = gen.output().rstrip('\n') + '\n'
        if policy.strip_token:
            text = text.replace(policy.strip_token, '')
        return text


def load_precomputed(path: str) -> str:
    """Read the committed bindings byte for byte"""
    try:
        return Path(path).read_bytes().decode('utf-8')
    except OSError as e:
        raise ParseError(f'precomputed bindings not readable: {e}') from None


def generate_enum_bindings(config: 'GeneratorConfig', parser: 'ClangAstParser',
                           platform: Platform, precomputed: str) -> str:
    """Generate the public enum module text for a platform"""
    if platform in PRECOMPUTED_PLATFORMS:
        return load_precomputed(precomputed)

    ir = parser.parse(config.header_path, list(config.extra_include_dirs), cpp=config.policy.cpp)
    if ir.is_empty():
        raise ParseError(f'no declarations found in {config.header_path}')
    return PublicTypesGenerator(config, ir).generate()
