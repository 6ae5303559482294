"""
C interface binding generation

Turns the engine's plain-C header into a ctypes module:

    opaque record classes        class TessBaseAPI(ctypes.Structure)
    enum aliases and constants   TessPageSegMode = ctypes.c_uint; PSM_AUTO = 3
    typedef aliases              BOOL = ctypes.c_int
    PROTOTYPES                   name -> (restype, argtypes)
    load_library()               finds the library using the link directives

Only allowlisted functions are bound, and only the types they reach are
emitted. Blocklisted types belong to another binding (leptonica, libc) and are
passed around as void pointers instead of being redefined here.
"""

from typing import Optional, TYPE_CHECKING

from .codegen import CodeGen, mangle
from .enum import EnumGenerator
from .errors import ParseError
from .func import FuncGenerator
from .types import TypeConverter

if TYPE_CHECKING:
    from .clang import ClangAstParser
    from .config import GeneratorConfig
    from .ir import IR
    from .locator import DiscoveryResult

LOADER = '''\
def _candidates(directory, name):
    if sys.platform == 'win32':
        patterns = [f'{name}.dll', f'lib{name}.dll']
    elif sys.platform == 'darwin':
        patterns = [f'lib{name}.dylib', f'lib{name}.*.dylib']
    else:
        patterns = [f'lib{name}.so', f'lib{name}.so.*']
    for pattern in patterns:
        yield from sorted(glob.glob(os.path.join(glob.escape(directory), pattern)))


def find_library(name=LIBRARY):
    """Locate a shared library in LINK_SEARCH_PATHS, then on the system path"""
    for directory in LINK_SEARCH_PATHS:
        for candidate in _candidates(directory, name):
            return candidate
    return ctypes.util.find_library(name)


def load_library(path=None):
    """Load the engine and apply PROTOTYPES to its exported functions"""
    if path is None:
        path = find_library()
        if path is None:
            raise OSError(f'cannot find {LIBRARY} in {LINK_SEARCH_PATHS} or on the system path')
    lib = ctypes.CDLL(path)
    for name, (restype, argtypes) in PROTOTYPES.items():
        func = getattr(lib, name)
        func.restype = restype
        if argtypes is not None:
            func.argtypes = argtypes
    return lib
'''


class CapiGenerator:
    """Generates the C interface ctypes module"""

    def __init__(self, config: 'GeneratorConfig', ir: 'IR'):
        self.config = config
        self.ir = ir
        self.type_conv = TypeConverter(ir, set(config.policy.blocklist_types))
        self.func_gen = FuncGenerator(self.type_conv)
        self.enum_gen = EnumGenerator()

    def functions(self):
        return [f for name, f in self.ir.funcs.items() if self.config.allows_function(name)]

    def generate(self, link_search_paths: list[str], link_libraries: list[str],
                 default_library: str = 'tesseract') -> str:
        funcs = self.functions()
        if not funcs:
            patterns = ', '.join(self.config.policy.allowlist_functions)
            raise ParseError(
                f'no functions matching {patterns} in {self.config.header_path}')

        prototypes = self.func_gen.collect(funcs)
        self.type_conv.resolve_used()
        used = self.type_conv.used

        gen = CodeGen()
        self._gen_header(gen, link_search_paths, link_libraries or [default_library])

        records = [r for name, r in self.ir.records.items() if name in used]
        for record in records:
            base = 'ctypes.Union' if record.tag == 'union' else 'ctypes.Structure'
            with gen.block(f'class {mangle(record.name)}({base}):'):
                gen.line('pass')
            gen.line()
            gen.line()

        for name, enum in self.ir.enums.items():
            if name in used:
                self.enum_gen.generate_consts(enum, gen, self.type_conv.enum_ctype(name))

        aliases = []
        for name in self.ir.typedefs:
            if name in used:
                target = self.type_conv.typedef_target(name)
                if target is not None:
                    aliases.append(f'{mangle(name)} = {target}')
        if aliases:
            gen.lines(*aliases)
            gen.line()

        for record in records:
            if not (record.is_complete and record.fields):
                continue
            with gen.block(f'{mangle(record.name)}._fields_ = [', ']'):
                for f in record.fields:
                    gen.line(f"('{f.name}', {self.type_conv.convert(f.type)}),")
            gen.line()

        gen.line()
        self.func_gen.generate(prototypes, gen)
        gen.line()
        gen.raw(LOADER.rstrip('\n'))
        return gen.output()

    def _gen_header(self, gen: CodeGen, search_paths: list[str], libraries: list[str]):
        header_name = self.config.header_path.replace('\\', '/').rsplit('/', 1)[-1]
        gen.line(f'# machine generated by tess_bindgen from {header_name}, do not edit')
        gen.lines('import ctypes', 'import ctypes.util', 'import glob', 'import os', 'import sys')
        gen.line()
        with gen.block('LINK_SEARCH_PATHS = [', ']'):
            for path in search_paths:
                gen.line(f'{path!r},')
        with gen.block('LINK_LIBRARIES = [', ']'):
            for lib in libraries:
                gen.line(f'{lib!r},')
        gen.line(f'LIBRARY = {libraries[0]!r}')
        gen.line()
        gen.line()


def generate_capi_bindings(config: 'GeneratorConfig', parser: 'ClangAstParser',
                           discovery: Optional['DiscoveryResult'] = None) -> str:
    """Parse the C header and generate the ctypes module text

    The link search paths and libraries of this run's discovery are baked into
    the module's loader.
    """
    ir = parser.parse(config.header_path, list(config.extra_include_dirs), cpp=config.policy.cpp)
    if ir.is_empty():
        raise ParseError(f'no declarations found in {config.header_path}')

    capi = CapiGenerator(config, ir)
    search_paths = list(discovery.link_search_paths) if discovery else []
    libraries = list(discovery.link_libraries) if discovery else []
    text = capi.generate(search_paths, libraries)
    for warning in capi.type_conv.warnings:
        print(f'  >> warning: {warning}')
    return text
