"""
tess_bindgen - build-time binding generation for the tesseract OCR engine

Locates tesseract (bundled copy, vcpkg, pkg-config), parses its headers from
clang AST JSON (IR) and generates a ctypes module for the C API plus an
IntEnum module for the public configuration enums.
"""

from .errors import BindgenError, DiscoveryError, ParseError
from .toolchain import Toolchain, Directive
from .locator import (
    Platform, DiscoveryResult, LocatorStrategy,
    PackageManagerStrategy, PkgConfigStrategy, BundledStrategy, UnknownStrategy,
    bundled_paths, system_strategy, locate,
    TESSERACT_VERSION, LIBS_PATH,
)
from .ir import IR, FuncInfo, ParamInfo, EnumInfo, EnumItem, RecordInfo, FieldInfo, TypedefInfo, VarInfo
from .clang import ClangAstParser
from .config import BindingPolicy, GeneratorConfig
from .types import TypeConverter
from .codegen import CodeGen
from .capi import CapiGenerator, generate_capi_bindings
from .public_types import PublicTypesGenerator, generate_enum_bindings
from .generator import Generator

__all__ = [
    'BindgenError', 'DiscoveryError', 'ParseError',
    'Toolchain', 'Directive',
    'Platform', 'DiscoveryResult', 'LocatorStrategy',
    'PackageManagerStrategy', 'PkgConfigStrategy', 'BundledStrategy', 'UnknownStrategy',
    'bundled_paths', 'system_strategy', 'locate',
    'TESSERACT_VERSION', 'LIBS_PATH',
    'IR', 'FuncInfo', 'ParamInfo', 'EnumInfo', 'EnumItem', 'RecordInfo', 'FieldInfo',
    'TypedefInfo', 'VarInfo',
    'ClangAstParser',
    'BindingPolicy', 'GeneratorConfig',
    'TypeConverter',
    'CodeGen',
    'CapiGenerator', 'generate_capi_bindings',
    'PublicTypesGenerator', 'generate_enum_bindings',
    'Generator',
]
