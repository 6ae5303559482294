"""
Function binding generation module

Generates the PROTOTYPES table applied to the loaded library.
"""

from typing import TYPE_CHECKING

from .codegen import CodeGen

if TYPE_CHECKING:
    from .ir import FuncInfo
    from .types import TypeConverter


class FuncGenerator:
    """Generates ctypes prototypes for C functions"""

    def __init__(self, type_conv: 'TypeConverter'):
        self.type_conv = type_conv

    def prototype(self, func: 'FuncInfo') -> tuple[str, str]:
        """Return (restype, argtypes) expressions; variadic functions get no argtypes"""
        restype = self.type_conv.convert(func.return_type)
        if func.is_variadic:
            return restype, 'None'
        args = [self.type_conv.convert(p.type) for p in func.params]
        return restype, f'[{", ".join(args)}]'

    def collect(self, funcs: list['FuncInfo']) -> list[tuple[str, tuple[str, str]]]:
        """Convert every signature up front so referenced types are known"""
        return [(func.name, self.prototype(func)) for func in funcs]

    def generate(self, prototypes: list[tuple[str, tuple[str, str]]], gen: CodeGen):
        """Generate the name -> (restype, argtypes) table"""
        with gen.block('PROTOTYPES = {', '}'):
            for name, (restype, argtypes) in prototypes:
                gen.line(f"'{name}': ({restype}, {argtypes}),")
        gen.line()
