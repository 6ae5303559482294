"""
Enum binding generation module

Enums come out in one of two styles:

    native   class PageSegMode(enum.IntEnum): ...
    consts   TessPageSegMode = ctypes.c_uint, plus one module constant per item
"""

from typing import TYPE_CHECKING

from .codegen import CodeGen, mangle, safe_name

if TYPE_CHECKING:
    from .ir import EnumInfo


class EnumGenerator:
    """Generates enum bindings"""

    def __init__(self, prefix_items: bool = False):
        # Prefix constant names with the enum name when items live in a namespace
        self.prefix_items = prefix_items

    def generate_native(self, enum: 'EnumInfo', gen: CodeGen):
        """Generate an enum.IntEnum class"""
        with gen.block(f'class {mangle(enum.name)}(enum.IntEnum):'):
            if not enum.items:
                gen.line('pass')
            for item in enum.items:
                gen.line(f'{safe_name(item.name)} = {item.value}')
        gen.line()
        gen.line()

    def generate_consts(self, enum: 'EnumInfo', gen: CodeGen, ctype: str):
        """Generate a type alias and one constant per item"""
        enum_name = mangle(enum.name)
        gen.line(f'{enum_name} = {ctype}')
        for item in enum.items:
            gen.line(f'{self.const_name(enum, item.name)} = {item.value}')
        gen.line()

    def const_name(self, enum: 'EnumInfo', item_name: str) -> str:
        if self.prefix_items:
            return f'{mangle(enum.name)}_{item_name}'
        return safe_name(item_name)
