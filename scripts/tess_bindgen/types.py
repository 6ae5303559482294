"""
Type conversion module

Maps C type spellings to ctypes expressions and records which named types a
binding references, so only those get emitted.
"""

from typing import Optional, TYPE_CHECKING

from .codegen import (
    normalize_type, strip_const, mangle,
    is_func_ptr, parse_func_ptr,
    is_array_type, extract_array_type, extract_array_sizes,
)

if TYPE_CHECKING:
    from .ir import IR

CTYPES_MAP = {
    'void': 'None',
    'bool': 'ctypes.c_bool',
    'char': 'ctypes.c_char',
    'signed char': 'ctypes.c_byte',
    'unsigned char': 'ctypes.c_ubyte',
    'short': 'ctypes.c_short',
    'unsigned short': 'ctypes.c_ushort',
    'int': 'ctypes.c_int',
    'unsigned int': 'ctypes.c_uint',
    'long': 'ctypes.c_long',
    'unsigned long': 'ctypes.c_ulong',
    'long long': 'ctypes.c_longlong',
    'unsigned long long': 'ctypes.c_ulonglong',
    'float': 'ctypes.c_float',
    'double': 'ctypes.c_double',
    'long double': 'ctypes.c_longdouble',
    'size_t': 'ctypes.c_size_t',
    'ssize_t': 'ctypes.c_ssize_t',
    'int8_t': 'ctypes.c_int8',
    'int16_t': 'ctypes.c_int16',
    'int32_t': 'ctypes.c_int32',
    'int64_t': 'ctypes.c_int64',
    'uint8_t': 'ctypes.c_uint8',
    'uint16_t': 'ctypes.c_uint16',
    'uint32_t': 'ctypes.c_uint32',
    'uint64_t': 'ctypes.c_uint64',
    'wchar_t': 'ctypes.c_wchar',
}

VOID_P = 'ctypes.c_void_p'


class TypeConverter:
    """Converts C types to ctypes, treating blocklisted types as external"""

    def __init__(self, ir: 'IR', blocklist: Optional[set[str]] = None):
        self.ir = ir
        self.blocklist = set(blocklist or ())
        self.used: dict[str, None] = {}  # ordered set of referenced type names
        self.warnings: list[str] = []

    def is_external(self, name: str) -> bool:
        """Check if a named type is (or aliases) a blocklisted type"""
        seen = set()
        while name not in seen:
            if name in self.blocklist:
                return True
            seen.add(name)
            typedef = self.ir.typedefs.get(name)
            if typedef is None:
                return False
            name = strip_const(normalize_type(typedef.type))
        return False

    def convert(self, type_str: str) -> str:
        """Convert a C type string to a ctypes expression"""
        t = normalize_type(type_str)

        if is_func_ptr(t):
            result, args = parse_func_ptr(t)
            parts = [self.convert(result)] + [self.convert(arg) for arg in args]
            return f'ctypes.CFUNCTYPE({", ".join(parts)})'

        if is_array_type(t):
            inner = self.convert(extract_array_type(t))
            for size in reversed(extract_array_sizes(t)):
                inner = f'({inner} * {size})'
            return inner

        if t.endswith('*'):
            return self._convert_ptr(t)

        return self._convert_named(strip_const(t))

    def _convert_ptr(self, t: str) -> str:
        base = t[:-1].strip()
        if base in ('const char', 'char const'):
            return 'ctypes.c_char_p'
        if base == 'char':
            # Owned strings must keep their address so they can be freed
            return 'ctypes.POINTER(ctypes.c_char)'
        if base.endswith('*'):
            return f'ctypes.POINTER({self._convert_ptr(base)})'

        base = strip_const(base)
        if base == 'void' or self.is_external(base):
            return VOID_P
        inner = self._convert_named(base)
        if inner == 'None':
            return VOID_P
        return f'ctypes.POINTER({inner})'

    def _convert_named(self, name: str) -> str:
        if name in CTYPES_MAP:
            return CTYPES_MAP[name]
        if self.is_external(name):
            self._warn(f'{name} is external and passed by value, using c_void_p')
            return VOID_P
        if name in self.ir.records or name in self.ir.enums or name in self.ir.typedefs:
            self.used.setdefault(name)
            return mangle(name)
        self._warn(f'unknown type {name}, using c_void_p')
        return VOID_P

    def _warn(self, message: str):
        if message not in self.warnings:
            self.warnings.append(message)

    def enum_ctype(self, name: str) -> str:
        """ctypes type used to pass an enum"""
        enum = self.ir.enums[name]
        if enum.underlying:
            return self.convert(enum.underlying)
        return 'ctypes.c_int' if enum.is_signed else 'ctypes.c_uint'

    def resolve_used(self):
        """Follow typedefs and record fields until no new types appear"""
        done: set[str] = set()
        while True:
            pending = [name for name in self.used if name not in done]
            if not pending:
                break
            for name in pending:
                done.add(name)
                if name in self.ir.records:
                    for f in self.ir.records[name].fields:
                        self.convert(f.type)
                elif name in self.ir.typedefs:
                    self.typedef_target(name)

    def typedef_target(self, name: str) -> Optional[str]:
        """ctypes expression for a typedef, None when it only renames a record/enum of the same name"""
        target = normalize_type(self.ir.typedefs[name].type)
        if target == name and (name in self.ir.records or name in self.ir.enums):
            return None
        return self.convert(target)
