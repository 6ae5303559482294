"""
IR (Intermediate Representation) module

Reads clang AST JSON (clang -Xclang -ast-dump=json) into plain dataclasses.
Names declared inside namespaces are qualified, e.g. 'tesseract::PageSegMode'.
"""

import operator
from dataclasses import dataclass, field
from typing import Optional

from .errors import ParseError


@dataclass
class ParamInfo:
    """Function parameter information"""
    name: str
    type: str


@dataclass
class FuncInfo:
    """Function declaration information"""
    name: str
    type: str  # Full function type signature
    params: list[ParamInfo]
    is_variadic: bool = False

    @property
    def return_type(self) -> str:
        """Extract return type from full type signature"""
        return self.type[:self.type.index('(')].strip()


@dataclass
class EnumItem:
    """Enum item (constant)"""
    name: str
    value: int


@dataclass
class EnumInfo:
    """Enum type information"""
    name: str
    items: list[EnumItem]
    is_anonymous: bool = False
    underlying: Optional[str] = None

    @property
    def is_signed(self) -> bool:
        return any(item.value < 0 for item in self.items)


@dataclass
class FieldInfo:
    """Struct field information"""
    name: str
    type: str


@dataclass
class RecordInfo:
    """Struct/union information; incomplete records are opaque"""
    name: str
    tag: str = 'struct'
    fields: list[FieldInfo] = field(default_factory=list)
    is_complete: bool = False


@dataclass
class TypedefInfo:
    name: str
    type: str


@dataclass
class VarInfo:
    """Variable declaration; value is set when clang evaluated it"""
    name: str
    type: str
    value: Optional[int] = None
    is_constexpr: bool = False


@dataclass
class IR:
    """Intermediate representation of a header"""
    funcs: dict[str, FuncInfo] = field(default_factory=dict)
    enums: dict[str, EnumInfo] = field(default_factory=dict)
    records: dict[str, RecordInfo] = field(default_factory=dict)
    typedefs: dict[str, TypedefInfo] = field(default_factory=dict)
    vars: dict[str, VarInfo] = field(default_factory=dict)

    @classmethod
    def from_ast(cls, ast: dict) -> 'IR':
        """Create IR from a clang JSON AST (TranslationUnitDecl)"""
        ir = cls()
        ir._walk(ast.get('inner', []), '')
        return ir

    def is_empty(self) -> bool:
        return not (self.funcs or self.enums or self.records or self.typedefs
                    or self.vars)

    def _walk(self, decls: list, scope: str):
        for decl in decls:
            if decl.get('isImplicit'):
                continue
            kind = decl.get('kind')

            if kind == 'NamespaceDecl':
                name = decl.get('name', '')
                self._walk(decl.get('inner', []), _qualify(scope, name) if name else scope)

            elif kind == 'LinkageSpecDecl':
                # extern "C" { ... }
                self._walk(decl.get('inner', []), scope)

            elif kind == 'FunctionDecl':
                func = _parse_func(decl, scope)
                self.funcs.setdefault(func.name, func)

            elif kind == 'EnumDecl':
                enum = _parse_enum(decl, scope)
                # Anonymous enums carry no type to bind
                if enum.is_anonymous:
                    continue
                if enum.items or enum.name not in self.enums:
                    self.enums[enum.name] = enum

            elif kind in ('RecordDecl', 'CXXRecordDecl') and 'name' in decl:
                record = _parse_record(decl, scope)
                existing = self.records.get(record.name)
                # Forward declarations are replaced by the definition
                if existing is None or (record.is_complete and not existing.is_complete):
                    self.records[record.name] = record

            elif kind == 'TypedefDecl':
                name = _qualify(scope, decl['name'])
                self.typedefs.setdefault(name, TypedefInfo(name, decl['type']['qualType']))

            elif kind == 'VarDecl':
                var = _parse_var(decl, scope)
                self.vars.setdefault(var.name, var)


def _qualify(scope: str, name: str) -> str:
    return f'{scope}::{name}' if scope else name


def _filter_types(s: str) -> str:
    """Replace _Bool with bool."""
    return s.replace('_Bool', 'bool')


_UNARY_OPS = {
    '-': operator.neg,
    '+': operator.pos,
    '~': operator.invert,
    '!': lambda v: int(not v),
}

_BINARY_OPS = {
    '+': operator.add,
    '-': operator.sub,
    '*': operator.mul,
    '&': operator.and_,
    '|': operator.or_,
    '^': operator.xor,
}

# Expression wrappers that do not change an integer value
_TRANSPARENT_EXPRS = ('ConstantExpr', 'ImplicitCastExpr', 'ParenExpr', 'CStyleCastExpr')


def _c_div(a: int, b: int) -> int:
    """Integer division truncating toward zero, as C does"""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _eval_int(node: dict) -> Optional[int]:
    """Evaluate an integer constant expression node.

    Values clang already evaluated (ConstantExpr, IntegerLiteral) are used as
    is; unary and binary operators over those are folded. Anything else
    returns None.
    """
    kind = node.get('kind')
    inner = node.get('inner', [])
    if kind in ('ConstantExpr', 'IntegerLiteral') and 'value' in node:
        return _to_int(node['value'])
    if kind in _TRANSPARENT_EXPRS and len(inner) == 1:
        return _eval_int(inner[0])

    if kind == 'UnaryOperator' and len(inner) == 1 and not node.get('isPostfix'):
        op = _UNARY_OPS.get(node.get('opcode'))
        value = _eval_int(inner[0])
        if op is None or value is None:
            return None
        return op(value)

    if kind == 'BinaryOperator' and len(inner) == 2:
        lhs, rhs = _eval_int(inner[0]), _eval_int(inner[1])
        if lhs is None or rhs is None:
            return None
        opcode = node.get('opcode')
        if opcode in _BINARY_OPS:
            return _BINARY_OPS[opcode](lhs, rhs)
        if opcode in ('/', '%'):
            if rhs == 0:
                return None
            quotient = _c_div(lhs, rhs)
            return quotient if opcode == '/' else lhs - quotient * rhs
        if opcode in ('<<', '>>') and rhs >= 0:
            return lhs << rhs if opcode == '<<' else lhs >> rhs
    return None


def _to_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _parse_func(decl: dict, scope: str) -> FuncInfo:
    """Parse function declaration."""
    params = []
    for param in decl.get('inner', []):
        if param.get('kind') != 'ParmVarDecl':
            continue
        params.append(ParamInfo(
            name=param.get('name', ''),
            type=_filter_types(param['type']['qualType']),
        ))
    return FuncInfo(
        name=_qualify(scope, decl['name']),
        type=_filter_types(decl['type']['qualType']),
        params=params,
        is_variadic=bool(decl.get('variadic')),
    )


def _parse_enum(decl: dict, scope: str) -> EnumInfo:
    """Parse enum declaration; implicit values count up from the last one."""
    items = []
    next_value = 0
    for item_decl in decl.get('inner', []):
        if item_decl.get('kind') != 'EnumConstantDecl':
            continue
        init = item_decl.get('inner')
        if init:
            value = _eval_int(init[0])
            if value is None:
                raise ParseError(f"enumerator {item_decl['name']} has no constant value")
            next_value = value
        items.append(EnumItem(name=item_decl['name'], value=next_value))
        next_value += 1

    name = decl.get('name', '')
    underlying = decl.get('fixedUnderlyingType', {}).get('qualType')
    return EnumInfo(
        name=_qualify(scope, name) if name else '',
        items=items,
        is_anonymous=not name,
        underlying=underlying,
    )


def _parse_record(decl: dict, scope: str) -> RecordInfo:
    """Parse struct/union declaration."""
    fields = []
    for item_decl in decl.get('inner', []):
        if item_decl.get('kind') != 'FieldDecl' or 'name' not in item_decl:
            continue
        fields.append(FieldInfo(
            name=item_decl['name'],
            type=_filter_types(item_decl['type']['qualType']),
        ))
    return RecordInfo(
        name=_qualify(scope, decl['name']),
        tag=decl.get('tagUsed', 'struct'),
        fields=fields,
        is_complete=bool(decl.get('completeDefinition')),
    )


def _parse_var(decl: dict, scope: str) -> VarInfo:
    """Parse variable declaration."""
    return VarInfo(
        name=_qualify(scope, decl['name']),
        type=_filter_types(decl['type']['qualType']),
        value=_eval_int(decl['inner'][-1]) if decl.get('init') and decl.get('inner') else None,
        is_constexpr=bool(decl.get('constexpr')),
    )
