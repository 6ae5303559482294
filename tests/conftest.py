"""
Shared fixtures: clang JSON AST fragments shaped like `clang -ast-dump=json`
output for the tesseract headers, and a parser that returns them instead of
running clang.
"""

import copy
import io

import pytest

from tess_bindgen import ClangAstParser, Toolchain, TESSERACT_VERSION


# ==============================================================================
# AST builders
# ==============================================================================

def func_decl(name, ret, params=(), variadic=False):
    arg_types = ', '.join(t for _, t in params) or 'void'
    decl = {
        'kind': 'FunctionDecl',
        'name': name,
        'type': {'qualType': f'{ret} ({arg_types})'},
        'inner': [{'kind': 'ParmVarDecl', 'name': n, 'type': {'qualType': t}} for n, t in params],
    }
    if variadic:
        decl['variadic'] = True
    return decl


def record_decl(name, fields=None, tag='struct'):
    decl = {'kind': 'RecordDecl', 'name': name, 'tagUsed': tag}
    if fields is not None:
        decl['completeDefinition'] = True
        decl['inner'] = [{'kind': 'FieldDecl', 'name': n, 'type': {'qualType': t}} for n, t in fields]
    return decl


def typedef_decl(name, qual_type, implicit=False):
    decl = {'kind': 'TypedefDecl', 'name': name, 'type': {'qualType': qual_type}}
    if implicit:
        decl['isImplicit'] = True
    return decl


def enum_decl(name, items):
    """items: names, or (name, value) for explicitly initialised constants"""
    inner = []
    for item in items:
        if isinstance(item, tuple):
            item_name, value = item
            inner.append({
                'kind': 'EnumConstantDecl',
                'name': item_name,
                'inner': [{
                    'kind': 'ConstantExpr',
                    'value': str(value),
                    'inner': [{'kind': 'IntegerLiteral', 'value': str(value)}],
                }],
            })
        else:
            inner.append({'kind': 'EnumConstantDecl', 'name': item})
    decl = {'kind': 'EnumDecl', 'inner': inner}
    if name:
        decl['name'] = name
    return decl


def int_literal(value):
    return {'kind': 'IntegerLiteral', 'value': str(value)}


def unary_op(opcode, operand):
    return {'kind': 'UnaryOperator', 'opcode': opcode, 'inner': [operand]}


def binary_op(opcode, lhs, rhs):
    return {'kind': 'BinaryOperator', 'opcode': opcode, 'inner': [lhs, rhs]}


def implicit_cast(expr):
    return {'kind': 'ImplicitCastExpr', 'castKind': 'IntegralCast', 'inner': [expr]}


def var_decl(name, qual_type, value=None, constexpr=False, init=None):
    """value builds a bare literal initialiser; init takes any expression node"""
    decl = {'kind': 'VarDecl', 'name': name, 'type': {'qualType': qual_type}}
    if constexpr:
        decl['constexpr'] = True
    if init is None and value is not None:
        init = int_literal(value)
    if init is not None:
        decl['init'] = 'c'
        decl['inner'] = [init]
    return decl


def namespace_decl(name, inner):
    return {'kind': 'NamespaceDecl', 'name': name, 'inner': inner}


def translation_unit(inner):
    return {'kind': 'TranslationUnitDecl', 'inner': inner}


# ==============================================================================
# Header ASTs
# ==============================================================================

def make_capi_ast():
    """Roughly what tesseract/capi.h looks like after preprocessing on Linux"""
    return translation_unit([
        typedef_decl('__int128_t', '__int128', implicit=True),
        # libc
        record_decl('_IO_marker'),
        record_decl('_IO_codecvt'),
        record_decl('_IO_wide_data'),
        record_decl('_IO_FILE', [('_flags', 'int'), ('_markers', 'struct _IO_marker *')]),
        typedef_decl('FILE', 'struct _IO_FILE'),
        func_decl('fopen', 'FILE *', [('path', 'const char *'), ('mode', 'const char *')]),
        func_decl('printf', 'int', [('format', 'const char *')], variadic=True),
        # leptonica
        record_decl('Pix', [('w', 'l_uint32'), ('h', 'l_uint32')]),
        typedef_decl('PIX', 'struct Pix'),
        record_decl('Boxa'),
        record_decl('Pixa'),
        func_decl('pixRead', 'PIX *', [('filename', 'const char *')]),
        # tesseract
        typedef_decl('BOOL', 'int'),
        record_decl('TessResultRenderer'),
        typedef_decl('TessResultRenderer', 'struct TessResultRenderer'),
        record_decl('TessBaseAPI'),
        typedef_decl('TessBaseAPI', 'struct TessBaseAPI'),
        record_decl('ETEXT_DESC'),
        typedef_decl('ETEXT_DESC', 'struct ETEXT_DESC'),
        enum_decl('TessOcrEngineMode', [
            'OEM_TESSERACT_ONLY', 'OEM_LSTM_ONLY', 'OEM_TESSERACT_LSTM_COMBINED', 'OEM_DEFAULT',
        ]),
        typedef_decl('TessOcrEngineMode', 'enum TessOcrEngineMode'),
        enum_decl('TessPageIteratorLevel', [
            'RIL_BLOCK', 'RIL_PARA', 'RIL_TEXTLINE', 'RIL_WORD', 'RIL_SYMBOL',
        ]),
        typedef_decl('TessPageIteratorLevel', 'enum TessPageIteratorLevel'),
        enum_decl('TessUnusedMode', [('UNUSED_A', 5), 'UNUSED_B']),
        typedef_decl('TessUnusedMode', 'enum TessUnusedMode'),
        typedef_decl('TessCancelFunc', 'BOOL (*)(void *, int)'),
        func_decl('TessVersion', 'const char *'),
        func_decl('TessDeleteText', 'void', [('text', 'const char *')]),
        func_decl('TessTextRendererCreate', 'TessResultRenderer *', [('outputbase', 'const char *')]),
        func_decl('TessBaseAPICreate', 'TessBaseAPI *'),
        func_decl('TessBaseAPIDelete', 'void', [('handle', 'TessBaseAPI *')]),
        func_decl('TessBaseAPIInit2', 'int', [
            ('handle', 'TessBaseAPI *'), ('datapath', 'const char *'),
            ('language', 'const char *'), ('oem', 'TessOcrEngineMode'),
        ]),
        func_decl('TessBaseAPISetImage2', 'void', [('handle', 'TessBaseAPI *'), ('pix', 'struct Pix *')]),
        func_decl('TessBaseAPIGetComponentImages', 'struct Boxa *', [
            ('handle', 'TessBaseAPI *'), ('level', 'TessPageIteratorLevel'),
            ('text_only', 'BOOL'), ('pixa', 'struct Pixa **'), ('blockids', 'int **'),
        ]),
        func_decl('TessBaseAPIPrintVariables', 'void', [('handle', 'const TessBaseAPI *'), ('fp', 'FILE *')]),
        func_decl('TessBaseAPIGetUTF8Text', 'char *', [('handle', 'TessBaseAPI *')]),
        func_decl('TessBaseAPIGetAvailableLanguagesAsVector', 'char **', [('handle', 'const TessBaseAPI *')]),
        func_decl('TessMonitorCreate', 'ETEXT_DESC *'),
        func_decl('TessMonitorSetCancelFunc', 'void', [
            ('monitor', 'ETEXT_DESC *'), ('cancelFunc', 'TessCancelFunc'),
        ]),
    ])


def make_public_types_ast():
    """tesseract/publictypes.h from the pinned release"""
    return translation_unit([
        typedef_decl('__builtin_va_list', 'char *', implicit=True),
        enum_decl('Unrelated', ['UNRELATED_A']),
        namespace_decl('tesseract', [
            var_decl('kPointsPerInch', 'const int', 72, constexpr=True),
            var_decl('kMinCredibleResolution', 'const int', 70, constexpr=True),
            var_decl('kMaxCredibleResolution', 'const int', 2400, constexpr=True),
            var_decl('kResolutionEstimationFactor', 'const int', 10, constexpr=True),
            enum_decl('PolyBlockType', [
                'PT_UNKNOWN', 'PT_FLOWING_TEXT', 'PT_HEADING_TEXT', 'PT_PULLOUT_TEXT',
                'PT_EQUATION', 'PT_INLINE_EQUATION', 'PT_TABLE', 'PT_VERTICAL_TEXT',
                'PT_CAPTION_TEXT', 'PT_FLOWING_IMAGE', 'PT_HEADING_IMAGE', 'PT_PULLOUT_IMAGE',
                'PT_HORZ_LINE', 'PT_VERT_LINE', 'PT_NOISE', 'PT_COUNT',
            ]),
            func_decl('PTIsLineType', 'bool', [('type', 'tesseract::PolyBlockType')]),
            func_decl('PTIsTextType', 'bool', [('type', 'tesseract::PolyBlockType')]),
            var_decl('kPolyBlockNames', 'const char *[]'),
            enum_decl('Orientation', [
                ('ORIENTATION_PAGE_UP', 0), ('ORIENTATION_PAGE_RIGHT', 1),
                ('ORIENTATION_PAGE_DOWN', 2), ('ORIENTATION_PAGE_LEFT', 3),
            ]),
            enum_decl('WritingDirection', [
                ('WRITING_DIRECTION_LEFT_TO_RIGHT', 0), ('WRITING_DIRECTION_RIGHT_TO_LEFT', 1),
                ('WRITING_DIRECTION_TOP_TO_BOTTOM', 2),
            ]),
            enum_decl('TextlineOrder', [
                ('TEXTLINE_ORDER_LEFT_TO_RIGHT', 0), ('TEXTLINE_ORDER_RIGHT_TO_LEFT', 1),
                ('TEXTLINE_ORDER_TOP_TO_BOTTOM', 2),
            ]),
            enum_decl('PageSegMode', [
                ('PSM_OSD_ONLY', 0), ('PSM_AUTO_OSD', 1), ('PSM_AUTO_ONLY', 2), ('PSM_AUTO', 3),
                ('PSM_SINGLE_COLUMN', 4), ('PSM_SINGLE_BLOCK_VERT_TEXT', 5),
                ('PSM_SINGLE_BLOCK', 6), ('PSM_SINGLE_LINE', 7), ('PSM_SINGLE_WORD', 8),
                ('PSM_CIRCLE_WORD', 9), ('PSM_SINGLE_CHAR', 10), ('PSM_SPARSE_TEXT', 11),
                ('PSM_SPARSE_TEXT_OSD', 12), ('PSM_RAW_LINE', 13), 'PSM_COUNT',
            ]),
            func_decl('PSM_OSD_ENABLED', 'bool', [('pageseg_mode', 'int')]),
            enum_decl('PageIteratorLevel', [
                'RIL_BLOCK', 'RIL_PARA', 'RIL_TEXTLINE', 'RIL_WORD', 'RIL_SYMBOL',
            ]),
            enum_decl('ParagraphJustification', [
                'JUSTIFICATION_UNKNOWN', 'JUSTIFICATION_LEFT', 'JUSTIFICATION_CENTER',
                'JUSTIFICATION_RIGHT',
            ]),
            enum_decl('OcrEngineMode', [
                'OEM_TESSERACT_ONLY', 'OEM_LSTM_ONLY', 'OEM_TESSERACT_LSTM_COMBINED',
                'OEM_DEFAULT', 'OEM_COUNT',
            ]),
        ]),
    ])


# ==============================================================================
# Fakes and fixtures
# ==============================================================================

class FakeParser(ClangAstParser):
    """Returns canned ASTs; an Exception in place of an AST is raised"""

    def __init__(self, c_ast=None, cpp_ast=None, on_call=None):
        super().__init__(clangpp='clang++')
        self.asts = {False: c_ast, True: cpp_ast}
        self.on_call = on_call
        self.calls = []

    def dump_ast(self, header, include_dirs, cpp=False):
        self.calls.append((str(header), list(include_dirs), cpp))
        if self.on_call:
            self.on_call()
        ast = self.asts[cpp]
        if isinstance(ast, Exception):
            raise ast
        return copy.deepcopy(ast)


@pytest.fixture
def capi_ast():
    return make_capi_ast()


@pytest.fixture
def public_types_ast():
    return make_public_types_ast()


@pytest.fixture
def fake_parser(capi_ast, public_types_ast):
    return FakeParser(capi_ast, public_types_ast)


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def toolchain(output):
    return Toolchain(stream=output)


@pytest.fixture
def bundled_root(tmp_path):
    """Project root with a complete bundled copy"""
    root = tmp_path / 'project'
    version_dir = root / 'resources' / 'libs' / 'tesseract' / TESSERACT_VERSION
    (version_dir / 'lib').mkdir(parents=True)
    (version_dir / 'include' / 'tesseract').mkdir(parents=True)
    return root
