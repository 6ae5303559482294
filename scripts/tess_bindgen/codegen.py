"""
Code generation utilities

Provides helpers for emitting Python source and for picking apart the C type
spellings clang reports.
"""

import keyword
import re


class CodeGen:
    """Code generation helper with indentation support"""

    def __init__(self):
        self._lines: list[str] = []
        self._indent: int = 0
        self._indent_str: str = '    '  # 4 spaces

    def line(self, text: str = ''):
        """Add a line with current indentation"""
        if text:
            self._lines.append(self._indent_str * self._indent + text)
        else:
            self._lines.append('')

    def lines(self, *texts: str):
        """Add multiple lines"""
        for text in texts:
            self.line(text)

    def raw(self, text: str):
        """Add raw text without indentation processing"""
        self._lines.append(text)

    def indent(self):
        """Increase indentation"""
        self._indent += 1

    def dedent(self):
        """Decrease indentation"""
        if self._indent > 0:
            self._indent -= 1

    def block(self, header: str, footer: str = ''):
        """Context manager for indented blocks

        Python blocks need no footer; pass one for bracketed literals.
        """
        return _BlockContext(self, header, footer)

    def output(self) -> str:
        """Get generated code as string, newline terminated"""
        return '\n'.join(self._lines) + '\n'


class _BlockContext:
    """Context manager for indented code blocks"""

    def __init__(self, gen: CodeGen, header: str, footer: str):
        self._gen = gen
        self._header = header
        self._footer = footer

    def __enter__(self):
        self._gen.line(self._header)
        self._gen.indent()
        return self

    def __exit__(self, *args):
        self._gen.dedent()
        if self._footer:
            self._gen.line(self._footer)


def mangle(name: str) -> str:
    """Flatten a qualified C++ name into a Python identifier

    Examples:
        tesseract::PageSegMode -> tesseract_PageSegMode
        TessBaseAPI -> TessBaseAPI
    """
    return name.replace('::', '_')


def safe_name(name: str) -> str:
    """Append an underscore to Python keywords"""
    return name + '_' if keyword.iskeyword(name) else name


def normalize_type(type_str: str) -> str:
    """Canonical spelling of a C type

    Examples:
        struct Pix * -> Pix *
        const char *const -> const char *
        enum TessPageSegMode -> TessPageSegMode
    """
    t = ' '.join(type_str.split())
    t = re.sub(r'\b(struct|enum|union)\s+', '', t)
    if is_func_ptr(t):
        return t
    t = re.sub(r'\*\s*const\b', '*', t)
    t = re.sub(r'\s*\*', ' *', t)
    t = re.sub(r'\* \*', '**', t)
    while '* *' in t:
        t = t.replace('* *', '**')
    return t.strip()


def strip_const(type_str: str) -> str:
    """Remove leading and trailing const on a value type"""
    t = type_str.strip()
    if t.startswith('const '):
        t = t[6:]
    if t.endswith(' const'):
        t = t[:-6]
    return t.strip()


def is_func_ptr(type_str: str) -> bool:
    """Check if type is a function pointer"""
    return '(*)' in type_str


def parse_func_ptr(type_str: str) -> tuple[str, list[str]]:
    """Parse function pointer type

    Returns (return_type, args_list)
    Example: "int (*)(void *, int)" -> ("int", ["void *", "int"])
    """
    if '(*)' not in type_str:
        return '', []
    result_type = type_str[:type_str.index('(*)')].strip()
    args_str = type_str[type_str.index('(*)') + 4:-1]
    args = [arg.strip() for arg in args_str.split(',') if arg.strip() and arg.strip() != 'void']
    return result_type, args


def is_array_type(type_str: str) -> bool:
    return re.search(r'\[\d*\]$', type_str) is not None


def extract_array_type(type_str: str) -> str:
    """Extract base type from array type"""
    return type_str[:type_str.index('[')].strip()


def extract_array_sizes(type_str: str) -> list[int]:
    """Extract array dimensions"""
    return [int(m) for m in re.findall(r'\[(\d+)\]', type_str)]
