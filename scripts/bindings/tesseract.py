"""
Tesseract binding configuration

Configures the binding generator with the tesseract-specific policy:
- C API: only Tess* functions, leptonica and libc FILE types left external
- public types: the configuration enums as IntEnum, kPolyBlockNames dropped
"""

import os

from tess_bindgen import BindingPolicy, Generator

BINDINGS_DIR = os.path.dirname(os.path.abspath(__file__))

CAPI_BINDINGS = 'capi_bindings.py'
PUBLIC_TYPES_BINDINGS = 'public_types_bindings.py'

# Hand-maintained stand-in for the parsed public types on macOS.
# Keep in sync with the vendored publictypes.h whenever the version pin changes.
PRECOMPUTED_MAC = os.path.join(BINDINGS_DIR, 'public_types_bindings_mac.py')


# ==============================================================================
# C API
# ==============================================================================

CAPI_POLICY = BindingPolicy(
    header='wrapper_capi.h',
    output=CAPI_BINDINGS,
    allowlist_functions=(r'^Tess.*',),
    blocklist_types=(
        # leptonica
        'Boxa',
        'Pix',
        'Pixa',
        # libc stdio internals
        '_IO_FILE',
        '_IO_codecvt',
        '_IO_marker',
        '_IO_wide_data',
    ),
)


# ==============================================================================
# Public types
# ==============================================================================

PUBLIC_TYPES_POLICY = BindingPolicy(
    header='wrapper_public_types.hpp',
    output=PUBLIC_TYPES_BINDINGS,
    cpp=True,
    native_enums=(
        'tesseract::OcrEngineMode',
        'tesseract::Orientation',
        'tesseract::PageIteratorLevel',
        'tesseract::PageSegMode',
        'tesseract::ParagraphJustification',
        'tesseract::PolyBlockType',
        'tesseract::TextlineOrder',
        'tesseract::WritingDirection',
    ),
    blocklist_items=(
        r'^kPolyBlockNames',
        r'^tesseract::kPolyBlockNames',
    ),
    strip_token='tesseract_',
    namespace='tesseract',
)


# ==============================================================================
# Configuration
# ==============================================================================

def configure(gen: Generator):
    """Configure generator with tesseract-specific settings"""
    gen.header_dir = BINDINGS_DIR
    gen.precomputed = PRECOMPUTED_MAC
    gen.capi = CAPI_POLICY
    gen.public_types = PUBLIC_TYPES_POLICY
