# hand-maintained for macOS (tesseract 5.3.4 publictypes.h), mirrors tess_bindgen output
import enum


kPointsPerInch = 72
kMinCredibleResolution = 70
kMaxCredibleResolution = 2400
kResolutionEstimationFactor = 10


class PolyBlockType(enum.IntEnum):
    PT_UNKNOWN = 0
    PT_FLOWING_TEXT = 1
    PT_HEADING_TEXT = 2
    PT_PULLOUT_TEXT = 3
    PT_EQUATION = 4
    PT_INLINE_EQUATION = 5
    PT_TABLE = 6
    PT_VERTICAL_TEXT = 7
    PT_CAPTION_TEXT = 8
    PT_FLOWING_IMAGE = 9
    PT_HEADING_IMAGE = 10
    PT_PULLOUT_IMAGE = 11
    PT_HORZ_LINE = 12
    PT_VERT_LINE = 13
    PT_NOISE = 14
    PT_COUNT = 15


class Orientation(enum.IntEnum):
    ORIENTATION_PAGE_UP = 0
    ORIENTATION_PAGE_RIGHT = 1
    ORIENTATION_PAGE_DOWN = 2
    ORIENTATION_PAGE_LEFT = 3


class WritingDirection(enum.IntEnum):
    WRITING_DIRECTION_LEFT_TO_RIGHT = 0
    WRITING_DIRECTION_RIGHT_TO_LEFT = 1
    WRITING_DIRECTION_TOP_TO_BOTTOM = 2


class TextlineOrder(enum.IntEnum):
    TEXTLINE_ORDER_LEFT_TO_RIGHT = 0
    TEXTLINE_ORDER_RIGHT_TO_LEFT = 1
    TEXTLINE_ORDER_TOP_TO_BOTTOM = 2


class PageSegMode(enum.IntEnum):
    PSM_OSD_ONLY = 0
    PSM_AUTO_OSD = 1
    PSM_AUTO_ONLY = 2
    PSM_AUTO = 3
    PSM_SINGLE_COLUMN = 4
    PSM_SINGLE_BLOCK_VERT_TEXT = 5
    PSM_SINGLE_BLOCK = 6
    PSM_SINGLE_LINE = 7
    PSM_SINGLE_WORD = 8
    PSM_CIRCLE_WORD = 9
    PSM_SINGLE_CHAR = 10
    PSM_SPARSE_TEXT = 11
    PSM_SPARSE_TEXT_OSD = 12
    PSM_RAW_LINE = 13
    PSM_COUNT = 14


class PageIteratorLevel(enum.IntEnum):
    RIL_BLOCK = 0
    RIL_PARA = 1
    RIL_TEXTLINE = 2
    RIL_WORD = 3
    RIL_SYMBOL = 4


class ParagraphJustification(enum.IntEnum):
    JUSTIFICATION_UNKNOWN = 0
    JUSTIFICATION_LEFT = 1
    JUSTIFICATION_CENTER = 2
    JUSTIFICATION_RIGHT = 3


class OcrEngineMode(enum.IntEnum):
    OEM_TESSERACT_ONLY = 0
    OEM_LSTM_ONLY = 1
    OEM_TESSERACT_LSTM_COMBINED = 2
    OEM_DEFAULT = 3
    OEM_COUNT = 4
