"""Text format bitmask codec shared by all converters.

The rich-tree model stores text formatting as an integer bitmask, the flat
model as named format ranges and the mark-tree model as named marks. The
flag values match the rich-tree editor's serialization.
"""

from typing import Iterable, Optional, Sequence

from ..schemas.flat_document import FormatType, TextFormatting
from ..schemas.mark_tree import Mark, MarkType


FORMAT_BOLD = 1
FORMAT_ITALIC = 2
FORMAT_STRIKETHROUGH = 4
FORMAT_UNDERLINE = 8
FORMAT_CODE = 16

# Decode order is fixed and independent of flag values.
_FORMAT_TYPE_FLAGS: tuple[tuple[FormatType, int], ...] = (
    ("bold", FORMAT_BOLD),
    ("italic", FORMAT_ITALIC),
    ("underline", FORMAT_UNDERLINE),
    ("strikethrough", FORMAT_STRIKETHROUGH),
    ("code", FORMAT_CODE),
)

# The mark-tree editor has no code mark.
_MARK_FLAGS: tuple[tuple[MarkType, int], ...] = (
    ("bold", FORMAT_BOLD),
    ("italic", FORMAT_ITALIC),
    ("strike", FORMAT_STRIKETHROUGH),
    ("underline", FORMAT_UNDERLINE),
)

_FORMAT_TYPE_VALUES: dict[str, int] = dict(_FORMAT_TYPE_FLAGS)
_MARK_VALUES: dict[str, int] = dict(_MARK_FLAGS)


def decode_bitmask_to_format_types(
    mask: Optional[int], include_code: bool = True
) -> list[FormatType]:
    """Expand a bitmask into format type names.

    Order is always bold, italic, underline, strikethrough, code.
    """
    if not mask:
        return []
    return [
        name
        for name, flag in _FORMAT_TYPE_FLAGS
        if mask & flag and (include_code or flag != FORMAT_CODE)
    ]


def encode_format_types_to_bitmask(format_types: Iterable[str]) -> int:
    """OR together the flags of ``format_types``. Unknown names are ignored."""
    mask = 0
    for name in format_types:
        mask |= _FORMAT_TYPE_VALUES.get(name, 0)
    return mask


def decode_bitmask_to_marks(mask: Optional[int]) -> list[Mark]:
    """Expand a bitmask into mark-tree marks, dropping the code flag.

    Order is always bold, italic, strike, underline.
    """
    if not mask:
        return []
    return [Mark(type=name) for name, flag in _MARK_FLAGS if mask & flag]


def encode_marks_to_bitmask(marks: Optional[Iterable[Mark]]) -> int:
    """OR together the flags of ``marks``. Unknown mark types are ignored."""
    mask = 0
    for mark in marks or ():
        mask |= _MARK_VALUES.get(mark.type, 0)
    return mask


def format_bitmask_at(formatting: Sequence[TextFormatting], position: int) -> int:
    """Bitmask of every formatting range covering ``position``."""
    return encode_format_types_to_bitmask(
        fmt.type for fmt in formatting if fmt.start <= position < fmt.end
    )
