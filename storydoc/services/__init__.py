"""Document conversion services.

All converters are pure functions over the schema models: no I/O and no
shared state, so they are safe to call from any thread or task.
"""

from .content_converter import rich_tree_to_markdown, rich_tree_to_plain_text
from .flat_converter import (
    convert_flat_document_to_rich_tree,
    convert_flat_paragraph_to_rich_block,
    convert_rich_block_to_flat_paragraph,
    convert_rich_tree_document_to_flat,
)
from .format_codec import (
    FORMAT_BOLD,
    FORMAT_CODE,
    FORMAT_ITALIC,
    FORMAT_STRIKETHROUGH,
    FORMAT_UNDERLINE,
    decode_bitmask_to_format_types,
    decode_bitmask_to_marks,
    encode_format_types_to_bitmask,
    encode_marks_to_bitmask,
    format_bitmask_at,
)
from .mark_tree_converter import (
    MalformedInputError,
    convert_mark_tree_document_to_rich_tree_list,
    convert_mark_tree_paragraph_to_rich_tree,
    convert_rich_tree_block_to_mark_tree,
    convert_rich_tree_list_to_mark_tree_document,
    mark_tree_json_to_rich_tree_list,
    parse_mark_tree_document,
    rich_block_to_mark_tree_json,
)

__all__ = [
    "FORMAT_BOLD",
    "FORMAT_CODE",
    "FORMAT_ITALIC",
    "FORMAT_STRIKETHROUGH",
    "FORMAT_UNDERLINE",
    "MalformedInputError",
    "convert_flat_document_to_rich_tree",
    "convert_flat_paragraph_to_rich_block",
    "convert_mark_tree_document_to_rich_tree_list",
    "convert_mark_tree_paragraph_to_rich_tree",
    "convert_rich_block_to_flat_paragraph",
    "convert_rich_tree_block_to_mark_tree",
    "convert_rich_tree_document_to_flat",
    "convert_rich_tree_list_to_mark_tree_document",
    "decode_bitmask_to_format_types",
    "decode_bitmask_to_marks",
    "encode_format_types_to_bitmask",
    "encode_marks_to_bitmask",
    "format_bitmask_at",
    "mark_tree_json_to_rich_tree_list",
    "parse_mark_tree_document",
    "rich_block_to_mark_tree_json",
    "rich_tree_to_markdown",
    "rich_tree_to_plain_text",
]
