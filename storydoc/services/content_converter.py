"""Rich-tree JSON to Markdown and plain text converter.

Renders stories for AI consumption (Markdown) and for search indexing and
list previews (plain text).

Node types handled:
  Block: paragraph, heading (h1-h6 tag), quote
  Inline: text, association-inline
  Formats: bold, italic, strikethrough, underline, code

Design decisions:
  - underline renders as <u>text</u> (no Markdown equivalent)
  - association runs render their text without formatting
  - alignment and indent are presentation-only; skipped
"""

from typing import Optional

from ..schemas.rich_tree import RichBlockNode, RichTextNode, RichTreeDocument
from .format_codec import decode_bitmask_to_format_types


# -- Markdown Conversion -------------------------------------------------------

_FORMAT_WRAPPERS: dict[str, str] = {
    "bold": "**",
    "italic": "_",
    "strikethrough": "~~",
    "code": "`",
}


def rich_tree_to_markdown(doc: Optional[RichTreeDocument]) -> str:
    """Convert a rich-tree document to a Markdown string.

    Args:
        doc: Rich-tree document.

    Returns:
        Markdown string. Empty string for missing/empty input.
    """
    if doc is None:
        return ""
    return "".join(_md_block(block) for block in doc.root.children)


def _md_block(block: RichBlockNode) -> str:
    text = _md_inline(block)
    if block.type == "heading":
        return "#" * _heading_level(block.tag) + " " + text + "\n\n"
    if block.type == "quote":
        return "\n".join("> " + line for line in text.split("\n")) + "\n\n"
    return text + "\n\n"


def _heading_level(tag: str) -> int:
    if len(tag) == 2 and tag[0] == "h" and tag[1] in "123456":
        return int(tag[1])
    return 1


def _md_inline(block: RichBlockNode) -> str:
    """Convert inline runs (text + formats) to Markdown."""
    parts: list[str] = []
    for child in block.children:
        text = child.text
        if isinstance(child, RichTextNode) and text:
            for format_type in decode_bitmask_to_format_types(child.format):
                if format_type == "underline":
                    text = f"<u>{text}</u>"
                else:
                    wrapper = _FORMAT_WRAPPERS[format_type]
                    text = f"{wrapper}{text}{wrapper}"
        parts.append(text)
    return "".join(parts)


# -- Plain Text Extraction -----------------------------------------------------


def rich_tree_to_plain_text(doc: Optional[RichTreeDocument]) -> str:
    """Extract plain text, one line per block, formatting stripped."""
    if doc is None:
        return ""
    return "\n".join(block.text for block in doc.root.children).strip()
