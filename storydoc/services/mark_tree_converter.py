"""Mark-tree (Tiptap) <-> rich-tree (Lexical) paragraph translator.

The two editors serialize the same paragraph differently:

  - rich-tree: text runs carry a format bitmask, the block carries its
    alignment in ``format`` and a ``key_id`` used by the stories API
  - mark-tree: text runs carry a list of named marks, the paragraph carries
    ``attrs.textAlign``; left alignment is expressed by omitting attrs

Lossy paths:
  - the code flag (16) has no mark and is dropped going to the mark-tree
  - association runs become plain text runs in the mark-tree
  - heading/quote blocks become mark-tree paragraphs
"""

import json
import logging
from typing import Iterable, Union

from pydantic import ValidationError

from ..schemas.mark_tree import (
    MarkDocument,
    MarkParagraph,
    MarkParagraphAttrs,
    MarkTextNode,
)
from ..schemas.rich_tree import (
    RichBlockNode,
    RichParagraphNode,
    RichTextNode,
)
from .format_codec import decode_bitmask_to_marks, encode_marks_to_bitmask

logger = logging.getLogger(__name__)


class MalformedInputError(ValueError):
    """Raised when a serialized document is not JSON or has the wrong shape."""


# -- Rich-tree -> Mark-tree ----------------------------------------------------


def convert_rich_tree_block_to_mark_tree(block: RichBlockNode) -> MarkParagraph:
    """Convert a rich-tree block to a mark-tree paragraph."""
    content: list[MarkTextNode] = []
    for child in block.children:
        fmt = child.format if isinstance(child, RichTextNode) else None
        marks = decode_bitmask_to_marks(fmt)
        content.append(MarkTextNode(text=child.text or "", marks=marks or None))

    # The editor rejects paragraphs without content
    if not content:
        content = [MarkTextNode(text="")]

    attrs = None
    if block.alignment and block.alignment != "left":
        attrs = MarkParagraphAttrs(text_align=block.alignment)

    return MarkParagraph(content=content, attrs=attrs)


def convert_rich_tree_list_to_mark_tree_document(
    blocks: Iterable[RichBlockNode],
) -> MarkDocument:
    """Convert a list of rich-tree blocks into one mark-tree document."""
    return MarkDocument(content=[convert_rich_tree_block_to_mark_tree(b) for b in blocks])


def rich_block_to_mark_tree_json(block: RichBlockNode) -> str:
    """Serialize one rich-tree block as a single-paragraph mark-tree JSON string."""
    doc = convert_rich_tree_list_to_mark_tree_document([block])
    return doc.model_dump_json(by_alias=True, exclude_none=True)


# -- Mark-tree -> Rich-tree ----------------------------------------------------


def convert_mark_tree_paragraph_to_rich_tree(
    paragraph: MarkParagraph, key_id: str
) -> RichParagraphNode:
    """Convert a mark-tree paragraph to a rich-tree paragraph keyed ``key_id``."""
    children: list[RichTextNode] = []
    for node in paragraph.content or []:
        fmt = encode_marks_to_bitmask(node.marks)
        children.append(RichTextNode(text=node.text or "", format=fmt or None))

    if not children:
        children.append(RichTextNode(text=""))

    return RichParagraphNode(
        key_id=key_id,
        children=children,
        alignment=paragraph.alignment,
        indent=0,
    )


def convert_mark_tree_document_to_rich_tree_list(
    doc: MarkDocument, starting_key_id: str = "1"
) -> list[RichParagraphNode]:
    """Convert every paragraph, keyed ``{starting_key_id}_{index}``."""
    return [
        convert_mark_tree_paragraph_to_rich_tree(para, f"{starting_key_id}_{index}")
        for index, para in enumerate(doc.content)
    ]


def parse_mark_tree_document(raw: Union[str, bytes]) -> MarkDocument:
    """Parse a serialized mark-tree document.

    Raises:
        MalformedInputError: if ``raw`` is not JSON, or is not an object with
            ``type == "doc"`` and a ``content`` list of paragraphs.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise MalformedInputError(f"Mark-tree content is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedInputError("Mark-tree document must be a JSON object")
    if data.get("type") != "doc":
        raise MalformedInputError(
            f"Mark-tree document type must be 'doc', got {data.get('type')!r}"
        )
    if not isinstance(data.get("content"), list):
        raise MalformedInputError("Mark-tree document is missing its content array")

    try:
        return MarkDocument.model_validate(data)
    except ValidationError as e:
        raise MalformedInputError(
            f"Mark-tree document has an invalid shape: {e.error_count()} error(s)"
        ) from e


def mark_tree_json_to_rich_tree_list(
    raw: Union[str, bytes], starting_key_id: str = "1"
) -> list[RichParagraphNode]:
    """Parse a mark-tree JSON string and convert it to rich-tree paragraphs."""
    doc = parse_mark_tree_document(raw)
    logger.debug("Parsed mark-tree document with %d paragraph(s)", len(doc.content))
    return convert_mark_tree_document_to_rich_tree_list(doc, starting_key_id)
