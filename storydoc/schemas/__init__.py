"""Pydantic schemas for the document models and HTTP bodies."""

from .conversion import (
    ContentExportResponse,
    MarkTreeJsonRequest,
)
from .flat_document import (
    Association,
    AssociationOccurrence,
    FlatDocument,
    FlatParagraph,
    FormatType,
    ParagraphType,
    TextFormatting,
)
from .mark_tree import (
    Mark,
    MarkDocument,
    MarkParagraph,
    MarkParagraphAttrs,
    MarkTextNode,
    MarkType,
)
from .rich_tree import (
    RichAssociationNode,
    RichBlockNode,
    RichHeadingNode,
    RichInlineNode,
    RichParagraphNode,
    RichQuoteNode,
    RichTextNode,
    RichTreeDocument,
    RichTreeRoot,
)

__all__ = [
    # HTTP bodies
    "ContentExportResponse",
    "MarkTreeJsonRequest",
    # Flat-paragraph model
    "Association",
    "AssociationOccurrence",
    "FlatDocument",
    "FlatParagraph",
    "FormatType",
    "ParagraphType",
    "TextFormatting",
    # Mark-tree model
    "Mark",
    "MarkDocument",
    "MarkParagraph",
    "MarkParagraphAttrs",
    "MarkTextNode",
    "MarkType",
    # Rich-tree model
    "RichAssociationNode",
    "RichBlockNode",
    "RichHeadingNode",
    "RichInlineNode",
    "RichParagraphNode",
    "RichQuoteNode",
    "RichTextNode",
    "RichTreeDocument",
    "RichTreeRoot",
]
