"""Pydantic schemas for the mark-tree (Tiptap/ProseMirror) document model."""

from typing import Any, Literal, Optional

from pydantic import Field, field_validator

from .common import WireModel, normalize_alignment


MarkType = Literal["bold", "italic", "strike", "underline"]


class Mark(WireModel):
    """Named text mark.

    ``type`` is left open so marks the converter does not know about
    (link, highlight, ...) still validate; they are ignored on encode.
    """

    type: str = ""

    @field_validator("type", mode="before")
    @classmethod
    def default_type(cls, v: Any) -> str:
        return v if isinstance(v, str) else ""


class MarkTextNode(WireModel):
    type: Literal["text"] = "text"
    text: str = ""
    marks: Optional[list[Mark]] = None

    @field_validator("type", mode="before")
    @classmethod
    def coerce_type(cls, v: Any) -> str:
        """Inline nodes without text (hardBreak, image, ...) read as empty text."""
        return "text"

    @field_validator("text", mode="before")
    @classmethod
    def default_text(cls, v: Any) -> str:
        return "" if v is None else v


class MarkParagraphAttrs(WireModel):
    text_align: Optional[str] = Field(None, alias="textAlign")

    @field_validator("text_align", mode="before")
    @classmethod
    def validate_text_align(cls, v: Any) -> Optional[str]:
        return normalize_alignment(v)


class MarkParagraph(WireModel):
    """Paragraph node. Left alignment is expressed by omitting ``attrs``."""

    type: Literal["paragraph"] = "paragraph"
    attrs: Optional[MarkParagraphAttrs] = None
    content: Optional[list[MarkTextNode]] = None

    @field_validator("type", mode="before")
    @classmethod
    def coerce_type(cls, v: Any) -> str:
        """Headings, blockquotes and other blocks read as paragraphs."""
        return "paragraph"

    @property
    def alignment(self) -> str:
        if self.attrs is not None and self.attrs.text_align:
            return self.attrs.text_align
        return "left"


class MarkDocument(WireModel):
    """Top-level mark-tree document: ``{"type": "doc", "content": [...]}``."""

    type: Literal["doc"] = "doc"
    content: list[MarkParagraph]
