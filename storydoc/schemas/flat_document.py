"""Pydantic schemas for the flat-paragraph storage/transport model.

Offsets are measured in UTF-16 code units of the paragraph text, matching
what the mobile client and the API store.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator


FormatType = Literal["bold", "italic", "underline", "strikethrough", "code"]
ParagraphType = Literal["paragraph", "heading", "quote"]


class TextFormatting(BaseModel):
    """Formatting applied to ``[start, end)`` of the paragraph text."""

    start: int = Field(..., ge=0)
    end: int = Field(..., ge=0)
    type: FormatType


class AssociationOccurrence(BaseModel):
    start: int
    end: int


class Association(BaseModel):
    """All occurrences of one entity within a paragraph."""

    id: str
    text: str = Field("", description="Text of the first occurrence")
    occurrences: list[AssociationOccurrence] = Field(default_factory=list)


class FlatParagraph(BaseModel):
    text: str = ""
    formatting: list[TextFormatting] = Field(default_factory=list)
    associations: list[Association] = Field(default_factory=list)
    type: ParagraphType = "paragraph"

    @field_validator("text", mode="before")
    @classmethod
    def default_text(cls, v: Any) -> str:
        return "" if v is None else v

    @field_validator("type", mode="before")
    @classmethod
    def validate_type(cls, v: Any) -> str:
        """Unknown paragraph types degrade to plain paragraphs."""
        return v if v in ("paragraph", "heading", "quote") else "paragraph"


class FlatDocument(BaseModel):
    paragraphs: list[FlatParagraph] = Field(default_factory=list)
