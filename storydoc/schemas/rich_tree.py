"""Pydantic schemas for the rich-tree (Lexical) document model.

Block nodes are paragraph, heading and quote. Inline nodes are text runs,
carrying a formatting bitmask, and association runs referencing a story
entity. Every node carries a ``version`` that is passed through untouched.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import Discriminator, Field, Tag, field_validator

from .common import WireModel, normalize_alignment


class RichTextNode(WireModel):
    """Plain text run. ``format`` is an OR of the FORMAT_* flags."""

    type: Literal["text"] = "text"
    text: str = ""
    format: Optional[int] = None
    version: int = 1

    @field_validator("type", mode="before")
    @classmethod
    def coerce_type(cls, v: Any) -> str:
        """Any inline node that is not an association reads as text."""
        return "text"

    @field_validator("text", mode="before")
    @classmethod
    def default_text(cls, v: Any) -> str:
        return "" if v is None else v

    @field_validator("format", mode="before")
    @classmethod
    def validate_format(cls, v: Any) -> Optional[int]:
        """Zero, negative and non-integer masks read as unformatted."""
        if isinstance(v, int) and not isinstance(v, bool) and v > 0:
            return v
        return None


class RichAssociationNode(WireModel):
    """Text run referencing a story entity (character, place, ...)."""

    type: Literal["association-inline"] = "association-inline"
    text: str = ""
    association_id: str = Field("", alias="associationId")
    short_description: str = Field("", alias="shortDescription")
    association_type: str = Field("", alias="associationType")
    portrait: str = ""
    version: int = 1

    @field_validator(
        "text", "association_id", "short_description", "association_type", "portrait",
        mode="before",
    )
    @classmethod
    def default_strings(cls, v: Any) -> str:
        return "" if v is None else v


def _inline_kind(value: Any) -> str:
    if isinstance(value, dict):
        kind = value.get("type")
    else:
        kind = getattr(value, "type", None)
    return "association-inline" if kind == "association-inline" else "text"


RichInlineNode = Annotated[
    Union[
        Annotated[RichTextNode, Tag("text")],
        Annotated[RichAssociationNode, Tag("association-inline")],
    ],
    Discriminator(_inline_kind),
]


class RichBlockBase(WireModel):
    """Fields shared by all block nodes.

    ``alignment`` travels as ``format`` on the wire, which is the name the
    editor uses for element alignment.
    """

    children: list[RichInlineNode] = Field(default_factory=list)
    alignment: Optional[str] = Field(None, alias="format")
    indent: Optional[int] = None
    key_id: Optional[str] = None
    version: int = 1

    @field_validator("alignment", mode="before")
    @classmethod
    def validate_alignment(cls, v: Any) -> Optional[str]:
        return normalize_alignment(v)

    @field_validator("children", mode="before")
    @classmethod
    def default_children(cls, v: Any) -> Any:
        return [] if v is None else v

    @property
    def text(self) -> str:
        """Concatenated text of all inline children."""
        return "".join(child.text for child in self.children)


class RichParagraphNode(RichBlockBase):
    type: Literal["paragraph"] = "paragraph"

    @field_validator("type", mode="before")
    @classmethod
    def coerce_type(cls, v: Any) -> str:
        """Unrecognized block types read as paragraphs."""
        return "paragraph"


class RichHeadingNode(RichBlockBase):
    type: Literal["heading"] = "heading"
    tag: str = "h1"

    @field_validator("tag", mode="before")
    @classmethod
    def default_tag(cls, v: Any) -> str:
        return v if isinstance(v, str) and v else "h1"


class RichQuoteNode(RichBlockBase):
    type: Literal["quote"] = "quote"


def _block_kind(value: Any) -> str:
    if isinstance(value, dict):
        kind = value.get("type")
    else:
        kind = getattr(value, "type", None)
    return kind if kind in ("heading", "quote") else "paragraph"


RichBlockNode = Annotated[
    Union[
        Annotated[RichParagraphNode, Tag("paragraph")],
        Annotated[RichHeadingNode, Tag("heading")],
        Annotated[RichQuoteNode, Tag("quote")],
    ],
    Discriminator(_block_kind),
]


class RichTreeRoot(WireModel):
    type: Literal["root"] = "root"
    children: list[RichBlockNode] = Field(default_factory=list)
    version: int = 1


class RichTreeDocument(WireModel):
    """Top-level rich-tree document: ``{"root": {...}}``."""

    root: RichTreeRoot = Field(default_factory=RichTreeRoot)
