"""Request/response bodies for the conversion endpoints."""

from typing import Optional

from pydantic import BaseModel, Field


class MarkTreeJsonRequest(BaseModel):
    """Raw mark-tree JSON as stored by the editor."""

    content_json: str = Field(
        ...,
        description="Mark-tree JSON document string",
        examples=['{"type":"doc","content":[{"type":"paragraph"}]}'],
    )
    starting_key_id: Optional[str] = Field(
        None,
        min_length=1,
        description="Base key for generated paragraph keys (defaults to the configured key)",
    )


class ContentExportResponse(BaseModel):
    markdown: str = Field(..., description="Markdown rendering of the document")
    plain_text: str = Field(..., description="Plain text with one line per block")
