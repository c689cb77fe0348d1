"""Document conversion API endpoints.

Exposes the converters to the mobile app and the web editor bridge. All
endpoints are stateless: the request body is converted and returned.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, HTTPException, Query, status

from ..config import settings
from ..schemas.conversion import ContentExportResponse, MarkTreeJsonRequest
from ..schemas.flat_document import FlatDocument
from ..schemas.mark_tree import MarkDocument
from ..schemas.rich_tree import RichBlockNode, RichParagraphNode, RichTreeDocument
from ..services.content_converter import rich_tree_to_markdown, rich_tree_to_plain_text
from ..services.flat_converter import (
    convert_flat_document_to_rich_tree,
    convert_rich_tree_document_to_flat,
)
from ..services.mark_tree_converter import (
    convert_mark_tree_document_to_rich_tree_list,
    convert_rich_tree_list_to_mark_tree_document,
    mark_tree_json_to_rich_tree_list,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/convert",
    tags=["conversions"],
)


@router.post(
    "/flat-to-rich-tree",
    response_model=RichTreeDocument,
    response_model_exclude_none=True,
)
async def flat_to_rich_tree(
    doc: FlatDocument,
    split_formatting_runs: Optional[bool] = Query(
        None, description="Split text runs at formatting boundaries (defaults to server setting)"
    ),
) -> RichTreeDocument:
    """Convert a stored flat document to the rich-tree editor format."""
    if split_formatting_runs is None:
        split_formatting_runs = settings.split_formatting_runs
    logger.debug("Converting flat document with %d paragraph(s)", len(doc.paragraphs))
    return convert_flat_document_to_rich_tree(doc, split_formatting_runs)


@router.post(
    "/rich-tree-to-flat",
    response_model=FlatDocument,
)
async def rich_tree_to_flat(doc: RichTreeDocument) -> FlatDocument:
    """Convert a rich-tree editor document to the flat storage format."""
    logger.debug("Converting rich-tree document with %d block(s)", len(doc.root.children))
    return convert_rich_tree_document_to_flat(doc)


@router.post(
    "/mark-tree-to-rich-tree",
    response_model=list[RichParagraphNode],
    response_model_exclude_none=True,
)
async def mark_tree_to_rich_tree(
    doc: MarkDocument,
    starting_key_id: Optional[str] = Query(None, min_length=1),
) -> list[RichParagraphNode]:
    """Convert a mark-tree document to keyed rich-tree paragraphs."""
    logger.debug("Converting mark-tree document with %d paragraph(s)", len(doc.content))
    return convert_mark_tree_document_to_rich_tree_list(
        doc, starting_key_id or settings.default_starting_key_id
    )


@router.post(
    "/rich-tree-to-mark-tree",
    response_model=MarkDocument,
    response_model_exclude_none=True,
)
async def rich_tree_to_mark_tree(
    blocks: list[RichBlockNode] = Body(..., description="Rich-tree blocks in document order"),
) -> MarkDocument:
    """Convert rich-tree blocks to a single mark-tree document."""
    logger.debug("Converting %d rich-tree block(s) to mark-tree", len(blocks))
    return convert_rich_tree_list_to_mark_tree_document(blocks)


@router.post(
    "/mark-tree-json",
    response_model=list[RichParagraphNode],
    response_model_exclude_none=True,
)
async def mark_tree_json_to_rich_tree(body: MarkTreeJsonRequest) -> list[RichParagraphNode]:
    """Parse raw mark-tree JSON and convert it to keyed rich-tree paragraphs.

    Malformed JSON is reported as 400 by the application's
    MalformedInputError handler.
    """
    if len(body.content_json) > settings.max_content_json_length:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"content_json exceeds {settings.max_content_json_length} characters",
        )
    return mark_tree_json_to_rich_tree_list(
        body.content_json, body.starting_key_id or settings.default_starting_key_id
    )


@router.post(
    "/rich-tree-export",
    response_model=ContentExportResponse,
)
async def rich_tree_export(doc: RichTreeDocument) -> ContentExportResponse:
    """Render a rich-tree document as Markdown and plain text."""
    return ContentExportResponse(
        markdown=rich_tree_to_markdown(doc),
        plain_text=rich_tree_to_plain_text(doc),
    )
