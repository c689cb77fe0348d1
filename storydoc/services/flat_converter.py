"""Rich-tree <-> flat-paragraph converter.

The flat model is what the mobile client and the stories API persist: each
paragraph is one string plus side-channel formatting ranges and association
occurrences, offsets in UTF-16 code units.

Design decisions:
  - Rich-tree -> flat records one formatting range per format flag per text
    run, and one occurrence per association run, grouped by association id
    in order of first appearance.
  - Flat -> rich-tree splits text between association occurrences at every
    formatting boundary by default. With ``split_formatting_runs=False`` the
    bitmask is sampled once at the start of each span instead, which can
    under- or over-apply formatting when ranges do not line up with
    association boundaries.
  - Association display metadata (description, type, portrait) is not
    stored in the flat model and comes back as empty strings.
  - Occurrences that are out of bounds, empty, or overlap an earlier
    occurrence are dropped with a warning; their text stays as plain text.
"""

import logging
from dataclasses import dataclass

from ..schemas.flat_document import (
    Association,
    AssociationOccurrence,
    FlatDocument,
    FlatParagraph,
    TextFormatting,
)
from ..schemas.rich_tree import (
    RichAssociationNode,
    RichBlockNode,
    RichHeadingNode,
    RichParagraphNode,
    RichQuoteNode,
    RichTextNode,
    RichTreeDocument,
    RichTreeRoot,
)
from .format_codec import decode_bitmask_to_format_types, format_bitmask_at
from .utf16 import utf16_length, utf16_slice

logger = logging.getLogger(__name__)


# -- Rich-tree -> Flat ---------------------------------------------------------


def convert_rich_block_to_flat_paragraph(block: RichBlockNode) -> FlatParagraph:
    """Flatten one rich-tree block into a flat paragraph."""
    parts: list[str] = []
    position = 0
    formatting: list[TextFormatting] = []
    associations: dict[str, Association] = {}

    for child in block.children:
        text = child.text or ""
        start = position
        position += utf16_length(text)
        parts.append(text)
        if start == position:
            continue

        if isinstance(child, RichAssociationNode):
            occurrence = AssociationOccurrence(start=start, end=position)
            if child.association_id in associations:
                associations[child.association_id].occurrences.append(occurrence)
            else:
                associations[child.association_id] = Association(
                    id=child.association_id,
                    text=text,
                    occurrences=[occurrence],
                )
        else:
            for format_type in decode_bitmask_to_format_types(child.format):
                formatting.append(
                    TextFormatting(start=start, end=position, type=format_type)
                )

    return FlatParagraph(
        text="".join(parts),
        formatting=formatting,
        associations=list(associations.values()),
        type=block.type if block.type in ("heading", "quote") else "paragraph",
    )


def convert_rich_tree_document_to_flat(doc: RichTreeDocument) -> FlatDocument:
    """Flatten every block of a rich-tree document, preserving order."""
    return FlatDocument(
        paragraphs=[convert_rich_block_to_flat_paragraph(b) for b in doc.root.children]
    )


# -- Flat -> Rich-tree ---------------------------------------------------------


@dataclass(frozen=True)
class _Segment:
    start: int
    end: int
    association: Association


def _association_segments(para: FlatParagraph, length: int) -> list[_Segment]:
    """Occurrences sorted by start, with invalid and overlapping ones dropped."""
    candidates = [
        _Segment(occ.start, occ.end, assoc)
        for assoc in para.associations
        for occ in assoc.occurrences
    ]
    # sort is stable: equal starts keep association-list order
    candidates.sort(key=lambda seg: seg.start)

    segments: list[_Segment] = []
    cursor = 0
    for seg in candidates:
        if seg.start < 0 or seg.end > length or seg.start >= seg.end:
            logger.warning(
                "Dropping association %s occurrence [%d, %d): outside paragraph of length %d",
                seg.association.id, seg.start, seg.end, length,
            )
            continue
        if seg.start < cursor:
            logger.warning(
                "Dropping association %s occurrence [%d, %d): overlaps previous occurrence",
                seg.association.id, seg.start, seg.end,
            )
            continue
        segments.append(seg)
        cursor = seg.end
    return segments


def _text_runs(
    para: FlatParagraph, start: int, end: int, split_formatting_runs: bool
) -> list[RichTextNode]:
    """Text runs covering ``[start, end)`` of the paragraph."""
    bounds = [start, end]
    if split_formatting_runs:
        for fmt in para.formatting:
            for edge in (fmt.start, fmt.end):
                if start < edge < end:
                    bounds.append(edge)
    bounds = sorted(set(bounds))

    runs: list[RichTextNode] = []
    for run_start, run_end in zip(bounds, bounds[1:]):
        fmt = format_bitmask_at(para.formatting, run_start)
        runs.append(
            RichTextNode(
                text=utf16_slice(para.text, run_start, run_end),
                format=fmt or None,
            )
        )
    return runs


def convert_flat_paragraph_to_rich_block(
    para: FlatParagraph, split_formatting_runs: bool = True
) -> RichBlockNode:
    """Rebuild a rich-tree block from a flat paragraph.

    The concatenated text of the returned block always equals ``para.text``.
    """
    length = utf16_length(para.text)
    children: list[RichTextNode | RichAssociationNode] = []
    cursor = 0

    for seg in _association_segments(para, length):
        if cursor < seg.start:
            children.extend(_text_runs(para, cursor, seg.start, split_formatting_runs))
        children.append(
            RichAssociationNode(
                text=utf16_slice(para.text, seg.start, seg.end),
                association_id=seg.association.id,
            )
        )
        cursor = seg.end

    if cursor < length:
        children.extend(_text_runs(para, cursor, length, split_formatting_runs))

    if para.type == "heading":
        return RichHeadingNode(children=children, tag="h1")
    if para.type == "quote":
        return RichQuoteNode(children=children)
    return RichParagraphNode(children=children)


def convert_flat_document_to_rich_tree(
    doc: FlatDocument, split_formatting_runs: bool = True
) -> RichTreeDocument:
    """Rebuild a rich-tree document from a flat document, preserving order."""
    return RichTreeDocument(
        root=RichTreeRoot(
            children=[
                convert_flat_paragraph_to_rich_block(p, split_formatting_runs)
                for p in doc.paragraphs
            ]
        )
    )
