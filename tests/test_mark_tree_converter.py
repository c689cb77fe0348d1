"""Tests for the mark-tree <-> rich-tree paragraph translator."""

import json

import pytest

from storydoc.schemas.mark_tree import MarkDocument, MarkParagraph
from storydoc.schemas.rich_tree import RichParagraphNode, RichTreeRoot
from storydoc.services.mark_tree_converter import (
    MalformedInputError,
    convert_mark_tree_document_to_rich_tree_list,
    convert_mark_tree_paragraph_to_rich_tree,
    convert_rich_tree_block_to_mark_tree,
    convert_rich_tree_list_to_mark_tree_document,
    mark_tree_json_to_rich_tree_list,
    parse_mark_tree_document,
    rich_block_to_mark_tree_json,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def rich_block(*children: dict, block_type: str = "paragraph", **extra):
    root = RichTreeRoot.model_validate({
        "children": [{"type": block_type, "children": list(children), **extra}],
    })
    return root.children[0]


def rich_text(t: str, fmt: int | None = None) -> dict:
    node: dict = {"type": "text", "text": t}
    if fmt is not None:
        node["format"] = fmt
    return node


def mark_para(*content: dict, align: str | None = None) -> MarkParagraph:
    data: dict = {"type": "paragraph", "content": list(content)}
    if align is not None:
        data["attrs"] = {"textAlign": align}
    return MarkParagraph.model_validate(data)


def mark_text(t: str, *marks: str) -> dict:
    node: dict = {"type": "text", "text": t}
    if marks:
        node["marks"] = [{"type": m} for m in marks]
    return node


def mark_doc(*paragraphs: dict) -> MarkDocument:
    return MarkDocument.model_validate({"type": "doc", "content": list(paragraphs)})


# ===========================================================================
# Rich-tree -> Mark-tree
# ===========================================================================

class TestRichToMarkTree:
    def test_plain_text(self):
        result = convert_rich_tree_block_to_mark_tree(rich_block(rich_text("Hello world")))
        assert result.to_wire() == {
            "type": "paragraph",
            "content": [{"type": "text", "text": "Hello world"}],
        }

    @pytest.mark.parametrize(
        "fmt, marks",
        [
            (1, ["bold"]),
            (2, ["italic"]),
            (4, ["strike"]),
            (8, ["underline"]),
            (3, ["bold", "italic"]),
        ],
    )
    def test_single_and_combined_formats(self, fmt, marks):
        result = convert_rich_tree_block_to_mark_tree(rich_block(rich_text("x", fmt)))
        assert [m.type for m in result.content[0].marks] == marks

    def test_all_formats(self):
        result = convert_rich_tree_block_to_mark_tree(rich_block(rich_text("All formats", 15)))
        assert result.to_wire()["content"][0]["marks"] == [
            {"type": "bold"}, {"type": "italic"}, {"type": "strike"}, {"type": "underline"},
        ]

    def test_code_dropped(self):
        result = convert_rich_tree_block_to_mark_tree(rich_block(rich_text("c", 16)))
        assert result.content[0].marks is None
        assert "marks" not in result.to_wire()["content"][0]

    def test_empty_block_gets_empty_run(self):
        result = convert_rich_tree_block_to_mark_tree(rich_block())
        assert result.to_wire()["content"] == [{"type": "text", "text": ""}]

    def test_missing_text(self):
        result = convert_rich_tree_block_to_mark_tree(rich_block({"type": "text"}))
        assert result.to_wire()["content"] == [{"type": "text", "text": ""}]

    def test_multiple_runs(self):
        result = convert_rich_tree_block_to_mark_tree(rich_block(
            rich_text("Plain "), rich_text("bold", 1), rich_text(" text"),
        ))
        assert result.to_wire()["content"] == [
            {"type": "text", "text": "Plain "},
            {"type": "text", "text": "bold", "marks": [{"type": "bold"}]},
            {"type": "text", "text": " text"},
        ]

    def test_association_becomes_plain_run(self):
        result = convert_rich_tree_block_to_mark_tree(rich_block(
            rich_text("Meet "),
            {"type": "association-inline", "text": "Anna", "associationId": "c1"},
        ))
        assert result.to_wire()["content"][1] == {"type": "text", "text": "Anna"}

    def test_alignment_copied(self):
        result = convert_rich_tree_block_to_mark_tree(rich_block(rich_text("C"), format="center"))
        assert result.to_wire()["attrs"] == {"textAlign": "center"}

    def test_left_alignment_omitted(self):
        result = convert_rich_tree_block_to_mark_tree(rich_block(rich_text("L"), format="left"))
        assert result.attrs is None
        assert "attrs" not in result.to_wire()

    def test_unknown_alignment_omitted(self):
        result = convert_rich_tree_block_to_mark_tree(rich_block(rich_text("L"), format="start"))
        assert "attrs" not in result.to_wire()

    def test_heading_becomes_paragraph(self):
        result = convert_rich_tree_block_to_mark_tree(
            rich_block(rich_text("Title"), block_type="heading", tag="h1")
        )
        assert result.type == "paragraph"


class TestRichListToMarkDocument:
    def test_multiple_blocks(self):
        result = convert_rich_tree_list_to_mark_tree_document([
            rich_block(rich_text("First")),
            rich_block(rich_text("Second")),
        ])
        assert result.type == "doc"
        assert [p.content[0].text for p in result.content] == ["First", "Second"]

    def test_empty_list(self):
        assert convert_rich_tree_list_to_mark_tree_document([]).to_wire() == {
            "type": "doc",
            "content": [],
        }

    def test_json_string(self):
        raw = rich_block_to_mark_tree_json(rich_block(rich_text("Test", 1)))
        parsed = json.loads(raw)
        assert parsed["type"] == "doc"
        assert len(parsed["content"]) == 1
        assert parsed["content"][0]["content"][0] == {
            "type": "text", "text": "Test", "marks": [{"type": "bold"}],
        }


# ===========================================================================
# Mark-tree -> Rich-tree
# ===========================================================================

class TestMarkToRichTree:
    def test_plain_text(self):
        result = convert_mark_tree_paragraph_to_rich_tree(mark_para(mark_text("Hello world")), "test-1")
        assert result.to_wire() == {
            "type": "paragraph",
            "key_id": "test-1",
            "children": [{"type": "text", "text": "Hello world", "version": 1}],
            "format": "left",
            "indent": 0,
            "version": 1,
        }

    @pytest.mark.parametrize(
        "marks, fmt",
        [
            (["bold"], 1),
            (["italic"], 2),
            (["strike"], 4),
            (["underline"], 8),
            (["bold", "italic"], 3),
            (["underline", "strike", "italic", "bold"], 15),
        ],
    )
    def test_marks_to_format(self, marks, fmt):
        result = convert_mark_tree_paragraph_to_rich_tree(mark_para(mark_text("x", *marks)), "1")
        assert result.children[0].format == fmt

    def test_unknown_marks_ignored(self):
        result = convert_mark_tree_paragraph_to_rich_tree(mark_para(mark_text("x", "link", "highlight")), "1")
        assert result.children[0].format is None

    def test_empty_content(self):
        result = convert_mark_tree_paragraph_to_rich_tree(mark_para(), "1")
        assert [c.to_wire() for c in result.children] == [{"type": "text", "text": "", "version": 1}]

    def test_missing_content(self):
        result = convert_mark_tree_paragraph_to_rich_tree(MarkParagraph.model_validate({"type": "paragraph"}), "1")
        assert [c.text for c in result.children] == [""]

    def test_missing_text(self):
        result = convert_mark_tree_paragraph_to_rich_tree(mark_para({"type": "text"}), "1")
        assert result.children[0].text == ""

    def test_alignment_propagated(self):
        result = convert_mark_tree_paragraph_to_rich_tree(mark_para(mark_text("C"), align="center"), "1")
        assert result.alignment == "center"

    def test_missing_alignment_equals_explicit_left(self):
        implicit = convert_mark_tree_paragraph_to_rich_tree(mark_para(mark_text("L")), "1")
        explicit = convert_mark_tree_paragraph_to_rich_tree(mark_para(mark_text("L"), align="left"), "1")
        assert implicit.to_wire() == explicit.to_wire()
        assert implicit.alignment == "left"


class TestMarkDocumentToRichList:
    def test_keys_from_starting_id(self):
        doc = mark_doc(
            {"type": "paragraph", "content": [mark_text("a")]},
            {"type": "paragraph", "content": [mark_text("b")]},
            {"type": "paragraph", "content": [mark_text("c")]},
        )
        result = convert_mark_tree_document_to_rich_tree_list(doc, "5")
        assert [p.key_id for p in result] == ["5_0", "5_1", "5_2"]
        assert [p.text for p in result] == ["a", "b", "c"]

    def test_default_starting_id(self):
        doc = mark_doc(*[{"type": "paragraph", "content": [mark_text(t)]} for t in "abc"])
        result = convert_mark_tree_document_to_rich_tree_list(doc)
        assert [p.key_id for p in result] == ["1_0", "1_1", "1_2"]

    def test_empty_document(self):
        assert convert_mark_tree_document_to_rich_tree_list(mark_doc()) == []


class TestMarkTreeJson:
    def test_parse_and_convert(self):
        raw = json.dumps({
            "type": "doc",
            "content": [{"type": "paragraph", "content": [mark_text("Test", "bold")]}],
        })
        result = mark_tree_json_to_rich_tree_list(raw, "test")
        assert len(result) == 1
        assert result[0].key_id == "test_0"
        assert result[0].children[0].text == "Test"
        assert result[0].children[0].format == 1

    def test_default_starting_id(self):
        raw = json.dumps({"type": "doc", "content": [{"type": "paragraph"}]})
        assert mark_tree_json_to_rich_tree_list(raw)[0].key_id == "1_0"

    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            "",
            "[1, 2]",
            '"doc"',
            '{"type": "paragraph", "content": []}',
            '{"type": "doc"}',
            '{"type": "doc", "content": {}}',
            '{"type": "doc", "content": null}',
            '{"type": "doc", "content": [5]}',
        ],
    )
    def test_malformed(self, raw):
        with pytest.raises(MalformedInputError):
            parse_mark_tree_document(raw)

    def test_malformed_is_value_error(self):
        with pytest.raises(ValueError):
            mark_tree_json_to_rich_tree_list("{")

    def test_bytes_accepted(self):
        doc = parse_mark_tree_document(b'{"type": "doc", "content": []}')
        assert doc.content == []


class TestUnknownMarkTreeNodes:
    """Nodes the translator does not model degrade instead of failing."""

    def test_hard_break_reads_as_empty_text(self):
        raw = json.dumps({
            "type": "doc",
            "content": [{"type": "paragraph", "content": [
                {"type": "text", "text": "a"},
                {"type": "hardBreak"},
                {"type": "text", "text": "b", "marks": [{"type": "bold"}]},
            ]}],
        })
        result = mark_tree_json_to_rich_tree_list(raw)
        assert [(c.text, c.format) for c in result[0].children] == [
            ("a", None), ("", None), ("b", 1),
        ]

    def test_heading_block_reads_as_paragraph(self):
        raw = json.dumps({
            "type": "doc",
            "content": [
                {"type": "heading", "attrs": {"level": 2}, "content": [{"type": "text", "text": "Title"}]},
                {"type": "blockquote"},
            ],
        })
        result = mark_tree_json_to_rich_tree_list(raw, "9")
        assert [(p.key_id, p.text) for p in result] == [("9_0", "Title"), ("9_1", "")]

    def test_in_memory_document_with_unknown_nodes(self):
        doc = mark_doc({"type": "heading", "content": [{"type": "image", "attrs": {"src": "x.png"}}]})
        assert doc.content[0].type == "paragraph"
        assert doc.content[0].content[0].to_wire() == {"type": "text", "text": ""}

    def test_mark_without_type_ignored(self):
        para = mark_para({"type": "text", "text": "x", "marks": [{}, {"type": "italic"}]})
        result = convert_mark_tree_paragraph_to_rich_tree(para, "1")
        assert result.children[0].format == 2


# ===========================================================================
# Round trips
# ===========================================================================

class TestRoundTrip:
    def test_rich_mark_rich(self):
        original = rich_block(
            rich_text("Plain "), rich_text("bold", 1), rich_text(" and "), rich_text("italic", 2),
            format="center",
        )
        back = convert_mark_tree_paragraph_to_rich_tree(convert_rich_tree_block_to_mark_tree(original), "1")
        assert [(c.text, c.format) for c in back.children] == [
            ("Plain ", None), ("bold", 1), (" and ", None), ("italic", 2),
        ]
        assert back.alignment == "center"

    def test_mark_rich_mark(self):
        original = mark_para(
            mark_text("Bold ", "bold"), mark_text("and italic", "italic"), align="right",
        )
        back = convert_rich_tree_block_to_mark_tree(convert_mark_tree_paragraph_to_rich_tree(original, "1"))
        assert back.to_wire() == original.to_wire()

    def test_code_flag_lost(self):
        """Bold+code comes back as bold only: the mark-tree has no code mark."""
        original = rich_block(rich_text("x", 17))
        back = convert_mark_tree_paragraph_to_rich_tree(convert_rich_tree_block_to_mark_tree(original), "1")
        assert back.children[0].format == 1
