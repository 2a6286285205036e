"""
调度器测试：规则优先级、标题/副标题分配与单页解析。
"""

import pytest

from presentor.parser.dispatcher import BLOCK_RULES, match_rule, parse_slide
from presentor.parser.layout import infer_layout
from presentor.common.types import BulletsBlock, ImageBlock, TextBlock


class TestRulePriority:
    def test_rule_order(self):
        assert [rule.name for rule in BLOCK_RULES] == [
            "blank",
            "notes",
            "background",
            "heading1",
            "heading2",
            "heading3",
            "fence",
            "stock-image",
            "ai-image",
            "image",
            "quote",
            "bullets",
            "numbered",
            "paragraph",
        ]

    @pytest.mark.parametrize(
        "line, expected",
        [
            ("   ", "blank"),
            ("<!-- notes: hi -->", "notes"),
            ("<!--bg: red-->", "background"),
            ("# Title", "heading1"),
            ("## Sub", "heading2"),
            ("### Small", "heading3"),
            ("#### Deeper", "paragraph"),
            ("```chart", "fence"),
            ("![stock: sea](vertical)", "stock-image"),
            ("![ai-photo: city]()", "ai-image"),
            ("![ai-video: city]()", "image"),
            ("![alt](src.png)", "image"),
            ("> quote", "quote"),
            ("- item", "bullets"),
            ("  * item", "bullets"),
            ("3. item", "numbered"),
            ("plain words", "paragraph"),
            ("![broken", "paragraph"),
        ],
    )
    def test_first_matching_rule(self, line, expected):
        assert match_rule(line).name == expected


class TestParseSlide:
    def test_title_and_paragraph(self):
        slide = parse_slide(["# Hello", "", "World"])
        assert slide.title == "Hello"
        assert slide.blocks == [TextBlock(content="World")]

    def test_second_h1_becomes_heading(self):
        slide = parse_slide(["# One", "# Two"])
        assert slide.title == "One"
        assert slide.blocks[0].type == "heading"
        assert slide.blocks[0].content == "Two"
        assert slide.blocks[0].level == 1

    def test_h2_assignment_order(self):
        slide = parse_slide(["## First", "## Second", "## Third"])
        assert slide.title == "First"
        assert slide.subtitle == "Second"
        assert slide.blocks[0].type == "subheading"
        assert slide.blocks[0].level == 2

    def test_h1_after_h2_title_is_heading(self):
        slide = parse_slide(["## Lead", "# Later"])
        assert slide.title == "Lead"
        assert slide.blocks[0].type == "heading"

    def test_h3_is_subheading(self):
        slide = parse_slide(["# Title", "### My Subheading", "Some text"])
        assert slide.blocks[0].type == "subheading"
        assert slide.blocks[0].content == "My Subheading"
        assert slide.blocks[0].level == 3

    def test_notes_and_background_are_not_blocks(self):
        slide = parse_slide(["# Dark", "<!-- bg: #1a1a2e -->", "Some text", "<!-- notes: Say hi -->"])
        assert slide.background == "#1a1a2e"
        assert slide.notes == "Say hi"
        assert [b.type for b in slide.blocks] == ["text"]

    def test_block_order_preserved(self):
        lines = [
            "# Mixed",
            "Intro text",
            "- a",
            "- b",
            "> quoted",
            "1. one",
            "```py",
            "x = 1",
            "```",
            "![pic](p.png)",
        ]
        slide = parse_slide(lines)
        assert [b.type for b in slide.blocks] == ["text", "bullets", "quote", "numbered", "code", "image"]

    def test_fence_protects_structural_lines(self):
        slide = parse_slide(["```", "# not a title", "- not a bullet", "```"])
        assert slide.title is None
        assert len(slide.blocks) == 1
        assert slide.blocks[0].content == "# not a title\n- not a bullet"

    def test_layout_assigned(self):
        assert parse_slide(["# Only"], is_first=True).layout == "title"
        assert parse_slide(["# Only"]).layout == "section"
        assert parse_slide(["![x](x.png)"]).layout == "image-full"
        assert parse_slide(["# T", "- a"]).layout == "content"


class TestInferLayout:
    def test_title_slide(self):
        assert infer_layout("Hello", [], True) == "title"

    def test_first_slide_without_title_or_blocks(self):
        assert infer_layout(None, [], True) == "title"

    def test_section(self):
        assert infer_layout("Hello", [], False) == "section"

    def test_content(self):
        assert infer_layout("Hello", [BulletsBlock(content="a", items=["a"])], False) == "content"
        assert infer_layout("Hello", [BulletsBlock(content="a", items=["a"])], True) == "content"

    def test_image_full(self):
        image = ImageBlock(content="hero.jpg", alt="", src="hero.jpg")
        assert infer_layout(None, [image], False) == "image-full"
        assert infer_layout(None, [image], True) == "image-full"

    def test_image_with_title_is_content(self):
        image = ImageBlock(content="hero.jpg", alt="", src="hero.jpg")
        assert infer_layout("Gallery", [image], False) == "content"

    def test_untitled_empty_later_slide(self):
        assert infer_layout(None, [], False) == "content"
