"""
图片解析阶段测试：只写入 `resolved_src`，失败与超时不影响其他字段。
"""

import asyncio

import pytest

from presentor.agents.image_resolver import ImageResolver
from presentor.common.utils import Settings
from presentor.parser.presentation import parse


def _image_blocks(presentation):
    return [b for s in presentation.slides for b in s.blocks if b.type in ("stock-image", "ai-image", "image")]


class TestImageResolver:
    def test_collect_order(self, image_deck):
        presentation = parse(image_deck)
        blocks = ImageResolver(settings=Settings()).collect(presentation)
        assert [b.type for b in blocks] == ["stock-image", "ai-image", "stock-image"]

    @pytest.mark.asyncio
    async def test_resolves_stock_and_ai(self, image_deck):
        calls = []

        async def stock_lookup(query, orientation, index):
            calls.append(("stock", query, orientation, index))
            return f"/tmp/stock-{index}.jpg"

        async def ai_lookup(prompt, style, index):
            calls.append(("ai", prompt, style, index))
            return f"/tmp/ai-{index}.png"

        presentation = parse(image_deck)
        resolver = ImageResolver(stock_lookup, ai_lookup, settings=Settings())
        assert await resolver.resolve(presentation) == 3

        assert sorted(calls) == sorted([
            ("stock", "business meeting", "horizontal", 0),
            ("ai", "futuristic city", "photo", 1),
            ("stock", "mountains", "vertical", 2),
        ])
        stock, ai, plain, stock2 = _image_blocks(presentation)
        assert stock.resolved_src == "/tmp/stock-0.jpg"
        assert ai.resolved_src == "/tmp/ai-1.png"
        assert stock2.resolved_src == "/tmp/stock-2.jpg"
        assert plain.resolved_src is None

    @pytest.mark.asyncio
    async def test_missing_lookup_skips_kind(self, image_deck):
        async def stock_lookup(query, orientation, index):
            return "found.jpg"

        presentation = parse(image_deck)
        assert await ImageResolver(stock_lookup=stock_lookup, settings=Settings()).resolve(presentation) == 2
        ai = [b for b in _image_blocks(presentation) if b.type == "ai-image"][0]
        assert ai.resolved_src is None

    @pytest.mark.asyncio
    async def test_failures_leave_structure_untouched(self, image_deck):
        async def failing(query, orientation, index):
            raise RuntimeError("service down")

        async def slow(prompt, style, index):
            await asyncio.sleep(5)
            return "late.png"

        presentation = parse(image_deck)
        before = presentation.model_dump()
        resolver = ImageResolver(failing, slow, settings=Settings(image_timeout=0.05))
        assert await resolver.resolve(presentation) == 0
        assert presentation.model_dump() == before

    @pytest.mark.asyncio
    async def test_empty_result_not_written(self, image_deck):
        async def nothing(query, orientation, index):
            return None

        presentation = parse(image_deck)
        assert await ImageResolver(stock_lookup=nothing, settings=Settings()).resolve(presentation) == 0

    @pytest.mark.asyncio
    async def test_unknown_orientation_passed_as_none(self):
        seen = []

        async def stock_lookup(query, orientation, index):
            seen.append(orientation)
            return "x.jpg"

        presentation = parse("![stock: sea](square)")
        await ImageResolver(stock_lookup=stock_lookup, settings=Settings()).resolve(presentation)
        assert seen == [None]

    @pytest.mark.asyncio
    async def test_no_image_blocks(self):
        presentation = parse("# Plain\n\ntext")
        assert await ImageResolver(settings=Settings()).resolve(presentation) == 0
