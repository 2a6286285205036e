"""图片解析（Image Resolver）：解析完成之后的第二阶段，为图片指令块补充 `resolved_src`。

核心职责：
- 按页、按块顺序遍历演示文稿，图库图片与 AI 图片共用一个递增序号；
- 调用调用方提供的查找函数（图库搜索 / AI 生图），把返回的路径或 URL 写入 `resolved_src`；
- 不包含任何真实的下载或生成逻辑，具体实现由调用方注入。

实现要点：
- 查找并发执行，受 `PRESENTOR_IMAGE_CONCURRENCY` 限制，单次查找受 `PRESENTOR_IMAGE_TIMEOUT` 限制；
- 单个查找失败或超时只记录警告，不中止流程，也不修改其他任何字段；
- 未提供某类查找函数时静默跳过该类图片，渲染端会显示占位图。
"""

import asyncio
from typing import Awaitable, Callable, List, Optional, Union

from presentor.common.types import AIImageBlock, Presentation, StockImageBlock
from presentor.common.utils import Settings, get_logger, get_settings

logger = get_logger(__name__)

ORIENTATIONS = ("horizontal", "vertical")

# (query, orientation, index) -> path/url
StockLookup = Callable[[str, Optional[str], int], Awaitable[Optional[str]]]
# (prompt, style, index) -> path/url
AILookup = Callable[[str, str, int], Awaitable[Optional[str]]]

ResolvableBlock = Union[StockImageBlock, AIImageBlock]


class ImageResolver:
    """为 `stock-image` 与 `ai-image` 块填充 `resolved_src`。"""
    def __init__(
        self,
        stock_lookup: Optional[StockLookup] = None,
        ai_lookup: Optional[AILookup] = None,
        settings: Optional[Settings] = None,
    ):
        self.stock_lookup = stock_lookup
        self.ai_lookup = ai_lookup
        self.settings = settings or get_settings()

    def collect(self, presentation: Presentation) -> List[ResolvableBlock]:
        """按文档顺序收集需要解析的图片块，序号即列表下标。"""
        return [
            block
            for slide in presentation.slides
            for block in slide.blocks
            if block.type in ("stock-image", "ai-image")
        ]

    def _has_lookup(self, block: ResolvableBlock) -> bool:
        if block.type == "stock-image":
            return self.stock_lookup is not None
        return self.ai_lookup is not None

    def _lookup(self, block: ResolvableBlock, index: int) -> Awaitable[Optional[str]]:
        if block.type == "stock-image":
            orientation = block.src if block.src in ORIENTATIONS else None
            return self.stock_lookup(block.image_query, orientation, index)
        return self.ai_lookup(block.content, block.image_style, index)

    async def _resolve_one(self, block: ResolvableBlock, index: int, semaphore: asyncio.Semaphore) -> bool:
        if not self._has_lookup(block):
            return False

        async with semaphore:
            try:
                result = await asyncio.wait_for(self._lookup(block, index), timeout=self.settings.image_timeout)
            except asyncio.TimeoutError:
                logger.warning(f"Image lookup #{index} ({block.type}) timed out after {self.settings.image_timeout}s")
                return False
            except Exception as e:
                # 失败只影响这一张图，渲染端显示占位图
                logger.warning(f"Image lookup #{index} ({block.type}) failed: {e}")
                return False

        if not result:
            logger.info(f"No image found for #{index} ({block.type}): {block.content!r}")
            return False
        block.resolved_src = result
        return True

    async def resolve(self, presentation: Presentation) -> int:
        """解析所有图片指令块，返回成功写入 `resolved_src` 的数量。"""
        blocks = self.collect(presentation)
        if not blocks:
            return 0

        logger.info(f"Resolving {len(blocks)} image blocks")
        semaphore = asyncio.Semaphore(self.settings.image_concurrency)
        results = await asyncio.gather(
            *(self._resolve_one(block, index, semaphore) for index, block in enumerate(blocks))
        )
        resolved = sum(results)
        logger.info(f"Resolved {resolved}/{len(blocks)} image blocks")
        return resolved
