"""内容块调度器：逐行扫描一个幻灯片行块，按固定优先级匹配规则并委派给子解析器。

核心职责：
- `BLOCK_RULES` 是有序规则表（判定 -> 处理），顺序即优先级，可单独测试；
- 游标作为显式位置在处理函数之间传递，处理函数返回下一个位置；
- 标题、副标题、备注、背景写入 `SlideDraft`，其余规则追加内容块；
- 扫描结束后调用版式推断生成 `Slide`。

优先级要点：
- 图库/AI 图片指令必须先于普通图片匹配；
- 围栏必须先于任何可能出现在围栏内部的行类型；
- 段落是兜底规则，总能匹配。
"""

from dataclasses import dataclass, field
from typing import Callable, List, NamedTuple, Optional, Tuple

from presentor.common.types import ContentBlock, HeadingBlock, Slide, SubheadingBlock
from presentor.common.utils import get_logger
from presentor.parser import blocks as bp
from presentor.parser.layout import infer_layout

logger = get_logger(__name__)


@dataclass
class SlideDraft:
    """解析单页时的可变草稿，解析结束后转为 `Slide`。"""
    title: Optional[str] = None
    subtitle: Optional[str] = None
    notes: Optional[str] = None
    background: Optional[str] = None
    blocks: List[ContentBlock] = field(default_factory=list)


Handler = Callable[[SlideDraft, List[str], int], int]


class BlockRule(NamedTuple):
    name: str
    matches: Callable[[str], bool]
    handle: Handler


def _append(sub_parser: Callable[[List[str], int], Tuple[ContentBlock, int]]) -> Handler:
    """把 `(lines, pos) -> (block, next)` 子解析器包装成追加内容块的处理函数。"""
    def handle(draft: SlideDraft, lines: List[str], pos: int) -> int:
        block, end = sub_parser(lines, pos)
        draft.blocks.append(block)
        return end
    return handle


def _skip(draft: SlideDraft, lines: List[str], pos: int) -> int:
    return pos + 1


def _notes(draft: SlideDraft, lines: List[str], pos: int) -> int:
    draft.notes, end = bp.parse_notes(lines, pos)
    return end


def _background(draft: SlideDraft, lines: List[str], pos: int) -> int:
    draft.background, end = bp.parse_background(lines, pos)
    return end


def _heading1(draft: SlideDraft, lines: List[str], pos: int) -> int:
    text = bp.H1.match(lines[pos].strip()).group(1).strip()
    if draft.title is None:
        draft.title = text
    else:
        draft.blocks.append(HeadingBlock(content=text, level=1))
    return pos + 1


def _heading2(draft: SlideDraft, lines: List[str], pos: int) -> int:
    text = bp.H2.match(lines[pos].strip()).group(1).strip()
    if draft.title is None:
        draft.title = text
    elif draft.subtitle is None:
        draft.subtitle = text
    else:
        draft.blocks.append(SubheadingBlock(content=text, level=2))
    return pos + 1


def _heading3(draft: SlideDraft, lines: List[str], pos: int) -> int:
    text = bp.H3.match(lines[pos].strip()).group(1).strip()
    draft.blocks.append(SubheadingBlock(content=text, level=3))
    return pos + 1


def _matcher(pattern) -> Callable[[str], bool]:
    return lambda trimmed: bool(pattern.match(trimmed))


BLOCK_RULES: List[BlockRule] = [
    BlockRule("blank", lambda trimmed: not trimmed, _skip),
    BlockRule("notes", _matcher(bp.NOTES_OPEN), _notes),
    BlockRule("background", _matcher(bp.BG_OPEN), _background),
    BlockRule("heading1", _matcher(bp.H1), _heading1),
    BlockRule("heading2", _matcher(bp.H2), _heading2),
    BlockRule("heading3", _matcher(bp.H3), _heading3),
    BlockRule("fence", _matcher(bp.FENCE_OPEN), _append(bp.parse_fence)),
    BlockRule("stock-image", _matcher(bp.STOCK_IMAGE), _append(bp.parse_stock_image)),
    BlockRule("ai-image", _matcher(bp.AI_IMAGE), _append(bp.parse_ai_image)),
    BlockRule("image", _matcher(bp.IMAGE), _append(bp.parse_image)),
    BlockRule("quote", lambda trimmed: trimmed.startswith(">"), _append(bp.parse_quote)),
    BlockRule("bullets", _matcher(bp.BULLET), _append(bp.parse_bullets)),
    BlockRule("numbered", _matcher(bp.NUMBERED), _append(bp.parse_numbered)),
    BlockRule("paragraph", lambda trimmed: True, _append(bp.parse_paragraph)),
]


def match_rule(line: str, rules: List[BlockRule] = BLOCK_RULES) -> BlockRule:
    """返回第一条匹配该行的规则。"""
    trimmed = line.strip()
    return next(rule for rule in rules if rule.matches(trimmed))


def parse_slide(lines: List[str], is_first: bool = False) -> Slide:
    """解析一个幻灯片行块。

    参数：
        lines: 该页的原始行。
        is_first: 是否为首页且元数据尚无标题，用于版式推断。
    """
    draft = SlideDraft()
    pos = 0
    while pos < len(lines):
        rule = match_rule(lines[pos])
        pos = rule.handle(draft, lines, pos)

    layout = infer_layout(draft.title, draft.blocks, is_first)
    logger.debug(f"Parsed slide {draft.title!r}: layout={layout}, blocks={len(draft.blocks)}")
    return Slide(
        layout=layout,
        title=draft.title,
        subtitle=draft.subtitle,
        blocks=draft.blocks,
        notes=draft.notes,
        background=draft.background,
    )
