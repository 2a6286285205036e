"""内容块子解析器：每个子解析器都是 `(lines, pos) -> (结果, 下一位置)` 的纯函数。

核心职责：
- 备注、背景指令、代码围栏（含 chart/mindmap 分派）、引用、无序/有序列表、图片指令、段落；
- 子解析器只读取 `lines`，从 `pos` 开始消费若干行，返回构造好的内容块和下一个未消费的行号；
- 每个子解析器至少消费一行，保证游标前进、解析必然终止。

实现要点：
- 行类型判定用模块级正则，调度器（`dispatcher`）与段落解析共享同一组判定；
- 无序列表的子项（行首两个及以上空白）以两个空格前缀存入同一个 `items`；
- 列表允许条目之间夹一个空行，前提是空行后紧跟同类条目。
"""

import re
from typing import List, Optional, Tuple, Union

from presentor.common.types import (
    AIImageBlock,
    BulletsBlock,
    ChartBlock,
    CodeBlock,
    ImageBlock,
    MindMapBlock,
    NumberedBlock,
    QuoteBlock,
    StockImageBlock,
    TextBlock,
)
from presentor.parser.charts import parse_chart
from presentor.parser.mindmap import parse_mindmap
from presentor.parser.segmenter import SEPARATOR

SUB_ITEM_PREFIX = "  "

NOTES_OPEN = re.compile(r"^<!--\s*notes:\s*", re.IGNORECASE)
BG_OPEN = re.compile(r"^<!--\s*bg:\s*", re.IGNORECASE)
COMMENT_CLOSE = re.compile(r"\s*-->.*$")
H1 = re.compile(r"^#\s+(.+)$")
H2 = re.compile(r"^##\s+(.+)$")
H3 = re.compile(r"^###\s+(.+)$")
ANY_HEADING = re.compile(r"^#{1,3}\s+")
FENCE_OPEN = re.compile(r"^(`{3,})(.*)$")
FENCE_CLOSE = re.compile(r"^`{3,}$")
STOCK_IMAGE = re.compile(r"^!\[stock:\s*(\S.*?)\s*\]\(([^)]*)\)")
AI_IMAGE = re.compile(r"^!\[ai-(photo|illustration|diagram):\s*(\S.*?)\s*\]\(([^)]*)\)")
IMAGE = re.compile(r"^!\[([^\]]*)\]\(([^)]*)\)")
QUOTE = re.compile(r"^>\s?")
BULLET = re.compile(r"^[-*]\s+(.*)$")
SUB_BULLET = re.compile(r"^\s{2,}[-*]\s+(.*)$")
NUMBERED = re.compile(r"^\d+\.\s+(.*)$")


def is_structural(trimmed: str) -> bool:
    """判断一行（已去除两端空白）是否会开启非段落的结构。"""
    return bool(
        ANY_HEADING.match(trimmed)
        or BULLET.match(trimmed)
        or NUMBERED.match(trimmed)
        or FENCE_OPEN.match(trimmed)
        or trimmed.startswith(">")
        or trimmed.startswith("![")
        or trimmed.startswith("<!--")
        or SEPARATOR.match(trimmed)
    )


def parse_notes(lines: List[str], pos: int) -> Tuple[str, int]:
    """解析演讲者备注，支持单行与多行；未闭合时消费到块尾并保留已收集内容。"""
    first = NOTES_OPEN.sub("", lines[pos].strip())
    if "-->" in first:
        return COMMENT_CLOSE.sub("", first).strip(), pos + 1

    collected = [first]
    i = pos + 1
    while i < len(lines):
        line = lines[i].rstrip()
        if "-->" in line:
            collected.append(COMMENT_CLOSE.sub("", line))
            return "\n".join(collected).strip(), i + 1
        collected.append(line)
        i += 1
    return "\n".join(collected).strip(), i


def parse_background(lines: List[str], pos: int) -> Tuple[str, int]:
    """解析单行背景指令，去掉注释包装后返回值（颜色或图片地址）。"""
    value = BG_OPEN.sub("", lines[pos].strip())
    return COMMENT_CLOSE.sub("", value).strip(), pos + 1


def _collect_fence(lines: List[str], pos: int) -> Tuple[List[str], int]:
    """收集围栏体，返回 (内容行, 结束围栏之后的行号)。"""
    body: List[str] = []
    i = pos + 1
    while i < len(lines):
        if FENCE_CLOSE.match(lines[i].strip()):
            return body, i + 1
        body.append(lines[i])
        i += 1
    return body, i


def fence_language(line: str) -> Optional[str]:
    """取围栏开启行的语言标签（小写），没有标签时返回 None。"""
    m = FENCE_OPEN.match(line.strip())
    label = m.group(2).strip().lower() if m else ""
    return label or None


def parse_fence(lines: List[str], pos: int) -> Tuple[Union[CodeBlock, ChartBlock, MindMapBlock], int]:
    """按围栏语言标签分派到代码、图表或思维导图。"""
    language = fence_language(lines[pos])
    body, end = _collect_fence(lines, pos)
    content = "\n".join(body)

    if language == "chart":
        return ChartBlock(content=content, chart_data=parse_chart(body)), end
    if language == "mindmap":
        return MindMapBlock(content=content, mindmap_data=parse_mindmap(body)), end
    return CodeBlock(content=content, language=language), end


def parse_stock_image(lines: List[str], pos: int) -> Tuple[StockImageBlock, int]:
    """解析 `![stock: query](orientation)`；`src` 保存方向提示，可为空。"""
    m = STOCK_IMAGE.match(lines[pos].strip())
    query = m.group(1)
    block = StockImageBlock(
        content=query,
        image_query=query,
        alt=query,
        src=m.group(2).strip() or None,
    )
    return block, pos + 1


def parse_ai_image(lines: List[str], pos: int) -> Tuple[AIImageBlock, int]:
    """解析 `![ai-<style>: prompt](...)`；括号内的内容不使用。"""
    m = AI_IMAGE.match(lines[pos].strip())
    prompt = m.group(2)
    return AIImageBlock(content=prompt, image_style=m.group(1), alt=prompt), pos + 1


def parse_image(lines: List[str], pos: int) -> Tuple[ImageBlock, int]:
    """解析普通图片 `![alt](src)`，`content` 保存 src。"""
    m = IMAGE.match(lines[pos].strip())
    src = m.group(2).strip()
    return ImageBlock(content=src, alt=m.group(1), src=src or None), pos + 1


def parse_quote(lines: List[str], pos: int) -> Tuple[QuoteBlock, int]:
    """消费连续的 `>` 行，去掉标记后以换行拼接。"""
    quoted: List[str] = []
    i = pos
    while i < len(lines) and lines[i].strip().startswith(">"):
        quoted.append(QUOTE.sub("", lines[i].strip()).strip())
        i += 1
    return QuoteBlock(content="\n".join(quoted)), i


def _bullet_item(line: str) -> Optional[str]:
    m = SUB_BULLET.match(line)
    if m:
        return SUB_ITEM_PREFIX + m.group(1).strip()
    m = BULLET.match(line.strip())
    if m:
        return m.group(1).strip()
    return None


def _numbered_item(line: str) -> Optional[str]:
    m = NUMBERED.match(line.strip())
    return m.group(1).strip() if m else None


def _parse_list(lines: List[str], pos: int, read_item) -> Tuple[List[str], int]:
    items: List[str] = []
    i = pos
    while i < len(lines):
        item = read_item(lines[i])
        if item is not None:
            items.append(item)
            i += 1
        elif not lines[i].strip() and i + 1 < len(lines) and read_item(lines[i + 1]) is not None:
            # 条目之间允许一个空行
            i += 1
        else:
            break
    return items, i


def parse_bullets(lines: List[str], pos: int) -> Tuple[BulletsBlock, int]:
    """解析无序列表，子项带两个空格前缀。"""
    items, end = _parse_list(lines, pos, _bullet_item)
    return BulletsBlock(content="\n".join(items), items=items), end


def parse_numbered(lines: List[str], pos: int) -> Tuple[NumberedBlock, int]:
    """解析有序列表；编号前缀丢弃，重新编号属于渲染阶段。"""
    items, end = _parse_list(lines, pos, _numbered_item)
    return NumberedBlock(content="\n".join(items), items=items), end


def parse_paragraph(lines: List[str], pos: int) -> Tuple[TextBlock, int]:
    """消费连续的非空、非结构行，以空格拼接。首行无条件消费。"""
    parts = [lines[pos].strip()]
    i = pos + 1
    while i < len(lines):
        trimmed = lines[i].strip()
        if not trimmed or is_structural(trimmed):
            break
        parts.append(trimmed)
        i += 1
    return TextBlock(content=" ".join(parts)), i
