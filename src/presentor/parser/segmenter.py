"""幻灯片切分：按水平线把正文行切成逐页的行块。

围栏感知：遇到以三个及以上反引号开头的行时翻转围栏奇偶性，
只有在围栏外（偶数）时，三个及以上 `-` 组成的行才作为分隔符。
"""

import re
from typing import List

from presentor.common.utils import get_logger

logger = get_logger(__name__)

SEPARATOR = re.compile(r"^-{3,}$")
FENCE = re.compile(r"^`{3,}")


def is_separator(line: str) -> bool:
    return bool(SEPARATOR.match(line.strip()))


def is_fence(line: str) -> bool:
    return bool(FENCE.match(line.strip()))


def split_slides(lines: List[str], start: int = 0) -> List[List[str]]:
    """从 `start` 行开始切分幻灯片，丢弃全部为空白的行块。"""
    chunks: List[List[str]] = []
    current: List[str] = []
    in_fence = False

    for line in lines[start:]:
        if is_fence(line):
            in_fence = not in_fence
        elif not in_fence and is_separator(line):
            # 空块也要关闭，保证块序号与源文本一致
            chunks.append(current)
            current = []
            continue
        current.append(line)

    if current:
        chunks.append(current)

    chunks = [chunk for chunk in chunks if any(line.strip() for line in chunk)]
    logger.debug(f"Segmented body into {len(chunks)} slide chunks")
    return chunks
