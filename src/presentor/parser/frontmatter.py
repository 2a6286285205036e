"""Frontmatter 解析：识别文档开头可选的 `---` 元数据块。

规则：
- 仅当第 0 行是 `---` 时才尝试识别，并向后寻找下一条 `---` 作为结束；
- 找不到结束行时整份输入都视为正文，元数据只保留默认画幅比例；
- 内部每行按第一个冒号拆成 key/value，key 不区分大小写，value 去掉两端引号；
- 未识别的 key 静默丢弃。
"""

from typing import List, Tuple

from presentor.common.types import ASPECT_RATIOS, PresentationMeta
from presentor.common.utils import get_logger

logger = get_logger(__name__)

RULE = "---"

# key 别名 -> PresentationMeta 字段名
META_KEYS = {
    "title": "title",
    "author": "author",
    "date": "date",
    "theme": "theme",
    "aspect-ratio": "aspect_ratio",
    "aspectratio": "aspect_ratio",
    "accent-color": "accent_color",
    "accentcolor": "accent_color",
    "color": "accent_color",
    "font-family": "font_family",
    "fontfamily": "font_family",
    "font": "font_family",
    "style": "style",
}


def _strip_quotes(value: str) -> str:
    if value[:1] in ("'", '"'):
        value = value[1:]
    if value[-1:] in ("'", '"'):
        value = value[:-1]
    return value


def parse_frontmatter(lines: List[str]) -> Tuple[PresentationMeta, int]:
    """解析元数据块。

    参数：
        lines: 已按行切分的输入。

    返回：
        (元数据, 正文起始行号)。没有元数据块时起始行号为 0。
    """
    meta = PresentationMeta()
    if not lines or lines[0].strip() != RULE:
        return meta, 0

    end = next((i for i in range(1, len(lines)) if lines[i].strip() == RULE), None)
    if end is None:
        logger.debug("Frontmatter opening rule has no closing rule, treating input as body")
        return meta, 0

    values = {}
    for raw in lines[1:end]:
        line = raw.strip()
        if not line or line.startswith("#") or ":" not in line:
            continue
        key, _, value = line.partition(":")
        field = META_KEYS.get(key.strip().lower())
        if field is None:
            continue
        value = _strip_quotes(value.strip())
        # 只接受两种画幅比例，其余值忽略
        if field == "aspect_ratio" and value not in ASPECT_RATIOS:
            continue
        values[field] = value

    meta = meta.model_copy(update=values)
    logger.debug(f"Parsed frontmatter keys: {sorted(values)}")
    return meta, end + 1
