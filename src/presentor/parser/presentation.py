"""演示文稿组装：串联 frontmatter 解析、幻灯片切分与逐页解析，得到完整的 `Presentation`。

数据严格单向流动：文本 -> 元数据 + 正文行 -> 幻灯片行块 -> 逐页内容块 -> 带版式的幻灯片。
解析是同步、无 I/O 的纯计算，任何字符串输入（包括空串）都不会抛错。
"""

from typing import List

from presentor.common.types import Presentation
from presentor.common.utils import get_logger
from presentor.parser.dispatcher import parse_slide
from presentor.parser.frontmatter import parse_frontmatter
from presentor.parser.segmenter import split_slides

logger = get_logger(__name__)


def split_lines(text: str) -> List[str]:
    """统一换行符并切分为行；去掉开头的 UTF-8 BOM，否则 frontmatter 首行无法识别。"""
    text = text.removeprefix("\ufeff")
    return text.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def parse(text: str) -> Presentation:
    """把类 Markdown 文本解析为 `Presentation`。

    行为：
    - 首个行块且 frontmatter 没有标题时，按“首页”规则推断版式；
    - 元数据缺少标题而第一页有标题时，把第一页标题回填到元数据。
    """
    lines = split_lines(text)
    meta, body_start = parse_frontmatter(lines)
    chunks = split_slides(lines, body_start)

    slides = [parse_slide(chunk, is_first=(i == 0 and not meta.title)) for i, chunk in enumerate(chunks)]

    if not meta.title and slides and slides[0].title:
        meta = meta.model_copy(update={"title": slides[0].title})

    logger.debug(f"Parsed presentation {meta.title!r} with {len(slides)} slides")
    return Presentation(meta=meta, slides=slides)
