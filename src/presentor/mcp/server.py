"""MCP Server 定义：将解析器的能力以工具形式暴露给 MCP 客户端。

主要职责：
- 使用 FastMCP 创建 MCP 服务器实例，注册 `get_format_guide`、`parse_presentation`、`describe_presentation`；
- `parse_presentation` 返回解析模型的 JSON，供渲染器或其他代理消费；
- `describe_presentation` 返回便于阅读的逐页概要；
- 工具内部捕获异常并返回错误文本，不向客户端抛出。

启动：`python -m presentor.mcp.server --transport stdio`。
"""

import json
from typing import Optional

import click
from dotenv import load_dotenv
from fastmcp import FastMCP

from presentor.common.types import ASPECT_RATIOS, Presentation
from presentor.common.utils import get_logger
from presentor.parser.presentation import parse

logger = get_logger(__name__)

# 初始化 MCP Server，并声明服务名称
mcp = FastMCP("Presentor")

FORMAT_GUIDE = """# Presentor Input Format Guide

## Frontmatter (optional)
Place key: value metadata between `---` lines at the very top:

    ---
    title: "My Presentation"
    author: "Author Name"
    date: 2025-01-01
    theme: default
    aspect-ratio: 16:9
    accent-color: #2563EB
    font-family: Inter
    style: dark
    ---

Aspect ratios: 16:9 (default), 4:3. Unknown keys are ignored.

## Slides
Slides are separated by a line of three or more dashes (`---`).
Dashes inside a code fence do not split slides.

## Headings
- `# Title`: first H1 is the slide title, later H1s become headings
- `## Subtitle`: title if none yet, otherwise the subtitle, otherwise a subheading
- `### Subheading`: content subheading

## Text and lists
- Plain lines become paragraphs (consecutive lines are joined)
- `- item` or `* item`: bullet list, indent two spaces for sub-items
- `1. item`: numbered list
- `> text`: blockquote

## Code, charts and mind maps
Fenced blocks with three backticks and an optional language tag.

    ```chart
    type: bar
    title: Revenue ($M)
    Q1: 12
    Q2: 18
    ```

Chart types: bar (default), pie, line.

    ```mindmap
    center: Planning
    - Research
      - Market
    - Design
    ```

## Images
- `![alt](path/or/url)`: regular image
- `![stock: search query](horizontal)`: stock photo, orientation horizontal/vertical or empty
- `![ai-photo: prompt]()`, `![ai-illustration: prompt]()`, `![ai-diagram: prompt]()`: AI image

## Directives
- `<!-- notes: speaker notes -->` (may span several lines)
- `<!-- bg: #1a1a2e -->`: slide background

## Layouts (auto-detected)
- title: first slide with no content blocks
- section: a later slide with only a title
- image-full: a slide with a single image and no title
- content: everything else
"""


def _apply_overrides(presentation: Presentation, theme: Optional[str], aspect_ratio: Optional[str]) -> Presentation:
    updates = {}
    if theme:
        updates["theme"] = theme
    if aspect_ratio:
        if aspect_ratio not in ASPECT_RATIOS:
            raise ValueError(f"aspect_ratio must be one of {', '.join(ASPECT_RATIOS)}, got {aspect_ratio!r}")
        updates["aspect_ratio"] = aspect_ratio
    if not updates:
        return presentation
    meta = presentation.meta.model_copy(update=updates)
    return presentation.model_copy(update={"meta": meta})


def describe(presentation: Presentation) -> str:
    """生成逐页概要文本。"""
    meta = presentation.meta
    lines = [
        f"Title: {meta.title or '(untitled)'}",
        f"Slides: {len(presentation.slides)}",
        f"Theme: {meta.theme or 'default'}",
        f"Aspect ratio: {meta.aspect_ratio}",
    ]
    for number, slide in enumerate(presentation.slides, start=1):
        kinds = ", ".join(block.type for block in slide.blocks) or "-"
        lines.append(f"{number}. [{slide.layout}] {slide.title or '(no title)'}: {kinds}")
    return "\n".join(lines)


@mcp.tool()
async def get_format_guide() -> str:
    """返回输入格式说明，客户端应先调用它了解幻灯片、图表、思维导图与图片指令的语法。"""
    return FORMAT_GUIDE


@mcp.tool()
async def parse_presentation(
    content: str,
    theme: Optional[str] = None,
    aspect_ratio: Optional[str] = None,
) -> str:
    """把 Presentor 格式文本解析为结构化 JSON。

    参数:
        content (str): Presentor 格式的演示文稿文本。
        theme (str): 可选，覆盖元数据中的主题名。
        aspect_ratio (str): 可选，覆盖画幅比例，只接受 16:9 或 4:3。

    返回:
        str: 成功时返回模型 JSON；失败时返回错误信息。
    """
    logger.info(f"Received parse request ({len(content)} chars)")
    try:
        presentation = _apply_overrides(parse(content), theme, aspect_ratio)
        logger.info(f"Parsed {len(presentation.slides)} slides")
        return json.dumps(presentation.model_dump(mode="json", exclude_none=True), ensure_ascii=False)
    except Exception as e:
        logger.error(f"Error parsing presentation: {e}")
        return f"Error parsing presentation: {str(e)}"


@mcp.tool()
async def describe_presentation(content: str) -> str:
    """解析文本并返回逐页概要（版式、标题、内容块类型）。"""
    logger.info(f"Received describe request ({len(content)} chars)")
    try:
        return describe(parse(content))
    except Exception as e:
        logger.error(f"Error describing presentation: {e}")
        return f"Error describing presentation: {str(e)}"


@click.command()
@click.option("--transport", type=click.Choice(["stdio", "sse", "http"]), default="stdio")
@click.option("--host", default="localhost")
@click.option("--port", default=10100)
def main(transport, host, port):
    # 自动加载 .env 文件，确保环境变量可用
    load_dotenv()
    logger.info(f"Starting Presentor MCP server ({transport})")
    if transport == "stdio":
        mcp.run()
    else:
        mcp.run(transport=transport, host=host, port=port)


if __name__ == "__main__":
    main()
