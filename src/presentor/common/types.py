"""公共数据模型：描述解析后的演示文稿结构，供下游渲染器消费。

包含：
- `PresentationMeta`：文档级元数据（标题、作者、主题、画幅比例等）；
- `ContentBlock`：按 `type` 区分的内容块联合类型（标题、列表、代码、图表、思维导图、图片等）；
- `ChartData` / `MindMapData`：围栏内嵌小语言解析出的结构；
- `Slide` / `Presentation`：单页与整份文档。

约定：
- 每种内容块单独建模，`type` 字段作为判别器，避免出现无效的字段组合；
- `content` 字段始终保存去掉标记后的原始文本；
- `resolved_src` 只由解析之后的图片解析阶段写入，解析器从不设置。
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

AspectRatio = Literal["16:9", "4:3"]
ChartKind = Literal["bar", "pie", "line"]
ImageStyle = Literal["photo", "illustration", "diagram"]
SlideLayout = Literal["title", "section", "content", "image-full", "two-column", "blank"]

DEFAULT_ASPECT_RATIO: AspectRatio = "16:9"
ASPECT_RATIOS = ("16:9", "4:3")


class PresentationMeta(BaseModel):
    """文档级元数据，来自 frontmatter。"""
    title: Optional[str] = Field(description="演示文稿标题", default=None)
    author: Optional[str] = Field(description="作者", default=None)
    date: Optional[str] = Field(description="日期（原样保存）", default=None)
    theme: Optional[str] = Field(description="主题名", default=None)
    aspect_ratio: AspectRatio = Field(description="画幅比例", default=DEFAULT_ASPECT_RATIO)
    accent_color: Optional[str] = Field(description="强调色", default=None)
    font_family: Optional[str] = Field(description="字体", default=None)
    style: Optional[str] = Field(description="风格别名（如 dark、minimal）", default=None)


class ChartItem(BaseModel):
    """单个数据项；整数保持整数，便于序列化后与源文本一致。"""
    label: str
    value: Union[int, float]


class ChartData(BaseModel):
    """`chart` 围栏解析结果。"""
    type: ChartKind = Field(description="图表类型", default="bar")
    title: Optional[str] = Field(description="图表标题", default=None)
    items: List[ChartItem] = Field(description="数据项，按源顺序排列", default_factory=list)


class MindMapBranch(BaseModel):
    label: str
    children: List[str] = Field(default_factory=list)


class MindMapData(BaseModel):
    """`mindmap` 围栏解析结果。"""
    center: str = Field(description="中心主题", default="Topic")
    branches: List[MindMapBranch] = Field(description="一级分支", default_factory=list)


class HeadingBlock(BaseModel):
    type: Literal["heading"] = "heading"
    content: str
    level: int = 1


class SubheadingBlock(BaseModel):
    type: Literal["subheading"] = "subheading"
    content: str
    level: Literal[2, 3] = 3


class TextBlock(BaseModel):
    type: Literal["text"] = "text"
    content: str


class BulletsBlock(BaseModel):
    """无序列表；子项以两个空格前缀存放在同一个 `items` 中。"""
    type: Literal["bullets"] = "bullets"
    content: str
    items: List[str] = Field(default_factory=list)


class NumberedBlock(BaseModel):
    type: Literal["numbered"] = "numbered"
    content: str
    items: List[str] = Field(default_factory=list)


class CodeBlock(BaseModel):
    type: Literal["code"] = "code"
    content: str
    language: Optional[str] = None


class QuoteBlock(BaseModel):
    type: Literal["quote"] = "quote"
    content: str


class ImageBlock(BaseModel):
    type: Literal["image"] = "image"
    content: str
    alt: str = ""
    src: Optional[str] = None
    resolved_src: Optional[str] = None


class StockImageBlock(BaseModel):
    """图库图片指令：`![stock: query](orientation)`。"""
    type: Literal["stock-image"] = "stock-image"
    content: str
    image_query: str
    alt: str = ""
    src: Optional[str] = Field(description="方向提示（horizontal/vertical）或空", default=None)
    resolved_src: Optional[str] = None


class AIImageBlock(BaseModel):
    """AI 生成图片指令：`![ai-<style>: prompt](...)`。"""
    type: Literal["ai-image"] = "ai-image"
    content: str
    image_style: ImageStyle
    alt: str = ""
    resolved_src: Optional[str] = None


class ChartBlock(BaseModel):
    type: Literal["chart"] = "chart"
    content: str
    chart_data: ChartData


class MindMapBlock(BaseModel):
    type: Literal["mindmap"] = "mindmap"
    content: str
    mindmap_data: MindMapData


ContentBlock = Annotated[
    Union[
        HeadingBlock,
        SubheadingBlock,
        TextBlock,
        BulletsBlock,
        NumberedBlock,
        ImageBlock,
        CodeBlock,
        QuoteBlock,
        ChartBlock,
        MindMapBlock,
        StockImageBlock,
        AIImageBlock,
    ],
    Field(discriminator="type"),
]


class Slide(BaseModel):
    """单页幻灯片。"""
    layout: SlideLayout = Field(description="版式", default="content")
    title: Optional[str] = Field(description="页标题", default=None)
    subtitle: Optional[str] = Field(description="副标题", default=None)
    blocks: List[ContentBlock] = Field(description="内容块，顺序有意义", default_factory=list)
    notes: Optional[str] = Field(description="演讲者备注", default=None)
    background: Optional[str] = Field(description="背景颜色或图片地址", default=None)


class Presentation(BaseModel):
    """整份演示文稿：元数据 + 有序幻灯片。"""
    meta: PresentationMeta = Field(default_factory=PresentationMeta)
    slides: List[Slide] = Field(default_factory=list)
