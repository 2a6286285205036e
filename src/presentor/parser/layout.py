"""版式推断：根据标题、内容块与是否首页，从封闭版式集合中选出一个。

`two-column` 与 `blank` 只留给外部手动覆盖，推断从不产出。
"""

from typing import Optional, Sequence

from presentor.common.types import ContentBlock, SlideLayout


def infer_layout(title: Optional[str], blocks: Sequence[ContentBlock], is_first: bool) -> SlideLayout:
    """推断版式。`is_first` 表示首页且元数据尚无标题。"""
    if len(blocks) == 1 and blocks[0].type == "image" and not title:
        return "image-full"
    if is_first and not blocks:
        return "title"
    if title and not blocks:
        return "section"
    return "content"
