"""`mindmap` 围栏小语言解析。

- `center: ...` 设置中心主题，缺省为 "Topic"；
- 行首 0~1 个空格加 `- text` 开始一个新的一级分支；
- 行首 2 个及以上空白加 `- text` 是最近一个分支的子节点，尚无分支时忽略。
"""

import re
from typing import List

from presentor.common.types import MindMapBranch, MindMapData

CENTER_LINE = re.compile(r"^center:\s*(.+)$", re.IGNORECASE)
BRANCH_LINE = re.compile(r"^ ?-\s+(.+)$")
CHILD_LINE = re.compile(r"^\s{2,}-\s+(.+)$")


def parse_mindmap(lines: List[str]) -> MindMapData:
    """解析 mindmap 围栏体；没有分支的节点保留空的 `children` 列表。"""
    mindmap = MindMapData()
    for line in lines:
        line = line.rstrip()
        if not line.strip():
            continue

        m = CENTER_LINE.match(line.strip())
        if m:
            mindmap.center = m.group(1).strip()
            continue

        m = BRANCH_LINE.match(line)
        if m:
            mindmap.branches.append(MindMapBranch(label=m.group(1).strip()))
            continue

        m = CHILD_LINE.match(line)
        if m and mindmap.branches:
            mindmap.branches[-1].children.append(m.group(1).strip())

    return mindmap
