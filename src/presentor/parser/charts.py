"""`chart` 围栏小语言解析。

每行独立处理：
- `type: bar|pie|line`（不区分大小写）设置图表类型，默认 bar；
- `title: ...` 设置标题，后写覆盖先写；
- 其他 `<label>: <number>` 行按源顺序追加数据项，允许重复 label；
- 其余行忽略。
"""

import re
from typing import List, Union

from presentor.common.types import ChartData, ChartItem

TYPE_LINE = re.compile(r"^type:\s*(bar|pie|line)$", re.IGNORECASE)
TITLE_LINE = re.compile(r"^title:\s*(.+)$", re.IGNORECASE)
DATA_LINE = re.compile(r"^(.+?):\s*([-+]?\d+(?:\.\d+)?)$")


def _number(raw: str) -> Union[int, float]:
    return float(raw) if "." in raw else int(raw)


def parse_chart(lines: List[str]) -> ChartData:
    """解析 chart 围栏体；没有数据行时返回空的 `items`，不报错。"""
    chart = ChartData()
    for line in lines:
        trimmed = line.strip()
        if not trimmed:
            continue

        m = TYPE_LINE.match(trimmed)
        if m:
            chart.type = m.group(1).lower()
            continue

        m = TITLE_LINE.match(trimmed)
        if m:
            chart.title = m.group(1).strip()
            continue

        m = DATA_LINE.match(trimmed)
        if m:
            chart.items.append(ChartItem(label=m.group(1).strip(), value=_number(m.group(2))))

    return chart
