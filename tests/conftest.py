import sys
from pathlib import Path

import pytest

# 确保项目根目录在 sys.path，便于测试内直接以顶层包名导入
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)


class RecordingSink:
    """把用户可见输出收集成 (kind, text) 列表，替代 rich 控制台。"""

    def __init__(self):
        self.lines: list[tuple[str, str]] = []
        self.tables: list[dict] = []

    def info(self, message: str, *, emphasis: bool = False) -> None:
        self.lines.append(("info", message))

    def error(self, message: str) -> None:
        self.lines.append(("error", message))

    def rows(self, title, header, rows) -> None:
        self.tables.append({"title": title, "header": list(header), "rows": [list(r) for r in rows]})

    def text(self) -> str:
        return "\n".join(msg for _kind, msg in self.lines)


@pytest.fixture
def sink():
    return RecordingSink()
