"""面向用户的输出通道。

业务代码只依赖 `OutputSink` 协议（纯文本 + 可选强调）；
默认实现 `ConsoleSink` 基于 rich，非 TTY 时自动退化为无颜色文本。
"""

from __future__ import annotations

from typing import Protocol, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text


class OutputSink(Protocol):
    def info(self, message: str, *, emphasis: bool = False) -> None:
        ...

    def error(self, message: str) -> None:
        ...

    def rows(self, title: str, header: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
        ...


class ConsoleSink:
    """rich 控制台输出：info -> stdout，error -> stderr。"""

    def __init__(self, out: Console | None = None, err: Console | None = None):
        self.out = out or Console(highlight=False)
        self.err = err or Console(stderr=True, highlight=False)

    def info(self, message: str, *, emphasis: bool = False) -> None:
        # 用 Text 而不是 markup 字符串，路径里的 [ ] 不会被当成样式
        self.out.print(Text(message, style="bold green" if emphasis else ""))

    def error(self, message: str) -> None:
        self.err.print(Text(message, style="bold red"))

    def rows(self, title: str, header: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
        table = Table(title=title, show_lines=False)
        for col in header:
            table.add_column(col)
        for row in rows:
            table.add_row(*[str(c) for c in row])
        self.out.print(table)
