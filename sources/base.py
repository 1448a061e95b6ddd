"""InstallSource 抽象接口。"""

from __future__ import annotations

from abc import ABC, abstractmethod

from shared.models.models import InstallRecord


class InstallSource(ABC):
    """引擎安装来源抽象层。

    子类返回按发现顺序排列的 InstallRecord；来源不可用时返回空列表，
    只有“整个来源不可读”这类终止性错误才抛异常。
    """

    name: str = ""

    @abstractmethod
    def records(self) -> list[InstallRecord]:
        """列出该来源发现的全部安装。"""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
