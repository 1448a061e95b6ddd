"""核心数据结构：InstallRecord/BuildVersion。"""

from dataclasses import dataclass


@dataclass(frozen=True)
class InstallRecord:
    """一次可用的引擎安装（名字 + 根目录）。"""
    name: str        # 去掉 "UE_" 前缀后的版本号，或 "source-N"
    path: str        # 引擎根目录，原样保留，不做规范化/存在性检查
    source: str = ""  # 产生该记录的来源（launcher / registry），不参与匹配


@dataclass(frozen=True)
class BuildVersion:
    """`Engine/Build/Build.version` 的内容。"""
    major: int
    minor: int
    patch: int
    changelist: int = 0
    compatible_changelist: int = 0  # 源码构建通常 changelist=0，只填这个
    is_licensee_version: bool = False
    is_promoted_build: bool = False
    branch_name: str = ""

    @property
    def version_string(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @property
    def effective_changelist(self) -> int:
        if self.changelist == 0:
            return self.compatible_changelist
        return self.changelist
