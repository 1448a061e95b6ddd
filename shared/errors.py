"""uatrun 异常层级与退出码。

各模块只负责抛出；由 `main.main()` 统一捕获、输出一条可读信息并映射为退出码。
"""

from __future__ import annotations

from enum import IntEnum
from typing import Sequence

from shared.models.models import InstallRecord


class ExitCode(IntEnum):
    """进程退出码（成功时透传子进程退出码）。"""

    OK = 0
    USAGE = -1
    MANIFEST_NOT_FOUND = -2
    MANIFEST_PARSE = -3
    NAME_NOT_FOUND = -4
    INTERRUPTED = 130  # 等待子进程时 Ctrl-C，沿用 shell 的 128+SIGINT 约定


class UatRunError(Exception):
    """所有可预期失败的基类。"""

    exit_code: ExitCode = ExitCode.USAGE


class UsageError(UatRunError):
    """命令行参数不足或非法。"""

    exit_code = ExitCode.USAGE


class ManifestNotFound(UatRunError):
    """LauncherInstalled.dat 无法定位或无法打开。"""

    exit_code = ExitCode.MANIFEST_NOT_FOUND

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class ManifestParseError(UatRunError):
    """LauncherInstalled.dat 内容不是合法 JSON 对象。"""

    exit_code = ExitCode.MANIFEST_PARSE

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path


class NameNotFound(UatRunError):
    """请求的引擎名不在合并后的安装列表中。"""

    exit_code = ExitCode.NAME_NOT_FOUND

    def __init__(self, name: str, available: Sequence[InstallRecord]):
        super().__init__(f"Engine '{name}' not found")
        self.name = name
        self.available = list(available)
