"""源码构建来源：枚举注册表里登记的引擎目录。

UnrealVersionSelector 在
`HKEY_CURRENT_USER\\SOFTWARE\\Epic Games\\Unreal Engine\\Builds`
下为每个登记过的源码构建写一个值：值名是 GUID，值数据是引擎根目录。
这里不使用值名，记录名取枚举位置：`source-0`、`source-1`……
"""

from __future__ import annotations

import sys
from contextlib import AbstractContextManager
from typing import Any, Protocol

from shared.config.config_loader import DEFAULT_REGISTRY_KEY
from shared.models.models import InstallRecord
from shared.utils.logging import setup_logger
from sources.base import InstallSource

SOURCE_NAME_PREFIX = "source-"

_LOGGER = setup_logger("registry")


class RegistryReader(Protocol):
    """注册表访问协议（便于在非 Windows 平台/测试中替换）。"""

    def open_key(self, key_path: str) -> AbstractContextManager[Any]:
        """打开 key；不可用时抛 OSError。"""

    def enum_value(self, handle: Any, index: int) -> tuple[str, Any, int]:
        """返回第 index 个值 (name, data, type)；越界或出错时抛 OSError。"""


class WinRegReader:
    """基于标准库 winreg 的 HKEY_CURRENT_USER 读取器。"""

    def __init__(self):
        import winreg

        self._winreg = winreg

    def open_key(self, key_path: str):
        return self._winreg.OpenKey(self._winreg.HKEY_CURRENT_USER, key_path, 0, self._winreg.KEY_READ)

    def enum_value(self, handle: Any, index: int) -> tuple[str, Any, int]:
        return self._winreg.EnumValue(handle, index)


def default_reader() -> RegistryReader | None:
    """当前平台可用的读取器；非 Windows 返回 None。"""
    if not sys.platform.startswith("win"):
        return None
    return WinRegReader()


class RegistryBuildsSource(InstallSource):
    """注册表源码构建来源。

    key 打不开（非 Windows / 未登记过源码构建 / 无权限）时贡献 0 条记录，不视为错误。
    枚举在第一个失败的 index 处停止，越界与其他错误都按正常结束处理。
    """

    name = "registry"

    def __init__(self, key_path: str = DEFAULT_REGISTRY_KEY, reader: RegistryReader | None = None):
        self.key_path = key_path
        self.reader = reader if reader is not None else default_reader()

    def records(self) -> list[InstallRecord]:
        if self.reader is None:
            _LOGGER.debug("registry not available on %s", sys.platform)
            return []
        try:
            key = self.reader.open_key(self.key_path)
        except OSError as exc:
            _LOGGER.debug("registry key %s unavailable: %s", self.key_path, exc)
            return []

        out: list[InstallRecord] = []
        with key as handle:
            index = 0
            while True:
                try:
                    _value_name, data, _value_type = self.reader.enum_value(handle, index)
                except OSError:
                    break
                if isinstance(data, str):
                    out.append(InstallRecord(name=f"{SOURCE_NAME_PREFIX}{index}", path=data, source=self.name))
                else:
                    # 只支持字符串路径；位置编号照常占用
                    _LOGGER.debug("skip registry value #%d: non-string data", index)
                index += 1
        _LOGGER.info("%d source build(s) found in registry", len(out))
        return out
