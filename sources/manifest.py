"""启动器清单（LauncherInstalled.dat）定位与解析。

清单由 Epic 启动器维护，位于“程序数据”目录下的固定相对路径：

    <ProgramData>/Epic/UnrealEngineLauncher/LauncherInstalled.dat

内容是一个 JSON 对象，`InstallationList` 数组里除了引擎还会混有插件/其他应用，
引擎条目通过 `AppName` 中的 `UE_` 前缀识别。
"""

from __future__ import annotations

import json
import os
import sys
import uuid
from pathlib import Path
from typing import Any, Callable

from shared.config.config_loader import DEFAULT_ENGINE_PREFIX
from shared.errors import ManifestNotFound, ManifestParseError
from shared.models.models import InstallRecord
from shared.utils.logging import setup_logger
from sources.base import InstallSource

MANIFEST_SUFFIX = Path("Epic") / "UnrealEngineLauncher" / "LauncherInstalled.dat"
INSTALLATION_LIST_KEY = "InstallationList"
APP_NAME_KEY = "AppName"
INSTALL_LOCATION_KEY = "InstallLocation"

# FOLDERID_ProgramData
_FOLDERID_PROGRAM_DATA = uuid.UUID("62AB5D82-FDC1-4DC3-A9DD-070D1D495D97")

_LOGGER = setup_logger("manifest")


def _windows_program_data() -> str:
    """通过 SHGetKnownFolderPath 取 ProgramData 目录。"""
    import ctypes

    class _GUID(ctypes.Structure):
        _fields_ = [
            ("Data1", ctypes.c_uint32),
            ("Data2", ctypes.c_uint16),
            ("Data3", ctypes.c_uint16),
            ("Data4", ctypes.c_ubyte * 8),
        ]

    folder_id = _GUID.from_buffer_copy(_FOLDERID_PROGRAM_DATA.bytes_le)
    out = ctypes.c_wchar_p()
    hr = ctypes.windll.shell32.SHGetKnownFolderPath(ctypes.byref(folder_id), 0, None, ctypes.byref(out))
    try:
        if hr != 0 or not out.value:
            raise OSError(f"SHGetKnownFolderPath failed (hr=0x{hr & 0xFFFFFFFF:08X})")
        return out.value
    finally:
        ctypes.windll.ole32.CoTaskMemFree(out)


def program_data_dir(platform: str | None = None, home: Path | None = None) -> Path:
    """按平台解析“程序数据”目录。

    Parameters
    ----------
    platform:
        `sys.platform` 风格的平台名；为 None 时取当前平台。
    home:
        非 Windows 平台使用的用户目录；为 None 时取 `Path.home()`。

    Raises
    ------
    OSError
        平台 API 无法解析目录。
    """
    platform = platform or sys.platform
    if platform.startswith("win"):
        return Path(_windows_program_data())
    home = home or Path.home()
    if platform == "darwin":
        return home / "Library" / "Application Support"
    return home / ".local" / "share"


def locate_manifest(
    override: str | None = None,
    *,
    resolve_dir: Callable[[], Path] = program_data_dir,
) -> Path:
    """返回 LauncherInstalled.dat 的绝对路径。

    `override`（来自 config.manifest_path）非空时直接使用；
    否则为“程序数据目录 + 固定后缀”。目录解析失败抛 ManifestNotFound。
    """
    if override:
        return Path(override)
    try:
        base = resolve_dir()
    except (OSError, AttributeError, RuntimeError) as exc:
        raise ManifestNotFound(f"Unable to resolve the program data directory: {exc}") from exc
    return Path(base) / MANIFEST_SUFFIX


def _read_manifest(path: Path) -> dict[str, Any]:
    try:
        # 启动器写出的文件偶尔带 BOM
        with open(path, "r", encoding="utf-8-sig") as f:
            text = f.read()
    except UnicodeDecodeError as exc:
        raise ManifestParseError(f"Unable to decode manifest: {exc}", str(path)) from exc
    except OSError as exc:
        raise ManifestNotFound(f"Unable to open manifest: {exc.strerror or exc}", str(path)) from exc

    try:
        payload = json.loads(text)
    except ValueError as exc:
        raise ManifestParseError(f"Unable to parse manifest: {exc}", str(path)) from exc
    if not isinstance(payload, dict):
        raise ManifestParseError("Manifest root must be a JSON object", str(path))
    return payload


def parse_installation_list(payload: dict[str, Any], prefix: str = DEFAULT_ENGINE_PREFIX) -> list[InstallRecord]:
    """从已解码的清单中抽取引擎安装。

    单条坏数据（非对象 / 缺字段 / 非字符串）跳过，不影响后续条目；
    不含前缀的条目（插件、启动器自身等）同样跳过。
    名字去掉第一次出现的前缀，路径原样保留。
    """
    entries = payload.get(INSTALLATION_LIST_KEY)
    if not isinstance(entries, list):
        _LOGGER.debug("manifest has no %s array", INSTALLATION_LIST_KEY)
        return []

    out: list[InstallRecord] = []
    for idx, entry in enumerate(entries):
        if not isinstance(entry, dict):
            _LOGGER.debug("skip entry #%d: not an object", idx)
            continue
        app_name = entry.get(APP_NAME_KEY)
        location = entry.get(INSTALL_LOCATION_KEY)
        if not isinstance(app_name, str) or not isinstance(location, str):
            _LOGGER.debug("skip entry #%d: missing %s/%s", idx, APP_NAME_KEY, INSTALL_LOCATION_KEY)
            continue
        if prefix not in app_name:
            continue
        out.append(InstallRecord(name=app_name.replace(prefix, "", 1), path=location, source="launcher"))
    return out


class LauncherManifestSource(InstallSource):
    """启动器安装来源：读取 LauncherInstalled.dat。"""

    name = "launcher"

    def __init__(
        self,
        manifest_path: str | os.PathLike[str] | None = None,
        prefix: str = DEFAULT_ENGINE_PREFIX,
        *,
        resolve_dir: Callable[[], Path] = program_data_dir,
    ):
        self.manifest_path = str(manifest_path) if manifest_path else None
        self.prefix = prefix
        self._resolve_dir = resolve_dir

    def path(self) -> Path:
        return locate_manifest(self.manifest_path, resolve_dir=self._resolve_dir)

    def records(self) -> list[InstallRecord]:
        path = self.path()
        _LOGGER.debug("reading launcher manifest: %s", path)
        found = parse_installation_list(_read_manifest(path), self.prefix)
        _LOGGER.info("%d launcher install(s) found in %s", len(found), path)
        return found
