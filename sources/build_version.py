"""读取引擎根目录下的 `Engine/Build/Build.version`。

启动器版本与常规源码 clone 都带这个文件，用于在列表里展示 major/minor/patch 与 CL。
只做展示，不参与匹配；读不到时返回 None。
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from shared.models.models import BuildVersion
from shared.utils.logging import setup_logger

BUILD_VERSION_SUBPATH = Path("Engine") / "Build" / "Build.version"

_LOGGER = setup_logger("build-version")


def _as_int(payload: dict[str, Any], key: str, default: int = 0) -> int:
    val = payload.get(key, default)
    if isinstance(val, bool) or not isinstance(val, int):
        raise ValueError(f"{key} must be an integer")
    return val


def parse_build_version(payload: dict[str, Any]) -> BuildVersion:
    """把 Build.version 的 JSON 对象转成 BuildVersion。

    Raises
    ------
    ValueError
        缺少 Major/Minor/PatchVersion 或类型不对。
    """
    for key in ("MajorVersion", "MinorVersion", "PatchVersion"):
        if key not in payload:
            raise ValueError(f"Missing {key}")
    branch = payload.get("BranchName", "")
    return BuildVersion(
        major=_as_int(payload, "MajorVersion"),
        minor=_as_int(payload, "MinorVersion"),
        patch=_as_int(payload, "PatchVersion"),
        changelist=_as_int(payload, "Changelist"),
        compatible_changelist=_as_int(payload, "CompatibleChangelist"),
        is_licensee_version=bool(_as_int(payload, "IsLicenseeVersion")),
        is_promoted_build=bool(_as_int(payload, "IsPromotedBuild")),
        branch_name=branch if isinstance(branch, str) else "",
    )


def read_build_version(install_dir: str | Path) -> BuildVersion | None:
    path = Path(install_dir) / BUILD_VERSION_SUBPATH
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            payload = json.load(f)
    except (OSError, ValueError) as exc:
        _LOGGER.debug("no usable Build.version at %s: %s", path, exc)
        return None
    if not isinstance(payload, dict):
        return None
    try:
        return parse_build_version(payload)
    except ValueError as exc:
        _LOGGER.debug("invalid Build.version at %s: %s", path, exc)
        return None
