"""配置加载与数据结构。

支持 YAML 配置、环境变量占位符 `${VAR}` 展开，以及 .env/.env.local 自动加载。
配置是可选的：默认配置文件不存在时全部使用内置默认值。
"""

import os
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from shared.config.validation import validate_raw_config

DEFAULT_ENGINE_PREFIX = "UE_"
DEFAULT_REGISTRY_KEY = r"SOFTWARE\Epic Games\Unreal Engine\Builds"


def default_uat_subpath(platform: str | None = None) -> str:
    """RunUAT 入口相对引擎根目录的路径（Windows 用 .bat，其余平台用 .sh）。"""
    platform = platform or sys.platform
    if platform.startswith("win"):
        return "Engine/Build/BatchFiles/RunUAT.bat"
    return "Engine/Build/BatchFiles/RunUAT.sh"


def default_config_path(platform: str | None = None, home: Path | None = None) -> Path:
    """用户级配置文件位置，与当前工作目录无关。

    Windows: `~/AppData/Roaming/uatrun/config.yml`；其余平台: `~/.config/uatrun/config.yml`。
    """
    platform = platform or sys.platform
    home = home or Path.home()
    if platform.startswith("win"):
        return home / "AppData" / "Roaming" / "uatrun" / "config.yml"
    return home / ".config" / "uatrun" / "config.yml"


@dataclass
class AppConfig:
    """应用总配置（平铺 key）。"""
    manifest_path: str | None = None  # 为 None 时按平台定位 LauncherInstalled.dat
    engine_prefix: str = DEFAULT_ENGINE_PREFIX
    registry_key: str = DEFAULT_REGISTRY_KEY
    use_registry: bool = True
    uat_subpath: str = field(default_factory=default_uat_subpath)
    executor: str = "subprocess"
    log_level: str = "WARNING"


def _load_env_file(env_path: Path):
    if not env_path.exists():
        return
    for line in env_path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key and key not in os.environ:
            os.environ[key] = value


def _load_envs(cfg_path: Path):
    """
    加载配置文件所在目录下的 .env/.env.local（不覆盖已有环境变量）。
    """
    candidates = [
        cfg_path.parent / ".env",
        cfg_path.parent / ".env.local",
    ]
    for env_file in candidates:
        _load_env_file(env_file)


def _expand_env(value: Any) -> Any:
    if isinstance(value, str):
        # 未设置的变量直接报错，避免静默替换为空
        def replacer(match):
            var_name = match.group(1)
            if var_name not in os.environ:
                raise ValueError(f"Missing environment variable: {var_name}")
            return os.environ[var_name]

        return re.sub(r"\$\{([^}]+)\}", replacer, value)
    if isinstance(value, dict):
        return {k: _expand_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env(v) for v in value]
    return value


def load_config(
    path: str | None = None,
    *,
    required: bool = False,
    load_env: bool = True,
    expand_env: bool = True,
) -> AppConfig:
    """从 YAML 读取并解析配置。

    Parameters
    ----------
    path:
        配置文件路径；为 None 时使用 `default_config_path()`（用户级）。
    required:
        为 True 时文件不存在直接报错（用户显式传入 `--config` 的情况）。
    load_env:
        是否自动加载 .env/.env.local。
    expand_env:
        是否展开 `${VAR}` 占位符。

    Returns
    -------
    AppConfig
        解析后的配置对象。

    Raises
    ------
    FileNotFoundError
        required=True 且配置文件不存在。
    ValueError
        未知 key、类型错误或缺失环境变量。
    """
    cfg_path = Path(path) if path else default_config_path()
    if not cfg_path.exists():
        if required:
            raise FileNotFoundError(f"Config file not found: {cfg_path}")
        return AppConfig()

    if load_env:
        _load_envs(cfg_path)

    with cfg_path.open("r", encoding="utf-8") as f:
        raw_cfg: dict[str, Any] = yaml.safe_load(f) or {}

    cfg = _expand_env(raw_cfg) if expand_env else raw_cfg
    validate_raw_config(cfg)

    base = AppConfig()
    return AppConfig(
        manifest_path=cfg.get("manifest_path") or None,
        engine_prefix=cfg.get("engine_prefix") or base.engine_prefix,
        registry_key=cfg.get("registry_key") or base.registry_key,
        use_registry=base.use_registry if cfg.get("use_registry") is None else cfg["use_registry"],
        uat_subpath=cfg.get("uat_subpath") or base.uat_subpath,
        executor=cfg.get("executor") or base.executor,
        log_level=str(cfg.get("log_level") or base.log_level).upper(),
    )
