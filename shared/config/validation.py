"""配置 Schema 校验。

配置只有一层平铺的 key；这里做严格校验：
- 未知 key 直接报错，并给出 did-you-mean 提示；
- 已知 key 做类型检查，取值受限的 key（executor/log_level）做枚举检查。
"""

from __future__ import annotations

import difflib
from typing import Any, Iterable

EXECUTORS = ("subprocess", "system")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _suggest_key(key: str, allowed: Iterable[str]) -> str | None:
    matches = difflib.get_close_matches(key, list(allowed), n=1, cutoff=0.75)
    return matches[0] if matches else None


def _ensure_allowed_keys(block: dict[str, Any], *, allowed: set[str], ctx: str) -> None:
    unknown = [k for k in block.keys() if k not in allowed]
    if not unknown:
        return
    parts = []
    for k in sorted(str(k) for k in unknown):
        suggestion = _suggest_key(k, allowed)
        if suggestion:
            parts.append(f"{k} (did you mean '{suggestion}'?)")
        else:
            parts.append(k)
    raise ValueError(f"{ctx} contains unknown keys: {', '.join(parts)}")


def _expect_str(val: Any, *, ctx: str) -> str:
    if not isinstance(val, str) or not val.strip():
        raise ValueError(f"{ctx} must be a non-empty string")
    return val


def _expect_bool(val: Any, *, ctx: str) -> bool:
    if isinstance(val, bool):
        return val
    raise ValueError(f"{ctx} must be a bool")


def _expect_choice(val: Any, *, choices: Iterable[str], ctx: str) -> str:
    text = _expect_str(val, ctx=ctx)
    options = tuple(choices)
    if text not in options:
        raise ValueError(f"{ctx} must be one of: {', '.join(options)}")
    return text


def validate_raw_config(cfg: dict[str, Any]) -> None:
    """校验 raw config dict（来自 YAML + env 展开后）。"""
    if not isinstance(cfg, dict):
        raise ValueError("Config root must be a dict")

    top_allowed = {
        "manifest_path",
        "engine_prefix",
        "registry_key",
        "use_registry",
        "uat_subpath",
        "executor",
        "log_level",
    }
    _ensure_allowed_keys(cfg, allowed=top_allowed, ctx="config")

    for key in ("manifest_path", "engine_prefix", "registry_key", "uat_subpath"):
        if cfg.get(key) is not None:
            _expect_str(cfg[key], ctx=f"config.{key}")
    if cfg.get("use_registry") is not None:
        _expect_bool(cfg["use_registry"], ctx="config.use_registry")
    if cfg.get("executor") is not None:
        _expect_choice(cfg["executor"], choices=EXECUTORS, ctx="config.executor")
    if cfg.get("log_level") is not None:
        level = _expect_str(cfg["log_level"], ctx="config.log_level")
        _expect_choice(level.upper(), choices=LOG_LEVELS, ctx="config.log_level")
