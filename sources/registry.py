"""来源注册表：字符串 -> InstallSource 实现。"""

from __future__ import annotations

from typing import Callable

from shared.config.config_loader import AppConfig
from sources.base import InstallSource
from sources.manifest import LauncherManifestSource
from sources.registry_builds import RegistryBuildsSource

SourceFactory = Callable[[AppConfig], InstallSource]

_REGISTRY: dict[str, SourceFactory] = {}


def register_source(name: str, factory: SourceFactory) -> None:
    _REGISTRY[name] = factory


def get_source_factory(name: str) -> SourceFactory:
    if name not in _REGISTRY:
        raise ValueError(f"Unknown install source: {name}")
    return _REGISTRY[name]


def source_names(cfg: AppConfig) -> list[str]:
    """按合并顺序返回启用的来源名：启动器清单在前，注册表在后。"""
    names = ["launcher"]
    if cfg.use_registry:
        names.append("registry")
    return names


def build_sources(cfg: AppConfig | None = None) -> list[InstallSource]:
    """从配置构建有序来源列表。"""
    cfg = cfg or AppConfig()
    return [get_source_factory(name)(cfg) for name in source_names(cfg)]


# 默认注册
register_source("launcher", lambda cfg: LauncherManifestSource(cfg.manifest_path, cfg.engine_prefix))
register_source("registry", lambda cfg: RegistryBuildsSource(cfg.registry_key))
