"""安装来源层（sources）。

每个来源实现 `InstallSource.records() -> list[InstallRecord]`；
按配置顺序组装由 `sources.registry.build_sources` 负责，合并与匹配在 `dispatch.resolver`。
"""
