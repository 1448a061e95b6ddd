"""合并各来源的安装记录并按名字匹配。"""

from __future__ import annotations

from typing import Iterable, Sequence

from shared.errors import NameNotFound
from shared.models.models import InstallRecord
from shared.utils.logging import setup_logger
from sources.base import InstallSource

_LOGGER = setup_logger("resolver")


def collect_installs(sources: Iterable[InstallSource]) -> list[InstallRecord]:
    """按来源顺序拼接记录；不去重，保留发现顺序。"""
    merged: list[InstallRecord] = []
    for source in sources:
        found = source.records()
        _LOGGER.debug("source %s contributed %d record(s)", source.name, len(found))
        merged.extend(found)
    return merged


def find_install(installs: Sequence[InstallRecord], name: str) -> InstallRecord | None:
    """线性扫描，区分大小写的精确匹配，返回第一个命中。"""
    for record in installs:
        if record.name == name:
            return record
    return None


def resolve_install(installs: Sequence[InstallRecord], name: str) -> InstallRecord:
    """同 `find_install`，未命中时抛 NameNotFound（携带完整可选列表）。"""
    record = find_install(installs, name)
    if record is None:
        raise NameNotFound(name, installs)
    _LOGGER.info("resolved %s -> %s", name, record.path)
    return record
