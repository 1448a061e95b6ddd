"""执行命令串：子进程继承当前控制台，等待结束并返回其退出码。

无超时、无重试、不捕获输出。
"""

from __future__ import annotations

import os
import subprocess
import sys
from typing import Callable

from shared.utils.logging import setup_logger

_LOGGER = setup_logger("executor")


def _run_subprocess(command: str) -> int:
    return subprocess.run(command, shell=True, check=False).returncode


def _run_system(command: str) -> int:
    status = os.system(command)
    if sys.platform.startswith("win"):
        return status
    return os.waitstatus_to_exitcode(status)


EXECUTORS: dict[str, Callable[[str], int]] = {
    "subprocess": _run_subprocess,
    "system": _run_system,
}


def run_command(command: str, executor: str = "subprocess") -> int:
    """执行命令并返回子进程退出码。

    Parameters
    ----------
    command:
        `dispatch.command.build_command` 的结果，外层引号约定须与 executor 配套。
    executor:
        `subprocess`（subprocess.run, shell=True）或 `system`（os.system）。
    """
    if executor not in EXECUTORS:
        raise ValueError(f"Unknown executor: {executor}")
    _LOGGER.info("running (%s): %s", executor, command)
    rc = EXECUTORS[executor](command)
    _LOGGER.info("child exited with %d", rc)
    return rc
