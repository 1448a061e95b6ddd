"""拼接 RunUAT 命令串。

命令形如 `"<引擎根目录>/<RunUAT 相对路径>" <参数...>`：
- 可执行路径总是加引号，容忍目录里的空格（POSIX 上用 shlex.quote，避免 $ 与反引号被展开）；
- 参数来自已切分的 argv，逐个确定性地重新加引号（不还原原始命令行文本）；
- 除加引号外不做任何 shell 元字符转义，调用方传入的 `&&`、`|` 等会原样交给 shell。

两种外层包裹约定：
- `single`：`"<exe>" <args>`，配合 `subprocess.run(..., shell=True)`，
  Python 自己会再包一层交给 `cmd.exe /c`；
- `double`：`""<exe>" <args>"`，配合 `os.system`，
  cmd.exe 会剥掉首尾各一个引号，所以这里要先多包一层。
  只在 Windows 上生效；POSIX 上 os.system 走 /bin/sh，不需要外层引号。
"""

from __future__ import annotations

import shlex
import subprocess
import sys
from enum import Enum
from typing import Sequence


class QuoteStyle(Enum):
    """外层引号约定。"""

    SINGLE = "single"
    DOUBLE = "double"


# executor -> 外层约定，保证一次运行里两者总是配套
EXECUTOR_QUOTE_STYLE = {
    "subprocess": QuoteStyle.SINGLE,
    "system": QuoteStyle.DOUBLE,
}


def _is_windows(platform: str | None) -> bool:
    return (platform or sys.platform).startswith("win")


def uat_path(install_dir: str, uat_subpath: str, *, platform: str | None = None) -> str:
    """引擎根目录 + RunUAT 相对路径。

    根目录原样保留（不规范化），只去掉末尾分隔符；相对路径换成平台分隔符。
    """
    root = install_dir.rstrip("/\\")
    if _is_windows(platform):
        return root + "\\" + uat_subpath.replace("/", "\\")
    return root + "/" + uat_subpath.replace("\\", "/")


def quote_arg(token: str, *, platform: str | None = None) -> str:
    """按平台规则给单个参数加引号；无需引号的参数原样返回。"""
    if _is_windows(platform):
        return subprocess.list2cmdline([token])
    return shlex.quote(token)


def build_command(
    install_dir: str,
    args: Sequence[str],
    uat_subpath: str,
    *,
    style: QuoteStyle = QuoteStyle.SINGLE,
    platform: str | None = None,
) -> str:
    """拼出完整命令串。

    Parameters
    ----------
    install_dir:
        解析得到的引擎根目录。
    args:
        引擎名之后的全部参数（已切分）。
    uat_subpath:
        RunUAT 相对引擎根目录的路径。
    style:
        外层引号约定，需与执行方式配套（见 EXECUTOR_QUOTE_STYLE）。
    platform:
        `sys.platform` 风格的平台名；为 None 时取当前平台。
    """
    exe_path = uat_path(install_dir, uat_subpath, platform=platform)
    if _is_windows(platform):
        exe = f'"{exe_path}"'
    else:
        exe = shlex.quote(exe_path)
    tail = " ".join(quote_arg(str(a), platform=platform) for a in args)
    command = f"{exe} {tail}" if tail else exe
    # 外层引号只给 cmd.exe 剥
    if style is QuoteStyle.DOUBLE and _is_windows(platform):
        command = f'"{command}"'
    return command
