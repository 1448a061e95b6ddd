"""uatrun 统一命令行入口。

用法：

    uatrun [--config PATH] [--verbose] <engine-name> <UAT 参数...>
    uatrun [--config PATH] --list

流程：按配置组装安装来源（启动器清单 + 注册表源码构建）-> 合并 -> 按名字匹配
-> 拼出 RunUAT 命令 -> 继承控制台执行，并以子进程退出码退出。
引擎名之前的才是本工具的选项，之后的所有参数原样交给 RunUAT。
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from typing import Sequence

from dispatch.command import EXECUTOR_QUOTE_STYLE, build_command
from dispatch.executor import run_command
from dispatch.resolver import collect_installs, resolve_install
from shared.config.config_loader import load_config
from shared.errors import ExitCode, ManifestNotFound, ManifestParseError, NameNotFound, UsageError
from shared.models.models import InstallRecord
from shared.utils.console import ConsoleSink, OutputSink
from shared.utils.logging import set_global_level, setup_logger
from sources.build_version import read_build_version
from sources.registry import build_sources

USAGE = "Usage: uatrun <engine_version> <UAT Command>"

_LOGGER = setup_logger("cli")


@dataclass
class CliArgs:
    """定义命令行参数结构。

    engine: 要使用的引擎名（去掉 UE_ 前缀的版本号，或 source-N）
    uat_args: 引擎名之后的全部参数，原样交给 RunUAT
    """
    engine: str | None
    uat_args: list[str] = field(default_factory=list)
    config: str | None = None     # 为 None 时读取用户级配置（不存在则用默认值）
    list_installs: bool = False
    verbose: bool = False


class _UsageParser(argparse.ArgumentParser):
    """argparse 报错时抛 UsageError，由 main 统一映射退出码。"""

    def error(self, message: str):  # type: ignore[override]
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    """构建 CLI 参数解析器。"""
    parser = _UsageParser(
        prog="uatrun",
        description="按名字定位 Unreal Engine 安装并执行 RunUAT",
        allow_abbrev=False,
    )
    parser.add_argument("--config", default=None, help="配置文件路径 (默认: ~/.config/uatrun/config.yml)")
    parser.add_argument("--list", dest="list_installs", action="store_true", help="列出所有已发现的引擎安装")
    parser.add_argument("--verbose", action="store_true", help="输出 DEBUG 日志")
    parser.add_argument("engine", nargs="?", default=None, help="引擎名，例如 5.3 或 source-0")
    parser.add_argument("uat_args", nargs=argparse.REMAINDER, help="交给 RunUAT 的参数")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> CliArgs:
    """解析命令行参数。

    Raises
    ------
    UsageError
        参数非法，或既没有 --list 又缺少引擎名/UAT 参数。
    """
    ns = build_parser().parse_args(list(argv) if argv is not None else None)
    args = CliArgs(
        engine=ns.engine,
        uat_args=list(ns.uat_args or []),
        config=ns.config,
        list_installs=bool(ns.list_installs),
        verbose=bool(ns.verbose),
    )
    if not args.list_installs and (not args.engine or not args.uat_args):
        raise UsageError("an engine name and a UAT command are required")
    return args


def _report_not_found(sink: OutputSink, exc: NameNotFound) -> None:
    sink.error(f"Unable to find Unreal Engine install '{exc.name}'!")
    if not exc.available:
        sink.info("No Unreal Engine installs were found.")
        return
    sink.info("Available installs:")
    for record in exc.available:
        sink.info(f"- {record.name}: {record.path}")


def _report_installs(sink: OutputSink, installs: Sequence[InstallRecord]) -> None:
    rows = []
    for record in installs:
        version = read_build_version(record.path)
        rows.append([
            record.name,
            record.path,
            version.version_string if version else "?",
            str(version.effective_changelist) if version else "?",
            record.source,
        ])
    sink.rows(f"{len(installs)} Unreal Engine install(s) found", ["Name", "Path", "Version", "CL", "Source"], rows)


def main(argv: Sequence[str] | None = None, *, sink: OutputSink | None = None) -> int:
    """程序主入口。

    Parameters
    ----------
    argv:
        可选的参数列表；为 None 时读取 sys.argv。
    sink:
        用户可见输出的去处；为 None 时使用 rich 控制台。

    Returns
    -------
    int
        退出码：成功执行时为子进程退出码，否则为 ExitCode 中对应的值。
    """
    sink = sink or ConsoleSink()
    try:
        args = parse_args(argv)
    except UsageError as exc:
        sink.error(str(exc))
        sink.info(USAGE)
        return int(ExitCode.USAGE)

    try:
        cfg = load_config(args.config, required=args.config is not None)
    except (FileNotFoundError, ValueError) as exc:
        sink.error(f"Invalid configuration: {exc}")
        return int(ExitCode.USAGE)
    set_global_level("DEBUG" if args.verbose else cfg.log_level)

    try:
        installs = collect_installs(build_sources(cfg))
        if args.list_installs:
            _report_installs(sink, installs)
            return int(ExitCode.OK)
        record = resolve_install(installs, str(args.engine))
    except ManifestNotFound as exc:
        sink.error("Unable to locate & open LauncherInstalled.dat! "
                   "Please locate the file manually and set manifest_path in the config.")
        sink.error(str(exc))
        if exc.path:
            sink.info(f"Using LauncherInstalled path: {exc.path}")
        return int(exc.exit_code)
    except ManifestParseError as exc:
        sink.error("Unable to parse LauncherInstalled.dat!")
        sink.error(str(exc))
        sink.info(f"Using LauncherInstalled path: {exc.path}")
        return int(exc.exit_code)
    except NameNotFound as exc:
        _report_not_found(sink, exc)
        return int(exc.exit_code)

    command = build_command(
        record.path,
        args.uat_args,
        cfg.uat_subpath,
        style=EXECUTOR_QUOTE_STYLE[cfg.executor],
    )
    sink.info(f"Using Unreal Engine {record.name} at {record.path}", emphasis=True)
    _LOGGER.debug("command: %s", command)
    try:
        return run_command(command, cfg.executor)
    except KeyboardInterrupt:
        sink.error("Interrupted.")
        return int(ExitCode.INTERRUPTED)


if __name__ == "__main__":
    raise SystemExit(main())
