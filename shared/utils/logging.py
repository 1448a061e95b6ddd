import logging

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
_LOGGER_NAMES = ("cli", "manifest", "registry", "resolver", "executor", "build-version")


def setup_logger(name: str = "uatrun", level: int | None = None) -> logging.Logger:
    """获取带控制台 handler 的具名 logger。

    同名 logger 只挂一次 handler，重复调用仅更新 level。
    """
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    if not any(getattr(h, "_uatrun", False) for h in logger.handlers):
        # 控制台 handler（stderr，避免与子进程 stdout 混在一起）
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter(_FORMAT))
        ch._uatrun = True  # type: ignore[attr-defined]
        logger.addHandler(ch)
    return logger


def set_global_level(level: int | str) -> None:
    """统一调整本工具所有 logger 的级别（`-v` / config.log_level）。"""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")
    for name in _LOGGER_NAMES:
        setup_logger(name, level)

