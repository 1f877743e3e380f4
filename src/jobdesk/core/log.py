"""日志：标准库 logging，首次取 logger 时配置根 handler。"""
from __future__ import annotations

import logging
import sys

_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"
_configured = False


def get_logger(name: str) -> logging.Logger:
    """返回具名 logger；第一次调用时配置根 handler（级别取 JOBDESK_LOG_LEVEL）。"""
    global _configured
    if not _configured:
        _configure()
        _configured = True
    return logging.getLogger(name)


def _configure() -> None:
    from jobdesk.core.config import log_level

    level = getattr(logging, log_level(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)

    # 宿主（uvicorn / pytest）已挂 handler 时不重复添加
    if root.handlers:
        return

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FMT))
    root.addHandler(console)
