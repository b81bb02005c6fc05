"""
dbhub.logger
------------

统一日志入口：各模块通过 get_logger(__name__) 获取 logger。

- 作为库被引用时，dbhub 根 logger 只挂 NullHandler，输出由调用方的日志配置决定；
- scripts 入口调用 setup_logging() 开启控制台输出；
  设置环境变量 DBHUB_LOG_DIR 时，额外写入滚动日志文件 dbhub.log；
- 日志级别由 DBHUB_LOG_LEVEL 控制，默认 INFO。
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

_ROOT_NAME = "dbhub"
_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

logging.getLogger(_ROOT_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """
    获取挂在 dbhub 根 logger 之下的子 logger。

    输入：
        name: 通常为调用模块的 __name__；不在 dbhub 命名空间下时自动加前缀。
    输出：
        logging.Logger
    """
    if name != _ROOT_NAME and not name.startswith(_ROOT_NAME + "."):
        name = f"{_ROOT_NAME}.{name}"
    return logging.getLogger(name)


def setup_logging(level: Optional[str] = None, log_dir: Optional[str] = None) -> logging.Logger:
    """
    为命令行入口配置 dbhub 根 logger：控制台输出，及可选的滚动日志文件。

    输入：
        level: 日志级别名称；未传时读取 DBHUB_LOG_LEVEL，默认 INFO；
        log_dir: 日志目录；未传时读取 DBHUB_LOG_DIR，为空则不写文件。
    输出：
        dbhub 根 logger。重复调用不会重复添加 handler。
    """
    root = logging.getLogger(_ROOT_NAME)
    level_name = (level or os.getenv("DBHUB_LOG_LEVEL") or "INFO").strip().upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    # 避免重复调用时重复添加 handler
    if any(not isinstance(h, logging.NullHandler) for h in root.handlers):
        return root

    fmt = logging.Formatter(_FORMAT)
    console = logging.StreamHandler()
    console.setFormatter(fmt)
    root.addHandler(console)

    log_dir = log_dir or os.getenv("DBHUB_LOG_DIR")
    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            str(Path(log_dir) / "dbhub.log"),
            maxBytes=2_000_000,
            backupCount=5,
            encoding="utf-8",
        )
        handler.setFormatter(fmt)
        root.addHandler(handler)
    # 已由本函数输出，不再向上层 root logger 传递
    root.propagate = False
    return root
