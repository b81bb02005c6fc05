"""
dbhub: DBHub.io 托管 SQLite 数据库的 Python 客户端。

对外提供：
- Connection / connection_from_config：连接对象与按配置构造；
- Results / ResultRow / Column：接口返回的数据结构；
- RemoteError 及其子类：调用失败时抛出。
"""

from dbhub.db import (
    Column,
    ConfigError,
    Connection,
    DecodeError,
    RemoteError,
    ResultRow,
    Results,
    TransportError,
    connection_from_config,
)

__version__ = "0.0.1"

__all__ = [
    "Column",
    "ConfigError",
    "Connection",
    "DecodeError",
    "RemoteError",
    "ResultRow",
    "Results",
    "TransportError",
    "__version__",
    "connection_from_config",
]
