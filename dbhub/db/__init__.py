"""
dbhub.db: DBHub.io 接口客户端与结果解码。

当前实现：
- Connection：列出表 / 视图 / 列 / 索引，执行只读 SQL 查询；
- decoder：将带类型标签的查询结果解码为字符串行；
- errors：RemoteError 及其子类。

注意：
- 禁止引用 scripts 下的任何内容；
- 不直接读取 configs/*.yaml，由 scripts 负责配置注入。
"""

from __future__ import annotations

from .api_client import DEFAULT_SERVER, Connection, connection_from_config
from .decoder import decode_field, decode_rows, parse_tagged_value
from .errors import ConfigError, DecodeError, RemoteError, TransportError
from .models import Column, ResultRow, Results, TaggedValue, ValueKind

__all__ = [
    "DEFAULT_SERVER",
    "Column",
    "ConfigError",
    "Connection",
    "DecodeError",
    "RemoteError",
    "ResultRow",
    "Results",
    "TaggedValue",
    "TransportError",
    "ValueKind",
    "connection_from_config",
    "decode_field",
    "decode_rows",
    "parse_tagged_value",
]
