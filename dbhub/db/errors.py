"""
dbhub.db.errors
---------------

DBHub.io 客户端的异常类型。

- RemoteError：一次远程调用失败的统一基类；
- TransportError：请求构造、网络异常或非 2xx 状态码；
- DecodeError：响应不是合法 JSON，或 JSON 结构与预期不符；
- ConfigError：连接配置缺失或非法（如未设置 API key 环境变量）。
"""


class RemoteError(RuntimeError):
    """远程调用失败的基类，调用方可统一捕获。"""


class TransportError(RemoteError):
    """HTTP 请求失败（网络异常、超时或非 2xx 状态码）。"""


class DecodeError(RemoteError):
    """响应体无法按预期结构解析。"""


class ConfigError(ValueError):
    """连接配置缺失或非法。"""
