"""
dbhub.db.api_client
-------------------

DBHub.io HTTP 接口客户端：列出表、视图、列、索引，执行只读 SQL 查询。

设计原则：
- 仅依赖标准库与 requests，结果转换交给 dbhub.db.decoder；
- 不直接读取 configs/*.yaml，通过 connection_from_config 接收调用方解析好的配置；
- Connection 构造后不可变，切换服务器地址使用 with_server 返回新对象；
- 任何失败均以 RemoteError 子类抛出，不返回部分结果。
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional
import os

import requests

from dbhub.db.decoder import decode_columns, decode_index_map, decode_name_list, decode_rows
from dbhub.db.errors import ConfigError, DecodeError, TransportError
from dbhub.db.models import Column, Results
from dbhub.logger import get_logger

_logger = get_logger(__name__)

DEFAULT_SERVER = "https://api.dbhub.io"


@dataclass(frozen=True)
class Connection:
    """
    DBHub.io 连接对象。构造时不会访问网络。

    输入：
        api_key: DBHub.io 的 API key，随每个请求以表单字段 apikey 发送；
        server: 服务地址，默认生产环境；末尾的 "/" 会被去掉；
        timeout: 单次请求超时时间（秒），None 表示使用 requests 默认行为；
        session: 可选的 requests.Session，用于复用连接；未传时使用 requests.post。
    """

    api_key: str
    server: str = DEFAULT_SERVER
    timeout: Optional[float] = 60
    session: Optional[requests.Session] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        # frozen dataclass 只能通过 object.__setattr__ 规范化字段
        object.__setattr__(self, "server", self.server.rstrip("/"))

    def __repr__(self) -> str:
        # 不输出 api_key
        return f"Connection(server={self.server!r}, timeout={self.timeout!r})"

    def with_server(self, server: str) -> "Connection":
        """返回指向另一服务地址的新连接，用于测试或开发环境。"""
        return replace(self, server=server)

    def columns(self, dbowner: str, dbname: str, table: str) -> List[Column]:
        """返回指定表或视图的列信息。"""
        payload = self._post("/v1/columns", dbowner, dbname, {"table": table})
        return decode_columns(payload)

    def indexes(self, dbowner: str, dbname: str) -> Dict[str, str]:
        """返回数据库中的索引及其所属表：{索引名: 表名}。"""
        payload = self._post("/v1/indexes", dbowner, dbname)
        return decode_index_map(payload)

    def tables(self, dbowner: str, dbname: str) -> List[str]:
        """返回数据库中的表名列表。"""
        payload = self._post("/v1/tables", dbowner, dbname)
        return decode_name_list(payload, "表")

    def views(self, dbowner: str, dbname: str) -> List[str]:
        """返回数据库中的视图名列表。"""
        payload = self._post("/v1/views", dbowner, dbname)
        return decode_name_list(payload, "视图")

    def query(self, dbowner: str, dbname: str, blob_base64: bool, sql: str) -> Results:
        """
        在远程数据库上执行一段 SQL（仅 SELECT，由服务端校验），返回结果。

        输入：
            dbowner / dbname: 数据库所有者与数据库名；
            blob_base64: BLOB 字段是否以 base64 输出，否则以空字符串占位；
            sql: SQL 文本，发送前做 base64 编码。
        输出：
            Results：行与字段顺序与服务端返回一致。
        异常：
            TransportError: 网络异常或非 2xx 状态码；
            DecodeError: 响应不是合法 JSON 或结构不符。
        """
        encoded_sql = base64.b64encode(sql.encode("utf-8")).decode("ascii")
        payload = self._post("/v1/query", dbowner, dbname, {"sql": encoded_sql})
        return decode_rows(payload, blob_base64)

    def _build_params(
        self,
        dbowner: str,
        dbname: str,
        extra: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, str]:
        data: Dict[str, str] = {
            "apikey": self.api_key,
            "dbowner": dbowner,
            "dbname": dbname,
        }
        if extra:
            data.update(extra)
        return data

    def _post(
        self,
        path: str,
        dbowner: str,
        dbname: str,
        extra: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """
        以表单形式 POST 到 server + path，并返回解析后的 JSON。

        输入：
            path: 接口路径，如 "/v1/tables"；
            dbowner / dbname: 目标数据库；
            extra: 接口专有的表单字段。
        输出：
            JSON 解析结果（list / dict / None 等）。
        异常：
            TransportError / DecodeError。
        """
        url = self.server + path
        data = self._build_params(dbowner, dbname, extra)
        post = self.session.post if self.session is not None else requests.post

        _logger.debug("POST %s dbowner=%s dbname=%s", url, dbowner, dbname)
        try:
            resp = post(url, data=data, timeout=self.timeout)
        except requests.RequestException as exc:
            msg = f"请求 DBHub.io 接口失败：{url}，错误：{exc!s}"
            _logger.error(msg)
            raise TransportError(msg) from exc

        if not resp.ok:
            msg = (
                f"DBHub.io 接口返回异常状态码：{resp.status_code}（{url}）。"
                f"响应内容：{resp.text[:500]}"
            )
            _logger.error(msg)
            raise TransportError(msg)

        try:
            return resp.json()
        except ValueError as exc:
            msg = f"DBHub.io 接口返回内容不是合法 JSON，无法解析：{url}"
            _logger.error(msg)
            raise DecodeError(msg) from exc


def _get_api_key_from_env(env_var: str) -> str:
    """
    从环境变量中读取 API key。

    输入：
        env_var: 环境变量名称。
    输出：
        API key 字符串。
    异常：
        ConfigError: 未在环境变量中找到对应值时抛出。
    """
    key = os.getenv(env_var)
    if not key:
        msg = (
            f"未在环境变量中找到 DBHub.io API key：{env_var}。"
            f"请在终端中设置，例如：export {env_var}='你的 API key'，"
            f"或在 .env 文件中配置并确保已被加载。"
        )
        _logger.error(msg)
        raise ConfigError(msg)
    return key


def connection_from_config(cfg: Mapping[str, Any]) -> Connection:
    """
    根据配置字典（通常来自 configs/dbhub.yaml）构造 Connection。

    输入：
        cfg: 包含 api 段的字典：
             api.key_env_var（必填）：存放 API key 的环境变量名；
             api.server（可选）：服务地址，默认 https://api.dbhub.io；
             api.timeout（可选）：请求超时秒数，默认 60。
    输出：
        Connection
    异常：
        ConfigError: 缺少 key_env_var、环境变量未设置或 timeout 非法。
    """
    api_cfg = cfg.get("api") or {}
    key_env_var = api_cfg.get("key_env_var")
    if not key_env_var:
        msg = "配置中缺少必填字段：api.key_env_var"
        _logger.error(msg)
        raise ConfigError(msg)

    server = api_cfg.get("server") or DEFAULT_SERVER
    raw_timeout = api_cfg.get("timeout", 60)
    try:
        timeout = float(raw_timeout) if raw_timeout is not None else None
    except (TypeError, ValueError) as exc:
        msg = f"配置字段 api.timeout 不是合法数字：{raw_timeout!r}"
        _logger.error(msg)
        raise ConfigError(msg) from exc

    return Connection(
        api_key=_get_api_key_from_env(key_env_var),
        server=str(server),
        timeout=timeout,
    )
