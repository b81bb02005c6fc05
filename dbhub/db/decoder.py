"""
dbhub.db.decoder
----------------

将 DBHub.io 响应 JSON 解码为 dbhub.db.models 中的结构。

查询结果中每个单元格形如 {"Type": <类型>, "Value": <值>}，按类型转为字符串：
- Text / Integer / Float：值的默认字符串形式；
- Binary：开启 blob_base64 时输出 base64，否则输出空字符串占位；
- Null、Image 及无法识别的类型：空字符串。

结构不符时抛出 DecodeError，由调用方决定如何处理。
"""

from __future__ import annotations

import base64
from typing import Any, Dict, List

from dbhub.db.errors import DecodeError
from dbhub.db.models import Column, ResultRow, Results, TaggedValue, ValueKind
from dbhub.logger import get_logger

_logger = get_logger(__name__)

_SCALAR_KINDS = {ValueKind.TEXT, ValueKind.INTEGER, ValueKind.FLOAT}


def _fail(msg: str) -> DecodeError:
    _logger.error(msg)
    return DecodeError(msg)


def parse_tagged_value(obj: Any) -> TaggedValue:
    """
    将单个 {"Type", "Value"} 对象解析为 TaggedValue。

    输入：
        obj: 响应中的单元格对象；可带有 Name 等其他字段，忽略即可。
    输出：
        TaggedValue；缺少 Value 时 value 为 None。
    异常：
        DecodeError: obj 不是对象或缺少 Type 字段。
    """
    if not isinstance(obj, dict) or "Type" not in obj:
        raise _fail(f"查询结果单元格结构非法，期望包含 Type 字段的对象，实际为：{obj!r}")
    return TaggedValue(kind=ValueKind.parse(obj["Type"]), value=obj.get("Value"))


def decode_field(cell: TaggedValue, blob_base64: bool) -> str:
    """
    按类型将单元格转为输出字符串。

    输入：
        cell: 单元格；
        blob_base64: 是否将 Binary 数据以 base64 输出（否则以空字符串占位）。
    输出：
        str。Binary 值不是字符串时返回诊断信息，不抛异常。
        Text / Integer / Float 按 str() 输出，值为 null 时得到 "None"（服务端不应返回这种组合）。
    """
    kind = cell.kind
    if kind in _SCALAR_KINDS:
        return str(cell.value)
    if kind is ValueKind.BINARY:
        if not blob_base64:
            return ""
        if isinstance(cell.value, str):
            return base64.b64encode(cell.value.encode("utf-8")).decode("ascii")
        return f"unexpected data type '{type(cell.value).__name__}' for returned BLOB"
    # Null、Image 以及服务端新增的类型
    return ""


def decode_rows(payload: Any, blob_base64: bool) -> Results:
    """
    将 /v1/query 的响应解码为 Results。

    输入：
        payload: 已解析的 JSON，期望为「行列表」，每行为单元格对象列表；
        blob_base64: 见 decode_field。
    输出：
        Results：行数、每行字段数及顺序与输入一致；payload 为 null 时返回空结果。
    异常：
        DecodeError: 结构不符。
    """
    if payload is None:
        return Results()
    if not isinstance(payload, list):
        raise _fail(f"查询结果应为行列表，实际类型为：{type(payload).__name__}")

    rows: List[ResultRow] = []
    bad_blobs = 0
    for idx, raw_row in enumerate(payload):
        if raw_row is None:
            raw_row = []
        if not isinstance(raw_row, list):
            raise _fail(f"查询结果第 {idx} 行应为列表，实际类型为：{type(raw_row).__name__}")
        fields: List[str] = []
        for raw_cell in raw_row:
            cell = parse_tagged_value(raw_cell)
            if blob_base64 and cell.kind is ValueKind.BINARY and not isinstance(cell.value, str):
                bad_blobs += 1
            fields.append(decode_field(cell, blob_base64))
        rows.append(ResultRow(fields=fields))

    # 每个结果集只记录一次
    if bad_blobs:
        _logger.warning("查询结果中有 %d 个 BLOB 单元格不是字符串，已输出诊断信息占位", bad_blobs)
    return Results(rows=rows)


def decode_name_list(payload: Any, what: str) -> List[str]:
    """
    解码表名 / 视图名列表。

    输入：
        payload: 已解析的 JSON，期望为字符串数组；
        what: 用于错误信息的对象名称，如 "表" 或 "视图"。
    输出：
        List[str]；payload 为 null 时返回空列表。
    异常：
        DecodeError: 不是数组或含非字符串元素。
    """
    if payload is None:
        return []
    if not isinstance(payload, list) or not all(isinstance(x, str) for x in payload):
        raise _fail(f"{what}列表应为字符串数组，实际为：{payload!r}")
    return list(payload)


def decode_index_map(payload: Any) -> Dict[str, str]:
    """解码 索引名 -> 所属表名 映射；null 视为空映射。"""
    if payload is None:
        return {}
    if not isinstance(payload, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in payload.items()
    ):
        raise _fail(f"索引信息应为 字符串 -> 字符串 的对象，实际为：{payload!r}")
    return dict(payload)


def decode_columns(payload: Any) -> List[Column]:
    """解码列描述数组；null 视为空列表。"""
    if payload is None:
        return []
    if not isinstance(payload, list) or not all(isinstance(x, dict) for x in payload):
        raise _fail(f"列信息应为对象数组，实际为：{payload!r}")
    return [Column.from_dict(item) for item in payload]
