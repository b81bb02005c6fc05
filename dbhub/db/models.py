"""
dbhub.db.models
---------------

DBHub.io 接口返回数据对应的数据结构：

- ValueKind / TaggedValue：查询结果中单个单元格的类型标签与原始值；
- Column：表/视图的列描述；
- ResultRow / Results：解码后的查询结果（字段均为字符串）。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence

import pandas as pd


class ValueKind(Enum):
    """
    单元格值类型。

    取值与服务端的整数类型编码一致；OTHER 表示无法识别的编码或名称。
    """

    BINARY = 0
    IMAGE = 1
    NULL = 2
    TEXT = 3
    INTEGER = 4
    FLOAT = 5
    OTHER = -1

    @classmethod
    def parse(cls, raw: Any) -> "ValueKind":
        """
        将响应中的 Type 字段解析为 ValueKind。

        输入：
            raw: 整数编码（如 3）或类型名称（如 "Text"，不区分大小写）。
        输出：
            ValueKind；无法识别时返回 ValueKind.OTHER，不抛异常。
        """
        # bool 是 int 的子类，不能当作类型编码
        if isinstance(raw, bool):
            return cls.OTHER
        if isinstance(raw, int):
            for kind in cls:
                if kind is not cls.OTHER and kind.value == raw:
                    return kind
            return cls.OTHER
        if isinstance(raw, str):
            name = raw.strip().upper()
            if name in cls.__members__ and name != "OTHER":
                return cls[name]
        return cls.OTHER


@dataclass(frozen=True)
class TaggedValue:
    """单元格原始值：kind 决定 value 的解释方式。"""

    kind: ValueKind
    value: Any = None


@dataclass(frozen=True)
class Column:
    """
    表或视图的一列。

    说明：
    - 已知字段映射为属性，缺失时为 None；
    - raw 保存服务端返回的完整字典，列描述的结构由服务端决定。
    """

    name: str
    column_id: Optional[int] = None
    data_type: Optional[str] = None
    not_null: Optional[bool] = None
    default_value: Optional[str] = None
    primary_key: Optional[int] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Column":
        return cls(
            name=str(data.get("name", "")),
            column_id=data.get("column_id"),
            data_type=data.get("data_type"),
            not_null=data.get("not_null"),
            default_value=data.get("default_value"),
            primary_key=data.get("primary_key"),
            raw=dict(data),
        )


@dataclass
class ResultRow:
    """一行查询结果，字段顺序与列顺序一致。"""

    fields: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __getitem__(self, idx: int) -> str:
        return self.fields[idx]


@dataclass
class Results:
    """查询结果集，行顺序与服务端返回顺序一致。"""

    rows: List[ResultRow] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[ResultRow]:
        return iter(self.rows)

    def __getitem__(self, idx: int) -> ResultRow:
        return self.rows[idx]

    def to_dataframe(self, columns: Optional[Sequence[str]] = None) -> pd.DataFrame:
        """
        将结果转为 DataFrame，便于导出 CSV。

        输入：
            columns: 可选列名；未传时使用 0..M-1 的默认列号。
        输出：
            pd.DataFrame：所有单元格均为字符串；无数据时返回空 DataFrame
            （若传入 columns 则保留列名）。
        异常：
            ValueError: columns 个数与行字段数不一致时由 pandas 抛出。
        """
        data = [list(row.fields) for row in self.rows]
        if not data:
            return pd.DataFrame(columns=list(columns) if columns is not None else None)
        return pd.DataFrame(data, columns=list(columns) if columns is not None else None)
