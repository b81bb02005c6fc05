"""
dbhub.utils.config_loader: 连接配置读取（YAML）。

禁止引用 scripts 下的任何内容。
"""

from pathlib import Path
from typing import Any, Dict, Union

import yaml

from dbhub.db.errors import ConfigError

DEFAULT_CONFIG_RELPATH = Path("configs") / "dbhub.yaml"


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    读取 YAML 文件并返回字典。

    输入：
    - path: 文件路径，可为 str 或 Path。

    输出：
    - 解析得到的字典；若文件为空或顶层不是映射，返回空字典。

    异常：
    - FileNotFoundError: 路径不存在；
    - yaml.YAMLError: 解析失败时由 PyYAML 抛出。
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML 文件不存在：{path}")
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return data if isinstance(data, dict) else {}


def load_dbhub_config(path: Union[str, Path, None] = None) -> Dict[str, Any]:
    """
    读取 DBHub.io 连接配置，并校验 database 段。

    输入：
    - path: 配置文件路径；None 时使用当前工作目录（项目根目录）下的 configs/dbhub.yaml。

    输出：
    - 配置字典，保证包含 database.owner 与 database.name。

    异常：
    - FileNotFoundError: 配置文件不存在；
    - ConfigError: 缺少 database.owner / database.name。
    """
    cfg = load_yaml(path if path is not None else Path.cwd() / DEFAULT_CONFIG_RELPATH)
    db_cfg = cfg.get("database") or {}
    for key in ("owner", "name"):
        if not db_cfg.get(key):
            raise ConfigError(f"配置中缺少必填字段：database.{key}")
    return cfg
