"""
dbhub.utils.env_loader: 通过 python-dotenv 加载 .env 中的环境变量（如 DBHUB_API_KEY）。

不覆盖已存在的环境变量。
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv


def load_env(dotenv_path: str | Path | None = None, override: bool = False) -> Optional[Path]:
    """
    加载 .env 文件。

    输入：
        dotenv_path: 显式指定的 .env 路径；未传时从当前工作目录向上查找；
        override: 是否覆盖已存在的环境变量，默认 False。
    输出：
        实际加载的 .env 路径；未找到时返回 None。
    """
    if dotenv_path is not None:
        path = Path(dotenv_path).expanduser()
        if not path.is_file():
            return None
    else:
        found = find_dotenv(usecwd=True)
        if not found:
            return None
        path = Path(found)

    load_dotenv(dotenv_path=str(path), override=override)
    return path
