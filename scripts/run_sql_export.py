"""
scripts/run_sql_export.py
-------------------------

读取指定目录下的 *.sql，在 DBHub.io 托管数据库上逐个执行，
并将结果保存为 {filename}_res.csv（默认写入 SQL 目录的上一级目录）。

使用方式（示例）：
1. 在 configs/dbhub.yaml 中配置数据库 owner / name 及 api 段；
2. 在项目根目录 .env 中设置 API key（如 DBHUB_API_KEY=你的 API key）；
3. 在项目根目录下运行：
   python -m scripts.run_sql_export path/to/sql [--config configs/dbhub.yaml] [--out-dir 输出目录]
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from dbhub.db import Connection, RemoteError, connection_from_config
from dbhub.logger import get_logger, setup_logging
from dbhub.utils import list_sql_files, load_dbhub_config, load_env, read_sql_file

_logger = get_logger(__name__)


def run_for_directory(
    sql_dir: str | Path,
    conn: Connection,
    dbowner: str,
    dbname: str,
    blob_base64: bool = True,
    out_dir: Optional[str | Path] = None,
) -> Dict[str, List[str]]:
    """
    执行目录下所有 .sql，并将结果导出为 *_res.csv。

    输入：
        sql_dir: 含 .sql 文件的目录；
        conn: DBHub.io 连接；
        dbowner / dbname: 目标数据库；
        blob_base64: BLOB 字段是否 base64 输出；
        out_dir: 输出目录，默认 sql_dir 的上一级目录。
    输出：
        {"success": [...], "failed": [...]}：成功 / 失败的文件名列表。
        单个文件失败不会中断后续文件。
    """
    sql_path_dir = Path(sql_dir)
    sql_files = list_sql_files(sql_path_dir)
    target_dir = Path(out_dir) if out_dir is not None else sql_path_dir.resolve().parent
    target_dir.mkdir(parents=True, exist_ok=True)

    summary: Dict[str, List[str]] = {"success": [], "failed": []}
    if not sql_files:
        print(f"[提示] 目录中未找到任何 .sql 文件：{sql_path_dir}")
        return summary

    total = len(sql_files)
    print(f"[开始] 数据库：{dbowner}/{dbname}，待运行 SQL 文件数：{total}")

    for idx, sql_path in enumerate(sql_files, start=1):
        print(f"[执行] 第 {idx}/{total} 个：{sql_path.name}")
        try:
            sql_text = read_sql_file(sql_path)
            results = conn.query(dbowner, dbname, blob_base64, sql_text)
            out_path = target_dir / f"{sql_path.stem}_res.csv"
            results.to_dataframe().to_csv(out_path, index=False)
            print(f"[完成] 第 {idx} 个：{sql_path.name}，共 {len(results)} 行")
            summary["success"].append(sql_path.name)
        except (RemoteError, ValueError, OSError) as exc:
            _logger.error("执行 %s 失败：%s", sql_path.name, exc)
            print(f"[失败] 第 {idx} 个：{sql_path.name}，错误：{exc!s}")
            summary["failed"].append(sql_path.name)

    print(
        f"[总结] 共 {total} 个 SQL 文件，成功 {len(summary['success'])} 个，"
        f"失败 {len(summary['failed'])} 个。"
    )
    if summary["success"]:
        print(f"[成功列表] {', '.join(summary['success'])}")
    if summary["failed"]:
        print(f"[失败列表] {', '.join(summary['failed'])}")
    return summary


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="在 DBHub.io 上批量执行 .sql 并导出 CSV")
    parser.add_argument("sql_dir", help="含 .sql 文件的目录")
    parser.add_argument("--config", default=None, help="连接配置 YAML，默认 configs/dbhub.yaml")
    parser.add_argument("--out-dir", default=None, help="CSV 输出目录，默认 SQL 目录的上一级")
    args = parser.parse_args(argv)

    setup_logging()
    load_env()
    cfg: Dict[str, Any] = load_dbhub_config(args.config)
    conn = connection_from_config(cfg)
    db_cfg = cfg["database"]
    blob_base64 = bool((cfg.get("query") or {}).get("blob_base64", True))

    summary = run_for_directory(
        args.sql_dir,
        conn,
        db_cfg["owner"],
        db_cfg["name"],
        blob_base64=blob_base64,
        out_dir=args.out_dir,
    )
    return 1 if summary["failed"] else 0


if __name__ == "__main__":
    raise SystemExit(main())
