# scripts/show_schema.py
# 快捷入口：打印 DBHub.io 托管数据库的表、视图、索引，以及可选的某张表的列信息
#
#   python -m scripts.show_schema [--config configs/dbhub.yaml] [--table 表名]

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from dbhub.db import Connection, connection_from_config
from dbhub.logger import setup_logging
from dbhub.utils import load_dbhub_config, load_env


def print_schema(conn: Connection, dbowner: str, dbname: str, table: Optional[str] = None) -> None:
    """依次请求并打印表、视图、索引；传入 table 时追加打印其列信息。"""
    print(f"[数据库] {dbowner}/{dbname}")

    print("[表]")
    for name in conn.tables(dbowner, dbname):
        print(f"  {name}")

    print("[视图]")
    for name in conn.views(dbowner, dbname):
        print(f"  {name}")

    print("[索引]")
    for index_name, table_name in sorted(conn.indexes(dbowner, dbname).items()):
        print(f"  {index_name} -> {table_name}")

    if table:
        print(f"[列] {table}")
        for col in conn.columns(dbowner, dbname, table):
            flags = []
            if col.primary_key:
                flags.append("PK")
            if col.not_null:
                flags.append("NOT NULL")
            suffix = f" ({', '.join(flags)})" if flags else ""
            print(f"  {col.name} {col.data_type or ''}{suffix}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="打印 DBHub.io 数据库结构")
    parser.add_argument("--config", default=None, help="连接配置 YAML，默认 configs/dbhub.yaml")
    parser.add_argument("--table", default=None, help="需要列出列信息的表或视图")
    args = parser.parse_args(argv)

    setup_logging()
    load_env()
    cfg = load_dbhub_config(args.config)
    conn = connection_from_config(cfg)
    print_schema(conn, cfg["database"]["owner"], cfg["database"]["name"], args.table)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
