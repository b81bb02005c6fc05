# dbhub.utils: 通用工具（配置加载、.env 加载、SQL 文件读取）
# 禁止引用 scripts 下的任何内容

from dbhub.utils.config_loader import load_dbhub_config, load_yaml
from dbhub.utils.env_loader import load_env
from dbhub.utils.sql_loader import list_sql_files, read_sql_file

__all__ = ["list_sql_files", "load_dbhub_config", "load_env", "load_yaml", "read_sql_file"]
