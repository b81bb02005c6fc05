import logging
import logging.handlers

import pytest

from dbhub.db import DecodeError, decode_rows
from dbhub.logger import get_logger, setup_logging


@pytest.fixture
def restore_dbhub_logger():
    root = logging.getLogger("dbhub")
    handlers, level, propagate = list(root.handlers), root.level, root.propagate
    yield root
    root.handlers = handlers
    root.setLevel(level)
    root.propagate = propagate


def test_library_only_attaches_null_handler():
    root = logging.getLogger("dbhub")
    assert root.handlers
    assert all(isinstance(h, logging.NullHandler) for h in root.handlers)
    assert root.propagate is True


def test_get_logger_prefixes_name():
    assert get_logger("scripts.run_sql_export").name == "dbhub.scripts.run_sql_export"
    assert get_logger("dbhub.db.decoder").name == "dbhub.db.decoder"


def test_caught_error_leaves_output_to_caller(capsys, caplog):
    with caplog.at_level(logging.ERROR):
        with pytest.raises(DecodeError):
            decode_rows({"x": 1}, True)
    assert capsys.readouterr().err == ""
    assert len([r for r in caplog.records if r.name == "dbhub.db.decoder"]) == 1


def test_setup_logging_adds_console_once(restore_dbhub_logger, monkeypatch):
    monkeypatch.delenv("DBHUB_LOG_DIR", raising=False)
    root = setup_logging(level="debug")
    setup_logging()
    streams = [h for h in root.handlers if type(h) is logging.StreamHandler]
    assert len(streams) == 1
    assert root.propagate is False


def test_setup_logging_with_log_dir(restore_dbhub_logger, tmp_path):
    root = setup_logging(log_dir=str(tmp_path / "logs"))
    assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers)
    for h in root.handlers:
        h.close()
