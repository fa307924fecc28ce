"""Tests for the console log formatters."""

import json
import logging

from seaquote.core.logging_config import HumanFormatter, JSONFormatter, setup_logging


def _record(msg="Ingested %s", args=("req.xlsx",), **extra):
    record = logging.LogRecord("seaquote.agents.idp.main", logging.INFO, __file__, 10, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_known_extras():
    line = JSONFormatter().format(_record(requisition_id="abc", unrelated="x"))
    entry = json.loads(line)
    assert entry["msg"] == "Ingested req.xlsx"
    assert entry["level"] == "INFO"
    assert entry["requisition_id"] == "abc"
    assert "unrelated" not in entry


def test_human_formatter():
    line = HumanFormatter().format(_record())
    assert line.endswith("[I] seaquote.agents.idp.main: Ingested req.xlsx")


def test_setup_logging_installs_one_handler():
    root = logging.getLogger()
    saved = root.handlers[:], root.level
    try:
        setup_logging("debug", json_logs=True)
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
        assert logging.getLogger("botocore").level == logging.WARNING
    finally:
        root.handlers[:] = saved[0]
        root.setLevel(saved[1])
