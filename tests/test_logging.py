import json
import logging

from mflix.core.logging import DevelopmentFormatter, LogContext, StructuredFormatter, get_logger


def make_record(logger_name="mflix.repositories.users"):
    logger = logging.getLogger(logger_name)
    return logger.makeRecord(logger_name, logging.INFO, __file__, 10, "User registered", None, None)


def test_get_logger_namespaces_under_mflix():
    assert get_logger("scripts").name == "mflix.scripts"
    assert get_logger("mflix.db.mongo").name == "mflix.db.mongo"


def test_structured_formatter_includes_context():
    with LogContext(email="alice@x.com", operation="add_user"):
        record = make_record()

    data = json.loads(StructuredFormatter().format(record))
    assert data["message"] == "User registered"
    assert data["email"] == "alice@x.com"
    assert data["operation"] == "add_user"


def test_log_context_is_removed_on_exit():
    with LogContext(email="alice@x.com"):
        pass

    record = make_record()
    assert not hasattr(record, "email")


def test_development_formatter_appends_context():
    with LogContext(comment_id="c-1"):
        record = make_record()

    assert "comment_id=c-1" in DevelopmentFormatter().format(record)
