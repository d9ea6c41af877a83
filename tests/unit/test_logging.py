"""Tests for logging module."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from io import StringIO

import pytest

from fakejira.config import Config, load_config
from fakejira.logging import (
    ContextAdapter,
    DiagnosticFilter,
    FakeJiraLogger,
    JSONFormatter,
    StructuredFormatter,
    get_logger,
    setup_logging,
    setup_logging_from_config,
)


def _record(
    name: str = "fakejira.jql", level: int = logging.INFO, msg: str = "Test message"
) -> logging.LogRecord:
    return logging.LogRecord(
        name=name,
        level=level,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    """Restore root logger handlers and level changed by setup_logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    package_level = logging.getLogger("fakejira").level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("fakejira").setLevel(package_level)


class TestStructuredFormatter:
    """Tests for StructuredFormatter."""

    def test_basic_format(self) -> None:
        result = StructuredFormatter().format(_record())

        assert "INFO" in result
        assert "[jql" in result  # component extracted from logger name
        assert "Test message" in result

    def test_format_with_context(self) -> None:
        record = _record(name="fakejira.fake", msg="Searching")
        record.jql = "project=Test1"
        record.issue_id = "123"

        result = StructuredFormatter().format(record)

        assert "jql=project=Test1" in result
        assert "issue_id=123" in result
        assert "Searching" in result

    def test_unknown_extras_are_not_rendered(self) -> None:
        record = _record()
        record.diagnostic_tag = "jql"
        assert "diagnostic_tag" not in StructuredFormatter().format(record)


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_basic_format(self) -> None:
        data = json.loads(JSONFormatter().format(_record(name="fakejira.evaluator")))

        assert data["level"] == "INFO"
        assert data["component"] == "evaluator"
        assert data["message"] == "Test message"
        assert "timestamp" in data

    def test_format_with_context(self) -> None:
        record = _record()
        record.plugin = "jira"

        data = json.loads(JSONFormatter().format(record))

        assert data["plugin"] == "jira"
        assert "jql" not in data


class TestDiagnosticFilter:
    """Tests for DiagnosticFilter."""

    def test_non_debug_passes(self) -> None:
        record = _record(level=logging.WARNING)
        record.diagnostic_tag = "jql"
        assert DiagnosticFilter().filter(record) is True

    def test_untagged_debug_passes(self) -> None:
        assert DiagnosticFilter().filter(_record(level=logging.DEBUG)) is True

    def test_tagged_debug_suppressed_by_default(self) -> None:
        record = _record(level=logging.DEBUG)
        record.diagnostic_tag = "jql"
        assert DiagnosticFilter().filter(record) is False

    def test_enabled_tag_passes(self) -> None:
        record = _record(level=logging.DEBUG)
        record.diagnostic_tag = "jql"
        assert DiagnosticFilter.from_config_string(" jql , links ").filter(record) is True

    def test_wildcard(self) -> None:
        record = _record(level=logging.DEBUG)
        record.diagnostic_tag = "anything"
        diagnostic_filter = DiagnosticFilter.from_config_string("*")
        assert diagnostic_filter.allow_all is True
        assert diagnostic_filter.filter(record) is True

    def test_empty_config_string(self) -> None:
        assert DiagnosticFilter.from_config_string("  ").enabled_tags == frozenset()


class TestContextLogging:
    """Tests for FakeJiraLogger and ContextAdapter."""

    def test_get_logger_returns_custom_class(self) -> None:
        assert isinstance(get_logger("fakejira.test_context"), FakeJiraLogger)

    def test_with_context_adds_extra(self) -> None:
        logger = get_logger("fakejira.test_context_extra")
        stream = StringIO()
        handler = logging.StreamHandler(stream)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        try:
            adapter = logger.with_context(jql="status=Open")
            assert isinstance(adapter, ContextAdapter)
            adapter.info("Searching", extra={"issue_id": "1"})
        finally:
            logger.removeHandler(handler)

        output = stream.getvalue()
        assert "jql=status=Open" in output
        assert "issue_id=1" in output


@pytest.mark.usefixtures("restore_root_logger")
class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_sets_log_level(self) -> None:
        setup_logging(level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("fakejira").level == logging.DEBUG

    def test_json_format_adds_json_formatter(self) -> None:
        setup_logging(level="INFO", json_format=True)

        root = logging.getLogger()
        assert isinstance(root.handlers[0].formatter, JSONFormatter)

    def test_structured_format_by_default(self) -> None:
        setup_logging(level="INFO")

        root = logging.getLogger()
        assert isinstance(root.handlers[0].formatter, StructuredFormatter)

    def test_handles_invalid_level_gracefully(self) -> None:
        setup_logging(level="INVALID")

        assert logging.getLogger().level == logging.INFO

    def test_replace_handlers_true_removes_existing(self) -> None:
        root = logging.getLogger()
        existing_handler = logging.StreamHandler(StringIO())
        root.addHandler(existing_handler)

        setup_logging(level="INFO")

        assert existing_handler not in root.handlers
        assert len(root.handlers) == 1

    def test_replace_handlers_false_preserves_existing(self) -> None:
        root = logging.getLogger()
        existing_handler = logging.StreamHandler(StringIO())
        root.addHandler(existing_handler)

        setup_logging(level="INFO", replace_handlers=False)

        assert existing_handler in root.handlers

    def test_installs_diagnostic_filter(self) -> None:
        setup_logging(level="DEBUG", diagnostic_tags="jql")

        filters = logging.getLogger().handlers[-1].filters
        assert len(filters) == 1
        assert isinstance(filters[0], DiagnosticFilter)
        assert filters[0].enabled_tags == frozenset({"jql"})


@pytest.mark.usefixtures("restore_root_logger")
class TestSetupLoggingFromConfig:
    """Tests for setup_logging_from_config."""

    def test_applies_log_settings(self) -> None:
        setup_logging_from_config(Config(log_level="DEBUG", log_json=True, diagnostic_tags="jql"))

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
        assert root.handlers[0].filters[0].enabled_tags == frozenset({"jql"})

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FAKEJIRA_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("FAKEJIRA_DIAGNOSTIC_TAGS", "*")

        setup_logging_from_config(load_config())

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert logging.getLogger("fakejira").level == logging.WARNING
        assert isinstance(root.handlers[0].formatter, StructuredFormatter)
        assert root.handlers[0].filters[0].allow_all is True

    def test_keeps_existing_handlers(self) -> None:
        root = logging.getLogger()
        existing_handler = logging.StreamHandler(StringIO())
        root.addHandler(existing_handler)

        setup_logging_from_config(Config(), replace_handlers=False)

        assert existing_handler in root.handlers
        assert root.handlers[-1] is not existing_handler
