"""Tests for the package logging helpers."""

import logging

import pytest

from event_interception import (
    Component,
    ConfigurationError,
    Event,
    EventInterceptor,
    EventNameCache,
    InterceptorConfig,
    configure_logging,
    disable_logging,
    log_intercepted_events,
)
from event_interception.logging_config import AUDIT_LOGGER, PACKAGE_LOGGER, resolve_level


class Document(Component):
    def on_save(self, event):
        self.raise_event("on_save", event)


@pytest.fixture(autouse=True)
def restore_package_logger(monkeypatch):
    monkeypatch.delenv("EVENT_INTERCEPTOR_LOG_LEVEL", raising=False)
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    saved_level = package_logger.level
    saved_handlers = list(package_logger.handlers)
    yield
    for handler in package_logger.handlers:
        if handler not in saved_handlers:
            handler.close()
    package_logger.handlers[:] = saved_handlers
    package_logger.setLevel(saved_level)


@pytest.fixture
def interceptor():
    return EventInterceptor(config=InterceptorConfig(), cache=EventNameCache())


class TestResolveLevel:
    """Level names, numbers and the environment default."""

    @pytest.mark.parametrize(
        "raw, expected",
        [("debug", logging.DEBUG), (" Error ", logging.ERROR), (logging.INFO, logging.INFO)],
    )
    def test_names_and_numbers(self, raw, expected):
        assert resolve_level(raw) == expected

    def test_default_is_warning(self):
        assert resolve_level(None) == logging.WARNING

    def test_environment_default(self, monkeypatch):
        monkeypatch.setenv("EVENT_INTERCEPTOR_LOG_LEVEL", "debug")
        assert resolve_level(None) == logging.DEBUG

    def test_unknown_level(self):
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_level("chatty")
        assert exc_info.value.details == {"level": "chatty"}


class TestConfigureLogging:
    """Handlers on the package logger only."""

    def test_installs_handler_on_package_logger(self):
        root_handlers = list(logging.getLogger().handlers)

        handlers = configure_logging("DEBUG")

        package_logger = logging.getLogger(PACKAGE_LOGGER)
        assert len(handlers) == 1
        assert handlers[0] in package_logger.handlers
        assert package_logger.level == logging.DEBUG
        assert logging.getLogger().handlers == root_handlers

    def test_repeated_calls_replace_handlers(self):
        configure_logging("INFO")
        configure_logging("WARNING")

        installed = [
            h for h in logging.getLogger(PACKAGE_LOGGER).handlers
            if getattr(h, "_event_interception_handler", False)
        ]
        assert len(installed) == 1
        assert installed[0].level == logging.WARNING

    def test_log_file_receives_package_records(self, tmp_path):
        log_file = tmp_path / "nested" / "events.log"
        handlers = configure_logging("DEBUG", log_file=log_file, format_string="%(name)s|%(message)s")

        EventNameCache().get_or_discover(Document)
        for handler in handlers:
            handler.flush()

        content = log_file.read_text()
        assert "event_interception.discovery|Discovered 1 event(s) on Document" in content

    def test_disable_logging(self):
        disable_logging()
        assert logging.getLogger(PACKAGE_LOGGER).level > logging.CRITICAL


class TestLogInterceptedEvents:
    """Audit trail of intercepted events."""

    def test_logs_each_interception(self, interceptor, caplog):
        doc = Document()
        interceptor.initialize(doc)
        log_intercepted_events(interceptor)

        with caplog.at_level(logging.INFO, logger=AUDIT_LOGGER):
            doc.on_save(Event(sender=doc))
            doc.on_save(Event())

        messages = [r.getMessage() for r in caplog.records if r.name == AUDIT_LOGGER]
        assert messages == [
            "Intercepted on_save from Document",
            "Intercepted on_save from unknown sender",
        ]

    def test_custom_logger_and_level(self, interceptor, caplog):
        doc = Document()
        interceptor.initialize(doc)
        custom = logging.getLogger("tests.audit")
        log_intercepted_events(interceptor, level="WARNING", logger=custom)

        with caplog.at_level(logging.WARNING, logger="tests.audit"):
            doc.on_save(Event(sender=doc))

        records = [r for r in caplog.records if r.name == "tests.audit"]
        assert len(records) == 1
        assert records[0].levelno == logging.WARNING

    def test_handler_can_be_detached(self, interceptor, caplog):
        doc = Document()
        interceptor.initialize(doc)
        handler = log_intercepted_events(interceptor)

        assert interceptor.detach_event_handler(EventInterceptor.INTERCEPTED_EVENT, handler)

        with caplog.at_level(logging.INFO, logger=AUDIT_LOGGER):
            doc.on_save(Event(sender=doc))

        assert not [r for r in caplog.records if r.name == AUDIT_LOGGER]
