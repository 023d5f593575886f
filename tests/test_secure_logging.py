"""Tests for dadata/logging/secure.py: redacting logger and JSON output."""

import io
import json
import logging

import pytest

from dadata.config.settings import Settings
from dadata.logging.secure import (
    LOGGER_NAME,
    JSONFormatter,
    RequestTimer,
    SecureLogger,
    generate_request_id,
    get_logger,
    request_id_var,
    setup_logging,
    wrap_logger,
)


@pytest.fixture
def secure_logger(log_output):
    return SecureLogger(logging.getLogger("dadata.tests")), log_output


class TestSecureLogger:

    def test_message_redacted(self, secure_logger):
        logger, stream = secure_logger
        logger.info("API-Key: secret123")
        assert stream.getvalue().strip() == "API-Key: [FILTERED]"

    def test_args_interpolated_before_redaction(self, secure_logger):
        logger, stream = secure_logger
        logger.error("Headers: %s", "Authorization: Token abc")
        assert "abc" not in stream.getvalue()
        assert "Authorization: [FILTERED]" in stream.getvalue()

    def test_mapping_arg(self, secure_logger):
        logger, stream = secure_logger
        logger.warning("%(header)s", {"header": "X-Secret: xyz"})
        assert stream.getvalue().strip() == "X-Secret: [FILTERED]"

    def test_non_string_message(self, secure_logger):
        logger, stream = secure_logger
        logger.info(ValueError("Authorization: Token abc"))
        assert "Token abc" not in stream.getvalue()

    def test_respects_level(self, secure_logger):
        logger, stream = secure_logger
        logger.logger.setLevel(logging.WARNING)
        logger.debug("hidden")
        assert stream.getvalue() == ""

    def test_audit_data_redacted(self):
        logger = SecureLogger(logging.getLogger("dadata.tests.audit"))
        msg, kwargs = logger.process(
            "msg", {"extra": {"audit_data": {"detail": "X-Secret: s", "status_code": 401}}}
        )
        assert kwargs["extra"]["audit_data"] == {"detail": "X-Secret: [FILTERED]", "status_code": 401}

    def test_wraps_adapter(self, log_output):
        inner = logging.LoggerAdapter(logging.getLogger("dadata.tests"), {})
        SecureLogger(inner).info("Authorization: Token abc")
        assert log_output.getvalue().strip() == "Authorization: [FILTERED]"


class TestWrapLogger:

    def test_plain_logger_wrapped(self):
        wrapped = wrap_logger(logging.getLogger("x"))
        assert isinstance(wrapped, SecureLogger)

    def test_secure_logger_kept(self):
        logger = SecureLogger(logging.getLogger("x"))
        assert wrap_logger(logger) is logger

    def test_default_logger(self):
        logger = get_logger()
        assert isinstance(logger, SecureLogger)
        assert logger.logger.name == LOGGER_NAME


class TestJSONFormatter:

    def _record(self, msg):
        return logging.LogRecord(
            name="test", level=logging.INFO, pathname="",
            lineno=0, msg=msg, args=(), exc_info=None,
        )

    def test_output_is_valid_json(self):
        parsed = json.loads(JSONFormatter().format(self._record("hello")))
        assert parsed["message"] == "hello"
        assert parsed["level"] == "INFO"
        assert "timestamp" in parsed

    def test_message_redacted(self):
        parsed = json.loads(JSONFormatter().format(self._record("Authorization: Token abc")))
        assert parsed["message"] == "Authorization: [FILTERED]"

    def test_non_ascii_kept(self):
        output = JSONFormatter().format(self._record("мск сухонска 11/-89"))
        assert "мск сухонска" in output

    def test_includes_request_id(self):
        token = request_id_var.set("req-abc123")
        try:
            parsed = json.loads(JSONFormatter().format(self._record("test")))
            assert parsed["request_id"] == "req-abc123"
        finally:
            request_id_var.reset(token)

    def test_includes_audit_data(self):
        record = self._record("test")
        record.audit_data = {"status_code": 429, "elapsed_ms": 1.5}
        parsed = json.loads(JSONFormatter().format(record))
        assert parsed["status_code"] == 429
        assert parsed["elapsed_ms"] == 1.5


class TestGenerateRequestId:

    def test_length(self):
        assert len(generate_request_id()) == 12

    def test_uniqueness(self):
        ids = {generate_request_id() for _ in range(100)}
        assert len(ids) == 100


class TestRequestTimer:

    def test_measures_elapsed(self):
        with RequestTimer() as timer:
            _ = sum(range(1000))
        assert timer.elapsed_ms >= 0
        assert isinstance(timer.elapsed_ms, float)


class TestSetupLogging:

    @pytest.fixture(autouse=True)
    def restore_library_logger(self):
        logger = logging.getLogger(LOGGER_NAME)
        handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
        yield
        logger.handlers[:] = handlers
        logger.setLevel(level)
        logger.propagate = propagate

    def test_creates_stdout_handler(self):
        logger = setup_logging(Settings(log_level="DEBUG"))
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)
        assert logger.propagate is False

    def test_file_handler(self, tmp_path):
        path = tmp_path / "dadata.log"
        logger = setup_logging(Settings(log_file=str(path)))
        assert any(isinstance(h, logging.FileHandler) for h in logger.handlers)
        get_logger().info("X-Secret: top")
        for handler in logger.handlers:
            handler.flush()
        content = path.read_text(encoding="utf-8")
        assert "top" not in content
        assert "X-Secret: [FILTERED]" in content
        for handler in logger.handlers:
            handler.close()
