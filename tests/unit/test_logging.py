"""
Unit tests for the logging module.

Tests cover:
- Logger initialization with directory creation
- Three sink configuration (console, daily file, error file)
- Context manager for company/phase/carbon price fields
- Context validation
"""

import threading
import time

import pytest
from loguru import logger

from cement_carbon.utils.log_setup import VALID_CONTEXT_FIELDS, LogPhases, log_context, setup_logging


@pytest.fixture(autouse=True)
def clean_loguru():
    """
    Reset Loguru state before and after each test.

    Loguru keeps global handler state between tests.
    """
    logger.remove()
    yield
    logger.remove()


def _daily_log(logs_dir):
    files = [f for f in logs_dir.glob("*.log") if f.name != "errors.log"]
    assert files, "daily log file not created"
    return files[0]


class TestLoggerInitialization:
    """Test logger setup and directory creation"""

    def test_creates_logs_directory_if_missing(self, tmp_path):
        logs_dir = tmp_path / "logs"
        assert not logs_dir.exists()

        setup_logging(log_dir=str(logs_dir))

        assert logs_dir.is_dir()

    def test_configures_three_handlers(self, tmp_path):
        setup_logging(log_dir=str(tmp_path / "logs"))
        assert len(logger._core.handlers) == 3

    def test_repeated_setup_replaces_handlers(self, tmp_path):
        setup_logging(log_dir=str(tmp_path / "logs"))
        setup_logging(log_dir=str(tmp_path / "logs"))
        assert len(logger._core.handlers) == 3


class TestSinks:
    """Test console, daily and error sinks"""

    def test_console_sink_filters_by_level(self, tmp_path, capsys):
        setup_logging(log_level="WARNING", log_dir=str(tmp_path / "logs"))

        logger.info("Info message - hidden")
        logger.warning("Warning message - shown")

        output = capsys.readouterr().err
        assert "Info message" not in output
        assert "Warning message" in output

    def test_daily_file_captures_debug(self, tmp_path):
        logs_dir = tmp_path / "logs"
        setup_logging(log_level="WARNING", log_dir=str(logs_dir))

        logger.debug("Debug detail")

        log_file = _daily_log(logs_dir)
        parts = log_file.stem.split("-")
        assert [len(p) for p in parts] == [4, 2, 2]
        assert "Debug detail" in log_file.read_text()

    def test_error_sink_captures_errors_only(self, tmp_path):
        logs_dir = tmp_path / "logs"
        setup_logging(log_dir=str(logs_dir))

        logger.warning("Warning message")
        logger.error("Error message")

        content = (logs_dir / "errors.log").read_text()
        assert "Warning message" not in content
        assert "Error message" in content

    def test_exception_traceback_in_error_log(self, tmp_path):
        logs_dir = tmp_path / "logs"
        setup_logging(log_dir=str(logs_dir))

        try:
            raise ValueError("Test exception")
        except ValueError:
            logger.exception("Caught exception")

        content = (logs_dir / "errors.log").read_text()
        assert "Traceback" in content
        assert "Test exception" in content


class TestContextManager:
    """Test log_context manager for adding contextual fields"""

    def test_context_adds_fields_to_logs(self, tmp_path):
        logs_dir = tmp_path / "logs"
        setup_logging(log_dir=str(logs_dir))

        with log_context(company_id="ultratech", phase=LogPhases.ANALYSIS, carbon_price=9.5):
            logger.info("Analysing company")

        content = _daily_log(logs_dir).read_text()
        assert "ultratech" in content
        assert "analysis" in content
        assert "9.5" in content

    def test_console_shows_context(self, tmp_path, capsys):
        setup_logging(log_dir=str(tmp_path / "logs"))

        with log_context(company_id="acc", carbon_price=25):
            logger.info("Priced")

        output = capsys.readouterr().err
        assert "CO:acc" in output
        assert "$25/t" in output

    def test_context_is_removed_after_exit(self, tmp_path):
        logs_dir = tmp_path / "logs"
        setup_logging(log_dir=str(logs_dir))

        with log_context(company_id="shree"):
            logger.info("Inside context")
        logger.info("Outside context")

        lines = _daily_log(logs_dir).read_text().splitlines()
        outside = next(line for line in lines if "Outside context" in line)
        assert "shree" not in outside

    def test_nested_contexts_combine(self, tmp_path):
        logs_dir = tmp_path / "logs"
        setup_logging(log_dir=str(logs_dir))

        with log_context(company_id="acc"), log_context(phase=LogPhases.PEER_COMPARISON):
            logger.info("Nested context")

        line = next(line for line in _daily_log(logs_dir).read_text().splitlines() if "Nested context" in line)
        assert "acc" in line
        assert "peer_comparison" in line

    def test_context_isolated_between_threads(self, tmp_path):
        logs_dir = tmp_path / "logs"
        setup_logging(log_dir=str(logs_dir))

        def worker(company_id):
            with log_context(company_id=company_id):
                time.sleep(0.01)
                logger.info(f"Message for {company_id}")

        threads = [threading.Thread(target=worker, args=(cid,)) for cid in ("ultratech", "shree")]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        lines = _daily_log(logs_dir).read_text().splitlines()
        for cid, other in (("ultratech", "shree"), ("shree", "ultratech")):
            line = next(line for line in lines if f"Message for {cid}" in line)
            assert f"'company_id': '{cid}'" in line
            assert f"'company_id': '{other}'" not in line


class TestContextValidation:
    """Tests for log_context validation"""

    def test_raises_error_on_invalid_context_field(self):
        with pytest.raises(ValueError, match="Invalid context field"), log_context(document_id="x"):
            pass

    def test_accepts_all_valid_fields(self):
        values = {"company_id": "acc", "phase": LogPhases.SCENARIO, "carbon_price": 1.0}
        assert set(values) == VALID_CONTEXT_FIELDS
        with log_context(**values):
            logger.info("ok")
