"""
Logging utilities

Tests for run IDs and run-scoped log context.
"""

import re

import pytest

from prcheck.utils.logger import base36_encode, generate_run_id, is_debug_enabled, logger, with_run_id


@pytest.fixture
def captured():
    """Collect log records emitted while the test runs."""
    records = []
    sink_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(sink_id)


class TestRunId:
    def test_format(self):
        assert re.fullmatch(r"run_[0-9a-z]+_[0-9a-f]{8}", generate_run_id())

    def test_unique(self):
        assert generate_run_id() != generate_run_id()

    def test_base36(self):
        assert base36_encode(0) == "0"
        assert base36_encode(35) == "z"
        assert base36_encode(36) == "10"


class TestRunContext:
    def test_run_id_bound(self, captured):
        with with_run_id("run_abc_1234", file_path="src/a.ts"):
            logger.info("scanning")
        assert captured[-1]["extra"]["run_id"] == "run_abc_1234"
        assert captured[-1]["extra"]["file_path"] == "src/a.ts"

    def test_context_cleared_after_exit(self, captured):
        with with_run_id("run_abc_1234"):
            pass
        logger.info("after")
        assert "file_path" not in captured[-1]["extra"]
        assert captured[-1]["extra"].get("run_id") != "run_abc_1234"


class TestDebugFlag:
    def test_env(self, monkeypatch):
        monkeypatch.setenv("PRCHECK_DEBUG", "true")
        assert is_debug_enabled() is True
        monkeypatch.setenv("PRCHECK_DEBUG", "no")
        assert is_debug_enabled() is False
