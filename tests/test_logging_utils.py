"""Tests for logging_utils module."""

from __future__ import annotations

import io

from loguru import logger

from taskboard.logging_utils import configure_logging, pretty


class TestConfigureLogging:
    def test_level_filters_messages(self):
        sink = io.StringIO()
        configure_logging("warning", sink=sink)
        logger.info("hidden message")
        logger.warning("visible message")

        out = sink.getvalue()
        assert "visible message" in out
        assert "hidden message" not in out
        assert "WARNING" in out

    def teardown_method(self):
        configure_logging()


class TestPretty:
    def test_dict(self):
        assert pretty({"a": 1}) == '{\n  "a": 1\n}'

    def test_non_serializable_falls_back_to_str(self):
        obj = object()
        assert pretty({"o": obj}).startswith("{")

    def test_circular_reference(self):
        data: dict = {}
        data["self"] = data
        assert pretty(data) == str(data)


class TestServiceLogging:
    def test_created_task_is_logged_as_json(self):
        from taskboard.service import TaskService
        from taskboard.storage import InMemoryTaskRepository

        sink = io.StringIO()
        configure_logging("DEBUG", sink=sink)
        task = TaskService(InMemoryTaskRepository()).create_task({"title": "Log me"})

        out = sink.getvalue()
        assert f"Created task {task.id}" in out
        assert '"title": "Log me"' in out

    def teardown_method(self):
        configure_logging()
