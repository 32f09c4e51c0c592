"""Tests for rdme.core.logging."""

import json

from rdme.core.logging import LogContext, bind_context, configure_logging, get_logger, unbind_context


def _json_lines(text: str) -> list[dict]:
    return [json.loads(line) for line in text.splitlines() if line.strip()]


class TestConfigureLogging:
    def test_json_output_goes_to_stderr(self, capsys):
        configure_logging(level="INFO", json_format=True)
        get_logger("rdme.test").info("readme_written", path="README.md")

        captured = capsys.readouterr()
        assert captured.out == ""
        [record] = _json_lines(captured.err)
        assert record["event"] == "readme_written"
        assert record["path"] == "README.md"
        assert record["logger_name"] == "rdme.test"
        assert record["log.level"] == "info"
        assert record["service.name"] == "rdme"
        assert "@timestamp" in record

    def test_level_filtering(self, capsys):
        configure_logging(level="WARNING", json_format=True)
        logger = get_logger("rdme.test")
        logger.info("dropped")
        logger.warning("kept")

        events = [r["event"] for r in _json_lines(capsys.readouterr().err)]
        assert events == ["kept"]

    def test_service_name_and_no_timestamp(self, capsys):
        configure_logging(level="INFO", json_format=True, service="rdme-ci", add_timestamp=False)
        get_logger().info("hello")

        [record] = _json_lines(capsys.readouterr().err)
        assert record["service.name"] == "rdme-ci"
        assert "@timestamp" not in record

    def test_console_renderer(self, capsys):
        configure_logging(level="INFO", json_format=False)
        get_logger("rdme.test").info("doc_injected", doc_lines=3)

        err = capsys.readouterr().err
        assert "doc_injected" in err
        assert "doc_lines=3" in err


class TestContext:
    def test_log_context_binds_and_unbinds(self, capsys):
        configure_logging(level="INFO", json_format=True)
        logger = get_logger("rdme.test")

        with LogContext(project="/work/crate"):
            logger.info("inside")
        logger.info("outside")

        inside, outside = _json_lines(capsys.readouterr().err)
        assert inside["project"] == "/work/crate"
        assert "project" not in outside

    def test_bind_unbind(self, capsys):
        configure_logging(level="INFO", json_format=True)
        bind_context(run="1")
        get_logger().info("a")
        unbind_context("run")
        get_logger().info("b")

        first, second = _json_lines(capsys.readouterr().err)
        assert first["run"] == "1"
        assert "run" not in second
