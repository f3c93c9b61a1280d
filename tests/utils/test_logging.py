"""Tests for TriageLogger."""

import io
import json

from triage_swarm.utils.logging import LogLevel, TriageLogger


def _logger(**kwargs) -> tuple[TriageLogger, io.StringIO]:
    stream = io.StringIO()
    return TriageLogger(stream=stream, use_color=False, **kwargs), stream


class TestTriageLogger:
    """Tests for console and file output."""

    def test_console_line_format(self):
        logger, stream = _logger()
        logger.info("Starting parallel investigations...")

        line = stream.getvalue().strip()
        assert line.endswith("[INFO] Starting parallel investigations...")
        assert line.startswith("[")

    def test_agent_tag(self):
        logger, stream = _logger()
        logger.agent_complete("gemini", 1500)

        assert "[gemini] [SUCCESS] Agent completed in 1.5s" in stream.getvalue()

    def test_min_level_filters(self):
        logger, stream = _logger(min_level=LogLevel.WARNING)
        logger.info("hidden")
        logger.agent_start("claude", "hidden too")
        logger.warning("shown")

        output = stream.getvalue()
        assert "hidden" not in output
        assert "shown" in output

    def test_console_output_disabled(self):
        logger, stream = _logger(console_output=False)
        logger.error("nothing")

        assert stream.getvalue() == ""

    def test_no_color_codes_when_disabled(self):
        logger, stream = _logger()
        logger.error("plain")

        assert "\033[" not in stream.getvalue()

    def test_color_codes_when_enabled(self):
        stream = io.StringIO()
        TriageLogger(stream=stream, use_color=True).error("red")

        assert "\033[91m" in stream.getvalue()

    def test_writes_log_files(self, tmp_path):
        logger, _ = _logger(log_dir=tmp_path / "logs")
        logger.agent_error("codex", "exited with 1", exit_code=1)

        text = (tmp_path / "logs" / "triage.log").read_text()
        assert "[codex] [ERROR] Agent error: exited with 1" in text

        entry = json.loads((tmp_path / "logs" / "triage.jsonl").read_text().splitlines()[0])
        assert entry["level"] == "ERROR"
        assert entry["agent"] == "codex"
        assert entry["extra"] == {"exit_code": 1}

    def test_no_files_without_log_dir(self):
        logger, _ = _logger()

        assert logger.log_file is None
        assert logger.json_log_file is None

    def test_banner(self):
        logger, stream = _logger()
        logger.banner("Triage")

        assert "=" * 60 in stream.getvalue()
        assert "Triage" in stream.getvalue()
