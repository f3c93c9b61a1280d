"""Tests for report formatting."""

from triage_swarm.formatting import (
    ALIASES,
    SEPARATOR,
    UNKNOWN_ALIAS,
    alias_name,
    format_all_results,
    format_duration,
    format_result,
    format_summary_line,
    real_name,
)


class TestNameResolvers:
    """Tests for real and alias name resolution."""

    def test_real_name_is_upper_cased(self):
        assert real_name("claude") == "CLAUDE"

    def test_alias_table(self):
        assert alias_name("claude") == "Investigator A"
        assert alias_name("gemini") == "Investigator B"
        assert alias_name("codex") == "Investigator C"

    def test_unknown_identity(self):
        assert alias_name("mystery") == UNKNOWN_ALIAS == "Unknown"


class TestFormatResult:
    """Tests for a single report block."""

    def test_success_block(self, make_result):
        result = make_result(output="All good", duration_ms=1500, exit_code=0)

        assert format_result(result) == (
            "## CLAUDE Investigation\n"
            "Duration: 1.5s | Exit: 0\n"
            "\n"
            "All good\n"
        )

    def test_nonzero_exit_uses_error_branch(self, make_result):
        """A failed call renders ERROR even when it produced output."""
        result = make_result(output="half done", error="rate limited", exit_code=1)
        block = format_result(result)

        assert "ERROR: rate limited\nhalf done\n" in block
        assert not block.endswith("\n\nhalf done\n")

    def test_stderr_ignored_on_success(self, make_result):
        """Warnings on stderr never turn a successful result into an error."""
        result = make_result(output="done", error="deprecation warning", exit_code=0)
        block = format_result(result)

        assert "ERROR" not in block
        assert "deprecation warning" not in block

    def test_launch_failure_block(self, make_result):
        result = make_result(output="", error="Failed to invoke gemini", exit_code=-1, duration_ms=0)
        block = format_result(result)

        assert "Duration: 0.0s | Exit: -1" in block
        assert "ERROR: Failed to invoke gemini\n" in block

    def test_alias_resolver(self, make_result):
        block = format_result(make_result(source="gemini"), alias_name)

        assert block.startswith("## Investigator B Investigation\n")


class TestFormatDuration:
    """Tests for duration rendering."""

    def test_one_decimal_place(self):
        assert format_duration(1500) == "1.5s"
        assert format_duration(0) == "0.0s"
        assert format_duration(61234) == "61.2s"


class TestFormatAllResults:
    """Tests for joined rendering."""

    def test_separator_count(self, sample_results):
        text = format_all_results(sample_results)

        assert text.count(SEPARATOR) == 2
        assert text.count("\n---\n") == 2
        assert not text.endswith(SEPARATOR)

    def test_single_result_has_no_separator(self, make_result):
        assert "---" not in format_all_results([make_result()])

    def test_empty(self):
        assert format_all_results([]) == ""

    def test_durations_rendered(self, sample_results):
        text = format_all_results(sample_results)

        assert "Duration: 1.5s | Exit: 0" in text
        assert "Duration: 2.3s | Exit: 0" in text
        assert "Duration: 0.9s | Exit: 1" in text

    def test_blocks_in_given_order(self, sample_results):
        text = format_all_results(sample_results)

        assert text.index("## CLAUDE") < text.index("## GEMINI") < text.index("## CODEX")

    def test_anonymized_never_shows_real_headers(self, sample_results):
        text = format_all_results(sample_results, anonymize=True)

        for real in ("CLAUDE", "GEMINI", "CODEX"):
            assert f"## {real} Investigation" not in text
        for alias in ALIASES.values():
            assert f"## {alias} Investigation" in text

    def test_real_rendering_never_shows_aliases(self, sample_results):
        text = format_all_results(sample_results)

        for alias in ALIASES.values():
            assert alias not in text

    def test_unknown_source_anonymized(self, make_result):
        text = format_all_results([make_result(source="other")], anonymize=True)

        assert text.startswith("## Unknown Investigation\n")


class TestSummaryLine:
    """Tests for the status summary."""

    def test_ok_line(self, make_result):
        assert format_summary_line(make_result(duration_ms=1500)) == "  CLAUDE: OK (1.5s)"

    def test_failed_line(self, make_result):
        line = format_summary_line(make_result(source="codex", exit_code=2, duration_ms=500))
        assert line == "  CODEX: FAILED (0.5s)"
