"""Tests for configuration loading and validation."""

import json
import logging

import pytest

from triage_swarm.config import (
    CONFIG_FILENAME,
    ConfigValidationError,
    TriageConfig,
    load_config,
    validate_config,
)


class TestValidateConfig:
    """Tests for validate_config()."""

    def test_valid_config(self):
        ok, errors = validate_config({
            "timeouts": {"investigation_ms": 1000, "evaluation_ms": 2000},
            "retry": {"launch_retries": 2, "initial_interval": 0.5},
            "binaries": {"codex": "/opt/codex"},
        })

        assert ok is True
        assert errors == []

    @pytest.mark.parametrize(
        "data, path",
        [
            ({"timeouts": {"investigation_ms": 0}}, "timeouts.investigation_ms"),
            ({"timeouts": {"evaluation_ms": "fast"}}, "timeouts.evaluation_ms"),
            ({"timeouts": {"evaluation_ms": True}}, "timeouts.evaluation_ms"),
            ({"retry": {"launch_retries": -1}}, "retry.launch_retries"),
            ({"binaries": {"gemini": ""}}, "binaries.gemini"),
            ({"retry": 3}, "retry"),
        ],
    )
    def test_invalid_values(self, data, path):
        ok, errors = validate_config(data)

        assert ok is False
        assert any(e.startswith(path) for e in errors)

    def test_unknown_key_is_reported(self):
        ok, errors = validate_config({"timeouts": {"typo_ms": 5}})

        assert ok is False
        assert errors == ["timeouts: Additional properties are not allowed ('typo_ms' was unexpected)"]

    def test_non_object_root(self):
        ok, errors = validate_config(["not", "an", "object"])

        assert ok is False
        assert errors[0].startswith("<root>:")

    def test_all_errors_collected(self):
        ok, errors = validate_config({
            "timeouts": {"investigation_ms": 0, "evaluation_ms": "fast"},
            "binaries": {"codex": "   "},
        })

        assert ok is False
        assert [e.split(":")[0] for e in errors] == [
            "binaries.codex",
            "timeouts.evaluation_ms",
            "timeouts.investigation_ms",
        ]

    def test_raise_on_error(self):
        with pytest.raises(ConfigValidationError) as exc:
            validate_config({"timeouts": {"investigation_ms": -1}}, raise_on_error=True)

        assert len(exc.value.errors) == 1


class TestLoadConfig:
    """Tests for load_config()."""

    def test_defaults(self, tmp_path):
        config = load_config(tmp_path, environ={})

        assert config.timeouts.investigation_ms == 600_000
        assert config.timeouts.evaluation_ms == 600_000
        assert config.retry.launch_retries == 0
        assert config.binaries.claude == "claude"
        assert config.project_dir == tmp_path

    def test_reads_config_file(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text(json.dumps({
            "timeouts": {"investigation_ms": 1234},
            "binaries": {"codex": "/opt/codex"},
        }))

        config = load_config(tmp_path, environ={})

        assert config.timeouts.investigation_ms == 1234
        assert config.timeouts.evaluation_ms == 600_000
        assert config.binaries.codex == "/opt/codex"

    def test_environment_overrides_file(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text(json.dumps({"timeouts": {"investigation_ms": 1234}}))

        config = load_config(tmp_path, environ={
            "TRIAGE_TIMEOUT_MS": "999",
            "TRIAGE_LAUNCH_RETRIES": "3",
            "TRIAGE_GEMINI_BIN": "gemini-beta",
        })

        assert config.timeouts.investigation_ms == 999
        assert config.retry.launch_retries == 3
        assert config.binaries.gemini == "gemini-beta"

    def test_invalid_values_fall_back_to_defaults(self, tmp_path, caplog):
        (tmp_path / CONFIG_FILENAME).write_text(json.dumps({
            "timeouts": {"investigation_ms": -5, "evaluation_ms": 50},
        }))

        with caplog.at_level(logging.WARNING):
            config = load_config(tmp_path, environ={"TRIAGE_EVAL_TIMEOUT_MS": "soon"})

        assert config.timeouts.investigation_ms == 600_000
        assert config.timeouts.evaluation_ms == 50
        assert "timeouts.investigation_ms" in caplog.text
        assert "TRIAGE_EVAL_TIMEOUT_MS" in caplog.text

    def test_unknown_key_keeps_rest_of_section(self, tmp_path, caplog):
        (tmp_path / CONFIG_FILENAME).write_text(json.dumps({
            "timeouts": {"typo_ms": 5, "evaluation_ms": 70},
            "retry": "often",
        }))

        with caplog.at_level(logging.WARNING):
            config = load_config(tmp_path, environ={})

        assert config.timeouts.evaluation_ms == 70
        assert config.retry.launch_retries == 0
        assert "typo_ms" in caplog.text

    def test_blank_binary_from_environment_is_rejected(self, tmp_path):
        config = load_config(tmp_path, environ={"TRIAGE_CODEX_BIN": "   "})

        assert config.binaries.codex == "codex"

    def test_malformed_json_is_ignored(self, tmp_path, caplog):
        (tmp_path / CONFIG_FILENAME).write_text("{not json")

        with caplog.at_level(logging.WARNING):
            config = load_config(tmp_path, environ={})

        assert config.timeouts.investigation_ms == 600_000
        assert "Failed to read" in caplog.text


class TestTriageConfig:
    """Tests for TriageConfig."""

    def test_to_dict(self, tmp_path):
        data = TriageConfig(project_dir=tmp_path, verbose=True).to_dict()

        assert data["project_dir"] == str(tmp_path)
        assert data["verbose"] is True
        assert data["timeouts"]["evaluation_ms"] == 600_000
        assert data["binaries"]["evaluator"] == "claude"

    def test_instances_do_not_share_sections(self):
        first, second = TriageConfig(), TriageConfig()
        first.timeouts.investigation_ms = 1

        assert second.timeouts.investigation_ms == 600_000
