import pytest
from pydantic import ValidationError

from ccut.config import RunConfig, load_config
from ccut.styling import ColorMode


def test_defaults():
    config = RunConfig()
    assert config.color is ColorMode.ALWAYS
    assert config.name_filter is None
    assert config.timeout is None
    assert config.verbose is False
    assert config.debug_log is None


def test_load_config_full(tmp_path):
    config_file = tmp_path / "ccut.yaml"
    config_file.write_text(
        """
color: never
name_filter: "parse_*"
timeout: 2.5
verbose: true
"""
    )
    config = load_config(config_file)
    assert config.color is ColorMode.NEVER
    assert config.name_filter == "parse_*"
    assert config.timeout == 2.5
    assert config.verbose is True


def test_load_empty_config_gives_defaults(tmp_path):
    config_file = tmp_path / "ccut.yaml"
    config_file.write_text("")
    assert load_config(config_file) == RunConfig()


def test_unknown_key_rejected(tmp_path):
    config_file = tmp_path / "ccut.yaml"
    config_file.write_text("colour: never\n")
    with pytest.raises(ValidationError):
        load_config(config_file)


def test_non_mapping_rejected(tmp_path):
    config_file = tmp_path / "ccut.yaml"
    config_file.write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="mapping"):
        load_config(config_file)


@pytest.mark.parametrize("value", [0, -1])
def test_timeout_must_be_positive(value):
    with pytest.raises(ValidationError, match="greater than 0"):
        RunConfig(timeout=value)


def test_blank_filter_rejected():
    with pytest.raises(ValidationError):
        RunConfig(name_filter="  ")


def test_invalid_color_rejected():
    with pytest.raises(ValidationError):
        RunConfig(color="sometimes")


def test_relative_debug_log_resolved_against_config_dir(tmp_path, monkeypatch):
    project = tmp_path / "project"
    project.mkdir()
    config_file = project / "ccut.yaml"
    config_file.write_text("debug_log: logs/debug.log\n")
    monkeypatch.chdir(tmp_path)

    config = load_config(config_file)
    assert config.debug_log == str((project / "logs" / "debug.log").resolve())


def test_debug_log_expands_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("CCUT_LOG_DIR", str(tmp_path / "out"))
    config_file = tmp_path / "ccut.yaml"
    config_file.write_text("debug_log: ${CCUT_LOG_DIR}/debug.log\n")
    config = load_config(config_file)
    assert config.debug_log == str(tmp_path / "out" / "debug.log")


def test_debug_log_default_value_used_when_unset(tmp_path, monkeypatch):
    monkeypatch.delenv("CCUT_UNSET_DIR", raising=False)
    config_file = tmp_path / "ccut.yaml"
    config_file.write_text("debug_log: ${CCUT_UNSET_DIR:-fallback}/debug.log\n")
    config = load_config(config_file)
    assert config.debug_log == str((tmp_path / "fallback" / "debug.log").resolve())


def test_debug_log_missing_variable_raises(tmp_path, monkeypatch):
    monkeypatch.delenv("CCUT_MISSING_DIR", raising=False)
    config_file = tmp_path / "ccut.yaml"
    config_file.write_text("debug_log: ${CCUT_MISSING_DIR}/debug.log\n")
    with pytest.raises(ValueError, match="debug_log"):
        load_config(config_file)


def test_merged_applies_only_given_overrides():
    base = RunConfig(color="never", timeout=3)
    merged = base.merged(name_filter="a*", timeout=None, color=None)
    assert merged.color is ColorMode.NEVER
    assert merged.timeout == 3
    assert merged.name_filter == "a*"
    assert base.name_filter is None


def test_merged_validates_overrides():
    with pytest.raises(ValidationError):
        RunConfig().merged(timeout=-5)


def test_malformed_yaml_raises_value_error(tmp_path):
    config_file = tmp_path / "ccut.yaml"
    config_file.write_text("color: [never\n")
    with pytest.raises(ValueError, match="ccut.yaml"):
        load_config(config_file)
