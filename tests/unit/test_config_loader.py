from __future__ import annotations

from pathlib import Path

import pytest

from attendance_splitter.config.loader import ConfigError, load_config, resolve_config_path


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.source_directory == "./data"
    assert cfg.output_directory == "./out"
    assert cfg.header_scan_rows == 10
    assert cfg.preview_rows == 10
    assert cfg.sheet_name_policy == "truncate"
    assert cfg.output_template == "{stem} Divisions.xlsx"
    assert cfg.output_names == {"core.xlsx": "DJCSI Core Attendance.xlsx"}
    assert cfg.keep_na_strings is None


def test_load_config_missing_file(temp_workdir: Path):
    with pytest.raises(ConfigError, match="config file not found"):
        load_config(temp_workdir / "config" / "not_exists.yml")


def test_load_config_invalid_yaml(write_config: Path):
    write_config.write_text("source_directory: [unterminated\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid yaml"):
        load_config(write_config)


def test_load_config_missing_required(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("output_directory: ./out\n", "")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value) and "required property" in str(e.value)


def test_load_config_extra_field(write_config: Path):
    text = write_config.read_text(encoding="utf-8") + "\nextra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(write_config)


def test_load_config_output_dir_env_override(write_config: Path, monkeypatch):
    monkeypatch.setenv("ATTENDANCE_SPLITTER_OUTPUT_DIR", "./elsewhere")
    assert load_config(write_config).output_directory == "./elsewhere"


def test_output_path_for_uses_names_then_template(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.output_path_for(Path("data/core.xlsx")) == Path("./out") / "DJCSI Core Attendance.xlsx"
    assert cfg.output_path_for(Path("data/cocomm.xlsx")) == Path("./out") / "cocomm Divisions.xlsx"


def test_resolve_config_path_precedence(monkeypatch):
    monkeypatch.delenv("ATTENDANCE_SPLITTER_CONFIG", raising=False)
    assert resolve_config_path() == Path("config/splitter.yml")
    monkeypatch.setenv("ATTENDANCE_SPLITTER_CONFIG", "env.yml")
    assert resolve_config_path() == Path("env.yml")
    assert resolve_config_path("cli.yml") == Path("cli.yml")
