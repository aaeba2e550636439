"""Tests for unipatch.config."""

from unipatch.config import UnipatchConfig, _apply, _read_toml, load_config


# ---------------------------------------------------------------------------
# _read_toml
# ---------------------------------------------------------------------------


def test_read_toml_success(tmp_path):
    toml_file = tmp_path / "test.toml"
    toml_file.write_text("[tool.unipatch]\nbinary = true\n", encoding="utf-8")
    result = _read_toml(toml_file)
    assert result == {"tool": {"unipatch": {"binary": True}}}


def test_read_toml_missing_file(tmp_path):
    result = _read_toml(tmp_path / "nonexistent.toml")
    assert result == {}


def test_read_toml_invalid_utf8(tmp_path):
    bad_file = tmp_path / "bad.toml"
    bad_file.write_bytes(b"\x80\x81\x82")
    result = _read_toml(bad_file)
    assert result == {}


def test_read_toml_invalid_syntax(tmp_path):
    bad_file = tmp_path / "bad.toml"
    bad_file.write_text("binary = = true\n", encoding="utf-8")
    assert _read_toml(bad_file) == {}


# ---------------------------------------------------------------------------
# _apply
# ---------------------------------------------------------------------------


def test_apply_empty_dict():
    cfg = UnipatchConfig()
    _apply(cfg, {})
    assert cfg == UnipatchConfig()


def test_apply_known_key():
    cfg = UnipatchConfig()
    _apply(cfg, {"show_hunks": False})
    assert cfg.show_hunks is False


def test_apply_unknown_key_ignored():
    cfg = UnipatchConfig()
    _apply(cfg, {"unknown_option": 999})
    assert cfg == UnipatchConfig()


# ---------------------------------------------------------------------------
# load_config
# ---------------------------------------------------------------------------


def test_load_config_defaults_when_no_files(tmp_path):
    cfg = load_config(project_root=tmp_path)
    assert cfg == UnipatchConfig()
    assert cfg.binary is False
    assert cfg.log_level == "WARNING"


def test_load_config_reads_pyproject_toml(tmp_path):
    (tmp_path / "pyproject.toml").write_text(
        "[tool.unipatch]\nbinary = true\n", encoding="utf-8"
    )
    cfg = load_config(project_root=tmp_path)
    assert cfg.binary is True
    assert cfg.show_hunks is True


def test_load_config_pyproject_without_unipatch_section(tmp_path):
    (tmp_path / "pyproject.toml").write_text(
        "[tool.pytest]\naddopts = '-q'\n", encoding="utf-8"
    )
    cfg = load_config(project_root=tmp_path)
    assert cfg == UnipatchConfig()


def test_load_config_local_overrides_pyproject(tmp_path):
    (tmp_path / "pyproject.toml").write_text(
        "[tool.unipatch]\nshow_hunks = false\nlog_level = 'INFO'\n",
        encoding="utf-8",
    )
    (tmp_path / ".unipatch.toml").write_text("log_level = 'DEBUG'\n", encoding="utf-8")
    cfg = load_config(project_root=tmp_path)
    assert cfg.show_hunks is False
    assert cfg.log_level == "DEBUG"


def test_load_config_uses_cwd_when_no_root(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".unipatch.toml").write_text(
        "show_function_context = false\n", encoding="utf-8"
    )
    cfg = load_config()
    assert cfg.show_function_context is False
