import pytest

from nbinject_cli.config import ConfigError, InjectionConfig
from nbinject_cli.injection.constants import CONFIG_ENV_VAR, DEFAULT_CANDIDATE_DIRS, INJECTION_MARKER


def _write_config(path, text):
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults(tmp_path):
    config = InjectionConfig.from_config_file(base_dir=str(tmp_path))

    assert config.directories == list(DEFAULT_CANDIDATE_DIRS)
    assert config.marker == INJECTION_MARKER
    assert config.debug is False
    assert config.candidate_paths() == [tmp_path / "_build" / "html", tmp_path / "_build" / "site"]


def test_config_file_then_overrides(tmp_path):
    _write_config(tmp_path / "nbinject.yml", (
        "injection:\n"
        "  directories: [public]\n"
        "  toolbar_subject: Tutorials\n"
        "  debug: true\n"
    ))

    config = InjectionConfig.from_config_file(base_dir=str(tmp_path), toolbar_subject=None, debug=False)

    assert config.directories == ["public"]
    assert config.toolbar_subject == "Tutorials"
    assert config.debug is False


def test_config_path_from_environment(tmp_path, monkeypatch):
    path = _write_config(tmp_path / "custom.yml", "injection:\n  directories: site\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    config = InjectionConfig.from_config_file(base_dir=str(tmp_path))

    assert config.directories == ["site"]


def test_file_without_injection_section_uses_defaults(tmp_path):
    _write_config(tmp_path / "nbinject.yml", "other: 1\n")

    assert InjectionConfig.from_config_file(base_dir=str(tmp_path)).directories == list(DEFAULT_CANDIDATE_DIRS)


@pytest.mark.parametrize("text, message", [
    ("injection: [", "Could not read"),
    ("- a\n- b\n", "must contain a mapping"),
    ("injection:\n  colour: red\n", "Unknown keys"),
    ("injection:\n  marker: ''\n", "'marker'"),
    ("injection:\n  marker: 'a -->'\n", "'-->'"),
    ("injection:\n  debug: maybe\n", "'debug'"),
    ("injection:\n  directories: [1, 2]\n", "'directories'"),
])
def test_invalid_config_raises(tmp_path, text, message):
    _write_config(tmp_path / "nbinject.yml", text)

    with pytest.raises(ConfigError, match=message):
        InjectionConfig.from_config_file(base_dir=str(tmp_path))


def test_missing_explicit_config_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        InjectionConfig.from_config_file(str(tmp_path / "nope.yml"))
