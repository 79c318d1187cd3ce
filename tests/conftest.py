import pytest

from nbinject_cli.config import InjectionConfig
from nbinject_cli.injection.constants import CONFIG_ENV_VAR

PAGE = """<!DOCTYPE html>
<html>
<head><title>Example</title></head>
<body>
<p>Hello</p>
</body>
</html>
"""


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


@pytest.fixture
def page():
    return PAGE


@pytest.fixture
def site(tmp_path):
    """A project root with a small built site under _build/html."""
    html = tmp_path / "_build" / "html"
    (html / "notebooks").mkdir(parents=True)
    (html / "index.html").write_text(PAGE, encoding="utf-8")
    (html / "notebooks" / "ex1.html").write_text(PAGE, encoding="utf-8")
    (html / "style.css").write_text("body { margin: 0; }\n</body>\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def make_config(tmp_path):
    def _make(**overrides):
        overrides.setdefault("base_dir", str(tmp_path))
        return InjectionConfig.from_config_file(**overrides)
    return _make
