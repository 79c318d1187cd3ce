from rich.text import Text

from nbinject_cli.utils import console as console_module
from nbinject_cli.utils.console import _rich_panel


def test_rich_panel_draws_title_and_content(capsys):
    _rich_panel("hello there", title="Greeting")

    out = capsys.readouterr().out
    assert "Greeting" in out
    assert "hello there" in out
    assert "╭" in out or "+" in out


def test_rich_panel_accepts_renderables(capsys):
    text = Text()
    text.append("nbinject", style="bold cyan")
    text.append(" version 1.2.3")

    _rich_panel(text)

    assert "nbinject version 1.2.3" in capsys.readouterr().out


def test_rich_panel_plain_fallback(monkeypatch, capsys):
    monkeypatch.setattr(console_module, "_get_console", lambda: None)

    _rich_panel(Text("styled"), title="Note", fallback="plain")

    assert capsys.readouterr().out == "\n--- Note ---\nplain\n------------\n"
