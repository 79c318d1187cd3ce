from click.testing import CliRunner

from nbinject_cli.cli import cli
from nbinject_cli.injection.constants import INJECTION_MARKER
from nbinject_cli.version import get_version


def _invoke(*args):
    return CliRunner().invoke(cli, list(args))


def test_inject_patches_site_and_rerun_is_noop(site):
    index = site / "_build" / "html" / "index.html"

    first = _invoke("inject", "--base-dir", str(site))
    assert first.exit_code == 0, first.output
    assert "Patched 2 of 2 HTML files" in first.output
    patched = index.read_bytes()
    assert INJECTION_MARKER.encode() in patched

    second = _invoke("inject", "--base-dir", str(site))
    assert second.exit_code == 0, second.output
    assert "Patched 0 of 2 HTML files (2 already patched)" in second.output
    assert index.read_bytes() == patched


def test_inject_without_build_directory_still_succeeds(tmp_path):
    result = _invoke("inject", "--base-dir", str(tmp_path))

    assert result.exit_code == 0
    assert "Could not find build directory." in result.output


def test_inject_dir_option_replaces_defaults(site):
    custom = site / "public"
    custom.mkdir()
    (custom / "a.html").write_text("<body></body>", encoding="utf-8")

    result = _invoke("inject", "--base-dir", str(site), "--dir", "public")

    assert result.exit_code == 0, result.output
    assert INJECTION_MARKER in (custom / "a.html").read_text(encoding="utf-8")
    assert INJECTION_MARKER not in (site / "_build" / "html" / "index.html").read_text(encoding="utf-8")


def test_inject_dry_run(site):
    index = site / "_build" / "html" / "index.html"
    before = index.read_bytes()

    result = _invoke("inject", "--base-dir", str(site), "--dry-run", "--verbose")

    assert result.exit_code == 0, result.output
    assert "2 of 2 HTML files would be patched" in result.output
    assert index.read_bytes() == before


def test_inject_reports_file_errors_without_failing(site):
    (site / "_build" / "html" / "bad.html").write_bytes(b"\xff<body></body>")

    result = _invoke("inject", "--base-dir", str(site))

    assert result.exit_code == 0
    assert "bad.html" in result.output
    assert "read failed" in result.output


def test_inject_rejects_invalid_config(site):
    (site / "nbinject.yml").write_text("injection:\n  colour: red\n", encoding="utf-8")

    result = _invoke("inject", "--base-dir", str(site))

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_payload_command():
    result = _invoke("payload", "--debug-payload")

    assert result.exit_code == 0
    assert f"<!-- {INJECTION_MARKER} -->" in result.output
    assert "const DEBUG = true;" in result.output


def test_launch_url_command():
    result = _invoke("launch-url", "https://site/org/repo/edit/main/notebooks/ex1.ipynb",
                     "--home", "https://ws.example.org/")

    assert result.exit_code == 0
    assert result.output.strip() == (
        "https://ws.example.org/hub/user-redirect/git-pull"
        "?repo=https%3A%2F%2Fgithub.com%2Forg%2Frepo"
        "&urlpath=lab%2Ftree%2Frepo%2Fnotebooks%2Fex1.ipynb"
        "&branch=main"
    )


def test_launch_url_command_rejects_malformed_link():
    result = _invoke("launch-url", "https://site/org/repo/blob/main/x.ipynb")

    assert result.exit_code == 1
    assert "does not match" in result.output


def test_config_show(site):
    result = _invoke("config", "--show", "--base-dir", str(site))

    assert result.exit_code == 0
    assert "toolbar_subject" in result.output


def test_version():
    result = _invoke("--version")

    assert result.exit_code == 0
    assert "nbinject" in result.output
    assert f"version {get_version()}" in result.output
