from nbinject_cli.injection import render_payload
from nbinject_cli.injection.constants import (
    DEFAULT_FALLBACK_HUB_URL,
    INJECTION_MARKER,
    INJECTION_MARKER_END,
)


def test_payload_carries_marker_once(make_config):
    payload = render_payload(make_config())

    assert payload.count(INJECTION_MARKER) == 1
    assert payload.startswith(f"\n<!-- {INJECTION_MARKER} -->\n<style>")
    assert payload.endswith(f"</script>\n<!-- {INJECTION_MARKER_END} -->\n")


def test_all_placeholders_are_substituted(make_config):
    payload = render_payload(make_config())

    assert "{{" not in payload
    assert f'const FALLBACK_HUB_URL = "{DEFAULT_FALLBACK_HUB_URL}";' in payload
    assert 'const TOOLBAR_SUBJECT = "Notebook examples";' in payload
    assert "const INITIAL_SCAN_DELAY_MS = 1000;" in payload


def test_debug_variant_differs_only_in_flag(make_config):
    production = render_payload(make_config()).splitlines()
    debug = render_payload(make_config(debug=True)).splitlines()

    changed = [(a, b) for a, b in zip(production, debug) if a != b]
    assert len(production) == len(debug)
    assert changed == [("    const DEBUG = false;", "    const DEBUG = true;")]


def test_configured_values_cannot_close_the_script(make_config):
    payload = render_payload(make_config(toolbar_subject="</script><b>"))

    assert payload.count("</script>") == 1
    assert r'const TOOLBAR_SUBJECT = "<\/script><b>";' in payload


def test_custom_marker_is_rendered(make_config):
    payload = render_payload(make_config(marker="MY SITE PATCH"))

    assert payload.startswith("\n<!-- MY SITE PATCH -->\n")
    assert INJECTION_MARKER not in payload
