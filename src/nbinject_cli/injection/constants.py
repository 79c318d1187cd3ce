"""Shared constants for payload injection.

The marker doubles as the idempotence sentinel: a file containing it is
never patched again. It is rendered into the first line of the payload block so
the guard and the inserted content cannot drift apart.
"""

INJECTION_MARKER = "NBGITPULLER INJECTION START"
INJECTION_MARKER_END = "NBGITPULLER INJECTION END"

# Build output roots produced by the docs toolchain, relative to the project root
DEFAULT_CANDIDATE_DIRS = ("_build/html", "_build/site")

HTML_SUFFIX = ".html"  # case-sensitive match

# Client payload defaults
DEFAULT_FALLBACK_HUB_URL = "https://workspace.cubes-and-clouds.earthcode.eox.at/hub/user-redirect/git-pull"
DEFAULT_HUB_PATH = "/hub/user-redirect/git-pull"
DEFAULT_TOOLBAR_SUBJECT = "Notebook examples"
DEFAULT_CLIENT_SCRIPT_URL = "https://unpkg.com/@luigi-project/client/luigi-client.js"
GITHUB_BASE_URL = "https://github.com"

# Delay before the first toolbar scan in the browser
INITIAL_SCAN_DELAY_MS = 1000

CONFIG_FILENAME = "nbinject.yml"
CONFIG_ENV_VAR = "NBINJECT_CONFIG"
