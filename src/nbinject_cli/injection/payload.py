"""Rendering of the client payload block injected into built HTML pages.

The block is a style sheet plus a self-contained script that adds "back" and
"launch in workspace" buttons to notebook toolbars. Run-wide settings are
substituted into ``{{NAME}}`` placeholders once per run, so every file patched
in a run receives identical bytes.
"""
from __future__ import annotations

import json
from typing import TYPE_CHECKING, Dict

from .constants import (
    INJECTION_MARKER_END,
    INITIAL_SCAN_DELAY_MS,
    GITHUB_BASE_URL,
)

if TYPE_CHECKING:
    from ..config import InjectionConfig


PAYLOAD_STYLE = """<style>
  .custom-toolbar-btn {
    display: inline-flex;
    align-items: center;
    justify-content: center;
    width: 1.25rem;
    height: 1.25rem;
    color: inherit;
    opacity: 0.6;
    transition: opacity 0.2s, color 0.2s;
    cursor: pointer;
    margin-left: 0.5rem;
  }
  .custom-back-btn { margin-right: 0.25rem; }
  .custom-toolbar-btn:hover { opacity: 1; color: #E18435; }
  .custom-rocket-btn { color: #E18435 !important; }
  .custom-rocket-btn:hover { color: #c46d24 !important; }
  .custom-toolbar-btn svg { width: 100%; height: 100%; fill: currentColor; }
</style>
"""

BACK_ICON_SVG = (
    '<svg viewBox="0 0 24 24" xmlns="http://www.w3.org/2000/svg">'
    '<path d="M20 11H7.83l5.59-5.59L12 4l-8 8 8 8 1.41-1.41L7.83 13H20v-2z"/></svg>'
)

ROCKET_ICON_SVG = (
    '<svg style="width:24px;height:24px" xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">'
    '<title>Execute in workspace</title>'
    '<path d="M13.13 22.19L11.5 18.36C13.07 17.78 14.54 17 15.9 16.09L13.13 22.19M5.64 12.5L1.81 10.87L7.91 8.1'
    'C7 9.46 6.22 10.93 5.64 12.5M19.22 4C19.5 4 19.75 4 19.96 4.05C20.13 5.44 19.94 8.3 16.66 11.58'
    'C14.96 13.29 12.93 14.6 10.65 15.47L8.5 13.37C9.42 11.06 10.73 9.03 12.42 7.34C15.18 4.58 17.64 4 19.22 4'
    'M19.22 2C17.24 2 14.24 2.69 11 5.93C8.81 8.12 7.5 10.53 6.65 12.64C6.37 13.39 6.56 14.21 7.11 14.77'
    'L9.24 16.89C9.62 17.27 10.13 17.5 10.66 17.5C10.89 17.5 11.13 17.44 11.36 17.35C13.5 16.53 15.88 15.19 18.07 13'
    'C23.73 7.34 21.61 2.39 21.61 2.39S20.7 2 19.22 2M14.54 9.46C13.76 8.68 13.76 7.41 14.54 6.63'
    'S16.59 5.85 17.37 6.63C18.14 7.41 18.15 8.68 17.37 9.46C16.59 10.24 15.32 10.24 14.54 9.46'
    'M8.88 16.53L7.47 15.12L8.88 16.53M6.24 22L9.88 18.36C9.54 18.27 9.21 18.12 8.91 17.91L4.83 22H6.24'
    'M2 22H3.41L8.18 17.24L6.76 15.83L2 20.59V22M2 19.17L6.09 15.09C5.88 14.79 5.73 14.47 5.64 14.12'
    'L2 17.76V19.17Z" /></svg>'
)

PAYLOAD_SCRIPT = r"""<script>
  (function() {
    const DEBUG = {{DEBUG}};
    const FALLBACK_HUB_URL = {{FALLBACK_HUB_URL}};
    const HUB_PATH = {{HUB_PATH}};
    const TOOLBAR_SUBJECT = {{TOOLBAR_SUBJECT}};
    const CLIENT_SCRIPT_URL = {{CLIENT_SCRIPT_URL}};
    const GITHUB_BASE_URL = {{GITHUB_BASE_URL}};
    const INITIAL_SCAN_DELAY_MS = {{INITIAL_SCAN_DELAY_MS}};
    const BACK_ICON = {{BACK_ICON}};
    const ROCKET_ICON = {{ROCKET_ICON}};

    const LOG_PREFIX = "🛠️ [MicroFrontend]:";
    function log(msg) { if (DEBUG) console.log(`${LOG_PREFIX} ${msg}`); }

    // Written only by onHandshake, read by every launch URL builder.
    const state = { hubUrl: FALLBACK_HUB_URL };

    function client() { return window.LuigiClient; }
    function clientReady() {
      const c = client();
      return !!(c && c.isLuigiClientInitialized());
    }

    // --- Cross-frame client + handshake ---
    function onHandshake(context) {
      log("Context received");
      const config = context && context.workspaceConfig;
      if (!config || !config.home) return;
      state.hubUrl = String(config.home).replace(/\/$/, '') + HUB_PATH;
      log("Updated hub URL to: " + state.hubUrl);
      refreshLaunchLinks();
    }

    function registerHandshake() {
      if (!client()) return;
      client().addInitListener(onHandshake);
    }

    function loadClient() {
      if (client()) {
        registerHandshake();
        return;
      }
      const script = document.createElement('script');
      script.src = CLIENT_SCRIPT_URL;
      script.onload = registerHandshake;
      document.head.appendChild(script);
    }

    // --- URL builders ---
    function getRepoInfo() {
      const editLink = document.querySelector('a.myst-fm-edit-link');
      if (!editLink || !editLink.href) return null;
      try {
        const parts = new URL(editLink.href).pathname.split('/');
        if (parts.length < 6 || parts[3] !== 'edit') return null;
        return {
          repoUrl: `${GITHUB_BASE_URL}/${parts[1]}/${parts[2]}`,
          branch: parts[4],
          filePath: parts.slice(5).join('/')
        };
      } catch (e) {
        return null;
      }
    }

    function getLaunchUrl() {
      const info = getRepoInfo();
      if (!info) {
        log("No repository info on this page, launch button disabled");
        return null;
      }
      const repoName = info.repoUrl.split('/').pop();
      const labPath = `lab/tree/${repoName}/${info.filePath}`;
      const query = `?repo=${encodeURIComponent(info.repoUrl)}&urlpath=${encodeURIComponent(labPath)}&branch=${info.branch}`;
      return `${state.hubUrl}${query}`;
    }

    function refreshLaunchLinks() {
      const url = getLaunchUrl();
      if (!url) return;
      document.querySelectorAll('.custom-rocket-btn').forEach(btn => {
        btn.href = url;
        log("Refreshed launch button href");
      });
    }

    // --- Buttons ---
    function createBackButton() {
      const btn = document.createElement('a');
      btn.className = 'custom-toolbar-btn custom-back-btn';
      btn.href = "#";
      btn.setAttribute('aria-label', 'Go Back');
      btn.title = "Go Back";
      btn.innerHTML = BACK_ICON;
      btn.addEventListener('click', (e) => {
        e.preventDefault();
        if (clientReady()) {
          client().linkManager().goBack();
        } else {
          window.history.back();
        }
      });
      return btn;
    }

    function createLaunchButton() {
      const url = getLaunchUrl();
      if (!url) return null;

      const link = document.createElement('a');
      link.className = 'custom-toolbar-btn custom-rocket-btn';
      link.href = url;
      link.target = '_blank';
      link.setAttribute('aria-label', 'Execute in workspace');
      link.title = "Execute in workspace";
      link.innerHTML = ROCKET_ICON;
      link.addEventListener('click', (e) => {
        if (!clientReady()) return;
        e.preventDefault();
        // href may have been refreshed by a late handshake
        const current = link.href;
        try {
          const target = new URL(current);
          client().addCoreSearchParams(Object.fromEntries(target.searchParams));
          client().linkManager().preserveQueryParams(true).navigate(target.pathname);
        } catch (err) {
          log("In-frame navigation failed, opening new tab: " + err);
          window.open(current, '_blank');
        }
      });
      return link;
    }

    // --- Reconciliation pass, idempotent per toolbar ---
    function reconcile() {
      document.querySelectorAll('.myst-fm-block-header').forEach(toolbar => {
        const subject = toolbar.querySelector('.myst-fm-block-subject');
        if (!subject || !subject.innerText.includes(TOOLBAR_SUBJECT)) return;

        if (!toolbar.querySelector('.custom-back-btn')) {
          const backBtn = createBackButton();
          const badges = toolbar.querySelector('.myst-fm-block-badges');
          if (badges) toolbar.insertBefore(backBtn, badges);
          else toolbar.appendChild(backBtn);
        }

        if (!toolbar.querySelector('.custom-rocket-btn')) {
          const launchBtn = createLaunchButton();
          if (launchBtn) toolbar.appendChild(launchBtn);
        }
      });
    }

    window.addEventListener('load', () => {
      loadClient();
      setTimeout(() => {
        reconcile();
        new MutationObserver(reconcile).observe(document.body, { childList: true, subtree: true });
      }, INITIAL_SCAN_DELAY_MS);
    });
  })();
</script>
"""


def _js_literal(value) -> str:
    """Encode a Python value as a JavaScript literal safe inside a <script> element."""
    return json.dumps(value, ensure_ascii=False).replace("</", "<\\/")


def payload_variables(config: "InjectionConfig") -> Dict[str, str]:
    """Map template placeholders to JavaScript literals for ``config``."""
    return {
        "DEBUG": "true" if config.debug else "false",
        "FALLBACK_HUB_URL": _js_literal(config.fallback_hub_url),
        "HUB_PATH": _js_literal(config.hub_path),
        "TOOLBAR_SUBJECT": _js_literal(config.toolbar_subject),
        "CLIENT_SCRIPT_URL": _js_literal(config.client_script_url),
        "GITHUB_BASE_URL": _js_literal(GITHUB_BASE_URL),
        "INITIAL_SCAN_DELAY_MS": str(INITIAL_SCAN_DELAY_MS),
        "BACK_ICON": _js_literal(BACK_ICON_SVG),
        "ROCKET_ICON": _js_literal(ROCKET_ICON_SVG),
    }


def render_payload(config: "InjectionConfig") -> str:
    """Render the full payload block wrapped in injection markers.

    The block starts with a newline so it sits on its own line ahead of the
    closing body tag it is inserted before.
    """
    script = PAYLOAD_SCRIPT
    for name, value in payload_variables(config).items():
        script = script.replace(f"{{{{{name}}}}}", value)

    return (
        "\n"
        f"<!-- {config.marker} -->\n"
        f"{PAYLOAD_STYLE}\n"
        f"{script}"
        f"<!-- {INJECTION_MARKER_END} -->\n"
    )
