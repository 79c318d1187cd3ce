"""Edit-link parsing and launch URL construction.

These functions follow the injected script, so the URLs printed by
``nbinject launch-url`` are the ones a reader gets from the launch button.
The edit link path is normalised the way a browser URL parser does before
it is split, because the script reads it from ``new URL(href).pathname``.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote, urlsplit

from ..injection.constants import DEFAULT_HUB_PATH, GITHUB_BASE_URL

# Characters encodeURIComponent leaves alone besides alphanumerics and "-_.~"
_URI_COMPONENT_SAFE = "!*'()"

# Characters a browser leaves unescaped in an http(s) URL path
_URL_PATH_SAFE = "/%!$&'()*+,;=:@~[]|^"

_DOUBLE_DOT_SEGMENTS = ("..", ".%2e", "%2e.", "%2e%2e")
_SINGLE_DOT_SEGMENTS = (".", "%2e")


@dataclass(frozen=True)
class RepoInfo:
    """Repository coordinates parsed from a page's edit link."""
    repo_url: str
    branch: str
    file_path: str

    @property
    def repo_name(self) -> str:
        return self.repo_url.split('/')[-1]

    @property
    def lab_path(self) -> str:
        return f"lab/tree/{self.repo_name}/{self.file_path}"


def encode_uri_component(value: str) -> str:
    """Percent-encode ``value`` the way JavaScript's encodeURIComponent does."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def normalize_url_path(path: str) -> str:
    """Return ``path`` as a browser reports it in ``URL.pathname``.

    Backslashes become slashes, spaces and non-ASCII characters are
    percent-encoded (existing escapes are kept) and ``.``/``..`` segments,
    including their ``%2e`` spellings, are resolved.
    """
    path = quote(path.replace("\\", "/"), safe=_URL_PATH_SAFE)
    segments = path.split("/")[1:] if path.startswith("/") else path.split("/")

    resolved = []
    for index, segment in enumerate(segments):
        is_last = index == len(segments) - 1
        lowered = segment.lower()
        if lowered in _DOUBLE_DOT_SEGMENTS:
            if resolved:
                resolved.pop()
            if is_last:
                resolved.append("")
        elif lowered in _SINGLE_DOT_SEGMENTS:
            if is_last:
                resolved.append("")
        else:
            resolved.append(segment)
    return "/" + "/".join(resolved)


def parse_edit_link(href: Optional[str]) -> Optional[RepoInfo]:
    """Parse ``/{org}/{repo}/edit/{branch}/{file...}`` out of an edit link.

    Returns None for a missing or relative href, a path with fewer than six
    segments (counting the empty one before the leading slash) or a third
    segment other than ``edit``.
    """
    if not href:
        return None
    try:
        parts = urlsplit(href)
    except ValueError:
        return None
    if not parts.scheme or not parts.netloc:
        return None

    segments = normalize_url_path(parts.path).split('/')
    if len(segments) < 6 or segments[3] != 'edit':
        return None

    return RepoInfo(
        repo_url=f"{GITHUB_BASE_URL}/{segments[1]}/{segments[2]}",
        branch=segments[4],
        file_path='/'.join(segments[5:]),
    )


def hub_url_from_home(home: str, hub_path: str = DEFAULT_HUB_PATH) -> str:
    """Join a workspace home URL and the hub path with exactly one slash."""
    if home.endswith("/"):
        home = home[:-1]
    return home + hub_path


def build_launch_url(info: RepoInfo, hub_url: str) -> str:
    """Build the launch URL for ``info`` against ``hub_url``.

    The branch is appended unencoded, as the browser payload does.
    """
    query = (
        f"?repo={encode_uri_component(info.repo_url)}"
        f"&urlpath={encode_uri_component(info.lab_path)}"
        f"&branch={info.branch}"
    )
    return f"{hub_url}{query}"
