"""Launch link model shared by the CLI and the injected client script."""

from .urls import (
    RepoInfo,
    parse_edit_link,
    build_launch_url,
    hub_url_from_home,
    encode_uri_component,
    normalize_url_path,
)
from .context import LaunchContext
from .toolbar import Toolbar, ToolbarElement, Page, ToolbarReconciler

__all__ = [
    'RepoInfo',
    'parse_edit_link',
    'build_launch_url',
    'hub_url_from_home',
    'encode_uri_component',
    'normalize_url_path',
    'LaunchContext',
    'Toolbar',
    'ToolbarElement',
    'Page',
    'ToolbarReconciler',
]
