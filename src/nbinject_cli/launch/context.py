"""Launch context: owner of the active hub URL."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ..injection.constants import DEFAULT_FALLBACK_HUB_URL, DEFAULT_HUB_PATH
from .urls import build_launch_url, hub_url_from_home, parse_edit_link


@dataclass
class LaunchContext:
    """Holds the hub URL used for launch links.

    The URL starts at the fallback and is only ever replaced by
    :meth:`on_handshake`. Listeners run after each replacement so already
    rendered launch links can be refreshed.
    """
    hub_url: str = DEFAULT_FALLBACK_HUB_URL
    hub_path: str = DEFAULT_HUB_PATH
    listeners: List[Callable[['LaunchContext'], None]] = field(default_factory=list)

    def subscribe(self, listener: Callable[['LaunchContext'], None]) -> None:
        self.listeners.append(listener)

    def on_handshake(self, context: Optional[Dict[str, Any]]) -> bool:
        """Apply a handshake message from the hosting frame.

        Args:
            context: Handshake payload; ``workspaceConfig.home`` overrides the hub URL.
        Returns:
            True if the hub URL was replaced.
        """
        if not isinstance(context, dict):
            return False
        workspace_config = context.get("workspaceConfig")
        if not isinstance(workspace_config, dict):
            return False
        home = workspace_config.get("home")
        if not home:
            return False

        self.hub_url = hub_url_from_home(str(home), self.hub_path)
        for listener in self.listeners:
            listener(self)
        return True

    def launch_url(self, edit_href: Optional[str]) -> Optional[str]:
        """Launch URL for a page with the given edit link, or None."""
        info = parse_edit_link(edit_href)
        if info is None:
            return None
        return build_launch_url(info, self.hub_url)
