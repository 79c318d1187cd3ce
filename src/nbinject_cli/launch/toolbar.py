"""Toolbar reconciliation model.

Mirrors the payload's DOM pass over ``.myst-fm-block-header`` elements: each
pass adds whichever of the back and launch buttons a matching toolbar is
missing, so running it any number of times leaves one of each.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..injection.constants import DEFAULT_TOOLBAR_SUBJECT
from .context import LaunchContext

BACK_BUTTON_CLASS = "custom-back-btn"
LAUNCH_BUTTON_CLASS = "custom-rocket-btn"
BADGES_CLASS = "myst-fm-block-badges"


@dataclass
class ToolbarElement:
    css_class: str
    href: Optional[str] = None


@dataclass
class Toolbar:
    """A toolbar header: its subject text and ordered child elements."""
    subject: Optional[str] = None
    children: List[ToolbarElement] = field(default_factory=list)

    def find(self, css_class: str) -> Optional[ToolbarElement]:
        for child in self.children:
            if child.css_class == css_class:
                return child
        return None

    def has(self, css_class: str) -> bool:
        return self.find(css_class) is not None

    def count(self, css_class: str) -> int:
        return sum(1 for child in self.children if child.css_class == css_class)


@dataclass
class Page:
    edit_href: Optional[str] = None
    toolbars: List[Toolbar] = field(default_factory=list)


class ToolbarReconciler:
    """Inserts back/launch buttons into matching toolbars of a page."""

    def __init__(self, page: Page, context: LaunchContext, subject_text: str = DEFAULT_TOOLBAR_SUBJECT):
        self.page = page
        self.context = context
        self.subject_text = subject_text
        context.subscribe(lambda _ctx: self.refresh_launch_links())

    def _matches(self, toolbar: Toolbar) -> bool:
        return toolbar.subject is not None and self.subject_text in toolbar.subject

    def reconcile(self) -> int:
        """Run one pass; returns how many buttons were inserted."""
        inserted = 0
        for toolbar in self.page.toolbars:
            if not self._matches(toolbar):
                continue

            if not toolbar.has(BACK_BUTTON_CLASS):
                back = ToolbarElement(BACK_BUTTON_CLASS, href="#")
                badges = toolbar.find(BADGES_CLASS)
                if badges is not None:
                    toolbar.children.insert(toolbar.children.index(badges), back)
                else:
                    toolbar.children.append(back)
                inserted += 1

            if not toolbar.has(LAUNCH_BUTTON_CLASS):
                url = self.context.launch_url(self.page.edit_href)
                if url:
                    toolbar.children.append(ToolbarElement(LAUNCH_BUTTON_CLASS, href=url))
                    inserted += 1
        return inserted

    def refresh_launch_links(self) -> int:
        """Point existing launch buttons at the current hub URL."""
        url = self.context.launch_url(self.page.edit_href)
        if not url:
            return 0
        refreshed = 0
        for toolbar in self.page.toolbars:
            for child in toolbar.children:
                if child.css_class == LAUNCH_BUTTON_CLASS:
                    child.href = url
                    refreshed += 1
        return refreshed
