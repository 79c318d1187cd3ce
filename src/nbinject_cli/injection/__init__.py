"""Post-build payload injection for static documentation sites."""

from .injector import (
    HtmlInjector,
    InjectionResult,
    FileOutcome,
    FileStatus,
    inject_content,
    atomic_write,
)
from .payload import render_payload
from .walker import find_html_files

__all__ = [
    'HtmlInjector',
    'InjectionResult',
    'FileOutcome',
    'FileStatus',
    'inject_content',
    'atomic_write',
    'render_payload',
    'find_html_files',
]
