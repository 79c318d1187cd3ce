"""nbinject: post-build injection of workspace launch buttons into documentation sites."""

from .version import get_version

__version__ = get_version()
