"""x-ui - runtime configuration and startup for the x-ui panel."""

from xui.config import get_version

__version__ = get_version()
