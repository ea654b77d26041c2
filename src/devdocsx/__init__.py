"""
devdocsx - Offline developer documentation in the terminal

Ships a tree of Markdown notes (JavaScript, Node.js, Express, ...) and a
small reader that resolves a topic such as ``express/middleware`` to a
file and prints it. Topics may have an advanced companion, read by
adding ``.adv`` to the topic name.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("devdocsx")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from devdocsx.errors import (
    ConfigError,
    ContentRootError,
    DevDocsError,
    DocumentReadError,
    InvalidTopicError,
)
from devdocsx.resolver import Resolution, Status, Variant, resolve

__all__ = [
    "__version__",
    "ConfigError",
    "ContentRootError",
    "DevDocsError",
    "DocumentReadError",
    "InvalidTopicError",
    "Resolution",
    "Status",
    "Variant",
    "resolve",
]
