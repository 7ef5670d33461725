"""
inkpage - Single-page builder for ink interactive fiction

Bundles a project's stylesheet, template, script and compiled ink story into
one standalone HTML document.
"""

__version__ = "0.4.0"

from .builder import Builder, build
from .watcher import Watcher, watch
from .scaffold import scaffold_create
from .log import LOG, LOG_error, state_connectToLogger

__all__ = [
    "Builder",
    "build",
    "Watcher",
    "watch",
    "scaffold_create",
    "LOG",
    "LOG_error",
    "state_connectToLogger",
    "__version__",
]
