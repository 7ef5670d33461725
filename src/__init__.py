"""
inkpage - Single-page builder for ink interactive fiction

Bundles a project's stylesheet, template, script and compiled ink story into
one standalone HTML document.
"""

__version__ = "0.4.0"

from .lib import Builder, Watcher, build, watch, scaffold_create, LOG, state_connectToLogger

__all__ = ["Builder", "Watcher", "build", "watch", "scaffold_create", "LOG", "state_connectToLogger", "__version__"]
