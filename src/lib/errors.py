"""
Error kinds raised by the build pipeline.

Every fatal build error derives from InkpageError so the CLI and the watch
loop can report it uniformly. Wrapped library errors are chained, so the
underlying detail stays reachable through __cause__.
"""

from pathlib import Path
from typing import List


class InkpageError(Exception):
    """Base class for build failures"""
    pass


class MissingSourcesError(InkpageError):
    """Raised when required source files are absent and strict mode is on"""

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required source files: {', '.join(self.missing)}")


class AssetError(InkpageError):
    """Raised when a named asset cannot be read or parsed"""

    def __init__(self, name: str, path: Path, reason: str = ""):
        self.name = name
        self.path = Path(path)
        message = f"Could not load {name} from {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class StylesheetCompileError(InkpageError):
    """Raised when the stylesheet compiler rejects its input"""
    pass


class TemplateRenderError(InkpageError):
    """Raised when the page template cannot be parsed or rendered"""
    pass


class ScaffoldExistsError(InkpageError):
    """Raised when `new` would overwrite an existing sources directory"""

    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(
            f"Sources directory already exists: {self.path}. "
            "Use --force to override and delete its contents."
        )
