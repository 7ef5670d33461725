"""
Project scaffolding for `inkpage new`
"""

import shutil
from pathlib import Path
from typing import List, Optional

from ..config import appsettings, AppSettings, PACKAGE_ROOT
from ..models.assets import SCAFFOLD_FILES
from .errors import ScaffoldExistsError
from .log import LOG


SCAFFOLD_DIR = PACKAGE_ROOT / "scaffold"


def scaffold_create(
    cwd: Optional[Path] = None,
    force: bool = False,
    settings: Optional[AppSettings] = None,
) -> List[str]:
    """
    Copy the starter sources into a new sources directory.

    Args:
        cwd: Project working directory (default: process cwd)
        force: Empty an existing sources directory instead of refusing
        settings: Settings to use (default: the application singleton)

    Returns:
        Names of the copied files

    Raises:
        ScaffoldExistsError: If the sources directory exists and force is off
    """
    settings = settings or appsettings
    target_dir = settings.sourcesDir_get(cwd)

    if target_dir.exists():
        if not force:
            raise ScaffoldExistsError(target_dir)
        shutil.rmtree(target_dir)

    LOG("Copying files into sources directory...", level=1)
    target_dir.mkdir(parents=True)
    for filename in SCAFFOLD_FILES:
        shutil.copyfile(SCAFFOLD_DIR / filename, target_dir / filename)
        LOG(f"\t{filename}", level=1)

    LOG("All done!", level=1)
    return list(SCAFFOLD_FILES)
