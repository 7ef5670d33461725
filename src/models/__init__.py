"""
Models package for inkpage

Contains data structures and constants for the build pipeline.
"""

from .state import ProgramState, pipeline
from .assets import AssetBundle, REQUIRED_FILES, SCAFFOLD_FILES

__all__ = [
    "ProgramState",
    "pipeline",
    "AssetBundle",
    "REQUIRED_FILES",
    "SCAFFOLD_FILES",
]
