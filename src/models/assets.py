"""
Asset names and the per-build asset bundle

Defines the canonical list of required sources and the AssetBundle
dataclass that the reader fills and the template renderer consumes.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


STYLESHEET = "style.scss"
TEMPLATE = "template.html"
SCRIPT = "script.js"
STORY = "story.ink.json"
DEFINES = "defines.json"
RUNTIME = "blotter.js"

# Canonical order; missing-file reports follow it
REQUIRED_FILES: List[str] = [
    DEFINES,
    STYLESHEET,
    TEMPLATE,
    SCRIPT,
    STORY,
]

# Files copied by `inkpage new`; the story comes from the ink compiler
SCAFFOLD_FILES: List[str] = [
    DEFINES,
    STYLESHEET,
    TEMPLATE,
    SCRIPT,
]


@dataclass
class AssetBundle:
    """
    Loaded content of one build.

    Created fresh for every build and discarded once the document is
    written or the build fails.

    Attributes:
        css: Compiled stylesheet
        story: Story JSON text with any byte-order mark removed
        script: Raw runtime script
        template: Raw page template
        defines: Parsed metadata object
        blotter: Auxiliary runtime bundle text
    """

    css: str = field(default="")
    story: str = field(default="")
    script: str = field(default="")
    template: str = field(default="")
    defines: Any = field(default_factory=dict)
    blotter: str = field(default="")

    def context(self) -> Dict[str, Any]:
        """Template context keyed by the fixed logical names"""
        return {
            "css": self.css,
            "story": self.story,
            "script": self.script,
            "defines": self.defines,
            "blotter": self.blotter,
        }
