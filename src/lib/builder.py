"""
Build orchestrator

Reads every project source concurrently, renders the page template against
the merged asset context and writes one standalone document.

Usage:
    from inkpage.lib.builder import Builder

    output = asyncio.run(Builder(cwd=project_dir).build())
"""

import asyncio
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from ..config import appsettings, AppSettings
from ..models.assets import AssetBundle, DEFINES, SCRIPT, TEMPLATE
from .errors import MissingSourcesError
from .log import LOG, LOG_error
from .reader import (
    bundle_read,
    json_read,
    sources_missing,
    story_load,
    stylesheet_load,
    text_read,
)
from .render import stylesheet_compile, template_render


def atomic_write_text(path: Path, text: str, mode: int = 0o644) -> None:
    """
    Write text to a file atomically using a temporary file.

    Readers of the target see either the previous document or the new one,
    never a truncated file.

    Args:
        path: Destination file path
        text: Text content to write
        mode: File permissions (octal); mkstemp creates files as 0600
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
        os.chmod(path, mode)
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)


class Builder:
    """
    Builds the project found in a working directory.

    Responsibilities:
    - Report missing required sources
    - Load all assets concurrently
    - Render the template
    - Write the output document, or nothing at all on failure
    """

    def __init__(
        self,
        cwd: Optional[Path] = None,
        settings: Optional[AppSettings] = None,
        compile_css: Callable[[str], str] = stylesheet_compile,
        render: Callable[[str, Dict[str, Any]], str] = template_render,
        write: Callable[[Path, str], None] = atomic_write_text,
    ) -> None:
        """
        Initialize builder

        Args:
            cwd: Project working directory (default: process cwd)
            settings: Settings to use (default: the application singleton)
            compile_css: Stylesheet transform
            render: Template transform
            write: Document writer
        """
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()
        self.settings = settings or appsettings
        self.sources_dir = self.settings.sourcesDir_get(self.cwd)
        self.output_path = self.settings.outputPath_get(self.cwd)
        self.runtime_bundle = self.settings.runtimeBundle_get()
        self.compile_css = compile_css
        self.render = render
        self.write = write
        self.sources_missing_last: List[str] = []

    def sources_check(self) -> List[str]:
        """
        Report required sources absent from the sources directory.

        Advisory unless strict_sources is set, in which case the build
        stops here with MissingSourcesError.

        Returns:
            Missing filenames in canonical order
        """
        missing = sources_missing(self.sources_dir)
        self.sources_missing_last = missing
        if missing:
            LOG_error("Missing required source files")
            for filename in missing:
                LOG_error(f"\t{filename}")
            if self.settings.strict_sources:
                raise MissingSourcesError(missing)
        return missing

    async def assets_gather(self) -> AssetBundle:
        """
        Load every asset concurrently into a fresh bundle.

        All loads are dispatched before any is awaited. The first failure
        propagates; results of loads that did succeed are discarded.
        """
        src = self.sources_dir
        css, story, script, template, defines, blotter = await asyncio.gather(
            stylesheet_load(src, self.compile_css),
            story_load(src),
            text_read(SCRIPT, src / SCRIPT),
            text_read(TEMPLATE, src / TEMPLATE),
            json_read(DEFINES, src / DEFINES),
            bundle_read(self.runtime_bundle),
        )
        return AssetBundle(
            css=css,
            story=story,
            script=script,
            template=template,
            defines=defines,
            blotter=blotter,
        )

    async def build(self) -> Path:
        """
        Run one full build.

        Returns:
            Path of the written document

        Raises:
            InkpageError: Any asset, stylesheet or template failure; the
                output file is left untouched
        """
        self.sources_check()

        LOG("Reading source files:", level=1)
        try:
            bundle = await self.assets_gather()
            document = self.render(bundle.template, bundle.context())
        except Exception as e:
            LOG_error(f"Error loading game data: {e}")
            raise

        LOG("Writing output file...", level=1)
        self.write(self.output_path, document)
        LOG(f"Wrote {len(document)} characters to {self.output_path}", level=2)
        return self.output_path


def build(cwd: Optional[Path] = None, settings: Optional[AppSettings] = None) -> Path:
    """Synchronous entry point: build the project in cwd once"""
    return asyncio.run(Builder(cwd=cwd, settings=settings).build())
