"""
Asset reader for project sources

Each loader is a coroutine that performs its blocking read in a worker
thread, so a build can dispatch every load before awaiting any of them.
A failed load raises AssetError naming the asset and its path.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Callable, List

from .errors import AssetError
from .log import LOG
from .render import stylesheet_compile
from ..models.assets import REQUIRED_FILES, STYLESHEET, STORY, RUNTIME

BOM = "\ufeff"


def bom_strip(text: str) -> str:
    """
    Strip a byte-order mark from the head of a text.

    inklecate writes one for the benefit of some Windows tools; inline JSON
    inside a document is not a file, so it has to go.

    Args:
        text: Text possibly starting with U+FEFF

    Returns:
        Text without the leading mark; unchanged if there was none
    """
    if text.startswith(BOM):
        return text[1:]
    return text


def sources_missing(sources_dir: Path) -> List[str]:
    """
    List required source files absent from a directory.

    Args:
        sources_dir: Project sources directory

    Returns:
        Missing filenames, in canonical required-file order
    """
    return [name for name in REQUIRED_FILES if not (Path(sources_dir) / name).exists()]


def _reason(e: Exception) -> str:
    return getattr(e, "strerror", None) or str(e)


async def text_read(name: str, path: Path) -> str:
    """Read a UTF-8 text asset"""
    try:
        text = await asyncio.to_thread(Path(path).read_text, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise AssetError(name, path, _reason(e)) from e
    LOG(f"\t{name}", level=1)
    LOG(f"\t  {len(text)} characters from {path}", level=3)
    return text


async def json_read(name: str, path: Path) -> Any:
    """Read and parse a JSON asset"""
    try:
        raw = await asyncio.to_thread(Path(path).read_text, encoding="utf-8")
        data = json.loads(bom_strip(raw))
    except (OSError, UnicodeDecodeError) as e:
        raise AssetError(name, path, _reason(e)) from e
    except json.JSONDecodeError as e:
        raise AssetError(name, path, f"invalid JSON: {e}") from e
    LOG(f"\t{name}", level=1)
    return data


async def bundle_read(path: Path) -> str:
    """Read the auxiliary runtime bundle shipped with the installation"""
    return await text_read(RUNTIME, path)


async def stylesheet_load(
    sources_dir: Path, compile_css: Callable[[str], str] = stylesheet_compile
) -> str:
    """
    Read the stylesheet and compile it straight away.

    Only the compiled CSS leaves this function; the raw source is dropped.
    """
    text = await text_read(STYLESHEET, Path(sources_dir) / STYLESHEET)
    css = await asyncio.to_thread(compile_css, text)
    LOG(f"\t  compiled {len(css)} characters of CSS", level=2)
    return css


async def story_load(sources_dir: Path) -> str:
    """Read the ink story export with its byte-order mark removed"""
    text = await text_read(STORY, Path(sources_dir) / STORY)
    return bom_strip(text)
