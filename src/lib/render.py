"""
Render pipeline: stylesheet compiler and page template renderer

Both transforms are pure functions of their inputs. Library errors are
wrapped in inkpage error kinds with the original exception chained.
"""

from typing import Any, Dict

import sass
from jinja2 import Environment, StrictUndefined, TemplateError

from .errors import StylesheetCompileError, TemplateRenderError


def stylesheet_compile(text: str) -> str:
    """
    Compile SCSS source to CSS.

    Args:
        text: Raw stylesheet source

    Returns:
        CSS text

    Raises:
        StylesheetCompileError: If the compiler rejects the source
    """
    # libsass refuses an empty data context
    if not text.strip():
        return ""
    try:
        return sass.compile(string=text, output_style="expanded")
    except sass.CompileError as e:
        raise StylesheetCompileError(f"Stylesheet compile error: {e}") from e


def environment_make() -> Environment:
    """Jinja2 environment used for page templates"""
    # Assets are inlined verbatim (CSS, JSON, JS), so no autoescaping
    return Environment(
        undefined=StrictUndefined,
        autoescape=False,
        keep_trailing_newline=True,
    )


def template_render(template_text: str, context: Dict[str, Any]) -> str:
    """
    Render the page template against the asset context.

    Args:
        template_text: Raw Jinja2 template source
        context: Mapping of logical asset names to content

    Returns:
        Rendered document text

    Raises:
        TemplateRenderError: On template syntax errors, undefined names,
            or other renderer-level failures
    """
    try:
        template = environment_make().from_string(template_text)
        return template.render(**context)
    except TemplateError as e:
        where = f" (line {e.lineno})" if getattr(e, "lineno", None) else ""
        raise TemplateRenderError(f"Template render error{where}: {e.message or e}") from e
    except Exception as e:
        # filters and expressions can raise plain Python errors mid-render
        raise TemplateRenderError(f"Template render error: {type(e).__name__}: {e}") from e
