#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/gfmhost/renderers/html.py
"""HTML compilation of GitHub-Flavored Markdown via mistune.

mistune owns parsing and HTML emission. Parse options select mistune
plugins and GFM inline rules, and compile options are applied by
``GfmHtmlRenderer``, a ``mistune.HTMLRenderer`` subclass that gates URL
protocols, filters raw HTML, renders task list checkboxes and labels the
footnote section.

mistune is imported lazily (see ``gfmhost.renderers.mistune_gfm``) so a
missing or outdated install surfaces as ``DependencyError`` when a
conversion is requested.

"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Iterable

from gfmhost.constants import DEPS_MARKDOWN, GFM_TAGFILTER_TAG_NAMES
from gfmhost.exceptions import RenderingError
from gfmhost.options.markdown import LineEnding, Options
from gfmhost.utils.decorators import debug_timer, requires_dependencies

if TYPE_CHECKING:
    import mistune

logger = logging.getLogger(__name__)

BYTE_ORDER_MARK = "\ufeff"

_TAGFILTER_PATTERN = re.compile(
    r"<(/?(?:" + "|".join(GFM_TAGFILTER_TAG_NAMES) + r"))(?=[\t\n\f\r />]|$)",
    re.IGNORECASE,
)


def apply_tagfilter(html: str) -> str:
    """Escape the opening ``<`` of tags disallowed by the GFM tag filter.

    Parameters
    ----------
    html : str
        Raw HTML taken from the Markdown source

    Returns
    -------
    str
        HTML where ``<script``, ``</style`` and the like start with ``&lt;``

    """
    return _TAGFILTER_PATTERN.sub(r"&lt;\1", html)


def has_safe_protocol(url: str, protocols: Iterable[str]) -> bool:
    """Check whether a URL is relative or uses one of ``protocols``.

    A colon only introduces a protocol when it comes before any ``/``, ``?``
    or ``#``; otherwise the URL is relative.

    Parameters
    ----------
    url : str
        URL as written in the Markdown source
    protocols : iterable of str
        Lowercase protocol names that are allowed

    Returns
    -------
    bool
        True when the URL may be emitted unchanged

    """
    colon = url.find(":")
    if colon == -1:
        return True
    end = min((i for i in (url.find("/"), url.find("?"), url.find("#")) if i != -1), default=-1)
    if end != -1 and end < colon:
        return True
    return url[:colon].lower() in protocols


def create_markdown(options: Options) -> mistune.Markdown:
    """Build a mistune ``Markdown`` instance configured from ``options``.

    A new instance is built for every call; nothing is shared between
    conversions.
    """
    from gfmhost.renderers.mistune_gfm import build_markdown

    return build_markdown(options)


@requires_dependencies("markdown", DEPS_MARKDOWN)
def to_html_with_options(text: str, options: Options) -> str:
    """Compile Markdown text to HTML.

    Parameters
    ----------
    text : str
        Markdown source. A leading byte order mark is ignored.
    options : Options
        Parse and compile options

    Returns
    -------
    str
        HTML output. Lines are joined with the first line ending found in
        ``text``, or with ``options.compile.default_line_ending`` when the
        text has none. Every line break in the output uses that one line
        ending, including line breaks inside code blocks of input that mixes
        line endings.

    Raises
    ------
    RenderingError
        If mistune fails on the input. The error message is the reason.
    DependencyError
        If mistune is missing or older than 3.0.

    """
    if text.startswith(BYTE_ORDER_MARK):
        text = text[len(BYTE_ORDER_MARK) :]
    line_ending = LineEnding.detect(text) or options.compile.default_line_ending
    source = text.replace("\r\n", "\n").replace("\r", "\n")
    markdown = create_markdown(options)

    with debug_timer(logger, "Markdown to HTML"):
        try:
            html = markdown(source)
        except Exception as exc:
            reason = str(exc) or type(exc).__name__
            raise RenderingError(reason, rendering_stage="markdown", original_error=exc) from exc

    if not isinstance(html, str):
        raise RenderingError(
            f"markdown renderer produced {type(html).__name__} instead of text", rendering_stage="markdown"
        )

    if line_ending is not LineEnding.LINE_FEED:
        html = html.replace("\n", line_ending.value)
    return html
