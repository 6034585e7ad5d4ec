#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Renderers that compile Markdown to output formats.

``GfmHtmlRenderer`` lives in ``gfmhost.renderers.mistune_gfm``, which needs
mistune at import time and is therefore not imported here.
"""

from gfmhost.renderers.html import create_markdown, to_html_with_options

__all__ = ["create_markdown", "to_html_with_options"]
