#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for gfmhost.

This module centralizes the option names, defaults and protocol tables used
when normalizing host option records and compiling Markdown to HTML.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Option Record Keys - Names recognized in host option records
3. Option Defaults - Defaults applied by normalization
4. Library Defaults - Built-in values used when a field is left unset
5. Security Constants - URL protocol allow-lists and the GFM tag filter
6. Dependencies - Package requirements checked at call time
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

LineEndingName = Literal["crlf", "lf"]

# =============================================================================
# Option Record Keys
# =============================================================================

BOOLEAN_OPTION_KEYS: tuple[str, ...] = (
    "allow_any_img_src",
    "allow_dangerous_html",
    "allow_dangerous_protocol",
    "gfm_task_list_item_checkable",
    "gfm_tagfilter",
)

STRING_OPTION_KEYS: tuple[str, ...] = (
    "gfm_footnote_back_label",
    "gfm_footnote_clobber_prefix",
    "gfm_footnote_label_attributes",
    "gfm_footnote_label_tag_name",
    "gfm_footnote_label",
)

LINE_ENDING_OPTION_KEY = "default_line_ending"

OPTION_KEYS: frozenset[str] = frozenset(BOOLEAN_OPTION_KEYS + STRING_OPTION_KEYS + (LINE_ENDING_OPTION_KEY,))

# =============================================================================
# Option Defaults (applied by normalize)
# =============================================================================

DEFAULT_ALLOW_ANY_IMG_SRC = False
DEFAULT_ALLOW_DANGEROUS_HTML = False
DEFAULT_ALLOW_DANGEROUS_PROTOCOL = False
DEFAULT_LINE_ENDING: LineEndingName = "crlf"
DEFAULT_GFM_TASK_LIST_ITEM_CHECKABLE = True
DEFAULT_GFM_TAGFILTER = True

# =============================================================================
# Library Defaults (used by the compiler when a field is None)
# =============================================================================

LIBRARY_FOOTNOTE_LABEL = "Footnotes"
LIBRARY_FOOTNOTE_LABEL_TAG_NAME = "h2"
LIBRARY_FOOTNOTE_LABEL_ATTRIBUTES = 'class="sr-only"'
LIBRARY_FOOTNOTE_BACK_LABEL = "Back to content"
LIBRARY_FOOTNOTE_CLOBBER_PREFIX = "user-content-"

# =============================================================================
# Security Constants
# =============================================================================

# Protocols allowed in link hrefs unless dangerous protocols are enabled
SAFE_HREF_PROTOCOLS: frozenset[str] = frozenset({"http", "https", "irc", "ircs", "mailto", "xmpp"})

# Protocols allowed in image sources unless any source is enabled
SAFE_SRC_PROTOCOLS: frozenset[str] = frozenset({"http", "https"})

# Tag names disallowed by the GFM tag filter extension
GFM_TAGFILTER_TAG_NAMES: tuple[str, ...] = (
    "iframe",
    "noembed",
    "noframes",
    "plaintext",
    "script",
    "style",
    "textarea",
    "title",
    "xmp",
)

# =============================================================================
# Dependencies
# =============================================================================

DEPS_MARKDOWN: list[tuple[str, str, str]] = [("mistune", "mistune", ">=3.0.0")]
DEPS_JINJA: list[tuple[str, str, str]] = [("jinja2", "jinja2", ">=3.0.0")]

# =============================================================================
# CLI
# =============================================================================

CONFIG_ENV_VAR = "GFMHOST_CONFIG"
