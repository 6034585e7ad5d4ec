#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/gfmhost/renderers/mistune_gfm.py
"""mistune renderer and inline rules for GitHub-Flavored Markdown.

This module imports mistune at load time. It is only imported from
``gfmhost.renderers.html.create_markdown``, after the dependency check has
run, so ``import gfmhost`` works without mistune installed.

mistune's bundled plugins cover tables, footnotes, task lists, ``~~``
strikethrough and ``http(s)://`` autolinks. The inline rules here add the
rest of the GFM literals: ``www.`` autolinks, email autolinks and ``~``
strikethrough.

"""

from __future__ import annotations

import logging
import re
from typing import Callable, Iterable
from urllib.parse import quote

import mistune
from mistune.util import escape as escape_text
from mistune.util import escape_url, safe_entity, striptags

from gfmhost.constants import (
    LIBRARY_FOOTNOTE_BACK_LABEL,
    LIBRARY_FOOTNOTE_CLOBBER_PREFIX,
    LIBRARY_FOOTNOTE_LABEL,
    LIBRARY_FOOTNOTE_LABEL_ATTRIBUTES,
    LIBRARY_FOOTNOTE_LABEL_TAG_NAME,
    SAFE_HREF_PROTOCOLS,
    SAFE_SRC_PROTOCOLS,
)
from gfmhost.options.markdown import CompileOptions, Options, ParseOptions
from gfmhost.renderers.html import apply_tagfilter, has_safe_protocol

logger = logging.getLogger(__name__)

# Inline patterns are joined into one alternation by mistune; no capturing groups
WWW_LITERAL_PATTERN = r"(?<![A-Za-z0-9.:/@_-])www\.[A-Za-z0-9_-]+(?:\.[A-Za-z0-9_-]+)*[^\s<]*"
EMAIL_LITERAL_PATTERN = r"(?<![A-Za-z0-9.:/@+_-])[A-Za-z0-9.+_-]+@[A-Za-z0-9_-]+(?:\.[A-Za-z0-9_-]+)+"
SINGLE_TILDE_PATTERN = r"(?<!~)~(?=[^\s~])"

_SINGLE_TILDE_END = re.compile(r"(?:\\~|[^\s~])~(?!~)")
_TRAILING_PUNCTUATION = "?!.,:*_~'\""
_TRAILING_ENTITY = re.compile(r"&[A-Za-z0-9]+;$")


def trim_autolink(text: str) -> str:
    """Drop trailing characters that end a sentence rather than a URL.

    Trailing punctuation, an entity-like ``&name;`` suffix and unbalanced
    closing parentheses are removed, as GFM extended autolinks do.
    """
    while text:
        if text[-1] in _TRAILING_PUNCTUATION:
            text = text[:-1]
        elif text[-1] == ")" and text.count(")") > text.count("("):
            text = text[:-1]
        elif text[-1] == ";" and _TRAILING_ENTITY.search(text):
            text = _TRAILING_ENTITY.sub("", text)
        else:
            break
    return text


def _append_literal_link(state, text: str, url: str) -> None:
    if state.in_link:
        state.append_token({"type": "text", "raw": text})
        return
    state.append_token(
        {"type": "link", "children": [{"type": "text", "raw": text}], "attrs": {"url": escape_url(url)}}
    )


def parse_www_literal(inline, m: re.Match, state) -> int | None:
    text = trim_autolink(m.group(0))
    if len(text) <= len("www."):
        return None
    _append_literal_link(state, text, "http://" + text)
    return m.start() + len(text)


def parse_email_literal(inline, m: re.Match, state) -> int | None:
    text = m.group(0)
    # only "." may end an address and it is never part of the match
    if text[-1] in "-_":
        return None
    _append_literal_link(state, text, "mailto:" + text)
    return m.end()


def parse_single_tilde(inline, m: re.Match, state) -> int | None:
    pos = m.end()
    end = _SINGLE_TILDE_END.search(state.src, pos)
    if end is None:
        return None
    end_pos = end.end()
    new_state = state.copy()
    new_state.src = state.src[pos : end_pos - 1]
    state.append_token({"type": "strikethrough", "children": inline.render(new_state)})
    return end_pos


def autolink_literals(md: mistune.Markdown) -> None:
    """Recognize ``www.`` and email autolink literals."""
    md.inline.register("www_literal", WWW_LITERAL_PATTERN, parse_www_literal)
    md.inline.register("email_literal", EMAIL_LITERAL_PATTERN, parse_email_literal)


def single_tilde_strikethrough(md: mistune.Markdown) -> None:
    """Recognize ``~text~``; needs mistune's ``strikethrough`` plugin for rendering."""
    md.inline.register("single_tilde", SINGLE_TILDE_PATTERN, parse_single_tilde)


class GfmHtmlRenderer(mistune.HTMLRenderer):
    """mistune HTML renderer driven by ``CompileOptions``.

    Parameters
    ----------
    options : CompileOptions
        Compile-phase options; a fresh renderer is created per conversion.

    """

    def __init__(self, options: CompileOptions):
        # URL gating happens in safe_url/image below, so mistune never blocks on its own
        super().__init__(escape=not options.allow_dangerous_html, allow_harmful_protocols=True)
        self.options = options

    def _gate_url(self, url: str, protocols: Iterable[str], allow_any: bool) -> str:
        if allow_any or has_safe_protocol(url, protocols):
            return super().safe_url(url)
        logger.debug("Dropping URL with disallowed protocol: %r", url)
        return ""

    def safe_url(self, url: str) -> str:
        """Return the href for a link, or an empty string when disallowed."""
        return self._gate_url(url, SAFE_HREF_PROTOCOLS, self.options.allow_dangerous_protocol)

    def image(self, text: str, url: str, title: str | None = None) -> str:
        """Render an image, gating its source by the image protocol list."""
        allow_any = self.options.allow_dangerous_protocol or self.options.allow_any_img_src
        src = self._gate_url(url, SAFE_SRC_PROTOCOLS, allow_any)
        html = '<img src="' + src + '" alt="' + escape_text(striptags(text)) + '"'
        if title:
            html += ' title="' + safe_entity(title) + '"'
        return html + " />"

    def inline_html(self, html: str) -> str:
        rendered = super().inline_html(html)
        if self.options.allow_dangerous_html and self.options.gfm_tagfilter:
            return apply_tagfilter(rendered)
        return rendered

    def block_html(self, html: str) -> str:
        rendered = super().block_html(html)
        if self.options.allow_dangerous_html and self.options.gfm_tagfilter:
            return apply_tagfilter(rendered)
        return rendered

    def task_list_item(self, text: str, checked: bool = False) -> str:
        """Render a task list item with a leading checkbox."""
        checkbox = '<input type="checkbox"'
        if not self.options.gfm_task_list_item_checkable:
            checkbox += ' disabled=""'
        if checked:
            checkbox += ' checked=""'
        checkbox += " /> "
        if text.startswith("<p>"):
            text = text.replace("<p>", "<p>" + checkbox, 1)
        else:
            text = checkbox + text
        return "<li>" + text + "</li>\n"

    # Footnotes

    @property
    def _clobber_prefix(self) -> str:
        prefix = self.options.gfm_footnote_clobber_prefix
        return LIBRARY_FOOTNOTE_CLOBBER_PREFIX if prefix is None else prefix

    def _footnote_id(self, key: str) -> str:
        return escape_text(quote(key, safe=""))

    def footnote_ref(self, key: str, index: int) -> str:
        """Render a footnote call as a superscript link to its definition."""
        ident = self._footnote_id(key)
        prefix = escape_text(self._clobber_prefix)
        return (
            '<sup><a href="#' + prefix + "fn-" + ident + '" id="' + prefix + "fnref-" + ident + '" '
            'data-footnote-ref="" aria-describedby="footnote-label">' + str(index) + "</a></sup>"
        )

    def footnote_item(self, text: str, key: str, index: int) -> str:
        """Render one footnote definition with a back-reference."""
        ident = self._footnote_id(key)
        prefix = escape_text(self._clobber_prefix)
        back_label = self.options.gfm_footnote_back_label
        if back_label is None:
            back_label = LIBRARY_FOOTNOTE_BACK_LABEL
        back = (
            '<a href="#' + prefix + "fnref-" + ident + '" data-footnote-backref="" '
            'aria-label="' + escape_text(back_label) + '" class="data-footnote-backref">↩</a>'
        )
        body = text.rstrip()
        if body.endswith("</p>"):
            body = body[: -len("</p>")] + " " + back + "</p>"
        else:
            body = body + "\n" + back
        return '<li id="' + prefix + "fn-" + ident + '">\n' + body + "\n</li>\n"

    def footnotes(self, text: str) -> str:
        """Render the footnote section with its heading."""
        options = self.options
        tag_name = options.gfm_footnote_label_tag_name
        if tag_name is None:
            tag_name = LIBRARY_FOOTNOTE_LABEL_TAG_NAME
        attributes = options.gfm_footnote_label_attributes
        if attributes is None:
            attributes = LIBRARY_FOOTNOTE_LABEL_ATTRIBUTES
        label = options.gfm_footnote_label
        if label is None:
            label = LIBRARY_FOOTNOTE_LABEL

        heading = "<" + tag_name + ' id="footnote-label"'
        if attributes:
            heading += " " + attributes
        heading += ">" + escape_text(label) + "</" + tag_name + ">"
        return '<section data-footnotes="" class="footnotes">' + heading + "\n<ol>\n" + text + "</ol>\n</section>\n"


def plugins_for(parse: ParseOptions) -> tuple[list[str], list[Callable[[mistune.Markdown], None]]]:
    """Map parse options onto bundled mistune plugin names and extra inline rules."""
    names: list[str] = []
    extras: list[Callable[[mistune.Markdown], None]] = []
    if parse.gfm_strikethrough:
        names.append("strikethrough")
        extras.append(single_tilde_strikethrough)
    if parse.gfm_table:
        names.append("table")
    if parse.gfm_footnote_definition:
        names.append("footnotes")
    if parse.gfm_task_list_item:
        names.append("task_lists")
    if parse.gfm_autolink_literal:
        names.append("url")
        extras.append(autolink_literals)
    return names, extras


def build_markdown(options: Options) -> mistune.Markdown:
    """Build a mistune ``Markdown`` instance configured from ``options``."""
    names, extras = plugins_for(options.parse)
    md = mistune.create_markdown(renderer=GfmHtmlRenderer(options.compile), plugins=names)
    for plugin in extras:
        plugin(md)
    return md
