#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/gfmhost/host.py
"""Expose Markdown conversion to a host scripting environment.

A host is anything with a global binding table that scripts resolve names
against: a plain ``dict`` of interpreter globals, or a Jinja2
``Environment.globals``. Registration stores a ``MarkdownNamespace`` under a
name (``markdown`` by default) so scripts can call::

    markdown.to_html(text)
    markdown.to_html(text, {"default_line_ending": "lf"})
    markdown.gfm_options()

Each registration builds a fresh namespace; nothing is shared between host
environments.

"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import TYPE_CHECKING, Any, Callable, Iterator

from gfmhost.adapter import MarkdownText, OptionsAdapter, OptionsRecord
from gfmhost.constants import DEPS_JINJA
from gfmhost.utils.decorators import requires_dependencies

if TYPE_CHECKING:
    from jinja2 import Environment

logger = logging.getLogger(__name__)


class MarkdownNamespace:
    """Table of Markdown functions handed to host scripts.

    Supports attribute access (``ns.to_html``) and item access
    (``ns["to_html"]``) so it works wherever the host expects a table.

    Parameters
    ----------
    adapter : OptionsAdapter, optional
        Adapter backing the functions. A new one is created when omitted.

    """

    _EXPORTS = ("to_html", "gfm_options")

    def __init__(self, adapter: OptionsAdapter | None = None):
        self._adapter = adapter or OptionsAdapter()

    def to_html(self, markdown_text: MarkdownText, options: OptionsRecord | None = None) -> str:
        """Render Markdown to HTML, or return the failure reason."""
        return self._adapter.render(markdown_text, options)

    def gfm_options(self) -> dict[str, Any]:
        """Return the recommended GFM option record."""
        return self._adapter.default_options_table()

    def keys(self) -> tuple[str, ...]:
        return self._EXPORTS

    def __getitem__(self, name: str) -> Callable[..., Any]:
        if name not in self._EXPORTS:
            raise KeyError(name)
        return getattr(self, name)

    def __iter__(self) -> Iterator[str]:
        return iter(self._EXPORTS)

    def __len__(self) -> int:
        return len(self._EXPORTS)

    def __contains__(self, name: object) -> bool:
        return name in self._EXPORTS

    def __repr__(self) -> str:
        return f"<MarkdownNamespace {', '.join(self._EXPORTS)}>"


def register_markdown(
    globals_table: MutableMapping[str, Any],
    name: str = "markdown",
    *,
    adapter: OptionsAdapter | None = None,
) -> MarkdownNamespace:
    """Register the Markdown namespace into a host's global binding table.

    Parameters
    ----------
    globals_table : MutableMapping
        The host's global bindings (e.g. ``jinja2.Environment.globals``).
    name : str, default "markdown"
        Global name the namespace is bound to.
    adapter : OptionsAdapter, optional
        Adapter backing the namespace. A new one is created when omitted.

    Returns
    -------
    MarkdownNamespace
        The namespace that was registered.

    """
    namespace = MarkdownNamespace(adapter)
    if name in globals_table:
        logger.debug("Replacing existing global %r with Markdown namespace", name)
    globals_table[name] = namespace
    logger.debug("Registered Markdown namespace as %r", name)
    return namespace


@requires_dependencies("jinja", DEPS_JINJA)
def register_jinja(
    env: Environment,
    name: str = "markdown",
    *,
    filter_name: str | None = "markdown",
    options: OptionsRecord | None = None,
) -> MarkdownNamespace:
    """Register Markdown rendering on a Jinja2 environment.

    Adds the namespace to ``env.globals`` and, unless ``filter_name`` is
    None, a filter so templates can write ``{{ text | markdown }}``.

    Parameters
    ----------
    env : jinja2.Environment
        Environment to register on.
    name : str, default "markdown"
        Global name of the namespace.
    filter_name : str or None, default "markdown"
        Name of the template filter, or None to skip the filter.
    options : Mapping, optional
        Option record used by the filter when the template passes none.

    Returns
    -------
    MarkdownNamespace
        The namespace that was registered.

    """
    from markupsafe import Markup

    namespace = register_markdown(env.globals, name)

    if filter_name:

        def markdown_filter(text: MarkdownText, filter_options: OptionsRecord | None = None) -> Markup:
            return Markup(namespace.to_html(text, filter_options if filter_options is not None else options))

        env.filters[filter_name] = markdown_filter
        logger.debug("Registered Markdown template filter %r", filter_name)

    return namespace
