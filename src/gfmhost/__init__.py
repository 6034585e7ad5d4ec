"""gfmhost - GitHub-Flavored Markdown to HTML for host scripting environments.

gfmhost exposes a ``to_html`` function to scripts running inside a host
environment (a Jinja2 environment, or any interpreter with a table of global
bindings). Scripts pass a loosely-typed option record; gfmhost fills in the
defaults, maps line ending names onto ``LineEnding`` values, compiles the
Markdown with mistune and hands back a string: the HTML, or the reason the
conversion failed.

Examples
--------
Direct use:

    >>> from gfmhost import to_html
    >>> to_html("# Hello")
    '<h1>Hello</h1>\\n'
    >>> to_html("*hi*", {"default_line_ending": "crlf"})
    '<p><em>hi</em></p>\\r\\n'

Registering into a host's globals:

    >>> from gfmhost import register_markdown
    >>> host_globals = {}
    >>> markdown = register_markdown(host_globals)
    >>> host_globals["markdown"].gfm_options()["default_line_ending"]
    'crlf'

In a Jinja2 environment:

    >>> from jinja2 import Environment
    >>> from gfmhost import register_jinja
    >>> env = Environment()
    >>> _ = register_jinja(env)
    >>> env.from_string("{{ markdown.to_html('**x**') }}").render()
    '<p><strong>x</strong></p>\\n'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from gfmhost.adapter import OptionsAdapter, gfm_options, normalize_options, to_html
from gfmhost.exceptions import (
    ConfigError,
    DependencyError,
    GfmHostError,
    InputTypeError,
    OptionsTypeError,
    RenderingError,
    ValidationError,
)
from gfmhost.host import MarkdownNamespace, register_jinja, register_markdown
from gfmhost.options import CompileOptions, LineEnding, Options, ParseOptions

__version__ = "0.1.0"

__all__ = [
    "CompileOptions",
    "ConfigError",
    "DependencyError",
    "GfmHostError",
    "InputTypeError",
    "LineEnding",
    "MarkdownNamespace",
    "Options",
    "OptionsAdapter",
    "OptionsTypeError",
    "ParseOptions",
    "RenderingError",
    "ValidationError",
    "gfm_options",
    "normalize_options",
    "register_jinja",
    "register_markdown",
    "to_html",
]
