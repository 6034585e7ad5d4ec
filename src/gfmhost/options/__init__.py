#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Option dataclasses for Markdown parsing and HTML compilation."""

from gfmhost.options.base import CloneFrozenMixin
from gfmhost.options.markdown import CompileOptions, LineEnding, Options, ParseOptions

__all__ = [
    "CloneFrozenMixin",
    "CompileOptions",
    "LineEnding",
    "Options",
    "ParseOptions",
]
