#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for Markdown parsing and HTML compilation.

The parse phase decides which GFM syntax extensions are recognized. The
compile phase controls how the parsed document is emitted as HTML. Both
default to plain CommonMark behaviour; ``gfm()`` constructors return the
GitHub-Flavored-Markdown presets.
"""
# src/gfmhost/options/markdown.py


from __future__ import annotations

import enum
from dataclasses import dataclass, field

from gfmhost.options.base import CloneFrozenMixin


class LineEnding(enum.Enum):
    """Line ending used between HTML elements in compiled output."""

    CARRIAGE_RETURN = "\r"
    CARRIAGE_RETURN_LINE_FEED = "\r\n"
    LINE_FEED = "\n"

    @classmethod
    def from_name(cls, name: object) -> LineEnding:
        """Map a host line ending name onto a line ending.

        Only ``"lf"`` selects a line feed. Every other value, including
        differently-cased spellings, resolves to carriage return + line feed.
        """
        if name == "lf":
            return cls.LINE_FEED
        return cls.CARRIAGE_RETURN_LINE_FEED

    @classmethod
    def detect(cls, text: str) -> LineEnding | None:
        """Return the first line ending used in ``text``, if any."""
        for index, char in enumerate(text):
            if char == "\n":
                return cls.LINE_FEED
            if char == "\r":
                if text[index + 1 : index + 2] == "\n":
                    return cls.CARRIAGE_RETURN_LINE_FEED
                return cls.CARRIAGE_RETURN
        return None

    @property
    def short_name(self) -> str:
        """Host-facing name of the line ending."""
        return {"\r": "cr", "\r\n": "crlf", "\n": "lf"}[self.value]


@dataclass(frozen=True)
class ParseOptions(CloneFrozenMixin):
    """Configuration options for the parse phase.

    Parameters
    ----------
    gfm_autolink_literal : bool, default False
        Recognize bare URLs and www. links.
    gfm_footnote_definition : bool, default False
        Recognize footnote definitions and references ([^label]).
    gfm_strikethrough : bool, default False
        Recognize ~~strikethrough~~.
    gfm_table : bool, default False
        Recognize pipe tables.
    gfm_task_list_item : bool, default False
        Recognize task list items (- [ ] and - [x]).

    """

    gfm_autolink_literal: bool = field(default=False, metadata={"help": "Recognize bare URL autolinks"})
    gfm_footnote_definition: bool = field(default=False, metadata={"help": "Recognize footnotes"})
    gfm_strikethrough: bool = field(default=False, metadata={"help": "Recognize ~~strikethrough~~"})
    gfm_table: bool = field(default=False, metadata={"help": "Recognize pipe tables"})
    gfm_task_list_item: bool = field(default=False, metadata={"help": "Recognize task list items"})

    @classmethod
    def gfm(cls) -> ParseOptions:
        """Return parse options with every GFM extension enabled."""
        return cls(
            gfm_autolink_literal=True,
            gfm_footnote_definition=True,
            gfm_strikethrough=True,
            gfm_table=True,
            gfm_task_list_item=True,
        )


@dataclass(frozen=True)
class CompileOptions(CloneFrozenMixin):
    """Configuration options for compiling a parsed document to HTML.

    Every field is always present. Footnote string fields left as ``None``
    use the compiler's built-in defaults.

    Parameters
    ----------
    allow_any_img_src : bool, default False
        Allow any protocol in image sources, not only http(s).
    allow_dangerous_html : bool, default False
        Pass raw HTML through instead of escaping it.
    allow_dangerous_protocol : bool, default False
        Allow any protocol in link and image URLs.
    default_line_ending : LineEnding, default LineEnding.LINE_FEED
        Line ending used when the input contains none.
    gfm_footnote_back_label : str or None, default None
        Accessible label of footnote back-references ("Back to content").
    gfm_footnote_clobber_prefix : str or None, default None
        Prefix added to footnote ids ("user-content-").
    gfm_footnote_label_attributes : str or None, default None
        Raw attributes of the footnote section heading ('class="sr-only"').
    gfm_footnote_label_tag_name : str or None, default None
        Tag name of the footnote section heading ("h2").
    gfm_footnote_label : str or None, default None
        Text of the footnote section heading ("Footnotes").
    gfm_task_list_item_checkable : bool, default False
        Emit task list checkboxes without the ``disabled`` attribute.
    gfm_tagfilter : bool, default False
        Neutralize GFM-disallowed tags in raw HTML.

    """

    allow_any_img_src: bool = field(
        default=False,
        metadata={"help": "Allow any protocol in image sources"},
    )
    allow_dangerous_html: bool = field(
        default=False,
        metadata={"help": "Pass raw HTML through instead of escaping it"},
    )
    allow_dangerous_protocol: bool = field(
        default=False,
        metadata={"help": "Allow any protocol in link and image URLs"},
    )
    default_line_ending: LineEnding = field(
        default=LineEnding.LINE_FEED,
        metadata={"help": "Line ending used when the input has none", "choices": ["crlf", "lf"]},
    )
    gfm_footnote_back_label: str | None = field(
        default=None,
        metadata={"help": "Accessible label of footnote back-references", "cli_name": "footnote-back-label"},
    )
    gfm_footnote_clobber_prefix: str | None = field(
        default=None,
        metadata={"help": "Prefix added to footnote ids", "cli_name": "footnote-clobber-prefix"},
    )
    gfm_footnote_label_attributes: str | None = field(
        default=None,
        metadata={"help": "Raw attributes of the footnote heading", "cli_name": "footnote-label-attributes"},
    )
    gfm_footnote_label_tag_name: str | None = field(
        default=None,
        metadata={"help": "Tag name of the footnote heading", "cli_name": "footnote-label-tag-name"},
    )
    gfm_footnote_label: str | None = field(
        default=None,
        metadata={"help": "Text of the footnote heading", "cli_name": "footnote-label"},
    )
    gfm_task_list_item_checkable: bool = field(
        default=False,
        metadata={"help": "Emit task list checkboxes that can be toggled", "cli_name": "no-task-list-checkable"},
    )
    gfm_tagfilter: bool = field(
        default=False,
        metadata={"help": "Neutralize GFM-disallowed tags in raw HTML", "cli_name": "no-tagfilter"},
    )

    def __post_init__(self) -> None:
        """Validate field types that a plain annotation cannot enforce.

        Raises
        ------
        TypeError
            If ``default_line_ending`` is not a LineEnding.

        """
        if not isinstance(self.default_line_ending, LineEnding):
            raise TypeError(f"default_line_ending must be a LineEnding, got {type(self.default_line_ending).__name__}")

    @classmethod
    def gfm(cls) -> CompileOptions:
        """Return the compile options of the GFM preset (tag filter on)."""
        return cls(gfm_tagfilter=True)


@dataclass(frozen=True)
class Options(CloneFrozenMixin):
    """Combined parse and compile options handed to the HTML compiler."""

    parse: ParseOptions = field(default_factory=ParseOptions)
    compile: CompileOptions = field(default_factory=CompileOptions)

    @classmethod
    def gfm(cls) -> Options:
        """Return the full GFM preset for both phases."""
        return cls(parse=ParseOptions.gfm(), compile=CompileOptions.gfm())
