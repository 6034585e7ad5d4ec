#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/gfmhost/adapter.py
"""Translate host option records into compile options and render Markdown.

Host scripts pass a loosely-typed mapping of option names to values. The
``OptionsAdapter`` turns that mapping into a fully-populated
``CompileOptions``, runs the HTML compiler and hands back a string in every
case: the HTML on success, the failure reason otherwise.

Only the shape of the record is checked. Unknown keys and values of the
wrong type are ignored, and unrecognized line ending names fall back to
``"crlf"``.

Examples
--------
    >>> adapter = OptionsAdapter()
    >>> adapter.render("# Hello")
    '<h1>Hello</h1>\\n'
    >>> adapter.normalize({"default_line_ending": "lf"}).default_line_ending
    <LineEnding.LINE_FEED: '\\n'>

"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Union

from gfmhost.constants import (
    DEFAULT_ALLOW_ANY_IMG_SRC,
    DEFAULT_ALLOW_DANGEROUS_HTML,
    DEFAULT_ALLOW_DANGEROUS_PROTOCOL,
    DEFAULT_GFM_TAGFILTER,
    DEFAULT_GFM_TASK_LIST_ITEM_CHECKABLE,
    DEFAULT_LINE_ENDING,
    LINE_ENDING_OPTION_KEY,
    OPTION_KEYS,
)
from gfmhost.exceptions import InputTypeError, OptionsTypeError, RenderingError
from gfmhost.options.markdown import CompileOptions, LineEnding, Options
from gfmhost.renderers.html import to_html_with_options

logger = logging.getLogger(__name__)

OptionsRecord = Mapping[str, Any]
MarkdownText = Union[str, bytes]


def _check_record(record: object) -> OptionsRecord | None:
    """Return ``record`` if it is absent or a mapping, else raise."""
    if record is None or isinstance(record, Mapping):
        return record
    raise OptionsTypeError(type(record))


def _get_bool(record: OptionsRecord, key: str, default: bool) -> bool:
    value = record.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        logger.debug("Ignoring option %s: expected bool, got %s", key, type(value).__name__)
        return default
    return value


def _get_str(record: OptionsRecord, key: str) -> str | None:
    value = record.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        logger.debug("Ignoring option %s: expected str, got %s", key, type(value).__name__)
        return None
    return value


def _coerce_text(markdown_text: object) -> str:
    """Return markdown text as ``str``, decoding UTF-8 bytes."""
    if isinstance(markdown_text, str):
        return markdown_text
    if isinstance(markdown_text, (bytes, bytearray)):
        try:
            return bytes(markdown_text).decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise InputTypeError(
                f"markdown text is not valid UTF-8: {e}", received_type=type(markdown_text), original_error=e
            ) from e
    raise InputTypeError(
        f"markdown text must be a string, got '{type(markdown_text).__name__}'", received_type=type(markdown_text)
    )


class OptionsAdapter:
    """Normalize host option records and render Markdown with them.

    The adapter holds no state between calls; one instance may serve any
    number of callers.
    """

    def normalize(self, record: OptionsRecord | None = None) -> CompileOptions:
        """Resolve an option record into complete compile options.

        Parameters
        ----------
        record : Mapping or None
            Host option record. Any key may be absent.

        Returns
        -------
        CompileOptions
            Options with every field set. Footnote strings stay ``None``
            unless the record provides them.

        Raises
        ------
        OptionsTypeError
            If ``record`` is present but is not a mapping.

        """
        record = _check_record(record)
        if record is None:
            record = {}

        unknown = [key for key in record if key not in OPTION_KEYS]
        if unknown:
            logger.debug("Ignoring unrecognized options: %s", ", ".join(sorted(map(str, unknown))))

        line_ending_name = record.get(LINE_ENDING_OPTION_KEY, DEFAULT_LINE_ENDING)
        if line_ending_name not in ("crlf", "lf"):
            logger.debug("Unrecognized default_line_ending %r, using %r", line_ending_name, DEFAULT_LINE_ENDING)

        return CompileOptions(
            allow_any_img_src=_get_bool(record, "allow_any_img_src", DEFAULT_ALLOW_ANY_IMG_SRC),
            allow_dangerous_html=_get_bool(record, "allow_dangerous_html", DEFAULT_ALLOW_DANGEROUS_HTML),
            allow_dangerous_protocol=_get_bool(record, "allow_dangerous_protocol", DEFAULT_ALLOW_DANGEROUS_PROTOCOL),
            default_line_ending=LineEnding.from_name(line_ending_name),
            gfm_footnote_back_label=_get_str(record, "gfm_footnote_back_label"),
            gfm_footnote_clobber_prefix=_get_str(record, "gfm_footnote_clobber_prefix"),
            gfm_footnote_label_attributes=_get_str(record, "gfm_footnote_label_attributes"),
            gfm_footnote_label_tag_name=_get_str(record, "gfm_footnote_label_tag_name"),
            gfm_footnote_label=_get_str(record, "gfm_footnote_label"),
            gfm_task_list_item_checkable=_get_bool(
                record, "gfm_task_list_item_checkable", DEFAULT_GFM_TASK_LIST_ITEM_CHECKABLE
            ),
            gfm_tagfilter=_get_bool(record, "gfm_tagfilter", DEFAULT_GFM_TAGFILTER),
        )

    def resolve(self, record: OptionsRecord | None = None) -> Options:
        """Build the combined options used for one conversion.

        An absent record selects the full GFM preset. A present record
        (even an empty one) is normalized. GFM parsing is always on.
        """
        record = _check_record(record)
        if record is None:
            return Options.gfm()
        return Options.gfm().create_updated(compile=self.normalize(record))

    def render(self, markdown_text: MarkdownText, record: OptionsRecord | None = None) -> str:
        """Render Markdown to HTML, reporting failures as strings.

        Parameters
        ----------
        markdown_text : str or bytes
            Markdown source. Bytes are decoded as UTF-8.
        record : Mapping or None
            Host option record; ``None`` uses the GFM preset.

        Returns
        -------
        str
            The HTML, or the reason the conversion failed.

        Raises
        ------
        OptionsTypeError
            If ``record`` is present but is not a mapping.
        InputTypeError
            If ``markdown_text`` is not text or UTF-8 bytes.

        """
        options = self.resolve(record)
        text = _coerce_text(markdown_text)
        try:
            return to_html_with_options(text, options)
        except RenderingError as e:
            logger.warning("Markdown conversion failed: %s", e.message)
            return e.message

    @staticmethod
    def default_options_table() -> dict[str, Any]:
        """Return the recommended GFM option record.

        Footnote strings are omitted so they stay at the compiler defaults.
        A new dictionary is returned on every call.
        """
        return {
            "allow_any_img_src": DEFAULT_ALLOW_ANY_IMG_SRC,
            "allow_dangerous_html": DEFAULT_ALLOW_DANGEROUS_HTML,
            "allow_dangerous_protocol": DEFAULT_ALLOW_DANGEROUS_PROTOCOL,
            "default_line_ending": DEFAULT_LINE_ENDING,
            "gfm_task_list_item_checkable": DEFAULT_GFM_TASK_LIST_ITEM_CHECKABLE,
            "gfm_tagfilter": DEFAULT_GFM_TAGFILTER,
        }


_default_adapter = OptionsAdapter()


def normalize_options(record: OptionsRecord | None = None) -> CompileOptions:
    """Resolve an option record into complete compile options."""
    return _default_adapter.normalize(record)


def to_html(markdown_text: MarkdownText, options: OptionsRecord | None = None) -> str:
    """Render Markdown to HTML; failures come back as the reason string."""
    return _default_adapter.render(markdown_text, options)


def gfm_options() -> dict[str, Any]:
    """Return the recommended GFM option record."""
    return OptionsAdapter.default_options_table()
