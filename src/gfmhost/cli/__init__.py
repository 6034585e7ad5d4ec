"""Command-line interface for gfmhost.

Renders a Markdown file (or standard input) to HTML with the same option
record host scripts pass to ``to_html``. The record is assembled from a
configuration file, then overridden by command-line flags.

Configuration Files
-------------------
The record is read from, in priority order: ``--config FILE``, the file named
by the GFMHOST_CONFIG environment variable, or the first ``.gfmhost.toml``,
``.gfmhost.yaml``, ``.gfmhost.yml``, ``.gfmhost.json`` (or ``pyproject.toml``
with a ``[tool.gfmhost]`` section) found in the current directory or its
parents. ``--no-config`` disables all of these.

Examples
--------
Basic conversion::

    $ gfmhost README.md

Write to a file with LF line endings::

    $ gfmhost README.md --line-ending lf --out README.html

Allow raw HTML from trusted input::

    $ gfmhost notes.md --allow-dangerous-html

Use the library GFM preset instead of the recommended record::

    $ gfmhost README.md --gfm-defaults

Show the effective options::

    $ gfmhost --show-options --line-ending lf

"""

import argparse
import logging
import os
import sys
from dataclasses import fields
from pathlib import Path
from typing import Any

from gfmhost.adapter import OptionsAdapter
from gfmhost.cli.config import load_config_with_priority
from gfmhost.constants import CONFIG_ENV_VAR
from gfmhost.exceptions import ConfigError, DependencyError, ValidationError
from gfmhost.logging_utils import configure_logging
from gfmhost.options.markdown import CompileOptions, LineEnding

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4


def _add_option_arguments(parser: argparse.ArgumentParser) -> None:
    """Add one flag per compile option, driven by the dataclass field metadata."""
    group = parser.add_argument_group("compile options")
    for field in fields(CompileOptions):
        help_text = field.metadata.get("help")
        if field.name == "default_line_ending":
            group.add_argument(
                "--line-ending",
                dest=field.name,
                choices=field.metadata["choices"],
                default=None,
                help=f"{help_text} (default: crlf)",
            )
            continue

        cli_name = field.metadata.get("cli_name", field.name.replace("_", "-"))
        if field.type in (bool, "bool"):
            negated = cli_name.startswith("no-")
            group.add_argument(
                f"--{cli_name}",
                dest=field.name,
                action="store_false" if negated else "store_true",
                default=None,
                help=f"Disable: {help_text}" if negated else help_text,
            )
        else:
            group.add_argument(f"--{cli_name}", dest=field.name, default=None, metavar="TEXT", help=help_text)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the gfmhost command."""
    parser = argparse.ArgumentParser(
        prog="gfmhost",
        description="Render GitHub-Flavored Markdown to HTML.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", nargs="?", default=None, help="Markdown file to render ('-' or omitted for stdin)")
    parser.add_argument("--out", "-o", default=None, help="Write HTML to this file instead of stdout")
    parser.add_argument("--config", default=None, help="Load the option record from this JSON/TOML/YAML file")
    parser.add_argument("--no-config", action="store_true", help="Ignore configuration files")
    parser.add_argument(
        "--gfm-defaults",
        action="store_true",
        help="Use the library GFM preset; configuration files and option flags are ignored",
    )
    parser.add_argument("--show-options", action="store_true", help="Print the effective options and exit")

    _add_option_arguments(parser)

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    logging_group.add_argument("--log-file", default=None, help="Also write log output to this file")
    logging_group.add_argument("--trace", action="store_true", help="Include timestamps and logger names in logs")
    return parser


def _collect_overrides(parsed_args: argparse.Namespace) -> dict[str, Any]:
    """Return the option record entries given on the command line."""
    overrides = {}
    for field in fields(CompileOptions):
        value = getattr(parsed_args, field.name, None)
        if value is not None:
            overrides[field.name] = value
    return overrides


def _print_options(options: CompileOptions) -> None:
    from rich.console import Console
    from rich.table import Table

    table = Table(title="Compile options")
    table.add_column("Option", style="cyan")
    table.add_column("Value")
    for name, value in options.to_dict().items():
        if isinstance(value, LineEnding):
            display = value.short_name
        elif value is None:
            display = "[dim](library default)[/dim]"
        else:
            display = repr(value)
        table.add_row(name, display)
    Console().print(table)


def _read_input(input_path: str | None) -> bytes:
    if input_path is None or input_path == "-":
        return sys.stdin.buffer.read()
    return Path(input_path).read_bytes()


def _run(parsed_args: argparse.Namespace) -> int:
    record: dict[str, Any] | None
    if parsed_args.gfm_defaults:
        record = None
        if _collect_overrides(parsed_args):
            logger.warning("Option flags are ignored with --gfm-defaults")
    else:
        record = {}
        if not parsed_args.no_config:
            try:
                record.update(load_config_with_priority(parsed_args.config, os.environ.get(CONFIG_ENV_VAR)))
            except ConfigError as e:
                print(f"Error: {e}", file=sys.stderr)
                return EXIT_VALIDATION_ERROR
        record.update(_collect_overrides(parsed_args))

    adapter = OptionsAdapter()

    if parsed_args.show_options:
        _print_options(adapter.resolve(record).compile)
        return EXIT_SUCCESS

    try:
        markdown_bytes = _read_input(parsed_args.input)
    except OSError as e:
        print(f"Error: cannot read {parsed_args.input}: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    try:
        html = adapter.render(markdown_bytes, record)
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except DependencyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_DEPENDENCY_ERROR

    if parsed_args.out:
        try:
            with open(parsed_args.out, "w", encoding="utf-8", newline="") as f:
                f.write(html)
        except OSError as e:
            print(f"Error: cannot write {parsed_args.out}: {e}", file=sys.stderr)
            return EXIT_FILE_ERROR
        logger.info("Wrote %s", parsed_args.out)
    else:
        sys.stdout.write(html)

    return EXIT_SUCCESS


def main(args: list[str] | None = None) -> int:
    """Execute the gfmhost command."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    configure_logging(parsed_args.log_level, parsed_args.log_file, parsed_args.trace)

    try:
        return _run(parsed_args)
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
