"""
script_ripper: extract the code blocks of a document into one script per language.

Usage
-----
As a pandoc JSON filter (AST on stdin, AST on stdout)::

    pandoc notes.md -o notes.html --filter script-ripper-filter
    SCRIPT_RIPPER_OUTPUT_FILE=notes.html pandoc notes.md -o notes.html --filter script-ripper-filter

The filter names scripts after ``SCRIPT_RIPPER_OUTPUT_FILE`` (also read from a
``.env`` file), falling back to ``output``. Per-document options live under
``extensions.ripper`` in the front matter.

Standalone, straight from a Markdown or Quarto source::

    script-ripper notes.qmd --output-name build/notes --no-yaml
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from script_ripper import __version__
from script_ripper.exceptions import DocumentFormatError, UnsupportedApiVersionError
from script_ripper.logging import logger, setup_logging
from script_ripper.markdown import read_markdown
from script_ripper.pandoc import read_document, write_document
from script_ripper.session import ProcessingSession
from script_ripper.settings import HostSettings, RipperSettings, resolve_settings

if TYPE_CHECKING:
    from collections.abc import Sequence


def parse_filter_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="script-ripper-filter",
        description="Pandoc JSON filter writing one script file per code language.",
    )
    p.add_argument("format", nargs="?", default="", help="Target format, passed by pandoc.")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p.parse_args(argv)


def filter_main(argv: Sequence[str] | None = None) -> int:
    """Run as a pandoc JSON filter."""
    args = parse_filter_args(argv)
    host = HostSettings.from_env()
    if host.log_file:
        setup_logging(host.log_file)

    try:
        document = read_document(sys.stdin.read())
    except (DocumentFormatError, UnsupportedApiVersionError) as e:
        logger.error("document_unreadable", error=repr(e))  # noqa: TRY400
        return 1

    ProcessingSession().run(document, target_format=args.format, output_file=host.output_file)
    sys.stdout.write(write_document(document))
    return 0


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="script-ripper",
        description="Extract the code blocks of a Markdown/Quarto file into script files.",
    )
    p.add_argument("input", type=Path, help="Markdown or Quarto source file.")
    p.add_argument(
        "--output-name",
        type=str,
        default=None,
        help="Base name of the scripts (default: input path without suffix).",
    )
    p.add_argument("--no-yaml", action="store_true", help="Do not prepend the metadata header.")
    p.add_argument("--debug", action="store_true", help="Log every collected block.")
    p.add_argument("--log-file", type=str, default="", help="Log file path.")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p.parse_args(argv)


def _cli_settings(args: argparse.Namespace, front_matter: RipperSettings) -> RipperSettings:
    overrides: dict[str, object] = {}
    if args.output_name:
        overrides["output_name"] = args.output_name
    elif front_matter.output_name is None:
        overrides["output_name"] = str(args.input.with_suffix(""))
    if args.no_yaml:
        overrides["include_yaml"] = False
    if args.debug:
        overrides["debug"] = True
    return front_matter.model_copy(update=overrides)


def main(argv: Sequence[str] | None = None) -> int:
    """Extract scripts from a source file; returns 1 if any script could not be written."""
    args = parse_args(argv)
    if args.log_file:
        setup_logging(args.log_file)

    document = read_markdown(args.input.read_text(encoding="utf-8"))
    settings = _cli_settings(args, resolve_settings(document.meta))

    session = ProcessingSession(settings)
    session.on_metadata(document.meta)
    for block in document.iter_code_blocks():
        session.on_code_block(block.language, block.text)
    for emitted in session.emit_files():
        print(f"Wrote {emitted.filename}")

    return 1 if session.failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
