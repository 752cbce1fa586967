#!/usr/bin/env python3
"""
docpreview CLI

Command-line interface for rendering documents into inline HTML previews.

Usage:
    docpreview <file> [file ...] [options]
    docpreview report.xlsx
    docpreview contacts.csv --stdout
    docpreview minutes.docx budget.xls -o ./previews

Options:
    -o, --output DIR     Output directory (default: ./docpreview_output)
    --stdout             Print the rendered output instead of saving files
    --target FORMAT      Target representation (default: html)
    --formats            Show all supported formats
    -v, --verbose        Show debug logging
"""

import argparse
import logging
import os
import sys

from docpreview.core import DocumentRenderer, extension_family
from docpreview.result import Failure

DEFAULT_OUTPUT_DIR = "docpreview_output"

OUTPUT_SUFFIXES = {
    "html": ".html",
    "markdown": ".md",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docpreview",
        description=(
            "Self-contained HTML previews for uploaded documents\n\n"
            "Renders CSV, Excel and Word files into paginated HTML pages\n"
            "with inline styling and no external resources."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  docpreview report.xlsx\n"
            "  docpreview contacts.csv --stdout\n"
            "  docpreview minutes.docx budget.xls -o ./previews\n"
        ),
    )

    parser.add_argument(
        "sources",
        nargs="*",
        help="Files to render",
    )
    parser.add_argument(
        "-o", "--output",
        default=None,
        help=f"Output directory (default: ./{DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print rendered output to stdout instead of saving to files",
    )
    parser.add_argument(
        "--target",
        default="html",
        help="Target representation (default: html)",
    )
    parser.add_argument(
        "--formats",
        action="store_true",
        help="Show all supported input formats and exit",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging",
    )
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.formats:
        _show_formats()
        return 0

    if not args.sources:
        parser.print_help()
        print("\nError: No sources provided. Specify files to render.")
        return 1

    renderer = DocumentRenderer()
    output_dir = args.output or os.path.join(os.getcwd(), DEFAULT_OUTPUT_DIR)
    if not args.stdout:
        os.makedirs(output_dir, exist_ok=True)

    success_count = 0
    error_count = 0

    for source in args.sources:
        try:
            result = _render_file(renderer, source, args.target)
        except OSError as e:
            print(f"[ERROR] {source}: {e}", file=sys.stderr)
            error_count += 1
            continue

        if isinstance(result, Failure):
            print(f"[ERROR] {source}: {result.message}", file=sys.stderr)
            error_count += 1
            continue

        if args.stdout:
            sys.stdout.write(result.content.decode("utf-8", errors="replace"))
            sys.stdout.write("\n")
        else:
            out_path = os.path.join(output_dir, output_name(source, result.representation))
            with open(out_path, "wb") as f:
                f.write(result.content)
            print(f"[SAVED] {out_path}")
        success_count += 1

    if not args.stdout:
        print()
        print("-" * 60)
        print(f"  Done: {success_count} rendered, {error_count} errors")
        print(f"  Output: {output_dir}")
        print("-" * 60)

    return 1 if error_count else 0


def _render_file(renderer: DocumentRenderer, path: str, target: str):
    family = extension_family(path) or "raw"
    print(f"[{family.upper()}] Rendering: {path}", file=sys.stderr)
    with open(path, "rb") as f:
        content = f.read()
    return renderer.render(content, os.path.basename(path), target)


def output_name(source: str, representation: str) -> str:
    """Generate an output filename for a rendered source file."""
    basename = os.path.basename(source)
    name, ext = os.path.splitext(basename)
    safe_name = "".join(c if c.isalnum() or c in "-_ " else "_" for c in name)
    return f"{safe_name}{OUTPUT_SUFFIXES.get(representation, ext)}"


def _show_formats():
    """Display all supported formats."""
    formats = DocumentRenderer.supported_formats()
    print("\nSupported Input Formats:")
    print("-" * 40)
    for category, extensions in formats.items():
        print(f"\n  {category}:")
        for ext in extensions:
            print(f"    {ext}")
    print()


if __name__ == "__main__":
    sys.exit(main())
