#!/usr/bin/env python3
"""
Glyphshow – cli.py
==================

Command line entry point.

By default opens the full-screen browser: font files on the left, the
characters supported by the selected font on the right. With ``--list`` the
glyphs of every font are printed to stdout instead, one ``<name> - <char>``
line per glyph, followed by a per-block summary.
"""

from __future__ import annotations

import argparse
import curses
import sys
from pathlib import Path

from glyphshow.app_state import AppState
from glyphshow.coverage import compute_unicode_blocks
from glyphshow.discover_fonts import collect_font_paths
from glyphshow.extract_glyphs import (
    BACKENDS,
    OTFINFO_COMMAND,
    ExtractionError,
    Extractor,
    make_extractor,
)
from glyphshow.render_loop import run_loop, terminal_session


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glyphshow",
        description="Browse the Unicode characters supported by font files.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "fonts",
        type=Path,
        nargs="*",
        help="Font files and/or directories to scan recursively",
    )
    parser.add_argument(
        "--fc-list",
        action="store_true",
        help="Also list the fonts installed on the system (FontConfig)",
    )
    parser.add_argument(
        "--backend",
        choices=BACKENDS,
        default="otfinfo",
        help="Glyph extraction backend",
    )
    parser.add_argument(
        "--otfinfo",
        default=OTFINFO_COMMAND,
        help="otfinfo executable",
    )
    parser.add_argument(
        "--extract-timeout",
        type=float,
        default=30.0,
        help="Seconds to wait for otfinfo before giving up on a font",
    )
    parser.add_argument(
        "--tick-ms",
        type=int,
        default=250,
        help="Screen refresh interval in milliseconds",
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Re-extract glyphs every time a font is selected",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print the glyphs of every font and exit (no full-screen UI)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print diagnostics to stderr",
    )
    return parser


def list_glyphs(font_paths: list[Path], extractor: Extractor, verbose: bool = False) -> int:
    """Print the glyphs of each font to stdout.

    Returns:
        The number of fonts whose extraction failed.
    """
    failures = 0
    for path in font_paths:
        print(f"# {path}")
        record_errors: list[ExtractionError] = []
        try:
            records = extractor(path, record_errors)
        except ExtractionError as e:
            print(f"❌ {path}: {e}", file=sys.stderr)
            failures += 1
            continue

        for rec in records:
            print(f"{rec.name} - {rec.char}")

        blocks = compute_unicode_blocks(rec.codepoint for rec in records)
        print(f"# {len(records)} glyphs")
        for block, count in blocks.items():
            print(f"#   {block}: {count}")

        if record_errors:
            print(
                f"⚠️  Warning: {path}: skipped {len(record_errors)} malformed records",
                file=sys.stderr,
            )
            if verbose:
                for err in record_errors:
                    print(f"    {err}", file=sys.stderr)
    return failures


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        font_paths = collect_font_paths(args.fonts, use_fc_list=args.fc_list)
    except RuntimeError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        sys.exit(1)

    if not font_paths:
        print("❌ Error: no font files given", file=sys.stderr)
        print("Hint: pass font files or directories, or use --fc-list.", file=sys.stderr)
        sys.exit(1)

    if args.verbose:
        print(f"Found {len(font_paths)} font files", file=sys.stderr)

    extractor = make_extractor(
        args.backend,
        command=args.otfinfo,
        timeout=args.extract_timeout if args.extract_timeout > 0 else None,
    )

    if args.list:
        failures = list_glyphs(font_paths, extractor, verbose=args.verbose)
        if failures == len(font_paths):
            print(f"❌ Extraction failed for all {failures} font files", file=sys.stderr)
            sys.exit(1)
        return

    state = AppState(font_paths, extractor, use_cache=not args.no_cache)
    try:
        with terminal_session() as terminal:
            run_loop(state, args.tick_ms / 1000.0, terminal)
    except (curses.error, OSError) as e:
        print(f"❌ Terminal error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        if args.verbose:
            for line in state.diagnostics:
                print(line, file=sys.stderr)


if __name__ == "__main__":
    main()
