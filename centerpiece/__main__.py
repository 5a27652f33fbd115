"""Centerpiece CLI entry point.

Allows running via `python -m centerpiece` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional, Tuple

from .config import ModeConfig, resolve_body_width, resolve_minimum_width
from .settings_persistence import SettingsPersistence, get_persistence
from .version import get_version_string


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="centerpiece",
        description="View a text file in a centered column of comfortable width.",
    )
    parser.add_argument("filename", nargs="?", help="file to view")
    parser.add_argument("-w", "--width",
                        help="body width: columns (e.g. 66) or a fraction of the window (e.g. 0.6)")
    parser.add_argument("-m", "--min-width", help="minimum body width in columns")
    parser.add_argument("--hide-status-line", action="store_true", default=None,
                        help="hide the status line while centered")
    parser.add_argument("--textual", action="store_true", help="use the Textual interface")
    parser.add_argument("--log-file", help="write log messages to this file")
    parser.add_argument("-V", "--version", action="store_true", help="print version and exit")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace,
                 persistence: SettingsPersistence) -> Tuple[ModeConfig, List[str]]:
    """Combine saved per-document settings with command line overrides.

    Returns:
        (config, diagnostics) where diagnostics are messages for the user
    """
    config, diagnostics = persistence.load_config(args.filename)

    if args.width is not None:
        spec, diagnostic = resolve_body_width(args.width)
        if diagnostic:
            diagnostics.append(diagnostic)
        config = config.with_body_width(spec)

    if args.min_width is not None:
        minimum, diagnostic = resolve_minimum_width(args.min_width)
        if diagnostic:
            diagnostics.append(diagnostic)
        config = replace(config, minimum_body_width=minimum)

    if args.hide_status_line:
        config = replace(config, hide_status_line=True)

    return config, diagnostics


def configure_logging(log_file: Optional[str]) -> None:
    """Send log records to `log_file`, or drop them.

    The screen belongs to the viewer, so records must never reach stderr.
    """
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )
    else:
        logging.getLogger("centerpiece").addHandler(logging.NullHandler())


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    if args.version:
        print(get_version_string())
        return

    configure_logging(args.log_file)

    persistence = get_persistence()
    config, diagnostics = build_config(args, persistence)
    for diagnostic in diagnostics:
        # Shown before the screen is taken over; defaults are used instead
        print(f"centerpiece: {diagnostic}; using the default", file=sys.stderr)

    # Lazy import to avoid importing UI deps for --version
    if args.textual:
        from .textual_app import CenterpieceApp
        CenterpieceApp(filename=args.filename, config=config, persistence=persistence).run()
        return

    from .viewer import Viewer
    viewer = Viewer(config=config, persistence=persistence)
    if args.filename:
        try:
            viewer.load_file(args.filename)
        except OSError as e:
            print(f"centerpiece: cannot open {args.filename}: {e}", file=sys.stderr)
            sys.exit(1)
    viewer.run()


if __name__ == "__main__":  # pragma: no cover
    main()
