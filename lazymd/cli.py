"""Command-line front door for lazymd.

Parses CLI options, resolves the start directory and theme, and sets up
logging. Then dispatches into the interactive Explorer/Preview runtime, or
prints one rendered document with ``--render``.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .app_logging import init_logging
from .explorer import read_file
from .layout import line_text
from .preview import KIND_MARKDOWN, load_document, render_document
from .runtime import config, run_app
from .runtime.screen import cells_to_ansi
from .runtime.terminal import terminal_size
from .ui_theme import PLAIN_THEME, UITheme, available_theme_names, resolve_theme


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def render_markdown_file(path: Path, width: int, theme: UITheme) -> str:
    """Render ``path`` exactly as the preview would, one row per output line.

    With the plain theme rows are emitted without escape sequences and without
    trailing padding.
    """
    raw_text, error = load_document(path, read_file)
    lines = render_document(raw_text, KIND_MARKDOWN, width, theme, error=error)
    out: list[str] = []
    for line in lines:
        if theme is PLAIN_THEME:
            out.append(line_text(line).rstrip())
        else:
            out.append(cells_to_ansi(line, width, theme))
        out.append("\n")
    return "".join(out)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazymd",
        description="Browse a directory and read its Markdown files in the terminal.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Start directory. Defaults to current directory.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--show-hidden", action="store_true", help="List dot-files in the explorer.")
    parser.add_argument("--render", metavar="PATH", help="Print the rendered Markdown file PATH and exit.")
    parser.add_argument(
        "--max-cols",
        type=_positive_int,
        default=None,
        help="Column width for --render output (default: terminal width).",
    )
    parser.add_argument("--log-level", default=None, help="Log level for the session log file.")
    return parser


def main(default_path: Path | None = None, argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch lazymd.

    ``default_path`` and ``argv`` are primarily for tests; when omitted the
    current working directory and ``sys.argv`` are used.
    """
    args = build_parser().parse_args(argv)
    init_logging(args.log_level)

    theme_name = args.theme if args.theme is not None else config.load_theme_name()
    theme = resolve_theme(theme_name, no_color=args.no_color)
    if args.theme is not None and not args.no_color:
        config.save_theme_name(theme.name)

    if args.render is not None:
        if args.path is not None:
            raise SystemExit("Cannot combine positional path with --render.")
        render_path = Path(args.render)
        if not render_path.is_file():
            raise SystemExit(f"File not found: {render_path}")
        max_cols = args.max_cols if args.max_cols is not None else terminal_size()[0]
        sys.stdout.write(render_markdown_file(render_path, max_cols, theme))
        return

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_dir():
        raise SystemExit(f"Not a directory: {path}")

    show_hidden = args.show_hidden or config.load_show_hidden()
    run_app(path, theme, show_hidden=show_hidden)


if __name__ == "__main__":
    main()
