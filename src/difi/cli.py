"""Command-line interface for difi."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable
from dataclasses import replace
from typing import TYPE_CHECKING, TextIO

from difi import __version__
from difi.models import DiffStat, Focus, LineNumberMode

if TYPE_CHECKING:
    from difi.review import ReviewSession

log = logging.getLogger(__name__)

_CURSOR_MARK = ">"
_CONTEXT_ROWS = 20
_GUIDE = "Use --file PATH to view a diff, --cursor N to move, --edit to open the editor."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="difi",
        description="difi: review pending changes file by file against a target revision.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=None,
        help="Revision to compare against (default: HEAD for git, '.' for hg).",
    )
    parser.add_argument(
        "--vcs",
        type=str,
        default=None,
        help="Force a backend (git or hg). Overrides the DIFI_VCS env var and detection.",
    )
    parser.add_argument(
        "--plain",
        action="store_true",
        default=False,
        help="Print a flat, tab-separated summary of changed files and exit.",
    )
    parser.add_argument(
        "--file",
        type=str,
        default=None,
        help="Show the diff of one changed file.",
    )
    parser.add_argument(
        "--cursor",
        type=int,
        default=0,
        help="Zero-based diff row the cursor rests on (with --file).",
    )
    parser.add_argument(
        "--line-numbers",
        type=str,
        default=None,
        choices=[mode.value for mode in LineNumberMode],
        help="Gutter numbering mode. Overrides ui.line_numbers from the config file.",
    )
    parser.add_argument(
        "--edit",
        action="store_true",
        default=False,
        help="Open the --file in the editor at the line under the cursor.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Log subprocess invocations to stderr.",
    )
    return parser


def main(argv: list[str] | None = None, *, stdin: TextIO | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    from difi.backends import create_backend, resolve_backend_name
    from difi.config import load_config
    from difi.editor import EditorError
    from difi.review import ReviewSession
    from difi.runner import VcsError

    config = load_config()
    if args.line_numbers:
        config = replace(config, line_numbers=LineNumberMode.parse(args.line_numbers))

    try:
        name = resolve_backend_name(args.vcs)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    backend = create_backend(name, editor=config.editor)

    target: str = args.target if args.target is not None else backend.default_target
    session = ReviewSession(
        backend=backend,
        target=target,
        config=config,
        piped_diff=_read_piped_diff(stdin if stdin is not None else sys.stdin),
    )
    try:
        session.load()
    except VcsError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.plain:
        _print_plain(session)
        return 0

    if args.file is None:
        _print_overview(session)
        return 0

    if all(item.full_path != args.file or item.is_dir for item in session.items):
        print(f"Error: no changes for '{args.file}'", file=sys.stderr)
        return 1

    session.select(args.file)
    session.focus = Focus.DIFF
    session.move_cursor(args.cursor)
    _print_file(session)

    if args.edit:
        try:
            return session.edit()
        except EditorError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
    return 0


def _read_piped_diff(stream: TextIO) -> str:
    if stream.isatty():
        return ""
    try:
        return stream.read()
    except OSError as exc:
        log.debug("stdin not readable: %s", exc)
        return ""


def _print_plain(session: ReviewSession) -> None:
    for item in session.items:
        if item.is_dir:
            continue
        stat = session.stat_for(item)
        print(f"{item.full_path}\t+{stat.added}\t-{stat.deleted}")
    total = session.stats()
    print(f"total\t+{total.added}\t-{total.deleted}")


def _print_overview(session: ReviewSession) -> None:
    backend = session.backend
    print(f"{backend.repo_name()}: {backend.current_branch()} <-> {session.target}")
    if not session.items:
        print("No changes.")
        return
    rows = []
    for item in session.items:
        stat = session.stat_for(item)
        rows.append((item.label, f"+{stat.added}", f"-{stat.deleted}"))
    _print_table(["Path", "Added", "Deleted"], rows)
    files = sum(1 for item in session.items if not item.is_dir)
    print(_format_totals(files, session.stats()))
    if session.config.show_guide:
        print(_GUIDE)


def _print_file(session: ReviewSession) -> None:
    print(f"{session.selected_path}")
    start = max(session.cursor - _CONTEXT_ROWS, 0)
    end = session.cursor + _CONTEXT_ROWS + 1
    labels = list(session.line_labels(start, end))
    width = max((len(label) for label, _ in labels), default=0)
    for offset, (label, line) in enumerate(labels):
        mark = _CURSOR_MARK if start + offset == session.cursor else " "
        gutter = f"{label.rjust(width)} " if width else ""
        print(f"{gutter}{mark} {line.raw}")
    print(f"Line: {session.current_file_line()}")


def _format_totals(files: int, total: DiffStat) -> str:
    return f"Totals: files={files}, added={total.added}, deleted={total.deleted}"


def _print_table(headers: Iterable[str], rows: Iterable[tuple[str, ...]]) -> None:
    rows_list = list(rows)
    headers_list = list(headers)
    widths = [len(header) for header in headers_list]
    for row in rows_list:
        for idx, cell in enumerate(row):
            widths[idx] = max(widths[idx], len(cell))

    header_line = "  ".join(header.ljust(widths[idx]) for idx, header in enumerate(headers_list))
    print(header_line)
    print("-" * len(header_line))
    for row in rows_list:
        line = "  ".join(row[idx].ljust(widths[idx]) for idx in range(len(widths)))
        print(line)


if __name__ == "__main__":
    sys.exit(main())
