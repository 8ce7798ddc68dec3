"""Command-line interface for projectview."""

import argparse
import json
import logging
import os
import sys

from projectview.browser import ProjectBrowser
from projectview.constants import (
    CONTAINMENT_ANCESTRY,
    CONTAINMENT_PREFIX,
    DEFAULT_ENCODING,
    DEFAULT_EXCLUDED_DIRS,
)
from projectview.output_generators import render_dump, render_page


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="projectview",
        description=(
            "List the files of a project and read one of them without "
            "letting the path escape the project root."
        ),
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--root",
        default=os.getcwd(),
        help="Project root that every path is evaluated against.",
    )
    parser.add_argument(
        "-x",
        "--exclude",
        action="append",
        default=[],
        metavar="NAME",
        help="Additional directory-name substring to prune (repeatable).",
    )
    parser.add_argument(
        "--no-default-excludes",
        action="store_true",
        help=f"Do not prune {', '.join(DEFAULT_EXCLUDED_DIRS)}.",
    )
    parser.add_argument(
        "--gitignore",
        action="store_true",
        help="Also skip paths matched by .gitignore and .git/info/exclude.",
    )
    parser.add_argument(
        "--strict-containment",
        action="store_true",
        help="Compare paths by segment ancestry instead of string prefix.",
    )
    parser.add_argument(
        "--encoding",
        default=DEFAULT_ENCODING,
        help="Text encoding used to decode files.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show detailed processing information.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="Print every project file, one per line.")
    list_parser.add_argument("--json", action="store_true", help="Print the result as JSON.")

    read_parser = subparsers.add_parser("read", help="Print the content of one file.")
    read_parser.add_argument("path", help="Path relative to the project root.")
    read_parser.add_argument("--json", action="store_true", help="Print the result as JSON.")

    show_parser = subparsers.add_parser(
        "show", help="Render the file list and an optional selected file as Markdown."
    )
    show_parser.add_argument("path", nargs="?", help="File to display below the list.")
    show_parser.add_argument("--json", action="store_true", help="Print the result as JSON.")

    subparsers.add_parser("dump", help="Render every project file into one Markdown document.")

    return parser


def make_browser(args: argparse.Namespace) -> ProjectBrowser:
    excluded = [] if args.no_default_excludes else list(DEFAULT_EXCLUDED_DIRS)
    excluded.extend(args.exclude)
    return ProjectBrowser(
        args.root,
        excluded_dirs=excluded,
        respect_gitignore=args.gitignore,
        containment=CONTAINMENT_ANCESTRY if args.strict_containment else CONTAINMENT_PREFIX,
        encoding=args.encoding,
    )


def _write(text: str, errors: str = "surrogateescape") -> None:
    """Write ``text`` to stdout without failing on undecodable filenames.

    ``surrogateescape`` passes the original filename bytes through unchanged;
    anything else the stream cannot encode is backslash-escaped.
    """
    stream = sys.stdout
    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        stream.write(text)
        return
    encoding = stream.encoding or "utf-8"
    try:
        data = text.encode(encoding, errors=errors)
    except UnicodeEncodeError:
        data = text.encode(encoding, errors="backslashreplace")
    stream.flush()
    buffer.write(data)
    buffer.flush()


def _print_json(payload: dict) -> None:
    # Lone surrogates become \udcXX escapes, which is still valid JSON.
    _write(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", errors="backslashreplace")


def run(args: argparse.Namespace) -> int:
    """Execute one parsed command and return the process exit code."""
    if not os.path.isdir(args.root):
        print(f"Error: Directory not found: {args.root}", file=sys.stderr)
        return 1

    try:
        browser = make_browser(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.command == "list":
        listing = browser.list_files()
        if args.json:
            _print_json(listing.to_dict())
        else:
            _write("".join(f"{path}\n" for path in listing.files))
        if listing.failure is not None:
            print(f"Error: {listing.failure.message}", file=sys.stderr)
            return 1
        return 0

    if args.command == "read":
        selected = browser.read_file(args.path)
        if args.json:
            _print_json(selected.to_dict())
        elif selected.ok:
            _write(selected.content)
        if selected.failure is not None:
            print(f"Error: {selected.failure.message}", file=sys.stderr)
            return 1
        return 0

    if args.command == "show":
        snapshot = browser.snapshot(args.path)
        if args.json:
            _print_json(snapshot.to_dict())
        else:
            _write(render_page(snapshot, browser.root))
        failures = [snapshot.listing.failure]
        if snapshot.selected is not None:
            failures.append(snapshot.selected.failure)
        for failure in filter(None, failures):
            print(f"Error: {failure.message}", file=sys.stderr)
        return 1 if any(failures) else 0

    if args.command == "dump":
        _write(render_dump(browser, args.verbose))
        return 0

    raise AssertionError(f"unhandled command {args.command!r}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the projectview CLI."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
