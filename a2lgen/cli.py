"""Command line tool that lists C declarations carrying ``a2l`` annotations."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable
from pathlib import Path

from a2lgen.c_syntax import CSyntaxError, Node, NodeKind, parse_top_level

logger = logging.getLogger(__name__)

DEFAULT_FILE = "test_file.c"
DEFAULT_COMPILER_OPTIONS = ("TEST", "ENABLE", "ENABLE_TEST")


def _log_children(node: Node) -> None:
    for child in node.children:
        if child.kind is NodeKind.COMMENT:
            logger.info("Comment: %s", child.text)
        elif child.kind is NodeKind.DECLARATION:
            logger.info("Declaration: %s", child.text)


def collect_annotated_declarations(
    code: str, compiler_options: Iterable[str] = DEFAULT_COMPILER_OPTIONS
) -> list[tuple[str, str]]:
    """Pair each initialized declaration in an ``a2l on`` area with the comments before it.

    An area starts at a comment containing ``a2l on`` and ends at any top-level
    item that is neither a comment, an initialized declaration nor an
    ``#ifdef``/``#ifndef`` block. Each comment is followed by a newline.
    """
    options = set(compiler_options)
    found: list[tuple[str, str]] = []
    comments: list[str] = []
    valid_area = False
    for node in parse_top_level(code):
        if node.kind is NodeKind.COMMENT:
            logger.info("Comment: %s", node.text)
            if "a2l on" in node.text:
                valid_area = True
            if valid_area:
                comments.append(node.text)
        elif node.kind is NodeKind.DECLARATION and node.declarator.kind is NodeKind.INIT_DECLARATOR:
            if valid_area:
                logger.info("Declaration: %s", node.text)
                found.append(("".join(f"{comment}\n" for comment in comments), node.text))
                comments.clear()
        elif node.kind is NodeKind.PREPROC_IFDEF:
            logger.info("Found preprocessor directive: %s", node.name)
            if node.name in options:
                _log_children(node)
            elif node.alternative is not None:
                logger.info("Found alternative: %s", node.alternative.text)
        else:
            valid_area = False
            comments.clear()
    return found


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="a2lgen",
        description="List C declarations annotated with a2l comments.",
    )
    parser.add_argument("file", nargs="?", default=DEFAULT_FILE, help="C source file to scan")
    parser.add_argument(
        "-D",
        "--option",
        dest="options",
        action="append",
        help="compiler option treated as defined (repeatable)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Scan a C file and print its annotated declarations."""
    args = _parse_args(argv)
    options = args.options if args.options is not None else DEFAULT_COMPILER_OPTIONS
    try:
        code = Path(args.file).read_text(encoding="utf-8")
    except OSError as exc:
        print(f"Unable to read file {args.file}: {exc}", file=sys.stderr)
        return 1
    try:
        found = collect_annotated_declarations(code, options)
    except CSyntaxError as exc:
        print(f"Syntax error in {args.file}: {exc}", file=sys.stderr)
        return 1

    print(f"\nFound {len(found)} declarations with comments:\n")
    for comment, declaration in found:
        print(f"Found comment: \n{comment}")
        print(f"Found declaration: \n{declaration}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())