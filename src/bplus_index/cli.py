"""Command-line entry point: load a key file, then run the interactive menu."""

import argparse
import logging
import sys
from typing import List, Optional

from bplus_index.display import print_pretty
from bplus_index.factory import DEFAULT_MAX_KEYS, create_bplustree
from bplus_index.loader import DEFAULT_WORDS_PATH, load_keys_from_file
from bplus_index.logging_config import setup_logging
from bplus_index.shell import Shell


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bplus-index",
        description="In-memory B+ tree dictionary with an interactive search/insert/delete menu.",
    )
    parser.add_argument(
        "--file", default=str(DEFAULT_WORDS_PATH),
        help="Newline-delimited key file to load at startup (default: bundled words.txt)",
    )
    parser.add_argument(
        "--max-keys", type=int, default=DEFAULT_MAX_KEYS,
        help=f"Maximum keys per node before a split (default: {DEFAULT_MAX_KEYS})",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set the logging level (default: WARNING)",
    )
    parser.add_argument("--show-tree", action="store_true",
                        help="Print the tree level by level after loading")
    parser.add_argument("--no-shell", action="store_true",
                        help="Load the file, report and exit without starting the menu")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(level=getattr(logging, args.log_level))

    try:
        tree = create_bplustree(args.max_keys)
    except ValueError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 2

    count = load_keys_from_file(args.file, tree)
    print(f"✅ Loaded {count} keys into the B+ Tree.")

    if args.show_tree:
        print(print_pretty(tree))

    if args.no_shell:
        return 0

    try:
        Shell(tree).run()
    except KeyboardInterrupt:
        print()
        print("👋 Exiting. Goodbye!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
