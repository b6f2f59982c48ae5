"""Main CLI entry point for cargo-post.

cargo runs external subcommands as `cargo-post post <args>`, so the first
argument is the subcommand name itself.
"""

import logging
import os
import sys

from cargo_post.cli import post_cmd
from cargo_post.errors import EXIT_USAGE


def _configure_logging() -> None:
    level_name = os.environ.get("CARGO_POST_LOG", "warning").upper()
    level = getattr(logging, level_name, logging.WARNING)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="[cargo-post] %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main() -> None:
    """Main CLI entry point."""
    _configure_logging()
    if len(sys.argv) < 2:
        print("Usage: cargo post <CMD> [ARGS...]", file=sys.stderr)
        print("  cargo-post must be invoked as `cargo post`", file=sys.stderr)
        sys.exit(EXIT_USAGE)

    command = sys.argv[1]
    if command == "post":
        try:
            post_cmd.run_post_argv()
        except KeyboardInterrupt:
            sys.exit(130)
    elif command in ("--help", "-h"):
        print(post_cmd.HELP)
    elif command in ("--version", "-V"):
        post_cmd.run_post_argv(["--version"])
    else:
        print(f"Error: unknown command `{command}`; run as `cargo post`", file=sys.stderr)
        sys.exit(EXIT_USAGE)


if __name__ == "__main__":
    main()
