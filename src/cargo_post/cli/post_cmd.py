"""`cargo post <CMD> [ARGS...]`: forward to cargo, then run post_build.rs."""

import sys

from cargo_post import __version__
from cargo_post.errors import EXIT_USAGE
from cargo_post.post.orchestrate import run as run_post

HELP = """\
Run a post-build script after a cargo build

USAGE:
    cargo post <CMD> [ARGS...]

CMD and ARGS are passed to cargo unchanged. After `cargo build` (also `b`,
`xbuild`, `zigbuild`) succeeds, post_build.rs next to the package manifest is
compiled and run with these environment variables:

    CRATE_BUILD_COMMAND   the cargo invocation, e.g. `cargo build --release`
    CRATE_MANIFEST_DIR    directory of the package manifest
    CRATE_MANIFEST_PATH   path of the package manifest
    CRATE_PROFILE         `debug` or `release`
    CRATE_TARGET          value of --target, or empty
    CRATE_TARGET_TRIPLE   target triple (file stem for .json targets), or empty
    CRATE_TARGET_DIR      cargo target directory
    CRATE_OUT_DIR         directory of the built artifacts
    CRATE_OUT_BINS        `:`-separated binaries relative to CRATE_OUT_DIR

Dependencies of the script go in [package.metadata.cargo-post.dependencies].
`run` and `test` (also `r`, `t`) are built with `cargo build`, the script runs,
then the single built binary is executed with the arguments after `--`; pass
--bin <name> when the package has several. Any other command (check, doc, ...)
is forwarded without running the script.

In a workspace with several packages, pass --package <name> (or -p<name>).

Set CARGO_POST_LOG=debug for diagnostics."""


def run_post_argv(argv: list[str] | None = None) -> None:
    """argv defaults to sys.argv[2:] (after `cargo-post post`)."""
    if argv is None:
        argv = sys.argv[2:] if len(sys.argv) > 2 else []
    if argv[:1] in (["--help"], ["-h"]):
        print(HELP)
        sys.exit(0)
    if argv[:1] in (["--version"], ["-V"]):
        print(f"cargo-post {__version__}")
        sys.exit(0)
    if not argv:
        print("Usage: cargo post <CMD> [ARGS...]", file=sys.stderr)
        sys.exit(EXIT_USAGE)
    sys.exit(run_post(argv))
