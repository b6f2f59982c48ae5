"""Decide whether a forwarded cargo command produces build artifacts.

`run`/`test` are handled by building first, running the post-build script, then
executing the built binary, so the script sees the artifacts before they run.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

# cargo build (and its `b` alias) plus cross-compiling extensions that also link to target/.
BUILD_PRODUCING_COMMANDS = frozenset({"b", "build", "xbuild", "zigbuild"})

# Rewritten to `build`; the binary is executed afterwards with the args after `--`.
BUILD_THEN_EXECUTE_COMMANDS = frozenset({"r", "run", "t", "test"})

# cargo options that may precede the subcommand and take a separate value.
GLOBAL_VALUE_FLAGS = frozenset({"--color", "--config", "-C", "-Z"})


class BuildClassification(Enum):
    BUILD_PRODUCING = "build-producing"
    BUILD_THEN_EXECUTE = "build-then-execute"
    NON_BUILD_PRODUCING = "non-build-producing"


def subcommand_index(args: Sequence[str]) -> int | None:
    """Position of the first token that is neither a flag nor a `+toolchain` override."""
    skip_value = False
    for i, tok in enumerate(args):
        if skip_value:
            skip_value = False
            continue
        if tok == "--":
            return None
        if tok in GLOBAL_VALUE_FLAGS:
            skip_value = True
            continue
        if tok.startswith(("-", "+")):
            continue
        return i
    return None


def subcommand(args: Sequence[str]) -> str | None:
    i = subcommand_index(args)
    return args[i] if i is not None else None


def classify(name: str | None) -> BuildClassification:
    """Allow-list lookup; unknown and inspection-only commands (check, doc, update) are skipped."""
    if name in BUILD_PRODUCING_COMMANDS:
        return BuildClassification.BUILD_PRODUCING
    if name in BUILD_THEN_EXECUTE_COMMANDS:
        return BuildClassification.BUILD_THEN_EXECUTE
    return BuildClassification.NON_BUILD_PRODUCING


def classify_args(args: Sequence[str]) -> BuildClassification:
    return classify(subcommand(args))


def split_execute_args(args: Sequence[str]) -> tuple[list[str], list[str]]:
    """(`build` invocation, program args) for a run/test invocation.

    `cargo run --release -- -v` becomes (["build", "--release"], ["-v"]).
    """
    i = subcommand_index(args)
    if i is None:
        return list(args), []
    build_args = list(args)
    build_args[i] = "build"
    if "--" in build_args:
        sep = build_args.index("--")
        return build_args[:sep], build_args[sep + 1 :]
    return build_args, []
