"""Shared helpers for cargo_post (flag scanning, command rendering, path lookup).

Used by build, metadata and post modules. Forwarded arguments belong to cargo, so
they are scanned for the few flags cargo-post needs instead of being parsed.
"""

from __future__ import annotations

import shlex
from collections.abc import Sequence
from pathlib import Path

# --- Flags ---


def cargo_args(args: Sequence[str]) -> list[str]:
    """Tokens before a bare `--`; anything after it is for the executed program."""
    out: list[str] = []
    for a in args:
        if a == "--":
            break
        out.append(a)
    return out


def flag_values(args: Sequence[str], *flags: str) -> list[str]:
    """All values of the given flags, in order.

    Accepts `--flag value`, `--flag=value`, and for short flags `-p value` and `-pvalue`.

    A flag at the very end with no value is ignored (cargo rejects it anyway).
    """
    values: list[str] = []
    tokens = cargo_args(args)
    i = 0
    while i < len(tokens):
        tok = tokens[i]
        if tok in flags:
            if i + 1 < len(tokens):
                values.append(tokens[i + 1])
            i += 2
            continue
        for flag in flags:
            if flag.startswith("--"):
                if tok.startswith(flag + "="):
                    values.append(tok[len(flag) + 1 :])
                    break
            elif tok.startswith(flag) and len(tok) > len(flag):
                # attached short form: -pfoo, -p=foo
                values.append(tok[len(flag) :].removeprefix("="))
                break
        i += 1
    return values


def last_flag_value(args: Sequence[str], *flags: str) -> str | None:
    """Value of the last occurrence of any of flags, or None."""
    values = flag_values(args, *flags)
    return values[-1] if values else None


def has_flag(args: Sequence[str], *flags: str) -> bool:
    return any(tok in flags for tok in cargo_args(args))


# --- Command ---


def render_command(program: str, args: Sequence[str]) -> str:
    """Shell-equivalent command line, e.g. `cargo build --release`."""
    if not args:
        return program
    return f"{program} {shlex.join(args)}"


# --- Path ---


def find_upward(start: Path, name: str) -> Path | None:
    """First `name` file in start or any of its parents, else None."""
    start = start.resolve()
    for d in (start, *start.parents):
        candidate = d / name
        if candidate.is_file():
            return candidate
    return None
