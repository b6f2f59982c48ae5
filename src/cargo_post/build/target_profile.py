"""Profile and target triple from forwarded cargo arguments.

Mirrors how cargo itself resolves them for the output layout:
`--release`/`-r` or `--profile release` select release, the last `--target` wins,
and a custom target given as a `.json` target-description file is placed under its
file stem. Values are not validated; cargo rejects bad targets during the build.
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from cargo_post.helpers import flag_values, has_flag, last_flag_value

RELEASE_FLAGS = ("--release", "-r")


class BuildProfile(Enum):
    DEBUG = "debug"
    RELEASE = "release"


@dataclass(frozen=True)
class TargetSpec:
    raw: str
    triple: str

    @classmethod
    def from_raw(cls, raw: str) -> TargetSpec:
        """Bare triples are kept; `path/to/foo.json` becomes triple `foo`."""
        if raw.endswith(".json"):
            return cls(raw=raw, triple=Path(raw).stem)
        return cls(raw=raw, triple=raw)


def profile_from_args(args: Sequence[str]) -> BuildProfile:
    """RELEASE iff --release/-r or --profile release appears anywhere; otherwise DEBUG."""
    if any(tok in RELEASE_FLAGS for tok in args):
        return BuildProfile.RELEASE
    if "release" in flag_values(args, "--profile"):
        return BuildProfile.RELEASE
    return BuildProfile.DEBUG


def target_from_args(
    args: Sequence[str],
    env: Mapping[str, str] | None = None,
) -> TargetSpec | None:
    """Last --target value; else CARGO_BUILD_TARGET from env; else None (host target)."""
    raw = last_flag_value(args, "--target")
    if raw is None:
        if env is None:
            env = os.environ
        raw = env.get("CARGO_BUILD_TARGET") or None
    if raw is None:
        return None
    return TargetSpec.from_raw(raw)


def extract(
    args: Sequence[str],
    env: Mapping[str, str] | None = None,
) -> tuple[BuildProfile, TargetSpec | None]:
    return profile_from_args(args), target_from_args(args, env)


# --- Flags the metadata resolver needs ---


def manifest_path_arg(args: Sequence[str]) -> str | None:
    return last_flag_value(args, "--manifest-path")


def package_arg(args: Sequence[str]) -> str | None:
    return last_flag_value(args, "--package", "-p")


def example_arg(args: Sequence[str]) -> tuple[bool, list[str]]:
    """(all_examples, named_examples) from --examples / --example <name>."""
    return has_flag(args, "--examples"), flag_values(args, "--example")
