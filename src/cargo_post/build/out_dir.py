"""Compose cargo's artifact directory: {target_dir}[/{triple}]/{profile}."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from cargo_post.build.target_profile import BuildProfile, TargetSpec, example_arg
from cargo_post.helpers import flag_values
from cargo_post.metadata.models import PackageInfo


def compose(
    target_directory: Path,
    profile: BuildProfile,
    target: TargetSpec | None = None,
) -> Path:
    """Same placement cargo uses: the triple segment only exists for an explicit target."""
    out = Path(target_directory)
    if target is not None:
        out = out / target.triple
    return out / profile.value


def out_bins(package: PackageInfo, args: Sequence[str]) -> list[str]:
    """Binaries the build places in the out dir, relative to it.

    Package bin targets by default (only those named by --bin when given);
    `examples/<name>` for --example <name>, every example binary for --examples.
    """
    all_examples, examples = example_arg(args)
    named_bins = flag_values(args, "--bin")
    bins: list[str] = []
    for t in package.targets:
        if "bin" not in t.crate_types:
            continue
        if t.is_example:
            if all_examples or t.name in examples:
                bins.append(f"examples/{t.name}")
        elif not all_examples and not examples and t.is_bin:
            if not named_bins or t.name in named_bins:
                bins.append(t.name)
    return bins
