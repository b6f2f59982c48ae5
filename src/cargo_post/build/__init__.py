"""Build-side derivations: command classification, profile/target, output layout."""

from .classify import (
    BUILD_PRODUCING_COMMANDS,
    BUILD_THEN_EXECUTE_COMMANDS,
    BuildClassification,
    classify,
    classify_args,
    split_execute_args,
    subcommand,
    subcommand_index,
)
from .target_profile import (
    BuildProfile,
    TargetSpec,
    extract,
    profile_from_args,
    target_from_args,
)
from .out_dir import compose, out_bins

__all__ = [
    "BUILD_PRODUCING_COMMANDS",
    "BUILD_THEN_EXECUTE_COMMANDS",
    "BuildClassification",
    "BuildProfile",
    "TargetSpec",
    "classify",
    "classify_args",
    "compose",
    "extract",
    "out_bins",
    "profile_from_args",
    "split_execute_args",
    "subcommand",
    "subcommand_index",
    "target_from_args",
]
