"""Project metadata from `cargo metadata`: manifest, target directory, package."""

from .models import PackageInfo, ProjectMetadata, TargetInfo
from .reader import find_manifest, read_cargo_metadata, resolve, select_package

__all__ = [
    "PackageInfo",
    "ProjectMetadata",
    "TargetInfo",
    "find_manifest",
    "read_cargo_metadata",
    "resolve",
    "select_package",
]
