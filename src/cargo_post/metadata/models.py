"""Read-only snapshot of the `cargo metadata` fields cargo-post uses."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class TargetInfo:
    name: str
    kind: tuple[str, ...]
    crate_types: tuple[str, ...]

    @property
    def is_bin(self) -> bool:
        return "bin" in self.kind

    @property
    def is_example(self) -> bool:
        return "example" in self.kind

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> TargetInfo:
        return cls(
            name=data["name"],
            kind=tuple(data.get("kind", [])),
            crate_types=tuple(data.get("crate_types", [])),
        )


@dataclass(frozen=True)
class PackageInfo:
    name: str
    manifest_path: Path
    targets: tuple[TargetInfo, ...] = ()
    # package.metadata.cargo-post, {} when absent
    post_metadata: dict[str, Any] = field(default_factory=dict, hash=False, compare=False)

    @classmethod
    def from_json(cls, data: dict[str, Any], metadata_key: str = "cargo-post") -> PackageInfo:
        pkg_meta = data.get("metadata") or {}
        post = pkg_meta.get(metadata_key) if isinstance(pkg_meta, dict) else None
        return cls(
            name=data["name"],
            manifest_path=Path(data["manifest_path"]),
            targets=tuple(TargetInfo.from_json(t) for t in data.get("targets", [])),
            post_metadata=post if isinstance(post, dict) else {},
        )


@dataclass(frozen=True)
class ProjectMetadata:
    manifest_path: Path
    target_directory: Path
    workspace_root: Path
    package: PackageInfo

    @property
    def manifest_dir(self) -> Path:
        return self.manifest_path.parent
