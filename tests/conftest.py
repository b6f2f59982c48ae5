"""Pytest fixtures for cargo-post tests."""

import json
from pathlib import Path

import pytest

from cargo_post.metadata.models import PackageInfo, ProjectMetadata, TargetInfo


def cargo_metadata_json(
    root: Path,
    packages: list[dict] | None = None,
    target_directory: Path | None = None,
) -> str:
    """Minimal `cargo metadata --no-deps` output for a project rooted at root."""
    if packages is None:
        packages = [package_json("demo", root / "Cargo.toml")]
    return json.dumps(
        {
            "packages": packages,
            "workspace_root": str(root),
            "target_directory": str(target_directory or root / "target"),
            "version": 1,
        }
    )


def package_json(
    name: str,
    manifest_path: Path,
    bins: tuple[str, ...] | None = None,
    examples: tuple[str, ...] = (),
    post: dict | None = None,
) -> dict:
    if bins is None:
        bins = (name,)
    targets = [{"name": b, "kind": ["bin"], "crate_types": ["bin"]} for b in bins]
    targets += [{"name": e, "kind": ["example"], "crate_types": ["bin"]} for e in examples]
    targets.append({"name": name, "kind": ["lib"], "crate_types": ["lib"]})
    return {
        "name": name,
        "version": "0.1.0",
        "manifest_path": str(manifest_path),
        "targets": targets,
        "metadata": {"cargo-post": post} if post is not None else None,
    }


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Single-package crate in tmp_path/proj with a Cargo.toml. Returns the crate dir."""
    root = tmp_path / "proj"
    (root / "src").mkdir(parents=True)
    (root / "Cargo.toml").write_text('[package]\nname = "demo"\nversion = "0.1.0"\n')
    return root


@pytest.fixture
def make_metadata():
    """Factory for ProjectMetadata without running cargo."""

    def _make(
        manifest_path: Path = Path("/proj/Cargo.toml"),
        target_directory: Path = Path("/proj/target"),
        targets: tuple[TargetInfo, ...] = (TargetInfo("demo", ("bin",), ("bin",)),),
        post: dict | None = None,
    ) -> ProjectMetadata:
        pkg = PackageInfo(
            name="demo",
            manifest_path=manifest_path,
            targets=targets,
            post_metadata=post or {},
        )
        return ProjectMetadata(
            manifest_path=manifest_path,
            target_directory=target_directory,
            workspace_root=manifest_path.parent,
            package=pkg,
        )

    return _make
