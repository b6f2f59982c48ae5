"""Locate the manifest and read project metadata via `cargo metadata`.

Nothing is cached: every run asks cargo again, so the result always reflects the
current manifest, CARGO_TARGET_DIR and .cargo/config.toml.
"""

from __future__ import annotations

import json
import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from cargo_post.build.target_profile import manifest_path_arg, package_arg
from cargo_post.errors import (
    AmbiguousPackageError,
    ManifestNotFoundError,
    MetadataReadError,
    PackageNotFoundError,
)
from cargo_post.helpers import find_upward
from cargo_post.metadata.models import PackageInfo, ProjectMetadata
from cargo_post.settings import resolve_settings

log = logging.getLogger(__name__)

MANIFEST_NAME = "Cargo.toml"


def find_manifest(start: Path, manifest_path: str | None = None) -> Path:
    """Explicit --manifest-path (relative to start) if given, else nearest Cargo.toml upward."""
    if manifest_path is not None:
        p = Path(manifest_path)
        if not p.is_absolute():
            p = start / p
        if not p.is_file():
            msg = f"manifest path `{manifest_path}` does not exist"
            raise ManifestNotFoundError(msg)
        return p.resolve()
    found = find_upward(start, MANIFEST_NAME)
    if found is None:
        msg = f"could not find `{MANIFEST_NAME}` in `{start}` or any parent directory"
        raise ManifestNotFoundError(msg)
    return found


def read_cargo_metadata(
    manifest: Path,
    cargo: str = "cargo",
    cwd: Path | None = None,
) -> dict[str, Any]:
    """Run `cargo metadata --no-deps` for manifest and return the parsed JSON."""
    cmd = [
        cargo,
        "metadata",
        "--format-version",
        "1",
        "--no-deps",
        "--manifest-path",
        str(manifest),
    ]
    log.debug("Reading metadata: %s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            check=False,
            cwd=str(cwd) if cwd is not None else None,
            capture_output=True,
            text=True,
        )
    except OSError as e:
        msg = f"failed to run `{cargo} metadata`: {e}"
        raise MetadataReadError(msg) from e
    if result.returncode != 0:
        detail = (result.stderr or "").strip() or f"exit status {result.returncode}"
        msg = f"`{cargo} metadata` failed for {manifest}: {detail}"
        raise MetadataReadError(msg)
    try:
        data = json.loads(result.stdout)
    except json.JSONDecodeError as e:
        msg = f"`{cargo} metadata` printed invalid JSON: {e}"
        raise MetadataReadError(msg) from e
    if not isinstance(data, dict) or "target_directory" not in data:
        msg = f"`{cargo} metadata` output has no target_directory for {manifest}"
        raise MetadataReadError(msg)
    return data


def _package_name_matches(spec: str, name: str) -> bool:
    # -p also accepts pkgid specs such as `foo@1.2.3`
    return spec == name or spec.split("@", 1)[0] == name


def select_package(
    packages: Sequence[PackageInfo],
    manifest: Path,
    package_name: str | None = None,
) -> PackageInfo:
    """Pick the package the post-build script belongs to.

    --package wins; otherwise the package owning `manifest`; otherwise the only
    package. A workspace with several packages and no --package is not guessed.
    """
    if package_name is not None:
        for pkg in packages:
            if _package_name_matches(package_name, pkg.name):
                return pkg
        msg = f"package `{package_name}` not found in workspace"
        raise PackageNotFoundError(msg)
    for pkg in packages:
        if pkg.manifest_path.resolve() == manifest.resolve():
            return pkg
    if len(packages) == 1:
        return packages[0]
    if not packages:
        msg = f"no packages found for {manifest}"
        raise PackageNotFoundError(msg)
    names = ", ".join(sorted(p.name for p in packages))
    msg = f"{manifest} is a workspace with several packages ({names}); pass --package <name>"
    raise AmbiguousPackageError(msg)


def resolve(
    cwd: Path,
    args: Sequence[str],
    settings: dict[str, str] | None = None,
) -> ProjectMetadata:
    """Manifest + package + target directory for the forwarded invocation."""
    cfg = settings if settings is not None else resolve_settings()
    manifest = find_manifest(cwd, manifest_path_arg(args))
    data = read_cargo_metadata(manifest, cfg["cargo"], cwd=cwd)
    try:
        packages = [PackageInfo.from_json(p, cfg["metadata_key"]) for p in data.get("packages", [])]
    except (KeyError, TypeError) as e:
        msg = f"unexpected package entry in `cargo metadata` output: {e}"
        raise MetadataReadError(msg) from e
    package = select_package(packages, manifest, package_arg(args))
    log.debug("Selected package %s (%s)", package.name, package.manifest_path)
    return ProjectMetadata(
        manifest_path=package.manifest_path,
        target_directory=Path(data["target_directory"]),
        workspace_root=Path(data.get("workspace_root") or manifest.parent),
        package=package,
    )
