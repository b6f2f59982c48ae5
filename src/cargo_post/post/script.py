"""Post-build script lookup and the throw-away manifest cargo builds it from.

The script (post_build.rs next to the package manifest, or the `script` key of
[package.metadata.cargo-post]) is compiled as the only binary of a generated
package under {target_dir}/post_build_script_manifest/. Its dependencies come from
[package.metadata.cargo-post.dependencies]; relative `path` dependencies are
resolved against the package manifest directory since the generated manifest lives
elsewhere.
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any

import toml

from cargo_post.errors import ScriptManifestError
from cargo_post.metadata.models import ProjectMetadata

log = logging.getLogger(__name__)

SCRIPT_PACKAGE_NAME = "post-build-script"


def script_path(metadata: ProjectMetadata, script_name: str = "post_build.rs") -> Path:
    """Configured `script` (relative to the manifest dir) or manifest_dir/script_name."""
    configured = metadata.package.post_metadata.get("script")
    name = configured if isinstance(configured, str) and configured else script_name
    return metadata.manifest_dir / name


def script_dependencies(metadata: ProjectMetadata) -> dict[str, Any]:
    """[package.metadata.cargo-post.dependencies] with path deps made absolute."""
    deps = metadata.package.post_metadata.get("dependencies")
    if deps is None:
        return {}
    if not isinstance(deps, dict):
        msg = f"cargo-post dependencies in {metadata.manifest_path} must be a table"
        raise ScriptManifestError(msg)
    out = copy.deepcopy(deps)
    for name, dep in out.items():
        if not isinstance(dep, dict) or "path" not in dep:
            continue
        if not isinstance(dep["path"], str):
            msg = f"dependency {name} path is not a string in {metadata.manifest_path}"
            raise ScriptManifestError(msg)
        dep_path = Path(dep["path"])
        if not dep_path.is_absolute():
            dep_path = metadata.manifest_dir / dep_path
        if not dep_path.exists():
            msg = f"dependency {name} does not exist at {dep_path}"
            raise ScriptManifestError(msg)
        dep["path"] = str(dep_path.resolve())
    return out


def render_manifest(script: Path, dependencies: dict[str, Any]) -> str:
    """Cargo.toml text for a package whose only binary is script."""
    doc: dict[str, Any] = {
        "package": {
            "name": SCRIPT_PACKAGE_NAME,
            "version": "0.1.0",
            "edition": "2021",
            "publish": False,
        },
        "bin": [{"name": SCRIPT_PACKAGE_NAME, "path": str(script)}],
        "dependencies": dependencies,
        # Standalone: the target dir usually sits inside the user's workspace.
        "workspace": {},
    }
    return toml.dumps(doc)


def write_manifest(
    metadata: ProjectMetadata,
    script: Path,
    manifest_dir_name: str = "post_build_script_manifest",
    dependencies: dict[str, Any] | None = None,
) -> Path:
    """Write the generated manifest under the target directory. Returns its path.

    dependencies: already checked script_dependencies(metadata); computed here when None.
    """
    if dependencies is None:
        dependencies = script_dependencies(metadata)
    out_dir = metadata.target_directory / manifest_dir_name
    manifest = out_dir / "Cargo.toml"
    content = render_manifest(script, dependencies)
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
        manifest.write_text(content)
    except OSError as e:
        msg = f"failed to write post build script manifest {manifest}: {e}"
        raise ScriptManifestError(msg) from e
    log.debug("Wrote post build script manifest %s", manifest)
    return manifest


def script_command(cargo: str, manifest: Path) -> list[str]:
    return [cargo, "run", "--manifest-path", str(manifest)]
