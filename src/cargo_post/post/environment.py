"""Environment variables handed to the post-build script.

| Variable            | Value                                                   |
|---------------------|---------------------------------------------------------|
| CRATE_BUILD_COMMAND | `cargo <forwarded args>`                                |
| CRATE_MANIFEST_DIR  | directory of the package manifest                       |
| CRATE_MANIFEST_PATH | package manifest                                        |
| CRATE_PROFILE       | `debug` or `release`                                    |
| CRATE_TARGET        | raw --target value, or ""                               |
| CRATE_TARGET_TRIPLE | triple (file stem for .json targets), or ""             |
| CRATE_TARGET_DIR    | cargo target directory                                  |
| CRATE_OUT_DIR       | {target_dir}[/{triple}]/{profile}                       |
| CRATE_OUT_BINS      | `:`-separated binaries relative to CRATE_OUT_DIR        |
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass

from cargo_post.build.out_dir import compose, out_bins
from cargo_post.build.target_profile import extract
from cargo_post.helpers import render_command
from cargo_post.metadata.models import ProjectMetadata


@dataclass(frozen=True)
class PostBuildEnvironment:
    build_command: str
    manifest_dir: str
    manifest_path: str
    profile: str
    target: str
    target_triple: str
    target_dir: str
    out_dir: str
    out_bins: str

    def as_env(self) -> dict[str, str]:
        return {f"CRATE_{k.upper()}": v for k, v in asdict(self).items()}


def build_environment(
    metadata: ProjectMetadata,
    args: Sequence[str],
    env: Mapping[str, str] | None = None,
) -> PostBuildEnvironment:
    """Pure: same metadata, args and env always give the same values."""
    profile, target = extract(args, env)
    out_dir = compose(metadata.target_directory, profile, target)
    return PostBuildEnvironment(
        build_command=render_command("cargo", args),
        manifest_dir=str(metadata.manifest_dir),
        manifest_path=str(metadata.manifest_path),
        profile=profile.value,
        target=target.raw if target else "",
        target_triple=target.triple if target else "",
        target_dir=str(metadata.target_directory),
        out_dir=str(out_dir),
        out_bins=":".join(out_bins(metadata.package, args)),
    )
