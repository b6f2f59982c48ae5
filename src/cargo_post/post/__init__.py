"""Post-build phase: environment contract, script manifest, process orchestration."""

from .environment import PostBuildEnvironment, build_environment
from .orchestrate import Phase, PostRun, exit_code, run
from .script import render_manifest, script_dependencies, script_path, write_manifest

__all__ = [
    "Phase",
    "PostBuildEnvironment",
    "PostRun",
    "build_environment",
    "exit_code",
    "render_manifest",
    "run",
    "script_dependencies",
    "script_path",
    "write_manifest",
]
