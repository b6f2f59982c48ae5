"""Run the forwarded cargo command, then the post-build script.

Strictly sequential: the script only starts after cargo exited 0 for a
build-producing command. Children inherit stdio; their output is never
captured. Nothing is retried.

    IDLE -> BUILD_RUNNING -> BUILD_FAILED
                          -> BUILD_SUCCEEDED -> DONE (not build-producing, or no script)
                                             -> POST_BUILD_RUNNING -> POST_BUILD_FAILED
                                                                   -> DONE

run/test are built as `cargo build`, then after DONE the single built binary runs:

    DONE -> EXECUTE_RUNNING -> EXECUTE_FAILED | DONE
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from collections.abc import Mapping, Sequence
from enum import Enum
from pathlib import Path
from typing import Any

from cargo_post.build.classify import BuildClassification, classify_args, split_execute_args
from cargo_post.build.out_dir import compose, out_bins
from cargo_post.build.target_profile import extract
from cargo_post.errors import (
    BinarySelectionError,
    BuildSpawnError,
    CargoPostError,
    ExecuteSpawnError,
    PostBuildSpawnError,
)
from cargo_post.metadata.models import ProjectMetadata
from cargo_post.metadata.reader import resolve
from cargo_post.post.environment import build_environment
from cargo_post.post.script import (
    script_command,
    script_dependencies,
    script_path,
    write_manifest,
)
from cargo_post.settings import resolve_settings

log = logging.getLogger(__name__)


class Phase(Enum):
    IDLE = "idle"
    BUILD_RUNNING = "build-running"
    BUILD_FAILED = "build-failed"
    BUILD_SUCCEEDED = "build-succeeded"
    POST_BUILD_RUNNING = "post-build-running"
    POST_BUILD_FAILED = "post-build-failed"
    EXECUTE_RUNNING = "execute-running"
    EXECUTE_FAILED = "execute-failed"
    DONE = "done"


_FAILED_FROM = {
    Phase.BUILD_RUNNING: Phase.BUILD_FAILED,
    Phase.POST_BUILD_RUNNING: Phase.POST_BUILD_FAILED,
    Phase.EXECUTE_RUNNING: Phase.EXECUTE_FAILED,
}


def exit_code(returncode: int) -> int:
    """Child return code as a process exit code; death by signal N becomes 128 + N."""
    if returncode < 0:
        return 128 + (-returncode)
    return returncode


class PostRun:
    """One `cargo post` invocation. Call run() once; phase holds where it ended."""

    def __init__(
        self,
        args: Sequence[str],
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
        settings: dict[str, str] | None = None,
    ) -> None:
        self.args = tuple(args)
        self.cwd = cwd if cwd is not None else Path.cwd()
        self.env = dict(env if env is not None else os.environ)
        self.settings = settings if settings is not None else resolve_settings(env=self.env)
        self.classification = classify_args(self.args)
        if self.classification is BuildClassification.BUILD_THEN_EXECUTE:
            build_args, exec_args = split_execute_args(self.args)
            self.build_args, self.exec_args = tuple(build_args), tuple(exec_args)
        else:
            self.build_args, self.exec_args = self.args, ()
        self.phase = Phase.IDLE

    def _spawn(
        self,
        cmd: list[str],
        error: type[CargoPostError],
        env: Mapping[str, str],
    ) -> int:
        log.debug("Spawning %s", cmd)
        try:
            result = subprocess.run(cmd, check=False, cwd=str(self.cwd), env=dict(env))
        except OSError as e:
            msg = f"failed to execute `{cmd[0]}`: {e}"
            raise error(msg) from e
        return exit_code(result.returncode)

    def _prepare_script(self, metadata: ProjectMetadata) -> tuple[Path | None, dict[str, Any]]:
        """(script, checked dependencies); script is None when there is nothing to run."""
        script = script_path(metadata, self.settings["script_name"])
        if not script.is_file():
            log.info("No post build script at %s, skipping", script)
            return None, {}
        return script, script_dependencies(metadata)

    def _run_build(self) -> int:
        self.phase = Phase.BUILD_RUNNING
        rc = self._spawn([self.settings["cargo"], *self.build_args], BuildSpawnError, self.env)
        self.phase = Phase.BUILD_SUCCEEDED if rc == 0 else Phase.BUILD_FAILED
        log.info("cargo %s exited with %d", " ".join(self.build_args), rc)
        return rc

    def _run_post_build(
        self,
        metadata: ProjectMetadata,
        script: Path,
        dependencies: dict[str, Any],
    ) -> int:
        environment = build_environment(metadata, self.build_args, self.env)
        manifest = write_manifest(
            metadata,
            script,
            self.settings["script_manifest_dir"],
            dependencies=dependencies,
        )
        print(f"▶ Running post build script at {script}", file=sys.stderr)
        self.phase = Phase.POST_BUILD_RUNNING
        rc = self._spawn(
            script_command(self.settings["cargo"], manifest),
            PostBuildSpawnError,
            {**self.env, **environment.as_env()},
        )
        self.phase = Phase.DONE if rc == 0 else Phase.POST_BUILD_FAILED
        return rc

    def _check_bins(self, metadata: ProjectMetadata) -> list[str]:
        bins = out_bins(metadata.package, self.build_args)
        if not bins:
            msg = f"package `{metadata.package.name}` has no binary to run"
            raise BinarySelectionError(msg)
        return bins

    def _select_binary(self, metadata: ProjectMetadata, bins: list[str]) -> Path:
        profile, target = extract(self.build_args, self.env)
        out_dir = compose(metadata.target_directory, profile, target)
        found = [out_dir / b for b in bins if (out_dir / b).is_file()]
        if not found:
            msg = f"found no binary to run in {out_dir}"
            raise BinarySelectionError(msg)
        if len(found) > 1:
            names = ", ".join(p.name for p in found)
            msg = f"more than one binary found ({names}); use --bin to pick one"
            raise BinarySelectionError(msg)
        return found[0]

    def _run_binary(self, metadata: ProjectMetadata, bins: list[str]) -> int:
        try:
            binary = self._select_binary(metadata, bins)
        except BinarySelectionError:
            self.phase = Phase.EXECUTE_FAILED
            raise
        self.phase = Phase.EXECUTE_RUNNING
        rc = self._spawn([str(binary), *self.exec_args], ExecuteSpawnError, self.env)
        self.phase = Phase.DONE if rc == 0 else Phase.EXECUTE_FAILED
        return rc

    def _fail(self, err: CargoPostError) -> int:
        self.phase = _FAILED_FROM.get(self.phase, self.phase)
        if isinstance(err, BuildSpawnError):
            print(f"❌ could not start build: {err}", file=sys.stderr)
        elif isinstance(err, PostBuildSpawnError):
            print(f"❌ could not start post build script: {err}", file=sys.stderr)
        elif isinstance(err, ExecuteSpawnError):
            print(f"❌ could not start binary: {err}", file=sys.stderr)
        else:
            print(f"❌ cargo-post: {err}", file=sys.stderr)
        return err.exit_code

    def run(self) -> int:
        """Returns the exit code of the last child, or an internal code from errors."""
        mode = self.classification
        try:
            metadata = None
            script: Path | None = None
            dependencies: dict[str, Any] = {}
            bins: list[str] = []
            # Everything that can be checked is checked before anything is spawned.
            if mode is not BuildClassification.NON_BUILD_PRODUCING:
                metadata = resolve(self.cwd, self.build_args, self.settings)
                script, dependencies = self._prepare_script(metadata)
                if mode is BuildClassification.BUILD_THEN_EXECUTE:
                    bins = self._check_bins(metadata)
            rc = self._run_build()
            if rc != 0:
                return rc
            if metadata is None:
                self.phase = Phase.DONE
                return rc
            if script is not None:
                rc = self._run_post_build(metadata, script, dependencies)
                if rc != 0:
                    return rc
            if mode is BuildClassification.BUILD_THEN_EXECUTE:
                return self._run_binary(metadata, bins)
            self.phase = Phase.DONE
            return 0
        except CargoPostError as e:
            return self._fail(e)


def run(
    args: Sequence[str],
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    return PostRun(args, cwd=cwd, env=env).run()
