"""Tests for cargo_post.post.script (script lookup and generated manifest)."""

from pathlib import Path

import pytest
import toml

from cargo_post.errors import ScriptManifestError
from cargo_post.post import render_manifest, script_dependencies, script_path, write_manifest
from cargo_post.post.script import SCRIPT_PACKAGE_NAME, script_command


class TestScriptPath:
    def test_default_next_to_manifest(self, make_metadata) -> None:
        assert script_path(make_metadata()) == Path("/proj/post_build.rs")

    def test_configured_script(self, make_metadata) -> None:
        meta = make_metadata(post={"script": "scripts/after.rs"})
        assert script_path(meta) == Path("/proj/scripts/after.rs")

    def test_custom_default_name(self, make_metadata) -> None:
        assert script_path(make_metadata(), "finish.rs") == Path("/proj/finish.rs")


class TestScriptDependencies:
    def test_none(self, make_metadata) -> None:
        assert script_dependencies(make_metadata()) == {}

    def test_version_deps_kept(self, make_metadata) -> None:
        deps = {"serde": "1", "toml": {"version": "0.8", "features": ["parse"]}}
        assert script_dependencies(make_metadata(post={"dependencies": deps})) == deps

    def test_relative_path_resolved_against_manifest_dir(self, tmp_path: Path, make_metadata) -> None:
        (tmp_path / "helper").mkdir()
        meta = make_metadata(
            manifest_path=tmp_path / "Cargo.toml",
            post={"dependencies": {"helper": {"path": "helper"}}},
        )
        deps = script_dependencies(meta)
        assert deps["helper"]["path"] == str((tmp_path / "helper").resolve())
        # source table untouched
        assert meta.package.post_metadata["dependencies"]["helper"]["path"] == "helper"

    def test_missing_path_dependency_raises(self, tmp_path: Path, make_metadata) -> None:
        meta = make_metadata(
            manifest_path=tmp_path / "Cargo.toml",
            post={"dependencies": {"ghost": {"path": "ghost"}}},
        )
        with pytest.raises(ScriptManifestError, match="ghost"):
            script_dependencies(meta)

    def test_non_table_raises(self, make_metadata) -> None:
        with pytest.raises(ScriptManifestError, match="must be a table"):
            script_dependencies(make_metadata(post={"dependencies": ["serde"]}))


class TestRenderManifest:
    def test_single_bin_with_dependencies(self) -> None:
        text = render_manifest(Path("/proj/post_build.rs"), {"serde": "1"})
        doc = toml.loads(text)
        assert doc["package"]["name"] == SCRIPT_PACKAGE_NAME
        assert doc["bin"] == [{"name": SCRIPT_PACKAGE_NAME, "path": str(Path("/proj/post_build.rs"))}]
        assert doc["dependencies"] == {"serde": "1"}
        assert doc["workspace"] == {}


class TestWriteManifest:
    def test_written_under_target_dir(self, tmp_path: Path, make_metadata) -> None:
        meta = make_metadata(
            manifest_path=tmp_path / "Cargo.toml",
            target_directory=tmp_path / "target",
            post={"dependencies": {"serde": "1"}},
        )
        manifest = write_manifest(meta, tmp_path / "post_build.rs")
        assert manifest == tmp_path / "target" / "post_build_script_manifest" / "Cargo.toml"
        doc = toml.loads(manifest.read_text())
        assert doc["dependencies"] == {"serde": "1"}
        assert not (tmp_path / "Cargo.toml").exists()

    def test_unwritable_target_dir(self, tmp_path: Path, make_metadata) -> None:
        blocker = tmp_path / "target"
        blocker.write_text("not a dir")
        meta = make_metadata(manifest_path=tmp_path / "Cargo.toml", target_directory=blocker)
        with pytest.raises(ScriptManifestError, match="failed to write"):
            write_manifest(meta, tmp_path / "post_build.rs")


class TestScriptCommand:
    def test_cargo_run_manifest_path(self) -> None:
        assert script_command("cargo", Path("/t/m/Cargo.toml")) == [
            "cargo",
            "run",
            "--manifest-path",
            str(Path("/t/m/Cargo.toml")),
        ]
