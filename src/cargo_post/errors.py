"""Failures that end a `cargo post` run before or between child processes.

A non-zero exit of cargo or of the post-build script is not an error here: it is
returned as an exit code and propagated unchanged. The exceptions below cover what
cargo itself cannot report (no manifest, unreadable metadata, nothing to spawn).
"""

from __future__ import annotations

# sysexits.h / shell conventions; cargo itself exits 0, 1 or 101.
EXIT_USAGE = 64
EXIT_METADATA_FAILURE = 65
EXIT_MANIFEST_NOT_FOUND = 66
EXIT_NO_BINARY = 69
EXIT_SPAWN_FAILURE = 127


class CargoPostError(Exception):
    """Base class; exit_code is what the wrapper exits with."""

    exit_code = EXIT_METADATA_FAILURE


class ManifestNotFoundError(CargoPostError):
    exit_code = EXIT_MANIFEST_NOT_FOUND


class MetadataReadError(CargoPostError):
    """`cargo metadata` could not run, failed, or printed something unusable."""

    exit_code = EXIT_METADATA_FAILURE


class PackageNotFoundError(MetadataReadError):
    """--package named a package that is not in the workspace."""


class AmbiguousPackageError(MetadataReadError):
    """Workspace with several packages and no --package to pick one."""


class ScriptManifestError(MetadataReadError):
    """[package.metadata.cargo-post] is malformed or names a missing path dependency."""


class BuildSpawnError(CargoPostError):
    exit_code = EXIT_SPAWN_FAILURE


class PostBuildSpawnError(CargoPostError):
    exit_code = EXIT_SPAWN_FAILURE


class BinarySelectionError(CargoPostError):
    """run/test: the build left zero or several candidate binaries to execute."""

    exit_code = EXIT_NO_BINARY


class ExecuteSpawnError(CargoPostError):
    exit_code = EXIT_SPAWN_FAILURE
