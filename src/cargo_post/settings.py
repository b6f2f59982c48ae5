"""Runtime settings (cargo executable, script location, generated manifest dir)."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

DEFAULT_SETTINGS: dict[str, str] = {
    "cargo": "cargo",
    "script_name": "post_build.rs",
    "script_manifest_dir": "post_build_script_manifest",
    "metadata_key": "cargo-post",
}


def resolve_settings(
    overrides: Mapping[str, Any] | None = None,
    env: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Return settings with defaults filled.

    CARGO (exported by cargo to external subcommands) selects the cargo executable;
    explicit overrides win over the environment. Unknown keys are ignored.
    """
    if env is None:
        env = os.environ
    out = dict(DEFAULT_SETTINGS)
    if env.get("CARGO"):
        out["cargo"] = env["CARGO"]
    if overrides:
        out.update({k: str(v) for k, v in overrides.items() if k in out})
    return out
