"""cargo-post: run a post-build script after `cargo build`."""

__version__ = "0.1.0"
