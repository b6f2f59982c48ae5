"""Tests for cargo_post.cli (cargo-post post ...)."""

from unittest.mock import patch

import pytest

from cargo_post import __version__
from cargo_post.errors import EXIT_USAGE


def _main(monkeypatch, *argv: str) -> int:
    from cargo_post.cli.main import main

    monkeypatch.setattr("sys.argv", ["cargo-post", *argv])
    with pytest.raises(SystemExit) as exc:
        main()
    return exc.value.code


class TestMain:
    def test_forwards_args_and_exits_with_child_code(self, monkeypatch) -> None:
        with patch("cargo_post.cli.post_cmd.run_post", return_value=101) as m_run:
            assert _main(monkeypatch, "post", "build", "--release") == 101
        m_run.assert_called_once_with(["build", "--release"])

    def test_requires_post_subcommand(self, monkeypatch, capsys) -> None:
        with patch("cargo_post.cli.post_cmd.run_post") as m_run:
            assert _main(monkeypatch, "build") == EXIT_USAGE
        assert not m_run.called
        _, err = capsys.readouterr()
        assert "cargo post" in err

    def test_no_args(self, monkeypatch) -> None:
        assert _main(monkeypatch) == EXIT_USAGE

    def test_post_without_command(self, monkeypatch, capsys) -> None:
        assert _main(monkeypatch, "post") == EXIT_USAGE
        _, err = capsys.readouterr()
        assert "Usage" in err

    def test_help(self, monkeypatch, capsys) -> None:
        assert _main(monkeypatch, "post", "--help") == 0
        out, _ = capsys.readouterr()
        assert "CRATE_OUT_DIR" in out
        assert "--package" in out

    def test_version(self, monkeypatch, capsys) -> None:
        assert _main(monkeypatch, "post", "--version") == 0
        out, _ = capsys.readouterr()
        assert out.strip() == f"cargo-post {__version__}"

    def test_help_flag_after_command_is_forwarded(self, monkeypatch) -> None:
        with patch("cargo_post.cli.post_cmd.run_post", return_value=0) as m_run:
            assert _main(monkeypatch, "post", "build", "--help") == 0
        m_run.assert_called_once_with(["build", "--help"])

    def test_interrupt_exits_130(self, monkeypatch) -> None:
        with patch("cargo_post.cli.post_cmd.run_post", side_effect=KeyboardInterrupt):
            assert _main(monkeypatch, "post", "build") == 130
