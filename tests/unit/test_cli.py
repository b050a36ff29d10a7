"""Tests for the gistembed command-line entry point."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from gistembed import cli
from gistembed.config import GistConfig, Settings

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def isolated_root_logger(monkeypatch: pytest.MonkeyPatch) -> logging.Logger:
    """Restore the root logger's handlers and level after each test."""
    root_logger = logging.getLogger()
    monkeypatch.setattr(root_logger, "handlers", [])
    monkeypatch.setattr(root_logger, "level", root_logger.level)
    return root_logger


@pytest.fixture
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Settings without .env or GIST__ env vars."""
    settings = Settings(
        _env_file=None,  # type: ignore[call-arg]
        gist=GistConfig(username="octocat"),
    )
    monkeypatch.setattr(cli, "get_settings", lambda: settings)
    return settings


class TestResolveConfig:
    """Command-line options overlay the configured settings."""

    def test_flags_override(self, isolated_settings: Settings) -> None:
        """Command-line flags replace the configured username and truncate."""
        args = cli._build_parser().parse_args(["in.md", "-u", "alice", "--truncate"])
        config = cli.resolve_config(args)
        assert config.username == "alice"
        assert config.truncate is True
        assert isolated_settings.gist.username == "octocat"

    def test_defaults_kept(self, isolated_settings: Settings) -> None:
        """Without flags the configured settings are used unchanged."""
        args = cli._build_parser().parse_args(["in.md"])
        config = cli.resolve_config(args)
        assert config.username == "octocat"
        assert config.truncate is False


class TestMain:
    """End-to-end CLI runs with rendering stubbed out."""

    def test_writes_output_file(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        isolated_settings: Settings,
    ) -> None:
        """Rendered Markdown is written to the -o path."""
        source = tmp_path / "in.md"
        source.write_text("`gist:1#a.py`\n", encoding="utf-8")
        target = tmp_path / "out.md"

        async def fake_render(markdown: str, config: GistConfig) -> str:
            return markdown.replace("`gist:1#a.py`", f"<p>{config.username}</p>")

        monkeypatch.setattr(cli, "_render", fake_render)
        cli.main([str(source), "-o", str(target)])

        assert target.read_text(encoding="utf-8") == "<p>octocat</p>\n"

    def test_prints_to_stdout(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
        isolated_settings: Settings,
    ) -> None:
        """Without -o the rendered Markdown goes to stdout."""
        source = tmp_path / "in.md"
        source.write_text("# Title\n", encoding="utf-8")

        async def fake_render(markdown: str, config: GistConfig) -> str:
            return markdown

        monkeypatch.setattr(cli, "_render", fake_render)
        cli.main([str(source)])

        assert capsys.readouterr().out == "# Title\n"

    def test_missing_input_exits(
        self, tmp_path: Path, isolated_settings: Settings
    ) -> None:
        """An unreadable input file exits with status 1."""
        with pytest.raises(SystemExit) as excinfo:
            cli.main([str(tmp_path / "nope.md")])
        assert excinfo.value.code == 1


class TestSetupLogging:
    """Console logging is configured once per process."""

    def test_handler_installed_once(self, isolated_root_logger: logging.Logger) -> None:
        """Repeated setup keeps a single console handler and updates the level."""
        cli._setup_logging(verbose=False)
        cli._setup_logging(verbose=True)

        names = [h.get_name() for h in isolated_root_logger.handlers]
        assert names.count(cli.LOG_HANDLER_NAME) == 1
        assert isolated_root_logger.level == logging.DEBUG

    def test_repeated_main_does_not_duplicate(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        isolated_settings: Settings,
        isolated_root_logger: logging.Logger,
    ) -> None:
        """Running main twice in-process installs one handler."""
        source = tmp_path / "in.md"
        source.write_text("# Title\n", encoding="utf-8")

        async def fake_render(markdown: str, config: GistConfig) -> str:
            return markdown

        monkeypatch.setattr(cli, "_render", fake_render)
        cli.main([str(source), "-o", str(tmp_path / "a.md")])
        cli.main([str(source), "-o", str(tmp_path / "b.md")])

        names = [h.get_name() for h in isolated_root_logger.handlers]
        assert names.count(cli.LOG_HANDLER_NAME) == 1
