"""Tests for ``incidentio-mcp serve`` CLI command."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

from click.testing import CliRunner

from incidentio_mcp.cli import main

_ENV = {
    "INCIDENTIO_WEBHOOK_URL": "https://example.test/hook",
    "INCIDENTIO_API_TOKEN": "secret-token",
}


class TestServe:
    def test_missing_config_exits_before_serving(self) -> None:
        with patch("incidentio_mcp.server.run_stdio", new=AsyncMock()) as run_stdio:
            runner = CliRunner()
            result = runner.invoke(
                main,
                ["serve"],
                env={"INCIDENTIO_WEBHOOK_URL": "", "INCIDENTIO_API_TOKEN": ""},
            )

        assert result.exit_code == 1
        assert "Configuration error" in result.output
        assert "INCIDENTIO_WEBHOOK_URL" in result.output
        assert "INCIDENTIO_API_TOKEN" in result.output
        run_stdio.assert_not_called()

    def test_missing_token_only(self) -> None:
        with patch("incidentio_mcp.server.run_stdio", new=AsyncMock()) as run_stdio:
            runner = CliRunner()
            result = runner.invoke(
                main,
                ["serve"],
                env={"INCIDENTIO_WEBHOOK_URL": "https://example.test/hook", "INCIDENTIO_API_TOKEN": ""},
            )

        assert result.exit_code == 1
        assert "INCIDENTIO_API_TOKEN" in result.output
        run_stdio.assert_not_called()

    def test_serves_with_config(self) -> None:
        with patch("incidentio_mcp.server.run_stdio", new=AsyncMock()) as run_stdio:
            runner = CliRunner()
            result = runner.invoke(main, ["serve"], env=_ENV)

        assert result.exit_code == 0
        run_stdio.assert_awaited_once()
        config, framing = run_stdio.call_args.args
        assert config.webhook_url == "https://example.test/hook"
        assert framing.value == "ndjson"
        assert run_stdio.call_args.kwargs == {"dry_run": False}

    def test_framing_and_dry_run_options(self) -> None:
        with patch("incidentio_mcp.server.run_stdio", new=AsyncMock()) as run_stdio:
            runner = CliRunner()
            result = runner.invoke(
                main, ["serve", "--framing", "content-length", "--dry-run"], env=_ENV
            )

        assert result.exit_code == 0
        _, framing = run_stdio.call_args.args
        assert framing.value == "content-length"
        assert run_stdio.call_args.kwargs == {"dry_run": True}

    def test_stream_failure_exits_nonzero(self) -> None:
        failing = AsyncMock(side_effect=OSError("stdin broke"))
        with patch("incidentio_mcp.server.run_stdio", new=failing):
            runner = CliRunner()
            result = runner.invoke(main, ["serve"], env=_ENV)

        assert result.exit_code == 1

    def test_token_never_printed(self) -> None:
        with patch("incidentio_mcp.server.run_stdio", new=AsyncMock()):
            runner = CliRunner()
            result = runner.invoke(main, ["serve", "--verbose"], env=_ENV)

        assert "secret-token" not in result.output

    def test_invalid_framing_rejected(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["serve", "--framing", "xml"], env=_ENV)
        assert result.exit_code == 2

    def test_interrupt_exits_immediately(self) -> None:
        interrupted = AsyncMock(side_effect=KeyboardInterrupt)
        with (
            patch("incidentio_mcp.server.run_stdio", new=interrupted),
            patch("incidentio_mcp.cli_commands.serve._exit_now") as exit_now,
        ):
            runner = CliRunner()
            runner.invoke(main, ["serve"], env=_ENV)

        exit_now.assert_called_once_with(130)
