"""Tests for the ws-rpc command line."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from click.testing import CliRunner

from ws_rpc import CallTimeoutError, ConnectError, RpcCallError
from ws_rpc.cli import EXIT_CALL_FAILED, EXIT_CONNECT_FAILED, main, parse_argument


def make_client(call: AsyncMock) -> MagicMock:
    """A fake client usable as `async with await connect(...)`."""
    client = MagicMock()
    client.call = call
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=None)
    return client


class TestParseArgument:
    """Test command line argument parsing."""

    def test_json_object(self):
        """JSON text is decoded."""
        assert parse_argument('{"A": 1}') == {"A": 1}

    def test_json_number(self):
        """Numbers are decoded."""
        assert parse_argument("42") == 42

    def test_plain_string(self):
        """Non-JSON text is passed through as a string."""
        assert parse_argument("hello") == "hello"

    def test_missing(self):
        """No argument means null."""
        assert parse_argument(None) is None


class TestCallCommand:
    """Test `ws-rpc call`."""

    @pytest.fixture(autouse=True)
    def _clean_env(self, monkeypatch):
        monkeypatch.setattr("ws_rpc.cli.configure_logging", lambda level: None)
        for name in ("WS_RPC_CALL_TIMEOUT", "WS_RPC_OPEN_TIMEOUT", "WS_RPC_PING_INTERVAL"):
            monkeypatch.delenv(name, raising=False)

    def test_prints_result(self):
        """A successful call prints its result as JSON."""
        call = AsyncMock(return_value={"sum": 3})
        with patch("ws_rpc.cli.connect", new=AsyncMock(return_value=make_client(call))):
            result = CliRunner().invoke(
                main, ["call", "ws://example.test/rpc", "Arith.Add", '{"A": 1, "B": 2}']
            )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"sum": 3}
        call.assert_awaited_once_with("Arith.Add", {"A": 1, "B": 2})

    def test_timeout_options_reach_config(self):
        """--timeout and --open-timeout are applied to the config."""
        mock_connect = AsyncMock(return_value=make_client(AsyncMock(return_value=None)))
        with patch("ws_rpc.cli.connect", new=mock_connect):
            result = CliRunner().invoke(
                main,
                [
                    "call",
                    "ws://example.test/rpc",
                    "Status.Get",
                    "--timeout",
                    "1.5",
                    "--open-timeout",
                    "3",
                ],
            )

        assert result.exit_code == 0, result.output
        config = mock_connect.call_args[0][1]
        assert config.call_timeout == 1.5
        assert config.channel.open_timeout == 3.0

    def test_rpc_error_exit_code(self):
        """A remote error prints the payload and exits 1."""
        call = AsyncMock(side_effect=RpcCallError({"code": -1, "message": "bad"}, call_id=1))
        with patch("ws_rpc.cli.connect", new=AsyncMock(return_value=make_client(call))):
            result = CliRunner().invoke(main, ["call", "ws://example.test/rpc", "Job.Run"])

        assert result.exit_code == EXIT_CALL_FAILED
        assert '"message": "bad"' in result.output

    def test_timeout_exit_code(self):
        """A call timeout exits 1."""
        call = AsyncMock(side_effect=CallTimeoutError(1, "Slow.Op", 0.1))
        with patch("ws_rpc.cli.connect", new=AsyncMock(return_value=make_client(call))):
            result = CliRunner().invoke(main, ["call", "ws://example.test/rpc", "Slow.Op"])

        assert result.exit_code == EXIT_CALL_FAILED
        assert "timed out" in result.output

    def test_connect_error_exit_code(self):
        """A connect failure exits 2."""
        error = ConnectError("ws://example.test/rpc", OSError("refused"))
        with patch("ws_rpc.cli.connect", new=AsyncMock(side_effect=error)):
            result = CliRunner().invoke(main, ["call", "ws://example.test/rpc", "Status.Get"])

        assert result.exit_code == EXIT_CONNECT_FAILED
        assert "Failed to connect" in result.output
