"""ws-rpc command line.

Usage:
    ws-rpc call ws://localhost:1234/rpc Arith.Add '{"A": 1, "B": 2}'
    ws-rpc call ws://localhost:1234/rpc Echo.Say hello
    ws-rpc --log-level debug call ws://localhost:1234/rpc Status.Get

ARGUMENT is parsed as JSON when it can be, otherwise sent as a string.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Any

import click

from .config import ClientConfig
from .connector import connect
from .errors import CallTimeoutError, ChannelClosedError, ConnectError, RpcCallError

EXIT_CALL_FAILED = 1
EXIT_CONNECT_FAILED = 2

LOG_LEVELS = ["debug", "info", "warning", "error"]


def parse_argument(raw: str | None) -> Any:
    """Parse a command line argument as JSON, falling back to the raw string."""
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def configure_logging(level: str) -> None:
    """Send all logging to stderr so stdout stays clean for results."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    root_logger.addHandler(stderr_handler)
    root_logger.setLevel(level.upper())


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="warning",
    envvar="WS_RPC_LOG_LEVEL",
    help="Logging level (stderr)",
)
def main(log_level: str) -> None:
    """ws-rpc - call JSON-RPC methods over a WebSocket."""
    configure_logging(log_level)


@main.command("call")
@click.argument("address")
@click.argument("method")
@click.argument("argument", required=False)
@click.option("--timeout", type=float, default=None, help="Seconds to wait for the reply")
@click.option("--open-timeout", type=float, default=None, help="Seconds to wait for the handshake")
def call_command(
    address: str,
    method: str,
    argument: str | None,
    timeout: float | None,
    open_timeout: float | None,
) -> None:
    """Send one call to ADDRESS and print its result as JSON."""
    config = ClientConfig.from_env()
    if timeout is not None:
        config.call_timeout = timeout
    if open_timeout is not None:
        config.channel.open_timeout = open_timeout

    try:
        result = asyncio.run(_call_once(address, method, parse_argument(argument), config))
    except ConnectError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_CONNECT_FAILED)
    except RpcCallError as e:
        click.echo(f"Error: {json.dumps(e.error, default=str)}", err=True)
        sys.exit(EXIT_CALL_FAILED)
    except (CallTimeoutError, ChannelClosedError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_CALL_FAILED)

    click.echo(json.dumps(result, indent=2, default=str))


async def _call_once(address: str, method: str, argument: Any, config: ClientConfig) -> Any:
    async with await connect(address, config) as client:
        return await client.call(method, argument)


if __name__ == "__main__":
    main()
