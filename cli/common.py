import asyncio
import json
from typing import Any, Awaitable, Callable

import click
from pydantic import BaseModel

from config.settings import settings
from explorer.chain_explorer import ChainExplorer
from utils.exceptions import ExplorerError, format_error_chain
from utils.logger_utils import get_logger

logger = get_logger("Explorer CLI")

rpc_url_option = click.option(
    "-p",
    "--rpc-url",
    default=settings.rpc.rpc_url,
    show_default=True,
    type=str,
    help="The URI of the Ethereum JSON-RPC endpoint. e.g. https://eth.llamarpc.com",
)

log_file_option = click.option("--log-file", default=None, show_default=True, type=str, help="Path to the log file.")


def to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    if isinstance(value, dict):
        return {key: to_jsonable(item) for key, item in value.items()}
    return value


def echo_json(value: Any) -> None:
    click.echo(json.dumps(to_jsonable(value), indent=2))


def run_with_explorer(rpc_url: str, command: Callable[[ChainExplorer], Awaitable[Any]]) -> Any:
    """
    Runs one lookup against a fresh explorer and prints the result as JSON.
    Engine errors end the command with the rendered cause chain and the endpoint.
    """

    async def _run() -> Any:
        async with ChainExplorer.from_settings(rpc_url=rpc_url) as explorer:
            return await command(explorer)

    try:
        result = asyncio.run(_run())
    except ExplorerError as e:
        logger.error(f"Lookup failed: {e}")
        raise click.ClickException(f"{format_error_chain(e)}\n\nRPC: {rpc_url}") from e

    echo_json(result)
    return result
