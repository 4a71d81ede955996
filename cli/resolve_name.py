import click

from cli.common import log_file_option, rpc_url_option, run_with_explorer
from config.settings import settings
from utils.logger_utils import configure_logging


async def _resolve_name(explorer, name: str):
    return {"name": name, "address": await explorer.names.resolve_address(name)}


async def _lookup_address(explorer, address: str):
    return {"address": address, "name": await explorer.names.resolve_name(address)}


@click.command()
@click.argument("name", type=str)
@rpc_url_option
@log_file_option
def resolve_name(name: str, rpc_url: str, log_file: str):
    """Resolves an ENS name (e.g. vitalik.eth) to an address."""
    configure_logging(log_file, settings.app.effective_log_level)
    run_with_explorer(rpc_url, lambda explorer: _resolve_name(explorer, name))


@click.command()
@click.argument("address", type=str)
@rpc_url_option
@log_file_option
def lookup_address(address: str, rpc_url: str, log_file: str):
    """Looks up the primary ENS name of an address."""
    configure_logging(log_file, settings.app.effective_log_level)
    run_with_explorer(rpc_url, lambda explorer: _lookup_address(explorer, address))
