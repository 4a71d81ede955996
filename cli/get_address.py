import click

from cli.common import log_file_option, rpc_url_option, run_with_explorer
from config.settings import settings
from utils.logger_utils import configure_logging


@click.command()
@click.argument("address", type=str)
@rpc_url_option
@log_file_option
def get_address(address: str, rpc_url: str, log_file: str):
    """Shows balance, nonce and contract metadata of an account."""
    configure_logging(log_file, settings.app.effective_log_level)
    run_with_explorer(rpc_url, lambda explorer: explorer.addresses.get_address(address))
