import click

from cli.common import log_file_option, rpc_url_option, run_with_explorer
from config.settings import settings
from utils.logger_utils import configure_logging


@click.command()
@click.argument("tx_hash", type=str)
@rpc_url_option
@log_file_option
def get_transaction(tx_hash: str, rpc_url: str, log_file: str):
    """Shows a transaction with its receipt, decoded logs and token transfers."""
    configure_logging(log_file, settings.app.effective_log_level)
    run_with_explorer(rpc_url, lambda explorer: explorer.transactions.get_transaction(tx_hash))
