import click

from cli.common import log_file_option, rpc_url_option, run_with_explorer
from config.settings import settings
from utils.logger_utils import configure_logging


@click.command()
@rpc_url_option
@log_file_option
def get_network_info(rpc_url: str, log_file: str):
    """Shows the latest block, gas price, client version and fee trend."""
    configure_logging(log_file, settings.app.effective_log_level)
    run_with_explorer(rpc_url, lambda explorer: explorer.network.get_network_snapshot())
