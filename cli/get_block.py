import click

from cli.common import log_file_option, rpc_url_option, run_with_explorer
from config.settings import settings
from utils.logger_utils import configure_logging


async def _get_block(explorer, number: int, with_transactions: bool):
    if not with_transactions:
        return await explorer.blocks.get_block(number)

    block, transactions = await explorer.blocks.get_block_with_transactions(number)
    return {"block": block, "transactions": transactions}


@click.command()
@click.argument("number", type=click.IntRange(min=0))
@click.option(
    "-t",
    "--with-transactions",
    is_flag=True,
    default=False,
    help="Also fetch the transactions and fill in value, fee and builder totals.",
)
@rpc_url_option
@log_file_option
def get_block(number: int, with_transactions: bool, rpc_url: str, log_file: str):
    """Shows a block by its number."""
    configure_logging(log_file, settings.app.effective_log_level)
    run_with_explorer(rpc_url, lambda explorer: _get_block(explorer, number, with_transactions))
