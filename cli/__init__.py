import click

from cli.get_address import get_address
from cli.get_block import get_block
from cli.get_network_info import get_network_info
from cli.get_transaction import get_transaction
from cli.resolve_name import lookup_address, resolve_name


@click.group()
@click.version_option(version="0.1.0")
@click.pass_context
def cli(ctx):
    pass


# Blocks
cli.add_command(get_block, "get_block")

# Transactions
cli.add_command(get_transaction, "get_transaction")

# Accounts
cli.add_command(get_address, "get_address")

# ENS
cli.add_command(resolve_name, "resolve_name")
cli.add_command(lookup_address, "lookup_address")

# Network
cli.add_command(get_network_info, "get_network_info")
