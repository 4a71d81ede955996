import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from cli import cli
from explorer.chain_explorer import ChainExplorer
from explorer.executors.retry_executor import RetryExecutor
from tests.unit.chain_data import FakeTransport, raw_block
from utils.exceptions import RpcError


async def _no_sleep(delay):
    return None


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def runner(transport):
    explorer = ChainExplorer(transport, RetryExecutor(max_retries=1, sleep=_no_sleep))
    with patch("cli.common.ChainExplorer.from_settings", return_value=explorer):
        yield CliRunner()


def test_get_block_prints_json(runner, transport):
    transport.blocks[100] = raw_block(100)

    result = runner.invoke(cli, ["get_block", "100"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["number"] == 100
    assert payload["builder_tag"] is None
    assert transport.closed


def test_get_block_with_transactions(runner, transport):
    transport.blocks[100] = raw_block(100, extra_data="0x" + b"Titan".hex())

    result = runner.invoke(cli, ["get_block", "100", "--with-transactions"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["block"]["builder_tag"] == "Titan"
    assert payload["transactions"] == []


def test_get_network_info(runner, transport):
    transport.block_number = 42

    result = runner.invoke(cli, ["get_network_info"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["latest_block"] == 42


def test_failure_prints_error_chain_and_endpoint(runner, transport):
    transport.failures["eth_getBlockByNumber"] = RpcError("eth_getBlockByNumber", "header not found", -32000)

    result = runner.invoke(cli, ["get_block", "7", "--rpc-url", "http://node.example:8545"])

    assert result.exit_code == 1
    assert "Failed to fetch block #7" in result.output
    assert "caused by: RPC call eth_getBlockByNumber failed" in result.output
    assert "RPC: http://node.example:8545" in result.output


def test_connection_failure_reports_root_cause_once(runner, transport):
    cause = ConnectionError("Cannot connect to host 127.0.0.1:9")
    error = RpcError("eth_getBlockByNumber", f"connection error: {cause}")
    error.__cause__ = cause
    transport.failures["eth_getBlockByNumber"] = error

    result = runner.invoke(cli, ["get_block", "5"])

    assert result.exit_code == 1
    message = result.output[result.output.index("Error: ") :]
    assert message.count("Cannot connect to host 127.0.0.1:9") == 1
    assert "failed after 2 attempts" in message
