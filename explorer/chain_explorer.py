from typing import Optional

from config.settings import Settings, settings as default_settings
from explorer.assemblers.address_assembler import AddressAssembler
from explorer.assemblers.block_assembler import BlockAssembler
from explorer.assemblers.network_assembler import NetworkAssembler
from explorer.assemblers.transaction_assembler import TransactionAssembler
from explorer.executors.retry_executor import RetryExecutor
from explorer.rpc_client import RpcClient
from explorer.service.eth_contract_inspector_service import EthContractInspectorService
from explorer.service.eth_name_service import EthNameService
from explorer.service.eth_token_balance_service import EthTokenBalanceService
from explorer.transport import Transport
from utils.logger_utils import get_logger

logger = get_logger("Chain Explorer")


class ChainExplorer(object):
    """
    Wires one transport to the services and assemblers built on top of it.

    Usage::

        async with ChainExplorer.from_settings() as explorer:
            block = await explorer.blocks.get_block(19_000_000)
    """

    def __init__(
        self,
        transport: Transport,
        retry_executor: Optional[RetryExecutor] = None,
        token_balance_service: Optional[EthTokenBalanceService] = None,
    ):
        self.transport = transport
        self.retry_executor = retry_executor or RetryExecutor()

        self.names = EthNameService(transport, self.retry_executor)
        self.contracts = EthContractInspectorService(transport, self.retry_executor)
        self.token_balances = token_balance_service or EthTokenBalanceService(transport, self.retry_executor)

        self.blocks = BlockAssembler(transport, self.retry_executor, self.names)
        self.transactions = TransactionAssembler(transport, self.retry_executor, self.names)
        self.addresses = AddressAssembler(
            transport, self.retry_executor, self.names, self.contracts, self.token_balances
        )
        self.network = NetworkAssembler(transport, self.retry_executor)

    @classmethod
    def from_settings(cls, config: Settings = default_settings, rpc_url: Optional[str] = None) -> "ChainExplorer":
        rpc_url = rpc_url or config.rpc.rpc_url
        logger.info(f"Connecting to Ethereum node at {rpc_url}")

        transport = RpcClient(rpc_url, timeout=config.rpc.request_timeout)
        retry_executor = RetryExecutor(max_retries=config.rpc.max_retries, base_delay=config.rpc.retry_base_delay)
        token_balance_service = EthTokenBalanceService(
            transport,
            retry_executor,
            timeout=config.enrichment.token_scan_timeout,
            concurrency=config.enrichment.token_scan_concurrency,
        )
        return cls(transport, retry_executor, token_balance_service)

    @property
    def endpoint(self) -> str:
        return self.transport.endpoint

    async def close(self) -> None:
        await self.transport.close()

    async def __aenter__(self) -> "ChainExplorer":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
