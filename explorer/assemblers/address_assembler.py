import asyncio

from eth_utils import to_checksum_address

from explorer.executors.retry_executor import RetryExecutor
from explorer.models.address import AddressInfo
from explorer.service.eth_contract_inspector_service import EthContractInspectorService
from explorer.service.eth_name_service import EthNameService
from explorer.service.eth_token_balance_service import EthTokenBalanceService
from explorer.transport import Transport
from utils.exceptions import ExplorerError, FetchError
from utils.logger_utils import get_logger

logger = get_logger("Address Assembler")


class AddressAssembler(object):
    def __init__(
        self,
        transport: Transport,
        retry_executor: RetryExecutor,
        name_service: EthNameService,
        contract_inspector: EthContractInspectorService,
        token_balance_service: EthTokenBalanceService,
    ):
        self._transport = transport
        self._retry_executor = retry_executor
        self._name_service = name_service
        self._contract_inspector = contract_inspector
        self._token_balance_service = token_balance_service

    async def get_address(self, address: str) -> AddressInfo:
        """
        Account record. Balance, nonce and code are required; every contract
        probe, the token scan and the name lookup may fail on its own without
        affecting the rest of the record.
        """
        try:
            address = to_checksum_address(address)
        except ValueError as e:
            raise FetchError("fetch address", address) from e

        try:
            balance = await self._retry_executor.execute(
                lambda: self._transport.get_balance(address), f"eth_getBalance({address})"
            )
            nonce = await self._retry_executor.execute(
                lambda: self._transport.get_transaction_count(address), f"eth_getTransactionCount({address})"
            )
            code = await self._retry_executor.execute(
                lambda: self._transport.get_code(address), f"eth_getCode({address})"
            )
        except ExplorerError as e:
            raise FetchError("fetch address", address) from e

        is_contract = len(code) > 0
        proxy_impl = token_info = owner = None
        token_balances = []
        if is_contract:
            proxy_impl, token_info, owner = await asyncio.gather(
                self._contract_inspector.get_proxy_implementation(address),
                self._contract_inspector.detect_token(address),
                self._contract_inspector.get_owner(address),
            )
            token_balances = await self._token_balance_service.get_token_balances(address)
            logger.debug(
                f"Contract {address}: proxy={proxy_impl}, token={token_info is not None}, "
                f"{len(token_balances)} token balances"
            )

        name = await self._name_service.resolve_name(address)

        return AddressInfo(
            address=address,
            balance=balance,
            nonce=nonce,
            is_contract=is_contract,
            code_size=len(code) if is_contract else None,
            proxy_impl=proxy_impl,
            token_info=token_info,
            name=name,
            owner=owner,
            token_balances=token_balances,
        )
