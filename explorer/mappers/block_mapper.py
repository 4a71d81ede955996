# MIT License
#
# Copyright (c) 2018 Evgeny Medvedev, evge.medvedev@gmail.com
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

from typing import Any, Dict

from explorer.mappers.transaction_mapper import EthTransactionMapper
from explorer.models.block import EthBlock
from utils.formatter_utils import hex_to_dec, to_normalized_address


class EthBlockMapper(object):
    def __init__(self):
        self.transaction_mapper = EthTransactionMapper()

    def json_dict_to_block(self, json_dict: Dict[str, Any]) -> EthBlock:
        block = EthBlock(
            number=hex_to_dec(json_dict.get("number")),
            hash=json_dict.get("hash"),
            parent_hash=json_dict.get("parentHash"),
            miner=to_normalized_address(json_dict.get("miner")),
            state_root=json_dict.get("stateRoot"),
            receipts_root=json_dict.get("receiptsRoot"),
            transactions_root=json_dict.get("transactionsRoot"),
            extra_data=json_dict.get("extraData") or "0x",
            size=hex_to_dec(json_dict.get("size")),
            gas_limit=hex_to_dec(json_dict.get("gasLimit")) or 0,
            gas_used=hex_to_dec(json_dict.get("gasUsed")) or 0,
            timestamp=hex_to_dec(json_dict.get("timestamp")) or 0,
            base_fee_per_gas=hex_to_dec(json_dict.get("baseFeePerGas")),
            uncles=json_dict.get("uncles") or [],
            blob_gas_used=hex_to_dec(json_dict.get("blobGasUsed")),
            excess_blob_gas=hex_to_dec(json_dict.get("excessBlobGas")),
        )

        transactions = json_dict.get("transactions") or []
        block.transaction_count = len(transactions)
        # Bodies are only present when the block was requested with full transactions
        block.transactions = [
            self.transaction_mapper.json_dict_to_transaction(tx) for tx in transactions if isinstance(tx, dict)
        ]
        block.transaction_hashes = [
            tx.lower() if isinstance(tx, str) else (tx.get("hash") or "").lower() for tx in transactions
        ]

        if "withdrawals" in json_dict:
            block.withdrawals_count = len(json_dict["withdrawals"] or [])

        return block
