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

from explorer.models.transaction import EthTransaction
from utils.formatter_utils import hex_to_dec, to_normalized_address


class EthTransactionMapper(object):
    @staticmethod
    def json_dict_to_transaction(json_dict: Dict[str, Any]) -> EthTransaction:
        return EthTransaction(
            hash=(json_dict.get("hash") or "").lower() or None,
            nonce=hex_to_dec(json_dict.get("nonce")) or 0,
            block_number=hex_to_dec(json_dict.get("blockNumber")),
            transaction_index=hex_to_dec(json_dict.get("transactionIndex")),
            from_address=to_normalized_address(json_dict.get("from")),
            to_address=to_normalized_address(json_dict.get("to")),
            value=hex_to_dec(json_dict.get("value")) or 0,
            gas=hex_to_dec(json_dict.get("gas")) or 0,
            gas_price=hex_to_dec(json_dict.get("gasPrice")),
            input=json_dict.get("input") or "0x",
            max_fee_per_gas=hex_to_dec(json_dict.get("maxFeePerGas")),
            max_priority_fee_per_gas=hex_to_dec(json_dict.get("maxPriorityFeePerGas")),
            # Pre-Berlin nodes omit the type field for legacy transactions
            transaction_type=hex_to_dec(json_dict.get("type")) or 0,
            max_fee_per_blob_gas=hex_to_dec(json_dict.get("maxFeePerBlobGas")),
            access_list=json_dict.get("accessList"),
            blob_versioned_hashes=json_dict.get("blobVersionedHashes") or [],
        )
