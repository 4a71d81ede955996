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

from explorer.models.receipt_log import EthReceiptLog
from utils.formatter_utils import hex_to_dec, to_normalized_address


class EthReceiptLogMapper(object):
    @staticmethod
    def json_dict_to_receipt_log(json_dict: Dict[str, Any]) -> EthReceiptLog:
        return EthReceiptLog(
            log_index=hex_to_dec(json_dict.get("logIndex")),
            transaction_hash=json_dict.get("transactionHash"),
            address=to_normalized_address(json_dict.get("address")),
            data=json_dict.get("data") or "0x",
            topics=[topic.lower() for topic in json_dict.get("topics") or []],
        )
