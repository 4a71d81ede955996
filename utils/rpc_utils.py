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

from utils.exceptions import RpcError


def rpc_response_to_result(method: str, response: Dict[str, Any]) -> Any:
    """
    Extracts ``result`` from a JSON-RPC response object.

    A ``null`` result is returned as None: the node answers ``null`` for unknown
    blocks, transactions and pending receipts.
    """
    if not isinstance(response, dict):
        raise RpcError(method, f"unexpected JSON-RPC response {response!r}")

    error = response.get("error")
    if isinstance(error, dict):
        code = error.get("code")
        message = error.get("message") or "unknown error"
        data = error.get("data")
        if data:
            message = f"{message}: {data}"
        raise RpcError(method, message, code if isinstance(code, int) else None)

    if "result" not in response:
        raise RpcError(method, "unexpected JSON-RPC response (missing result)")
    return response["result"]

