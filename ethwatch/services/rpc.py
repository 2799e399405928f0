from __future__ import annotations

import logging
import re
from typing import Any

import httpx
from pydantic import ValidationError

from ethwatch.config import settings
from ethwatch.models.transaction import NodeTransaction, Transaction
from ethwatch.utils.errors import DecodeError, FormatError, TransportError

logger = logging.getLogger("rpc")

_HEX_QUANTITY = re.compile(r"^0x[0-9a-fA-F]+$")


def parse_hex_quantity(value: str) -> int:
    """Parse a JSON-RPC quantity such as ``"0x64"``. Raises FormatError."""
    if not _HEX_QUANTITY.match(value):
        raise FormatError(f"Not a hex quantity: {value!r}")
    return int(value, 16)


class EthRpcClient:
    def __init__(
        self,
        rpc_url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._url = rpc_url
        self._timeout = timeout if timeout is not None else settings.rpc_timeout_seconds
        self._transport = transport
        self._id = 0
        self._client: httpx.AsyncClient | None = None

    @property
    def url(self) -> str:
        return self._url

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    def _next_id(self, request_id: int | None) -> int:
        if request_id is not None:
            return request_id
        self._id += 1
        return self._id

    async def _call(
        self, method: str, params: list | None = None, request_id: int | None = None
    ) -> dict[str, Any]:
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params or [],
            "id": self._next_id(request_id),
        }
        client = self._get_client()
        try:
            resp = await client.post(self._url, json=payload)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise TransportError(f"{method} failed: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise DecodeError(f"{method} returned invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise DecodeError(f"{method} returned {type(data).__name__}, expected object")
        if data.get("error") is not None:
            raise DecodeError(f"RPC error from {method}: {data['error']}")
        return data

    async def current_height(self, request_id: int | None = None) -> int:
        data = await self._call("eth_blockNumber", request_id=request_id)
        result = data.get("result")
        if not isinstance(result, str):
            raise DecodeError(f"Unexpected eth_blockNumber result: {result!r}")
        return parse_hex_quantity(result)

    async def block_transactions(
        self, block_number: int, request_id: int | None = None
    ) -> list[Transaction]:
        hex_block = hex(block_number)
        data = await self._call(
            "eth_getBlockByNumber", [hex_block, True], request_id=request_id
        )
        block = data.get("result")
        if not isinstance(block, dict):
            raise DecodeError(f"Invalid block data for block {block_number}: {block!r}")

        raw_txs = block.get("transactions")
        if raw_txs is None:
            logger.warning(f"No transactions found for block {block_number}")
            return []
        if not isinstance(raw_txs, list):
            raise DecodeError(
                f"Block {block_number} transactions is {type(raw_txs).__name__}, expected array"
            )

        transactions: list[Transaction] = []
        for i, raw in enumerate(raw_txs):
            try:
                node_tx = NodeTransaction.model_validate(raw)
            except ValidationError as e:
                raise DecodeError(
                    f"Malformed transaction #{i} in block {block_number}: {e}"
                ) from e
            transactions.append(node_tx.stamped(block_number))
        return transactions
