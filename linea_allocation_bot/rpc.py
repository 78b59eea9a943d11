import asyncio
import itertools
import logging
from typing import Any, Dict, List, Optional

import aiohttp
from web3 import Web3

from .config import BotConfig
from .exceptions import AllocationQueryError

logger = logging.getLogger(__name__)

USER_AGENT = 'LineaAllocationBot/1.0'

# 4-byte selector of calculateAllocation(address) -> uint256
CALCULATE_ALLOCATION_SELECTOR = bytes(Web3.keccak(text="calculateAllocation(address)")[:4]).hex()


def build_session(config: BotConfig) -> aiohttp.ClientSession:
    """Create the shared HTTP session used for all RPC calls"""
    connector = aiohttp.TCPConnector(
        limit=20,
        ttl_dns_cache=600,
        use_dns_cache=True,
        keepalive_timeout=30,
        enable_cleanup_closed=True
    )

    timeout = aiohttp.ClientTimeout(total=config.request_timeout, connect=5)
    session = aiohttp.ClientSession(
        connector=connector,
        timeout=timeout,
        headers={'User-Agent': USER_AGENT}
    )
    logger.info(f"Created aiohttp session for {config.rpc_url}")
    return session


def encode_allocation_call(address: str) -> str:
    """ABI-encode calculateAllocation(address) calldata"""
    return f"0x{CALCULATE_ALLOCATION_SELECTOR}{address.strip()[2:].lower().zfill(64)}"


def parse_uint_result(result: Any) -> int:
    """Parse a hex-encoded uint256 eth_call result"""
    if not isinstance(result, str) or not result.startswith('0x'):
        raise AllocationQueryError(f"Malformed RPC result: {result!r}")

    digits = result[2:]
    if not digits:
        # "0x" is what nodes return when there is no contract code at the target
        raise AllocationQueryError("Empty result from contract call (is the contract deployed?)")

    try:
        return int(digits, 16)
    except ValueError:
        raise AllocationQueryError(f"Malformed RPC result: {result!r}")


class JsonRpcAllocationTransport:
    """Read-only contract queries against a single JSON-RPC endpoint.

    The session is owned by the caller and may be shared between requests.
    """

    def __init__(self, session: aiohttp.ClientSession, rpc_url: str, contract_address: str):
        self.session = session
        self.rpc_url = rpc_url
        self.contract_address = contract_address
        self._ids = itertools.count(1)

    async def _call(self, method: str, params: List[Any]) -> Any:
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": next(self._ids)
        }

        try:
            async with self.session.post(self.rpc_url, json=payload) as response:
                if response.status == 429:
                    logger.warning(f"Rate limited on {self.rpc_url} for {method}")
                    raise AllocationQueryError("RPC rate limit exceeded (HTTP 429)")
                if response.status != 200:
                    logger.warning(f"HTTP {response.status} from {self.rpc_url} for {method}")
                    raise AllocationQueryError(f"RPC endpoint returned HTTP {response.status}")
                data = await response.json(content_type=None)
        except asyncio.TimeoutError:
            logger.warning(f"Timeout for {method} on {self.rpc_url}")
            raise AllocationQueryError("RPC request timed out")
        except aiohttp.ClientError as e:
            logger.warning(f"RPC call {method} failed on {self.rpc_url}: {e}")
            raise AllocationQueryError(f"Network error: {e}") from e
        except ValueError as e:
            raise AllocationQueryError(f"Invalid JSON from RPC endpoint: {e}") from e

        if not isinstance(data, dict):
            raise AllocationQueryError(f"Unexpected RPC response: {data!r}")

        error: Optional[Dict[str, Any]] = data.get('error')
        if error is not None:
            message = error.get('message', 'unknown error') if isinstance(error, dict) else str(error)
            logger.debug(f"RPC error on {self.rpc_url}: {error}")
            raise AllocationQueryError(f"RPC error: {message}")

        if 'result' not in data:
            raise AllocationQueryError("RPC response has no result")

        return data['result']

    async def query_allocation(self, address: str) -> int:
        """Call calculateAllocation(address) at the latest block"""
        result = await self._call("eth_call", [{
            "to": self.contract_address,
            "data": encode_allocation_call(address)
        }, "latest"])
        return parse_uint_result(result)

    async def get_block_number(self) -> int:
        result = await self._call("eth_blockNumber", [])
        return parse_uint_result(result)
