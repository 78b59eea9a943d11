"""
Shared fakes and sample addresses for the test suite.
"""
from __future__ import annotations

from typing import Dict, List, Optional

ADDR_A = "0x" + "a" * 36 + "1111"
ADDR_A_UPPER = "0x" + "A" * 36 + "1111"
ADDR_B = "0x" + "b" * 36 + "2222"
ADDR_C = "0x" + "c" * 36 + "3333"
ADDR_D = "0x" + "d" * 36 + "4444"
CONTRACT = "0x" + "e" * 40

# EIP-55 checksummed, plus the same address with one letter's case flipped
CHECKSUMMED = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"
BAD_CHECKSUM = "0xD8dA6BF26964aF9D7eEd9e03E53415D37aA96045"

ONE_AND_A_HALF = 1_500_000_000_000_000_000
WEI = 10 ** 18


class FakeTransport:
    """In-memory stand-in for JsonRpcAllocationTransport"""

    def __init__(self, allocations: Optional[Dict[str, int]] = None,
                 failures: Optional[Dict[str, Exception]] = None,
                 block_number: int = 1234):
        self.allocations = {k.lower(): v for k, v in (allocations or {}).items()}
        self.failures = {k.lower(): v for k, v in (failures or {}).items()}
        self.block_number = block_number
        self.calls: List[str] = []

    async def query_allocation(self, address: str) -> int:
        self.calls.append(address)
        key = address.lower()
        if key in self.failures:
            raise self.failures[key]
        return self.allocations.get(key, 0)

    async def get_block_number(self) -> int:
        return self.block_number


class RecordingSleep:
    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
