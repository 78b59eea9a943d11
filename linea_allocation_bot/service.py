from typing import Sequence

from .addresses import is_valid_address
from .batch import BatchCoordinator
from .config import BotConfig
from .exceptions import BatchTooLargeError, InvalidAddressError
from .models import AllocationResult, BatchReport
from .resolver import AllocationResolver, AllocationTransport


def ensure_batch_size(addresses: Sequence[str], limit: int) -> None:
    """Reject a batch above the configured maximum before any processing"""
    if len(addresses) > limit:
        raise BatchTooLargeError(len(addresses), limit)


class AllocationChecker:
    """Entry point for collaborators: single checks and batch checks"""

    def __init__(self, resolver: AllocationResolver, coordinator: BatchCoordinator):
        self.resolver = resolver
        self.coordinator = coordinator

    @classmethod
    def from_config(cls, transport: AllocationTransport, config: BotConfig) -> 'AllocationChecker':
        resolver = AllocationResolver(transport, scale=config.scale)
        coordinator = BatchCoordinator(resolver, delay_seconds=config.batch_delay_seconds)
        return cls(resolver, coordinator)

    async def check_single(self, address: str) -> AllocationResult:
        if not is_valid_address(address):
            raise InvalidAddressError(address)
        return await self.resolver.resolve(address.strip())

    async def check_batch(self, addresses: Sequence[str]) -> BatchReport:
        return await self.coordinator.run_batch(addresses)
