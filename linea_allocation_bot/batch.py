import asyncio
import logging
from typing import Awaitable, Callable, Iterable, List

from .models import AllocationSuccess, BatchEntry, BatchReport
from .resolver import AllocationResolver

logger = logging.getLogger(__name__)


class BatchCoordinator:
    """Resolve an ordered list of addresses sequentially.

    Addresses are deduplicated case-insensitively; a repeat is recorded as a
    duplicate entry without a network call. Consecutive network calls are
    separated by ``delay_seconds``. Individual failures are recorded and the
    batch always runs to completion. The caller enforces any size limit.
    """

    def __init__(self,
                 resolver: AllocationResolver,
                 delay_seconds: float = 0.1,
                 sleep: Callable[[float], Awaitable[None]] = asyncio.sleep):
        self.resolver = resolver
        self.delay_seconds = delay_seconds
        self._sleep = sleep

    async def run_batch(self, addresses: Iterable[str]) -> BatchReport:
        entries: List[BatchEntry] = []
        seen = set()
        resolved = 0
        found = 0
        total_allocation = 0

        for position, address in enumerate(addresses):
            key = address.strip().lower()
            if key in seen:
                logger.debug(f"Skipping duplicate address at position {position}: {address}")
                entries.append(BatchEntry(position=position, address=address, duplicate=True))
                continue
            seen.add(key)

            if resolved and self.delay_seconds > 0:
                await self._sleep(self.delay_seconds)

            result = await self.resolver.resolve(address)
            resolved += 1

            if isinstance(result, AllocationSuccess) and result.display != 0:
                found += 1
                total_allocation += result.display

            entries.append(BatchEntry(position=position, address=address, result=result))

        total = len(entries)
        unique = len(seen)
        report = BatchReport(
            entries=tuple(entries),
            total=total,
            unique=unique,
            duplicates=total - unique,
            found=found,
            total_allocation=total_allocation,
        )
        logger.info(f"Batch completed: {total} submitted, {unique} unique, "
                    f"{found} with allocation, total {total_allocation}")
        return report
