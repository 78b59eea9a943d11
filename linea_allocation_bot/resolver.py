import logging
from typing import Protocol

from .exceptions import AllocationQueryError
from .models import AllocationFailure, AllocationResult, AllocationSuccess

logger = logging.getLogger(__name__)

WEI_SCALE = 10 ** 18


class AllocationTransport(Protocol):
    async def query_allocation(self, address: str) -> int:
        ...


def format_allocation(raw: int, scale: int = WEI_SCALE) -> int:
    """Scale a raw fixed-point value down, keeping only the integer part"""
    return raw // scale


class AllocationResolver:
    """Resolves one address to an AllocationResult; failures are returned, not raised"""

    def __init__(self, transport: AllocationTransport, scale: int = WEI_SCALE):
        self.transport = transport
        self.scale = scale

    async def resolve(self, address: str) -> AllocationResult:
        logger.info(f"Checking allocation for address: {address}")

        try:
            raw = await self.transport.query_allocation(address)
        except AllocationQueryError as e:
            logger.warning(f"Allocation query failed for {address}: {e}")
            return AllocationFailure(reason=str(e))
        except Exception as e:
            logger.error(f"Unexpected error checking allocation for {address}: {e}", exc_info=True)
            return AllocationFailure(reason=str(e) or type(e).__name__)

        if not isinstance(raw, int) or isinstance(raw, bool) or raw < 0:
            logger.warning(f"Contract returned an invalid value for {address}: {raw!r}")
            return AllocationFailure(reason=f"Contract returned an invalid value: {raw!r}")

        logger.info(f"Raw allocation result for {address}: {raw}")
        return AllocationSuccess(raw=raw, display=format_allocation(raw, self.scale))
