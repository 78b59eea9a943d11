"""
Connectivity self-test.

Calls calculateAllocation() for the zero address and reads the current block
number through the same transport the bot uses. Exits with status 1 on
failure.

    python -m linea_allocation_bot.diagnostics
"""

import asyncio
import logging
import sys
from typing import Optional

from .config import BotConfig
from .exceptions import AllocationQueryError, ConfigurationError
from .resolver import format_allocation
from .rpc import JsonRpcAllocationTransport, build_session

logger = logging.getLogger(__name__)

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def suggestion_for(error: Exception) -> Optional[str]:
    message = str(error).lower()
    if 'network' in message or 'timed out' in message or 'http' in message:
        return "Check your internet connection or try a different RPC URL (CUSTOM_RPC_URL)"
    if 'contract' in message or 'revert' in message or 'empty result' in message:
        return "Verify the contract address (CONTRACT_ADDRESS)"
    return None


async def run_diagnostics(config: BotConfig) -> int:
    """Returns the current block number; raises AllocationQueryError on failure"""
    logger.info(f"Testing contract {config.contract_address} via {config.rpc_url}")

    async with build_session(config) as session:
        transport = JsonRpcAllocationTransport(session, config.rpc_url, config.contract_address)

        raw = await transport.query_allocation(ZERO_ADDRESS)
        logger.info(f"Contract call successful, raw result for {ZERO_ADDRESS}: {raw}")
        logger.info(f"Formatted allocation: {format_allocation(raw, config.scale)}")

        block_number = await transport.get_block_number()
        logger.info(f"Current block: {block_number}")
        return block_number


def main() -> int:
    logging.basicConfig(format='%(asctime)s - %(name)s - %(levelname)s - %(message)s', level=logging.INFO)

    try:
        config = BotConfig.from_environment()
        asyncio.run(run_diagnostics(config))
    except (AllocationQueryError, ConfigurationError) as e:
        logger.error(f"Test failed: {e}")
        hint = suggestion_for(e)
        if hint:
            logger.info(f"Suggestion: {hint}")
        return 1

    logger.info("All checks passed. The bot should work correctly.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
