"""Address validation and extraction from free-form text."""

import logging
import re
from typing import List

from web3 import Web3

logger = logging.getLogger(__name__)

ADDRESS_PATTERN = re.compile(r'0x[a-fA-F0-9]{40}')
EXACT_ADDRESS_PATTERN = re.compile(r'^0x[a-fA-F0-9]{40}$')


def is_valid_address(candidate) -> bool:
    """Check shape (0x + 40 hex) and EIP-55 checksum for mixed-case input"""
    if not candidate or not isinstance(candidate, str):
        return False

    address = candidate.strip()
    if not EXACT_ADDRESS_PATTERN.match(address):
        return False

    # All-lowercase or all-uppercase passes; mixed case must match the checksum
    digits = address[2:]
    if digits == digits.lower() or digits == digits.upper():
        return True
    return Web3.is_checksum_address(address)


def to_checksum(address: str) -> str:
    return Web3.to_checksum_address(address.strip())


def extract_addresses(text) -> List[str]:
    """Find valid addresses in text, deduplicated case-insensitively in first-seen order"""
    if not isinstance(text, str):
        return []

    addresses = []
    seen = set()

    for match in ADDRESS_PATTERN.findall(text):
        key = match.lower()
        if key in seen:
            continue
        if not is_valid_address(match):
            logger.debug(f"Discarding address with bad checksum: {match}")
            continue
        addresses.append(match)
        seen.add(key)

    logger.info(f"Extracted {len(addresses)} unique address(es) from message")
    return addresses
