"""Linea allocation checker: resolve calculateAllocation() for one or many addresses."""

from .addresses import extract_addresses, is_valid_address, to_checksum
from .batch import BatchCoordinator
from .exceptions import (
    AllocationBotError,
    AllocationQueryError,
    BatchTooLargeError,
    ConfigurationError,
    InvalidAddressError,
)
from .models import AllocationFailure, AllocationResult, AllocationSuccess, BatchEntry, BatchReport
from .resolver import AllocationResolver
from .service import AllocationChecker

__all__ = [
    "AllocationBotError",
    "AllocationChecker",
    "AllocationFailure",
    "AllocationQueryError",
    "AllocationResolver",
    "AllocationResult",
    "AllocationSuccess",
    "BatchCoordinator",
    "BatchEntry",
    "BatchReport",
    "BatchTooLargeError",
    "ConfigurationError",
    "InvalidAddressError",
    "extract_addresses",
    "is_valid_address",
    "to_checksum",
]
