"""
Custom exception classes for the Linea allocation bot
"""


class AllocationBotError(Exception):
    """Base exception for allocation bot errors"""
    pass


class ConfigurationError(AllocationBotError):
    """Error in bot configuration"""
    pass


class InvalidAddressError(AllocationBotError):
    """Input is not a well-formed address"""

    def __init__(self, address):
        self.address = address
        super().__init__(f"Invalid address: {address!r}")


class AllocationQueryError(AllocationBotError):
    """Error while querying the allocation contract"""
    pass


class BatchTooLargeError(AllocationBotError):
    """Batch exceeds the configured maximum size"""

    def __init__(self, count: int, limit: int):
        self.count = count
        self.limit = limit
        super().__init__(f"Batch of {count} addresses exceeds the limit of {limit}")
