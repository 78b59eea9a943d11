"""
Configuration for the Linea allocation bot.

Values come from environment variables once at startup and are immutable for
the lifetime of the process.
"""

import os
from dataclasses import dataclass
from typing import Optional

from .addresses import is_valid_address
from .exceptions import ConfigurationError

DEFAULT_CONTRACT_ADDRESS = "0x87bAa1694381aE3eCaE2660d97fe60404080Eb64"
DEFAULT_RPC_URL = "https://rpc.linea.build"
DEFAULT_EXPLORER_URL = "https://lineascan.build"
DEFAULT_MAX_BATCH_SIZE = 50
DEFAULT_BATCH_DELAY_SECONDS = 0.1
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_TOKEN_DECIMALS = 18


@dataclass(frozen=True)
class BotConfig:
    """Runtime configuration for the bot and the allocation pipeline"""
    telegram_token: Optional[str] = None
    contract_address: str = DEFAULT_CONTRACT_ADDRESS
    rpc_url: str = DEFAULT_RPC_URL
    explorer_url: str = DEFAULT_EXPLORER_URL
    network_name: str = "Linea Mainnet"
    max_batch_size: int = DEFAULT_MAX_BATCH_SIZE
    batch_delay_seconds: float = DEFAULT_BATCH_DELAY_SECONDS
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    token_decimals: int = DEFAULT_TOKEN_DECIMALS

    def __post_init__(self):
        if not is_valid_address(self.contract_address):
            raise ConfigurationError(f"CONTRACT_ADDRESS is not a valid address: {self.contract_address!r}")
        if not self.rpc_url:
            raise ConfigurationError("RPC URL must not be empty")
        if self.max_batch_size < 1:
            raise ConfigurationError("MAX_BATCH_SIZE must be at least 1")
        if self.batch_delay_seconds < 0:
            raise ConfigurationError("BATCH_DELAY_SECONDS must not be negative")
        if self.request_timeout <= 0:
            raise ConfigurationError("REQUEST_TIMEOUT must be positive")
        if self.token_decimals < 0:
            raise ConfigurationError("TOKEN_DECIMALS must not be negative")

    @property
    def scale(self) -> int:
        """Fixed-point divisor applied to raw allocations"""
        return 10 ** self.token_decimals

    def explorer_address_url(self, address: str) -> str:
        return f"{self.explorer_url.rstrip('/')}/address/{address}"

    @classmethod
    def from_environment(cls) -> 'BotConfig':
        """Create configuration from environment variables"""
        try:
            return cls(
                telegram_token=os.getenv('TELEGRAM_BOT_TOKEN') or os.getenv('TELEGRAM_TOKEN'),
                contract_address=os.getenv('CONTRACT_ADDRESS', DEFAULT_CONTRACT_ADDRESS).strip(),
                rpc_url=os.getenv('CUSTOM_RPC_URL') or os.getenv('LINEA_RPC_URL') or DEFAULT_RPC_URL,
                explorer_url=os.getenv('EXPLORER_URL', DEFAULT_EXPLORER_URL),
                network_name=os.getenv('NETWORK_NAME', 'Linea Mainnet'),
                max_batch_size=int(os.getenv('MAX_BATCH_SIZE', str(DEFAULT_MAX_BATCH_SIZE))),
                batch_delay_seconds=float(os.getenv('BATCH_DELAY_SECONDS', str(DEFAULT_BATCH_DELAY_SECONDS))),
                request_timeout=float(os.getenv('REQUEST_TIMEOUT', str(DEFAULT_REQUEST_TIMEOUT))),
                token_decimals=int(os.getenv('TOKEN_DECIMALS', str(DEFAULT_TOKEN_DECIMALS))),
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid numeric configuration value: {e}") from e
