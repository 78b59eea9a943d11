"""
Pytest configuration and fixtures for the allocation bot.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the fixtures module importable from test files
_TESTS_DIR = Path(__file__).parent
if str(_TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(_TESTS_DIR))

from fixtures import CONTRACT, FakeTransport, RecordingSleep

from linea_allocation_bot.config import BotConfig


@pytest.fixture
def config() -> BotConfig:
    return BotConfig(
        telegram_token="123:abc",
        contract_address=CONTRACT,
        rpc_url="https://rpc.example.test",
        explorer_url="https://explorer.example.test",
        batch_delay_seconds=0.1,
    )


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()
