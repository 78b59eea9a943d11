"""
Tests for the collaborator-facing checker and the batch size guard.
"""
from __future__ import annotations

import asyncio

import pytest

from fixtures import ADDR_A, ADDR_B, BAD_CHECKSUM, WEI, FakeTransport

from linea_allocation_bot.exceptions import BatchTooLargeError, InvalidAddressError
from linea_allocation_bot.models import AllocationSuccess
from linea_allocation_bot.service import AllocationChecker, ensure_batch_size


class TestCheckSingle:

    def test_zero_allocation_reports_success(self, config, transport):
        checker = AllocationChecker.from_config(transport, config)
        result = asyncio.run(checker.check_single(ADDR_A))

        assert result == AllocationSuccess(raw=0, display=0)
        assert str(result.raw) == "0"
        assert str(result.display) == "0"

    def test_invalid_address_raises_without_network_call(self, config, transport):
        checker = AllocationChecker.from_config(transport, config)

        with pytest.raises(InvalidAddressError):
            asyncio.run(checker.check_single(BAD_CHECKSUM))
        with pytest.raises(InvalidAddressError):
            asyncio.run(checker.check_single("0x123"))
        assert transport.calls == []

    def test_whitespace_is_trimmed_before_query(self, config, transport):
        checker = AllocationChecker.from_config(transport, config)
        asyncio.run(checker.check_single(f" {ADDR_A} "))
        assert transport.calls == [ADDR_A]


class TestCheckBatch:

    def test_uses_configured_pacing(self, config, transport):
        checker = AllocationChecker.from_config(transport, config)
        assert checker.coordinator.delay_seconds == config.batch_delay_seconds

    def test_zero_result_does_not_increment_found(self, config):
        transport = FakeTransport(allocations={ADDR_B: 9 * WEI})
        checker = AllocationChecker.from_config(transport, config)
        checker.coordinator.delay_seconds = 0

        report = asyncio.run(checker.check_batch([ADDR_A, ADDR_B]))
        assert report.found == 1
        assert report.total_allocation == 9


class TestEnsureBatchSize:

    def test_accepts_limit(self):
        ensure_batch_size([ADDR_A] * 50, 50)

    def test_rejects_over_limit(self):
        with pytest.raises(BatchTooLargeError) as exc_info:
            ensure_batch_size([ADDR_A] * 51, 50)
        assert exc_info.value.count == 51
        assert exc_info.value.limit == 50
