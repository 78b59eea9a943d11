"""
Tests for address validation and extraction.
"""
from __future__ import annotations

import pytest

from fixtures import ADDR_A, ADDR_A_UPPER, ADDR_B, ADDR_C, BAD_CHECKSUM, CHECKSUMMED

from linea_allocation_bot.addresses import extract_addresses, is_valid_address, to_checksum


class TestIsValidAddress:

    @pytest.mark.parametrize("candidate", [ADDR_A, ADDR_A_UPPER, CHECKSUMMED, CHECKSUMMED.lower()])
    def test_accepts_well_formed(self, candidate):
        assert is_valid_address(candidate)

    def test_trims_whitespace(self):
        assert is_valid_address(f"  {ADDR_B}\n")

    @pytest.mark.parametrize("candidate", [
        None,
        "",
        123,
        ADDR_A[:-1],             # 41 characters
        ADDR_A + "0",            # 43 characters
        ADDR_A[2:],              # no prefix
        "0X" + ADDR_A[2:],       # uppercase prefix
        ADDR_A[:-1] + "g",       # non-hex digit
        "0x" + " " * 40,
    ])
    def test_rejects_malformed(self, candidate):
        assert not is_valid_address(candidate)

    def test_rejects_bad_mixed_case_checksum(self):
        assert not is_valid_address(BAD_CHECKSUM)

    @pytest.mark.parametrize("candidate", [
        "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed",
        "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359",
    ])
    def test_accepts_correct_checksum(self, candidate):
        assert is_valid_address(candidate)

    @pytest.mark.parametrize("candidate", [
        "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAeD",
        "0xfb6916095ca1df60bB79Ce92cE3Ea74c37c5d359",
    ])
    def test_rejects_any_flipped_letter(self, candidate):
        assert not is_valid_address(candidate)

    def test_digits_only_address_has_no_checksum(self):
        assert is_valid_address("0x" + "1234567890" * 4)

    def test_to_checksum_restores_display_form(self):
        assert to_checksum(CHECKSUMMED.lower()) == CHECKSUMMED


class TestExtractAddresses:

    @pytest.mark.parametrize("text", [
        "",
        "hello there, no wallets here",
        "0x1234",
        "0x" + "z" * 40,
    ])
    def test_no_candidates_yields_empty_list(self, text):
        assert extract_addresses(text) == []

    def test_non_string_input_yields_empty_list(self):
        assert extract_addresses(None) == []

    def test_preserves_first_seen_order(self):
        text = f"first {ADDR_C}, then {ADDR_A}; finally {ADDR_B}"
        assert extract_addresses(text) == [ADDR_C, ADDR_A, ADDR_B]

    def test_deduplicates_case_insensitively_keeping_first_spelling(self):
        text = f"{ADDR_A_UPPER}\n{ADDR_B}\n{ADDR_A}\n{ADDR_B.upper().replace('0X', '0x')}"
        assert extract_addresses(text) == [ADDR_A_UPPER, ADDR_B]

    def test_n_minus_k_unique(self):
        addresses = [ADDR_A, ADDR_B, ADDR_C]
        text = " ".join(addresses + [ADDR_A, ADDR_C])
        result = extract_addresses(text)
        assert len(result) == 3
        assert result == addresses

    def test_discards_bad_checksum_but_keeps_later_valid_spelling(self):
        text = f"{BAD_CHECKSUM} {CHECKSUMMED}"
        assert extract_addresses(text) == [CHECKSUMMED]

    def test_addresses_embedded_in_markup(self):
        text = f"wallet:{ADDR_A},`{ADDR_B}`"
        assert extract_addresses(text) == [ADDR_A, ADDR_B]

    def test_greedy_non_overlapping_matching(self):
        # 44 hex digits: only the first 40 form a candidate
        text = ADDR_A + "beef"
        assert extract_addresses(text) == [ADDR_A]
