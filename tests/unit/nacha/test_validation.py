"""Tests for context and entry validation."""

from __future__ import annotations

from decimal import Decimal

import pytest

from nachagen.core.exceptions import ConfigurationError, EmptyBatchError, ValidationError
from nachagen.nacha.validation import (
    ValidationLimits,
    ensure_valid,
    routing_checksum_ok,
    validate_context,
    validate_entries,
    validate_entry,
)
from tests.fakes import make_context, make_entry


class TestValidateContext:
    def test_complete_context_passes(self):
        assert validate_context(make_context()) == []

    def test_reports_all_missing_identity_fields(self):
        context = make_context(origin_routing_number="", origin_account_number="", company_id="")
        assert validate_context(context) == [
            "Missing origin routing number",
            "Missing origin account number",
            "Missing company ID",
        ]

    def test_routing_must_be_nine_digits(self):
        assert validate_context(make_context(origin_routing_number="12345")) == [
            "Origin routing number must be 9 digits"
        ]

    def test_company_id_width(self):
        assert validate_context(make_context(company_id="CMP00000001")) == [
            "Company ID must be at most 10 characters"
        ]

    def test_non_ascii_destination_name(self):
        context = make_context(immediate_destination_name="Société Générale")
        assert validate_context(context) == ["Immediate destination name must be ASCII"]

    @pytest.mark.parametrize("destination", ["09100001", "09100001X", "٠٩١٠٠٠٠١٩"])
    def test_immediate_destination_must_be_nine_ascii_digits(self, destination):
        assert validate_context(make_context(immediate_destination=destination)) == [
            "Immediate destination must be 9 digits"
        ]

    def test_configured_batch_options_are_checked(self):
        context = make_context(
            file_id_modifier="a",
            service_class_code="2X0",
            standard_entry_class="PPDX",
            entry_description="NÓMINA",
        )
        assert validate_context(context) == [
            "File ID modifier must be one uppercase letter or digit",
            "Service class code must be 3 digits",
            "Standard entry class must be 3 uppercase letters",
            "Entry description must be ASCII",
        ]

    def test_batch_number_must_fit_seven_digits(self):
        assert validate_context(make_context(batch_number=10_000_000)) == [
            "Batch number must be between 0 and 9999999"
        ]


class TestValidateEntry:
    def test_valid_entry(self):
        assert validate_entry(make_entry()) == []

    def test_missing_fields_are_all_reported(self):
        entry = make_entry("e-9", routing_number="", account_number="", amount=None, individual_name="")
        assert validate_entry(entry) == [
            "Entry e-9: Missing routing number",
            "Entry e-9: Missing account number",
            "Entry e-9: Invalid amount",
            "Entry e-9: Missing individual name",
        ]

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5.00")])
    def test_non_positive_amount(self, amount):
        assert validate_entry(make_entry("e-1", amount=amount)) == ["Entry e-1: Invalid amount"]

    def test_routing_format(self):
        assert validate_entry(make_entry("e-1", routing_number="98765432X")) == [
            "Entry e-1: Routing number must be 9 digits"
        ]

    def test_non_ascii_digits_are_not_a_routing_number(self):
        assert validate_entry(make_entry("e-1", routing_number="١٢٣٤٥٦٧٨٩")) == [
            "Entry e-1: Routing number must be 9 digits"
        ]

    def test_sub_cent_amount_rounds_to_zero_and_is_invalid(self):
        assert validate_entry(make_entry("e-1", amount=Decimal("0.004"))) == ["Entry e-1: Invalid amount"]

    def test_half_cent_rounds_up_to_a_valid_amount(self):
        assert validate_entry(make_entry("e-1", amount=Decimal("0.005"))) == []

    def test_amount_must_fit_ten_digit_field(self):
        assert validate_entry(make_entry("e-1", amount=Decimal("99999999.99"))) == []
        assert validate_entry(make_entry("e-1", amount=Decimal("100000000.00"))) == [
            "Entry e-1: Amount 100000000.00 exceeds the 10-digit amount field"
        ]

    def test_account_width(self):
        assert validate_entry(make_entry("e-1", account_number="1" * 18)) == [
            "Entry e-1: Account number exceeds 17 characters"
        ]

    def test_transaction_code_format(self):
        assert validate_entry(make_entry("e-1", transaction_code="2")) == [
            "Entry e-1: Transaction code must be 2 digits"
        ]

    def test_non_ascii_name(self):
        assert validate_entry(make_entry("e-1", individual_name="José Núñez")) == [
            "Entry e-1: Individual name must be ASCII"
        ]

    def test_per_transaction_limit(self):
        limits = ValidationLimits(max_per_transaction=Decimal("50.00"))
        assert validate_entry(make_entry("e-1", amount=Decimal("50.01")), limits) == [
            "Entry e-1: Amount 50.01 exceeds per-transaction limit 50.00"
        ]

    def test_checksum_only_when_enabled(self):
        entry = make_entry("e-1", routing_number="123456789")
        assert validate_entry(entry) == []
        limits = ValidationLimits(validate_routing_checksum=True)
        assert validate_entry(entry, limits) == ["Entry e-1: Routing number fails check digit validation"]


class TestRoutingChecksum:
    @pytest.mark.parametrize("routing", ["021000021", "011000015", "091000019"])
    def test_real_routing_numbers_pass(self, routing):
        assert routing_checksum_ok(routing)

    def test_bad_check_digit_fails(self):
        assert not routing_checksum_ok("021000022")

    def test_wrong_length_fails(self):
        assert not routing_checksum_ok("02100002")


class TestValidateEntries:
    def test_aggregates_across_entries(self):
        entries = [
            make_entry("a", amount=Decimal("-1")),
            make_entry("b"),
            make_entry("c", individual_name=""),
        ]
        assert validate_entries(entries) == [
            "Entry a: Invalid amount",
            "Entry c: Missing individual name",
        ]

    def test_per_file_limit(self):
        limits = ValidationLimits(max_per_file=Decimal("150.00"))
        entries = [make_entry("a"), make_entry("b")]

    def test_batch_totals_must_fit_twelve_digit_fields(self):
        entries = [make_entry(str(i), amount=Decimal("99999999.99")) for i in range(101)]
        assert validate_entries(entries) == [
            "Batch credit total 10099999998.99 exceeds the 12-digit total field"
        ]

    def test_debit_total_checked_separately(self):
        entries = [
            make_entry(str(i), transaction_code="27", amount=Decimal("99999999.99")) for i in range(101)
        ]
        assert validate_entries(entries) == [
            "Batch debit total 10099999998.99 exceeds the 12-digit total field"
        ]
        assert validate_entries(entries, limits) == [
            "Batch total 200.00 exceeds per-file limit 150.00"
        ]


class TestEnsureValid:
    def test_passes(self):
        ensure_valid(make_context(), [make_entry()])

    def test_configuration_checked_before_entries(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ensure_valid(make_context(company_id=""), [make_entry(amount=Decimal("0"))])
        assert exc_info.value.violations == ["Missing company ID"]

    def test_empty_batch(self):
        with pytest.raises(EmptyBatchError):
            ensure_valid(make_context(), [], batch_id="batch-1")

    def test_entry_violations_are_aggregated(self):
        entries = [make_entry("a", amount=Decimal("0")), make_entry("b", account_number="")]
        with pytest.raises(ValidationError) as exc_info:
            ensure_valid(make_context(), entries)
        assert exc_info.value.violations == [
            "Entry a: Invalid amount",
            "Entry b: Missing account number",
        ]
