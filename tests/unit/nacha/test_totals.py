"""Tests for RunningTotals accumulation."""

from __future__ import annotations

from decimal import Decimal

from nachagen.models.nacha_file import RunningTotals
from nachagen.nacha.totals import fold_totals
from tests.fakes import make_entry


class TestRunningTotals:
    def test_add_returns_new_snapshot(self):
        start = RunningTotals()
        after = start.add(make_entry())
        assert start.entry_count == 0
        assert after.entry_count == 1

    def test_credit_code_counts_as_credit(self):
        totals = RunningTotals().add(make_entry(transaction_code="22", amount=Decimal("100.00")))
        assert totals.total_credit_cents == 10000
        assert totals.total_debit_cents == 0

    def test_non_two_code_counts_as_debit(self):
        totals = RunningTotals().add(make_entry(transaction_code="27", amount=Decimal("100.00")))
        assert totals.total_credit_cents == 0
        assert totals.total_debit_cents == 10000

    def test_savings_credit_code_is_debit(self):
        # Only the leading digit decides; 32 is classified with the debits.
        totals = RunningTotals().add(make_entry(transaction_code="32"))
        assert totals.total_debit_cents == 10000

    def test_entry_hash_uses_first_eight_routing_digits(self):
        totals = RunningTotals().add(make_entry(routing_number="987654321"))
        assert totals.entry_hash == 98765432

    def test_amount_properties(self):
        totals = RunningTotals(total_credit_cents=123457, total_debit_cents=3510)
        assert totals.total_credit_amount == Decimal("1234.57")
        assert totals.total_debit_amount == Decimal("35.10")


class TestFoldTotals:
    def test_fold_sums_everything(self):
        entries = [
            make_entry("a", routing_number="987654321", amount=Decimal("100.00")),
            make_entry("b", routing_number="021000021", amount=Decimal("2450.75"), transaction_code="32"),
            make_entry("c", routing_number="011000015", amount=Decimal("35.10"), transaction_code="27"),
        ]
        totals = fold_totals(entries)
        assert totals.entry_count == 3
        assert totals.entry_hash == 98765432 + 2100002 + 1100001
        assert totals.total_credit_cents == 10000
        assert totals.total_debit_cents == 245075 + 3510

    def test_hash_is_not_truncated_while_accumulating(self):
        entries = [make_entry(str(i), routing_number="999999999") for i in range(200)]
        assert fold_totals(entries).entry_hash == 200 * 99999999

    def test_hash_sum_is_order_independent(self):
        entries = [
            make_entry("a", routing_number="987654321"),
            make_entry("b", routing_number="021000021", transaction_code="27"),
        ]
        assert fold_totals(entries) == fold_totals(list(reversed(entries)))

    def test_empty(self):
        assert fold_totals([]) == RunningTotals()
