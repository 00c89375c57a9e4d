"""Integration tests for DynamoDBBatchStore and a full run against LocalStack."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from nachagen.core.config import AppSettings
from nachagen.persistence.dynamodb_backend import DynamoDBBatchStore
from nachagen.persistence.s3_backend import S3FileStore
from nachagen.services.generator import NachaFileGenerator
from tests.integration.conftest import BUCKET, LOCALSTACK_URL, skip_no_localstack


@skip_no_localstack
class TestDynamoDBIntegration:
    @pytest.fixture
    def store(self, seeded_tables):
        return DynamoDBBatchStore(
            table_suffix=seeded_tables,
            region="us-east-1",
            endpoint_url=LOCALSTACK_URL,
        )

    def test_company_from_seed(self, store):
        company = store.get_company_settings("acme")
        assert company.company_name == "Acme Co"
        assert company.ach_routing_number == "123456789"

    def test_pending_entries_from_seed(self, store):
        entries = store.get_pending_entries("batch-0001")
        assert [e.entry_id for e in entries] == ["e-0001", "e-0002", "e-0003"]
        assert entries[1].amount == Decimal("2450.75")

    def test_full_generation_run(self, store, localstack_s3):
        generator = NachaFileGenerator(
            store=store,
            file_store=S3FileStore(bucket=BUCKET, endpoint_url=LOCALSTACK_URL),
            settings=AppSettings(),
        )
        result = generator.generate("batch-0001", "acme", date(2024, 6, 1))

        assert result.success
        assert result.storage_path == f"s3://{BUCKET}/nacha/acme/ACH_1_20240601.txt"
        summary = result.nacha_file.summary
        assert summary.total_entries == 3
        assert summary.total_credit_amount == Decimal("100.00")
        assert summary.total_debit_amount == Decimal("2485.85")

        assert store.get_pending_entries("batch-0001") == []
        assert store.get_batch("batch-0001").file_name == "ACH_1_20240601.txt"
