"""DynamoDB backend implementing IBatchStore with Redis caching."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import boto3
from boto3.dynamodb.types import TypeSerializer
from botocore.exceptions import ClientError

from nachagen.core.exceptions import BatchStoreError, TraceStampError
from nachagen.models.ach import AchBatch, BatchStatus, CompanySettings, EntryStatus, PaymentEntry
from nachagen.models.nacha_file import EntryTrace, NachaFile

BATCHES_TABLE = "nachagen-ach-batches"
COMPANY_TABLE = "nachagen-company-settings"
AUDIT_TABLE = "nachagen-audit-log"

TRANSACT_CHUNK = 100  # DynamoDB TransactWriteItems item limit

_serializer = TypeSerializer()


def _strip_keys(item: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in item.items() if k not in ("PK", "SK")}


class DynamoDBBatchStore:
    """Production IBatchStore backed by DynamoDB + optional Redis cache.

    Layout (all tables keyed PK/SK):
        nachagen-ach-batches       BATCH#{id} / BATCH, BATCH#{id} / ENTRY#{entry_id}
        nachagen-company-settings  COMPANY#{id} / ACH
        nachagen-audit-log         BATCH#{id} / AUDIT#{timestamp}#{action}
    """

    CACHE_TTL = 300  # 5 minutes

    def __init__(self, table_suffix: str = "", region: str = "us-east-1",
                 endpoint_url: str | None = None, cache: Any = None,
                 cache_ttl: int | None = None) -> None:
        self._table_suffix = table_suffix
        self._region = region
        self._endpoint_url = endpoint_url
        self._cache = cache
        self._cache_ttl = cache_ttl if cache_ttl is not None else self.CACHE_TTL
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._ddb = boto3.resource("dynamodb", **kwargs)
        self._client = boto3.client("dynamodb", **kwargs)

    def _table_name(self, base: str) -> str:
        return f"{base}{self._table_suffix}"

    def _table(self, base: str):
        return self._ddb.Table(self._table_name(base))

    def _get_item(self, table_base: str, pk: str, sk: str) -> dict[str, Any] | None:
        """Get a single item by PK + SK. Returns None if not found."""
        try:
            resp = self._table(table_base).get_item(Key={"PK": pk, "SK": sk})
        except ClientError as exc:
            raise BatchStoreError(f"DynamoDB get failed for {pk}/{sk}: {exc}") from exc
        return resp.get("Item")

    # ---- IBatchStore methods ----

    def get_batch(self, batch_id: str) -> AchBatch | None:
        item = self._get_item(BATCHES_TABLE, f"BATCH#{batch_id}", "BATCH")
        return AchBatch.model_validate({"batch_id": batch_id, **_strip_keys(item)}) if item else None

    def get_company_settings(self, company_id: str) -> CompanySettings | None:
        cache_key = f"company_ach:{company_id}"

        if self._cache is not None:
            cached = self._cache.get(cache_key)
            if cached is not None:
                return CompanySettings.model_validate_json(cached)

        item = self._get_item(COMPANY_TABLE, f"COMPANY#{company_id}", "ACH")
        if item is None:
            return None
        settings = CompanySettings.model_validate({"company_id": company_id, **_strip_keys(item)})

        if self._cache is not None:
            self._cache.setex(cache_key, self._cache_ttl, settings.model_dump_json())

        return settings

    def get_pending_entries(self, batch_id: str) -> list[PaymentEntry]:
        """Pending entry rows of a batch, ordered by ``sequence``.

        A batch committed as generated has no pending entries, whatever its
        entry rows still say.
        """
        batch = self.get_batch(batch_id)
        if batch is not None and batch.status == BatchStatus.GENERATED:
            return []

        tbl = self._table(BATCHES_TABLE)
        query: dict[str, Any] = {
            "KeyConditionExpression": "PK = :pk AND begins_with(SK, :entry)",
            "FilterExpression": "#status = :pending",
            "ExpressionAttributeNames": {"#status": "status"},
            "ExpressionAttributeValues": {
                ":pk": f"BATCH#{batch_id}",
                ":entry": "ENTRY#",
                ":pending": EntryStatus.PENDING.value,
            },
        }
        items: list[dict[str, Any]] = []
        try:
            while True:
                resp = tbl.query(**query)
                items.extend(resp.get("Items", []))
                if "LastEvaluatedKey" not in resp:
                    break
                query["ExclusiveStartKey"] = resp["LastEvaluatedKey"]
        except ClientError as exc:
            raise BatchStoreError(f"DynamoDB entry query failed for batch {batch_id!r}: {exc}") from exc

        entries = [PaymentEntry.model_validate(_strip_keys(item)) for item in items]
        return sorted(entries, key=lambda e: e.sequence)

    def save_generated_file(self, batch_id: str, nacha_file: NachaFile, storage_path: str) -> None:
        """Record file metadata on a batch that has not been committed yet."""
        summary = nacha_file.summary
        try:
            self._table(BATCHES_TABLE).update_item(
                Key={"PK": f"BATCH#{batch_id}", "SK": "BATCH"},
                UpdateExpression=(
                    "SET file_name = :file_name, storage_path = :path, "
                    "nacha_file_content = :content, total_entries = :entries, "
                    "total_credit_amount = :credits, total_debit_amount = :debits, "
                    "entry_hash = :hash"
                ),
                ConditionExpression=(
                    "attribute_exists(PK) AND (attribute_not_exists(#status) OR #status <> :generated)"
                ),
                ExpressionAttributeNames={"#status": "status"},
                ExpressionAttributeValues={
                    ":generated": BatchStatus.GENERATED.value,
                    ":file_name": nacha_file.file_name,
                    ":path": storage_path,
                    ":content": nacha_file.content,
                    ":entries": summary.total_entries,
                    ":credits": summary.total_credit_amount,
                    ":debits": summary.total_debit_amount,
                    ":hash": summary.entry_hash,
                },
            )
        except ClientError as exc:
            raise BatchStoreError(f"DynamoDB batch update failed for {batch_id!r}: {exc}") from exc

    def append_audit_log(
        self, batch_id: str, company_id: str, action_type: str, details: dict[str, Any]
    ) -> None:
        now = datetime.now(timezone.utc).isoformat()
        try:
            self._table(AUDIT_TABLE).put_item(Item={
                "PK": f"BATCH#{batch_id}",
                "SK": f"AUDIT#{now}#{action_type}",
                "company_id": company_id,
                "batch_id": batch_id,
                "action_type": action_type,
                "action_details": details,
                "performed_by": "system",
                "created_at": now,
            })
        except ClientError as exc:
            raise BatchStoreError(f"DynamoDB audit write failed for {batch_id!r}: {exc}") from exc

    def _commit_op(self, batch_id: str) -> dict[str, Any]:
        return {
            "Update": {
                "TableName": self._table_name(BATCHES_TABLE),
                "Key": {
                    "PK": _serializer.serialize(f"BATCH#{batch_id}"),
                    "SK": _serializer.serialize("BATCH"),
                },
                "UpdateExpression": "SET #status = :generated, generated_at = :generated_at",
                "ConditionExpression": (
                    "attribute_exists(PK) AND (attribute_not_exists(#status) OR #status <> :generated)"
                ),
                "ExpressionAttributeNames": {"#status": "status"},
                "ExpressionAttributeValues": {
                    ":generated": _serializer.serialize(BatchStatus.GENERATED.value),
                    ":generated_at": _serializer.serialize(datetime.now(timezone.utc).isoformat()),
                },
            }
        }

    def _stamp_op(self, batch_id: str, trace: EntryTrace) -> dict[str, Any]:
        return {
            "Update": {
                "TableName": self._table_name(BATCHES_TABLE),
                "Key": {
                    "PK": _serializer.serialize(f"BATCH#{batch_id}"),
                    "SK": _serializer.serialize(f"ENTRY#{trace.entry_id}"),
                },
                "UpdateExpression": "SET #status = :processed, trace_number = :trace",
                "ConditionExpression": "#status = :pending",
                "ExpressionAttributeNames": {"#status": "status"},
                "ExpressionAttributeValues": {
                    ":processed": _serializer.serialize(EntryStatus.PROCESSED.value),
                    ":pending": _serializer.serialize(EntryStatus.PENDING.value),
                    ":trace": _serializer.serialize(trace.trace_number),
                },
            }
        }

    def mark_entries_processed(self, batch_id: str, traces: list[EntryTrace]) -> None:
        """Commit the batch as generated and stamp its entries processed.

        The batch status flip travels in the same transaction as the first
        entry rows and is the commit point: once it lands, every entry of the
        batch counts as processed. Later chunks only stamp trace numbers onto
        the remaining rows; a failure there raises TraceStampError.
        """
        stamps = [self._stamp_op(batch_id, trace) for trace in traces]
        first = [self._commit_op(batch_id)] + stamps[:TRANSACT_CHUNK - 1]
        try:
            self._client.transact_write_items(TransactItems=first)
        except ClientError as exc:
            raise BatchStoreError(f"DynamoDB commit failed for batch {batch_id!r}: {exc}") from exc

        remaining = stamps[TRANSACT_CHUNK - 1:]
        for start in range(0, len(remaining), TRANSACT_CHUNK):
            try:
                self._client.transact_write_items(TransactItems=remaining[start:start + TRANSACT_CHUNK])
            except ClientError as exc:
                unstamped = len(remaining) - start
                raise TraceStampError(
                    f"Batch {batch_id!r} committed but {unstamped} entry rows were not stamped: {exc}"
                ) from exc
