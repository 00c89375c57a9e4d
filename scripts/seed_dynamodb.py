"""Seed DynamoDB tables with a sample company and pending ACH batch.

Usage:
    python scripts/seed_dynamodb.py --endpoint-url http://localhost:4566
"""

from __future__ import annotations

import argparse
import json
from decimal import Decimal
from pathlib import Path
from typing import Any

import boto3

TABLE_DEFINITIONS: list[dict[str, Any]] = [
    {"name": "nachagen-ach-batches"},
    {"name": "nachagen-company-settings"},
    {"name": "nachagen-audit-log"},
]

SAMPLE_PATH = Path(__file__).resolve().parent.parent / "config" / "sample_batch.json"


def create_tables(ddb: Any, suffix: str = "") -> None:
    """Create all nachagen tables. Skips if table already exists."""
    client = ddb.meta.client
    existing = client.list_tables().get("TableNames", [])

    for defn in TABLE_DEFINITIONS:
        table_name = f"{defn['name']}{suffix}"
        if table_name in existing:
            print(f"  Table {table_name} already exists, skipping")
            continue
        client.create_table(
            TableName=table_name,
            KeySchema=[
                {"AttributeName": "PK", "KeyType": "HASH"},
                {"AttributeName": "SK", "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "PK", "AttributeType": "S"},
                {"AttributeName": "SK", "AttributeType": "S"},
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        print(f"  Created table {table_name}")


def _json_to_dynamodb(obj: Any) -> Any:
    """Convert JSON-parsed floats to Decimal for DynamoDB."""
    if isinstance(obj, float):
        return Decimal(str(obj))
    if isinstance(obj, dict):
        return {k: _json_to_dynamodb(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_json_to_dynamodb(i) for i in obj]
    return obj


def seed_sample_batch(ddb: Any, suffix: str = "", sample_path: Path = SAMPLE_PATH) -> dict[str, Any]:
    """Load sample_batch.json into the company, batch and entry tables."""
    data = json.loads(sample_path.read_text())
    company = data["company"]
    batch = data["batch"]

    tbl = ddb.Table(f"nachagen-company-settings{suffix}")
    tbl.put_item(Item={
        "PK": f"COMPANY#{company['company_id']}", "SK": "ACH",
        **_json_to_dynamodb(company),
    })
    print(f"  Seeded company {company['company_id']}")

    tbl = ddb.Table(f"nachagen-ach-batches{suffix}")
    with tbl.batch_writer() as writer:
        writer.put_item(Item={"PK": f"BATCH#{batch['batch_id']}", "SK": "BATCH", **_json_to_dynamodb(batch)})
        for entry in data["entries"]:
            item = _json_to_dynamodb(entry)
            item["amount"] = Decimal(str(entry["amount"]))
            writer.put_item(Item={
                "PK": f"BATCH#{batch['batch_id']}",
                "SK": f"ENTRY#{entry['entry_id']}",
                **item,
            })
    print(f"  Seeded batch {batch['batch_id']} with {len(data['entries'])} entries")
    return data


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed DynamoDB tables for nachagen")
    parser.add_argument("--endpoint-url", default=None, help="DynamoDB endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--table-suffix", default="", help="Table name suffix (e.g. -dev)")
    parser.add_argument("--region", default="us-east-1", help="AWS region")
    parser.add_argument("--sample", default=str(SAMPLE_PATH), help="Sample batch JSON file")
    args = parser.parse_args()

    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url

    ddb = boto3.resource("dynamodb", **kwargs)

    print("Creating tables...")
    create_tables(ddb, suffix=args.table_suffix)

    print("Seeding data...")
    seed_sample_batch(ddb, suffix=args.table_suffix, sample_path=Path(args.sample))

    print("Done!")


if __name__ == "__main__":
    main()
