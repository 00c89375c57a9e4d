"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic_settings import BaseSettings


class DynamoDBConfig(BaseSettings):
    """DynamoDB configuration for the batch store."""

    model_config = {"env_prefix": "NACHAGEN_DYNAMO_"}

    table_suffix: str = ""  # "-dev", "-uat", or "" for prod
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override


class RedisConfig(BaseSettings):
    """Redis cache configuration."""

    model_config = {"env_prefix": "NACHAGEN_REDIS_"}

    enabled: bool = True
    host: str = "localhost"
    port: int = 6379
    db: int = 0


class S3Config(BaseSettings):
    """S3 artifact storage configuration."""

    model_config = {"env_prefix": "NACHAGEN_S3_"}

    bucket: str = "nachagen-ach-files"
    region: str = "us-east-1"
    endpoint_url: str | None = None  # LocalStack override
    prefix: str = "nacha/"


class LocalStorageConfig(BaseSettings):
    """Filesystem artifact storage, used by the CLI and local development."""

    model_config = {"env_prefix": "NACHAGEN_LOCAL_"}

    output_dir: str = "output"


class NachaConfig(BaseSettings):
    """Batch-level NACHA options and pre-encoding limits."""

    model_config = {"env_prefix": "NACHAGEN_NACHA_"}

    file_id_modifier: str = "A"
    service_class_code: str = "200"  # mixed debits and credits
    standard_entry_class: str = "PPD"
    entry_description: str = "PAYROLL"
    default_transaction_code: str = "22"  # automated deposit, checking

    max_per_transaction: Decimal | None = None
    max_per_file: Decimal | None = None
    validate_routing_checksum: bool = False

    settings_cache_ttl: int = 300


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "NACHAGEN_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"
    log_format: Literal["standard", "json"] = "standard"
    storage_backend: Literal["s3", "local"] = "s3"

    dynamodb: DynamoDBConfig = DynamoDBConfig()
    redis: RedisConfig = RedisConfig()
    s3: S3Config = S3Config()
    local: LocalStorageConfig = LocalStorageConfig()
    nacha: NachaConfig = NachaConfig()
