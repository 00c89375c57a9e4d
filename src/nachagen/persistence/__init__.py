"""Pluggable persistence backends behind Protocol interfaces."""

from __future__ import annotations

from nachagen.core.config import AppSettings
from nachagen.persistence.dynamodb_backend import DynamoDBBatchStore
from nachagen.persistence.local_backend import LocalFileStore
from nachagen.persistence.redis_backend import RedisCacheBackend
from nachagen.persistence.s3_backend import S3FileStore


def create_persistence(settings: AppSettings | None = None):
    """Create wired-up persistence backends from application settings.

    Returns:
        Tuple of (batch_store, cache, file_store). ``cache`` is None when
        Redis is disabled.
    """
    if settings is None:
        settings = AppSettings()

    cache = None
    if settings.redis.enabled:
        cache = RedisCacheBackend(
            host=settings.redis.host,
            port=settings.redis.port,
            db=settings.redis.db,
        )

    batch_store = DynamoDBBatchStore(
        table_suffix=settings.dynamodb.table_suffix,
        region=settings.dynamodb.region,
        endpoint_url=settings.dynamodb.endpoint_url,
        cache=cache,
        cache_ttl=settings.nacha.settings_cache_ttl,
    )

    if settings.storage_backend == "local":
        file_store = LocalFileStore(settings.local.output_dir)
    else:
        file_store = S3FileStore(
            bucket=settings.s3.bucket,
            region=settings.s3.region,
            endpoint_url=settings.s3.endpoint_url,
        )

    return batch_store, cache, file_store
