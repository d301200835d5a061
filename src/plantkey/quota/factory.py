"""Build quota trackers from configuration."""

import logging

from plantkey.config.models import PlantKeyConfig
from plantkey.quota.entitlements import TierEntitlementGate
from plantkey.quota.stores import KeyValueStore, MemoryStore, RedisStore, YamlFileStore
from plantkey.quota.tracker import QuotaTracker
from plantkey.system.path_resolver import PathResolver

logger = logging.getLogger(__name__)


def create_quota_store(config: PlantKeyConfig, path_resolver: PathResolver) -> KeyValueStore:
    """Create the key-value store selected by ``quota.backend``."""
    quota = config.quota
    if quota.backend == "redis":
        logger.info("Using Redis quota store at %s:%d", quota.redis_host, quota.redis_port)
        return RedisStore(host=quota.redis_host, port=quota.redis_port, db=quota.redis_db)
    if quota.backend == "memory":
        return MemoryStore()
    return YamlFileStore(path_resolver.get_quota_state_path())


def create_quota_tracker(
    config: PlantKeyConfig,
    path_resolver: PathResolver,
    store: KeyValueStore | None = None,
) -> QuotaTracker:
    """Create a quota tracker for the configured tier and backend.

    Args:
        config: Loaded application configuration
        path_resolver: Resolves the quota state file for the file backend
        store: Store to use instead of the configured backend

    Returns:
        QuotaTracker gated by the configured user tier
    """
    return QuotaTracker(
        store=store if store is not None else create_quota_store(config, path_resolver),
        entitlements=TierEntitlementGate(config.user_tier),
        limit=config.quota.free_daily_limit,
        count_key=config.quota.count_key,
        date_key=config.quota.date_key,
    )
