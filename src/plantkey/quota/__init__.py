"""Daily quota and entitlement package.

Configuration-aware construction lives in plantkey.quota.factory so this package can be
imported by the configuration models.
"""

from plantkey.quota.entitlements import (
    EntitlementGate,
    Feature,
    StaticEntitlementGate,
    TierEntitlementGate,
    UserTier,
)
from plantkey.quota.stores import (
    KeyValueStore,
    MemoryStore,
    QuotaStoreError,
    RedisStore,
    YamlFileStore,
)
from plantkey.quota.tracker import QuotaOutcome, QuotaStatus, QuotaTracker

__all__ = [
    "EntitlementGate",
    "Feature",
    "KeyValueStore",
    "MemoryStore",
    "QuotaOutcome",
    "QuotaStatus",
    "QuotaStoreError",
    "QuotaTracker",
    "RedisStore",
    "StaticEntitlementGate",
    "TierEntitlementGate",
    "UserTier",
    "YamlFileStore",
]
