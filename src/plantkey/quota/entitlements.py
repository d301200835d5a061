"""Entitlement tiers and the gate consumed by the quota tracker.

Purchases happen elsewhere; this module only turns the resulting tier into feature flags.
"""

from abc import ABC, abstractmethod
from enum import Enum


class UserTier(str, Enum):
    """Paid-access level of the current user."""

    FREE = "free"
    LIFETIME = "lifetime"
    PRO = "pro"

    @property
    def can_access_full_content(self) -> bool:
        return self is not UserTier.FREE

    @property
    def can_use_capture(self) -> bool:
        return self in (UserTier.PRO, UserTier.LIFETIME)


class Feature(str, Enum):
    """Features gated by tier."""

    FULL_SPECIES_ACCESS = "full_species_access"
    FULL_FAMILY_ACCESS = "full_family_access"
    FULL_TERM_ACCESS = "full_term_access"
    CAPTURE = "capture"
    BOTH_MODE = "both_mode"
    JOURNAL = "journal"
    COLLECTIONS = "collections"
    CLOUD_SYNC = "cloud_sync"
    UNLIMITED_OBSERVE = "unlimited_observe"

    def is_unlocked_for(self, tier: UserTier) -> bool:
        """Check whether a tier unlocks this feature."""
        if self in (Feature.CAPTURE, Feature.BOTH_MODE, Feature.CLOUD_SYNC):
            return tier.can_use_capture
        return tier.can_access_full_content


class EntitlementGate(ABC):
    """Answers whether the current user may use the local matcher without limit."""

    @abstractmethod
    def has_unlimited_matching(self) -> bool:
        """Return True when the daily quota does not apply."""
        pass


class TierEntitlementGate(EntitlementGate):
    """Entitlement gate backed by a user tier."""

    def __init__(self, tier: UserTier | str = UserTier.FREE) -> None:
        self.tier = UserTier(tier)

    def has_unlimited_matching(self) -> bool:
        return Feature.UNLIMITED_OBSERVE.is_unlocked_for(self.tier)

    def is_feature_unlocked(self, feature: Feature) -> bool:
        """Check an arbitrary feature for the configured tier."""
        return feature.is_unlocked_for(self.tier)


class StaticEntitlementGate(EntitlementGate):
    """Entitlement gate for hosts that compute the flag themselves."""

    def __init__(self, unlimited: bool) -> None:
        self.unlimited = unlimited

    def has_unlimited_matching(self) -> bool:
        return self.unlimited
