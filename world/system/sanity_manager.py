# Sanity manager: capacity and tier calculations plus the per-character tracker

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Mapping, Optional, Sequence
import logging
import math

from django.dispatch import Signal

from utils.stats_utils import normalize_stat_key
from world.system import stat_manager
from .constants import (
    SANITY_MODULE_ID,
    FLAG_SANITY_POOL,
    FLAG_CURRENT_SANITY,
    FLAG_INSANITY_TIER,
    TIER_COEFFICIENTS,
    BASE_TIER,
)

logger = logging.getLogger(__name__)

# Ability trait keys feeding the sanity pool, mapped to AbilityScores fields
MENTAL_ABILITIES = {
    "CHA": "charisma",
    "INT": "intelligence",
    "WIS": "wisdom",
}


# -------------------------------------------------------------
# Pure calculations
# -------------------------------------------------------------


def calc_capacity(cha: int, intel: int, wis: int) -> int:
    """Return the sanity pool granted by the three mental abilities."""
    return (cha + intel + wis) * 2


def calc_sanity_tier(
    capacity: int, coefficients: Sequence[float], current: int
) -> int:
    """Return the insanity tier for ``current`` out of ``capacity``.

    Coefficients are scanned from the loosest to the strictest; the tier is
    the 1-based index of the last coefficient the ratio is at or below,
    stopping at the first one it exceeds. A full pool is always tier 0 and a
    capacity of zero or less means the sanity system does not apply.
    """
    if capacity <= 0:
        return BASE_TIER
    ratio = current / capacity
    if ratio == 1.0:
        return BASE_TIER
    tier = BASE_TIER
    for i, coef in enumerate(coefficients):
        if ratio > coef:
            break
        tier = i + 1
    return tier


def clamp(value: int, capacity: int) -> int:
    """Clamp ``value`` into ``[0, capacity]``, treating negative capacity as 0."""
    return max(0, min(int(value), max(capacity, 0)))


@dataclass(frozen=True)
class AbilityScores:
    charisma: int = 0
    intelligence: int = 0
    wisdom: int = 0

    @classmethod
    def from_entity(cls, entity) -> "AbilityScores":
        """Read the committed mental ability scores of ``entity``."""
        return cls(
            **{
                name: stat_manager.get_ability(entity, key)
                for key, name in MENTAL_ABILITIES.items()
            }
        )

    def merged(self, pending: Optional[Mapping[str, int]]) -> "AbilityScores":
        """Return a copy with ``pending`` values taking precedence.

        Keys may be any stat alias; non-mental abilities are ignored.
        """
        if not pending:
            return self
        changes = {}
        for key, val in pending.items():
            name = MENTAL_ABILITIES.get(normalize_stat_key(key))
            if name and val is not None:
                changes[name] = int(val)
        return replace(self, **changes)

    @property
    def capacity(self) -> int:
        return calc_capacity(self.charisma, self.intelligence, self.wisdom)


# -------------------------------------------------------------
# Configuration and events
# -------------------------------------------------------------


@dataclass(frozen=True)
class SanityFlags:
    """Attribute keys holding the sanity record."""

    capacity: str = FLAG_SANITY_POOL
    current: str = FLAG_CURRENT_SANITY
    tier: str = FLAG_INSANITY_TIER


@dataclass(frozen=True)
class SanityConfig:
    module_id: str = SANITY_MODULE_ID
    flags: SanityFlags = field(default_factory=SanityFlags)
    tier_coefficients: tuple = TIER_COEFFICIENTS
    show_meter: bool = True
    public_notifications: bool = False
    debug: bool = False

    @classmethod
    def from_settings(cls, settings=None) -> "SanityConfig":
        """Build a config from the Django settings, using defaults when unset."""
        if settings is None:
            from django.conf import settings
        return cls(
            tier_coefficients=tuple(
                getattr(settings, "SANITY_TIER_COEFFICIENTS", TIER_COEFFICIENTS)
            ),
            show_meter=bool(getattr(settings, "SANITY_SHOW_METER", True)),
            public_notifications=bool(
                getattr(settings, "SANITY_PUBLIC_NOTIFICATIONS", False)
            ),
            debug=bool(getattr(settings, "SANITY_DEBUG", False)),
        )

    @property
    def max_tier(self) -> int:
        return len(self.tier_coefficients)


@dataclass(frozen=True)
class SanityRecord:
    capacity: int
    current: int
    tier: int


@dataclass(frozen=True)
class TierChanged:
    """Sent on ``SanityTracker.tier_changed`` after a tier transition is stored."""

    entity: object
    previous_tier: int
    new_tier: int

    @property
    def worsened(self) -> bool:
        return self.new_tier > self.previous_tier


# -------------------------------------------------------------
# Tracker
# -------------------------------------------------------------


class SanityTracker:
    """Keep a character's sanity record consistent with its abilities.

    The record lives in the character's Attributes under
    ``config.module_id``. Listeners connect to ``tier_changed`` and are
    called as ``receiver(sender=tracker, event=TierChanged(...))`` once the
    new values have been written.
    """

    def __init__(self, config: Optional[SanityConfig] = None) -> None:
        self.config = config or SanityConfig()
        self.tier_changed = Signal()

    # ------------------------------------------------------------------
    # attribute storage
    # ------------------------------------------------------------------

    def _get_flag(self, entity, key: str):
        return entity.attributes.get(key, default=None, category=self.config.module_id)

    def _set_flag(self, entity, key: str, value) -> None:
        entity.attributes.add(key, value, category=self.config.module_id)

    def has_record(self, entity) -> bool:
        return self._get_flag(entity, self.config.flags.current) is not None

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------

    def get_capacity(self, entity, pending: Optional[Mapping[str, int]] = None) -> int:
        """Return the live capacity of ``entity``, previewing ``pending`` abilities."""
        return AbilityScores.from_entity(entity).merged(pending).capacity

    def get_current(self, entity) -> Optional[int]:
        """Return stored sanity clamped to the live capacity, or None."""
        current = self._get_flag(entity, self.config.flags.current)
        if current is None:
            return None
        return clamp(current, self.get_capacity(entity))

    def get_stored_tier(self, entity) -> int:
        """Return the stored tier flag, kept within the configured tiers."""
        tier = self._get_flag(entity, self.config.flags.tier)
        if tier is None:
            return BASE_TIER
        return max(BASE_TIER, min(int(tier), self.config.max_tier))

    def get_tier(self, entity) -> int:
        current = self.get_current(entity)
        if current is None:
            return BASE_TIER
        return self._tier_for(self.get_capacity(entity), current)

    def get_record(self, entity) -> Optional[SanityRecord]:
        current = self.get_current(entity)
        if current is None:
            return None
        capacity = self.get_capacity(entity)
        return SanityRecord(
            capacity=capacity,
            current=current,
            tier=self._tier_for(capacity, current),
        )

    def is_active(self, entity) -> bool:
        return self.get_capacity(entity) > 0

    def get_percent(self, entity) -> Optional[int]:
        """Return remaining sanity in percent, or None when inactive."""
        capacity = self.get_capacity(entity)
        current = self.get_current(entity)
        if current is None or capacity <= 0:
            return None
        return int(math.ceil(current * 100 / capacity))

    def _tier_for(self, capacity: int, current: int) -> int:
        return calc_sanity_tier(capacity, self.config.tier_coefficients, current)

    # ------------------------------------------------------------------
    # mutations
    # ------------------------------------------------------------------

    def initialize(self, entity, pending: Optional[Mapping[str, int]] = None) -> bool:
        """Create the sanity record of ``entity`` if it has none.

        Returns:
            bool: True if a record was created.
        """
        if self.has_record(entity):
            return False
        capacity = self.get_capacity(entity, pending)
        self._set_flag(entity, self.config.flags.capacity, capacity)
        self._set_flag(entity, self.config.flags.current, max(capacity, 0))
        self._set_flag(entity, self.config.flags.tier, BASE_TIER)
        logger.debug("Initialized sanity for %s: %s", getattr(entity, "key", entity), capacity)
        return True

    def set_current(self, entity, value: int) -> int:
        """Store ``value`` clamped to the capacity and return the stored value."""
        self.initialize(entity)
        return self._store(entity, self.get_capacity(entity), value)

    def adjust_current(self, entity, delta: int) -> int:
        """Shift current sanity by ``delta`` and return the stored value."""
        self.initialize(entity)
        return self.set_current(entity, self.get_current(entity) + int(delta))

    def on_abilities_changed(self, entity, pending: Mapping[str, int]) -> int:
        """React to abilities about to be committed.

        Call this before the new ability values are written so the capacity
        matches what the character is about to have. Returns the re-clamped
        current sanity.
        """
        self.initialize(entity, pending)
        capacity = self.get_capacity(entity, pending)
        self._set_flag(entity, self.config.flags.capacity, capacity)
        current = self._get_flag(entity, self.config.flags.current)
        return self._store(entity, capacity, current)

    def _store(self, entity, capacity: int, value: int) -> int:
        previous = self.get_stored_tier(entity)
        current = clamp(value, capacity)
        tier = self._tier_for(capacity, current)
        self._set_flag(entity, self.config.flags.current, current)
        self._set_flag(entity, self.config.flags.tier, tier)
        if tier != previous:
            self.tier_changed.send(
                sender=self,
                event=TierChanged(entity=entity, previous_tier=previous, new_tier=tier),
            )
        return current


__all__ = [
    "MENTAL_ABILITIES",
    "calc_capacity",
    "calc_sanity_tier",
    "clamp",
    "AbilityScores",
    "SanityFlags",
    "SanityConfig",
    "SanityRecord",
    "TierChanged",
    "SanityTracker",
]
