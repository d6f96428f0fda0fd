# Stat manager for reading and committing ability scores

from __future__ import annotations

from typing import Dict, Mapping
import logging

from utils.stats_utils import normalize_stat_key

from world import stats
from world.stats import MIN_ABILITY, MAX_ABILITY

logger = logging.getLogger(__name__)

ABILITY_KEYS = stats.CORE_STAT_KEYS


def get_ability(obj, key: str) -> int:
    """Return the committed value of ability ``key``.

    Gracefully handles objects without the trait system by
    falling back to ``0`` for missing values.
    """
    traits = getattr(obj, "traits", None)
    trait_get = getattr(traits, "get", None)
    if not callable(trait_get):
        return 0
    trait = trait_get(normalize_stat_key(key))
    if not trait:
        return 0
    try:
        return int(trait.value)
    except (TypeError, ValueError):
        return 0


def get_ability_scores(obj) -> Dict[str, int]:
    """Return a mapping of every ability key to its committed value."""
    return {key: get_ability(obj, key) for key in ABILITY_KEYS}


def _validate(updates: Mapping[str, int]) -> Dict[str, int]:
    values: Dict[str, int] = {}
    for key, val in updates.items():
        norm = normalize_stat_key(key)
        if norm not in ABILITY_KEYS:
            raise KeyError(key)
        values[norm] = max(MIN_ABILITY, min(MAX_ABILITY, int(val)))
    return values


def set_abilities(chara, updates: Mapping[str, int], tracker=None) -> Dict[str, int]:
    """Commit several ability scores on ``chara``.

    The sanity tracker sees the pending values before the traits are
    written so the sanity pool follows the new scores.

    Args:
        chara: Character whose abilities change.
        updates: Mapping of ability key (any alias) to new value.
        tracker: Sanity tracker to notify; defaults to the game tracker.

    Returns:
        dict: The committed values, keyed by canonical ability key.

    Raises:
        KeyError: If a key is not an ability.
    """
    values = _validate(updates)
    if not values:
        return values

    stats.apply_stats(chara)
    if tracker is None:
        from world.sanity import get_tracker

        tracker = get_tracker()
    tracker.on_abilities_changed(chara, values)

    for key, val in values.items():
        chara.traits.get(key).base = val
    logger.debug("%s abilities set: %s", getattr(chara, "key", chara), values)
    return values


def set_ability(chara, key: str, value: int, tracker=None) -> int:
    """Commit a single ability score and return the stored value."""
    values = set_abilities(chara, {key: value}, tracker=tracker)
    return values[normalize_stat_key(key)]
