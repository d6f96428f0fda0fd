from dataclasses import dataclass
from typing import List, Optional

# Ability score bounds
MIN_ABILITY = 0
MAX_ABILITY = 30


@dataclass
class Stat:
    key: str
    display: str
    trait_type: str = "counter"
    base: int = 0
    min: int = 0
    max: int = 100
    rate: Optional[float] = None


def _ability(key: str, display: str) -> Stat:
    return Stat(key, display, base=10, min=MIN_ABILITY, max=MAX_ABILITY)


# Core character abilities
CORE_STATS: List[Stat] = [
    _ability("STR", "Strength"),
    _ability("DEX", "Dexterity"),
    _ability("CON", "Constitution"),
    _ability("INT", "Intelligence"),
    _ability("WIS", "Wisdom"),
    _ability("CHA", "Charisma"),
]

# Primary resources
RESOURCE_STATS: List[Stat] = [
    Stat("health", "Health", trait_type="gauge", base=100, rate=0.0),
    Stat("mana", "Mana", trait_type="gauge", base=100, rate=0.0),
    Stat("stamina", "Stamina", trait_type="gauge", base=100, rate=0.0),
]

ALL_STATS: List[Stat] = CORE_STATS + RESOURCE_STATS

# Convenience: list of only core stat keys
CORE_STAT_KEYS = [stat.key for stat in CORE_STATS]


def apply_stats(chara):
    """Add default stats to a character if missing."""
    for stat in ALL_STATS:
        if chara.traits.get(stat.key):
            continue
        kwargs = {
            "trait_type": stat.trait_type,
            "min": stat.min,
            "max": stat.max,
            "base": stat.base,
        }
        if stat.trait_type == "gauge" and stat.rate is not None:
            kwargs["rate"] = stat.rate
        chara.traits.add(stat.key, stat.display, **kwargs)
