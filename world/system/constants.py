# Constants used across the world.system package

# Namespace for every Attribute the sanity system stores on a character.
SANITY_MODULE_ID = "tabulanil-sanity"

# Attribute keys of the sanity record
FLAG_SANITY_POOL = "totalSanity"
FLAG_CURRENT_SANITY = "currSanity"
FLAG_INSANITY_TIER = "insanityTier"

# Descending ratio thresholds. A ratio at or below the n-th coefficient
# reaches tier n (1-based).
TIER_COEFFICIENTS = (0.8, 0.6, 0.4, 0.2, 0.1, 0.0)

# Tier of a fully sane character
BASE_TIER = 0

__all__ = [
    "SANITY_MODULE_ID",
    "FLAG_SANITY_POOL",
    "FLAG_CURRENT_SANITY",
    "FLAG_INSANITY_TIER",
    "TIER_COEFFICIENTS",
    "BASE_TIER",
]
