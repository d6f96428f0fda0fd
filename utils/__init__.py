from .stats_utils import (
    normalize_stat_key,
    parse_sanity_input,
    format_sanity_meter,
)
