"""
Sanity

Binds the sanity tracker to the game. The tracker is built once from the
settings and the tier-change announcer is connected to it here, so
typeclasses and commands only ever call :func:`get_tracker`.

"""

from evennia.utils import logger

from utils.debug import sanity_debug
from world.system.sanity_manager import SanityConfig, SanityTracker

# name and flavor text per insanity tier
TIER_DESCRIPTIONS = {
    0: ("Lucid", "Your mind is clear and steady."),
    1: ("Uneasy", "A creeping unease gnaws at the edge of your thoughts."),
    2: ("Shaken", "Your hands tremble and shadows seem to move on their own."),
    3: ("Disturbed", "Whispers follow you that nobody else can hear."),
    4: ("Unhinged", "The world bends and twists whenever you look away."),
    5: ("Deranged", "You no longer trust your own eyes, or your own name."),
    6: ("Broken", "Your mind shatters under the weight of what you have seen."),
}

_TRACKER = None


def describe_tier(tier):
    """Return ``(name, flavor)`` for ``tier``, clamping unknown tiers."""
    tier = max(0, min(int(tier), max(TIER_DESCRIPTIONS)))
    return TIER_DESCRIPTIONS[tier]


def format_tier_change(event, looker=None):
    """Return the tier-change message as seen by ``looker``."""
    entity = event.entity
    prev_name, _ = describe_tier(event.previous_tier)
    new_name, flavor = describe_tier(event.new_tier)
    if looker is entity:
        who = "Your"
    else:
        who = f"{entity.get_display_name(looker)}'s" if looker else f"{entity.key}'s"
    color = "|r" if event.worsened else "|g"
    text = (
        f"{color}{who} sanity shifts from tier {event.previous_tier} ({prev_name}) "
        f"to tier {event.new_tier} ({new_name}).|n"
    )
    if looker is entity:
        text += f" {flavor}"
    return text


def announce_tier_change(sender, event, **kwargs):
    """Tell the character, or its whole room, that its insanity tier moved."""
    entity = event.entity
    sanity_debug(
        f"Insanity tier for {entity.key}[{entity.id}]: "
        f"{event.previous_tier} -> {event.new_tier}",
        force=sender.config.debug,
    )
    entity.msg(format_tier_change(event, entity))
    location = entity.location
    if sender.config.public_notifications and location:
        location.msg_contents(
            format_tier_change(event), exclude=[entity], from_obj=entity
        )


def build_tracker(config=None):
    """Create a tracker from ``config`` (or the settings) with announcements wired."""
    tracker = SanityTracker(config or SanityConfig.from_settings())
    tracker.tier_changed.connect(
        announce_tier_change, weak=False, dispatch_uid="sanity_announce_tier_change"
    )
    return tracker


def get_tracker():
    """Return the game's sanity tracker, building it on first use."""
    global _TRACKER
    if _TRACKER is None:
        _TRACKER = build_tracker()
        logger.log_info("Sanity tracker ready")
    return _TRACKER


def reset_tracker():
    """Forget the game's tracker so the next call rebuilds it from settings."""
    global _TRACKER
    _TRACKER = None
