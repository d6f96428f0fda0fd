import re

ALIAS_MAP = {
    "str": "STR",
    "dex": "DEX",
    "con": "CON",
    "int": "INT",
    "wis": "WIS",
    "cha": "CHA",
    "strength": "STR",
    "dexterity": "DEX",
    "constitution": "CON",
    "intelligence": "INT",
    "wisdom": "WIS",
    "charisma": "CHA",
    "hp": "health",
    "mp": "mana",
    "sp": "stamina",
}


def normalize_stat_key(key: str) -> str:
    """Return canonical stat key for ``key``."""
    name = str(key).strip().replace(" ", "_")
    lower = name.lower()
    if lower in ALIAS_MAP:
        return ALIAS_MAP[lower]
    return lower


# "42", "=42", "+5", "-3"
SANITY_INPUT_RE = re.compile(r"^\s*(?P<op>[=+-]?)\s*(?P<num>\d+)\s*$")


def parse_sanity_input(text):
    """Parse a sanity edit typed by a user.

    Plain numbers and numbers prefixed with ``=`` are absolute values,
    numbers prefixed with ``+`` or ``-`` are relative changes.

    Returns:
        tuple: ``(value, relative)``; ``value`` is negative for ``-N``.

    Raises:
        ValueError: If ``text`` is not one of the accepted forms.
    """
    match = SANITY_INPUT_RE.match(str(text or ""))
    if not match:
        raise ValueError(text)
    op, num = match.group("op"), int(match.group("num"))
    if op == "+":
        return num, True
    if op == "-":
        return -num, True
    return num, False


def format_sanity_meter(current, capacity, width: int = 20):
    """Return a text meter for ``current``/``capacity`` or ``None`` if inactive."""
    if capacity is None or capacity <= 0 or current is None:
        return None
    filled = int(round(width * max(0, min(current, capacity)) / capacity))
    bar = "|m" + "#" * filled + "|n" + "." * (width - filled)
    return f"[{bar}] {current}/{capacity}"


def _strip_colors(text: str) -> str:
    """Remove simple Evennia color codes for width calculations."""
    return re.sub(r"\|.", "", text)


def _pad(text: str, width: int) -> str:
    """Pad ``text`` with spaces to ``width`` accounting for color codes."""
    return text + " " * (width - len(_strip_colors(text)))


def get_sanity_lines(chara, looker=None):
    """Return the sanity section of a character sheet as a list of lines."""
    from world.sanity import get_tracker, describe_tier

    tracker = get_tracker()
    if looker is not None and looker != chara and not tracker.config.show_meter:
        return []
    record = tracker.get_record(chara)
    if record is None or record.capacity <= 0:
        return ["|wSanity|n --"]
    name, _ = describe_tier(record.tier)
    return [
        f"|wSanity|n {format_sanity_meter(record.current, record.capacity)}",
        f"|wInsanity Tier|n {record.tier} ({name})",
    ]


def get_display_scroll(chara, looker=None):
    """Return a formatted character sheet for ``chara``."""

    from world.system import stat_manager

    lines = [f"|w{chara.key}|n", ""]

    hp = chara.traits.get("health")
    mp = chara.traits.get("mana")
    sp = chara.traits.get("stamina")

    if hp and mp and sp:
        hp_disp = f"{int(hp.current)}/{int(hp.max)}"
        mp_disp = f"{int(mp.current)}/{int(mp.max)}"
        sp_disp = f"{int(sp.current)}/{int(sp.max)}"
    else:
        hp_disp = mp_disp = sp_disp = "--/--"
    lines.append(f"|rHP|n {hp_disp}  |cMP|n {mp_disp}  |gSP|n {sp_disp}")
    lines.extend(get_sanity_lines(chara, looker))

    lines.append("")
    lines.append("|YABILITIES|n")
    lines.append(
        "  ".join(
            f"{key}: |w{val}|n"
            for key, val in stat_manager.get_ability_scores(chara).items()
        )
    )

    width = max(len(_strip_colors(l)) for l in lines)
    top = "+" + "=" * (width + 2) + "+"
    bottom = "+" + "=" * (width + 2) + "+"
    out = [top]
    for line in lines:
        out.append("| " + _pad(line, width) + " |")
    out.append(bottom)
    return "\n".join(out)
