import re

from evennia import CmdSet

from .command import Command, MuxCommand
from utils.stats_utils import (
    get_display_scroll,
    normalize_stat_key,
    parse_sanity_input,
)
from world.sanity import get_tracker
from world.system import stat_manager

_SANITY_USAGE = "Usage: sanity [<target>] [= <value>|+<amount>|-<amount>|=<value>]"
_SETABILITY_USAGE = "Usage: setability <target> <ability> <value>"
_VALUE_RE = re.compile(r"^[+-]?\d+$")


class CmdSanity(MuxCommand):
    """
    View or change sanity.

    Usage:
        sanity
        sanity <target>
        sanity <value>
        sanity [<target>] = <value>

    The value may be a number to set sanity outright (|w42|n or |w=42|n)
    or a signed number to raise or lower it (|w+5|n, |w-3|n). Sanity is
    always kept between 0 and the maximum granted by Charisma,
    Intelligence and Wisdom.

    Changing another character's sanity requires Builder permission.

    Examples:
        sanity
        sanity -3
        sanity = -3
        sanity Bob = +5
    """

    key = "sanity"
    aliases = ("san",)
    help_category = "General"

    def func(self):
        caller = self.caller
        target = caller
        lhs, rhs = self.lhs, self.rhs
        if "=" not in self.args and lhs:
            # "sanity 42" or "sanity -3" edits the caller's own sanity
            try:
                parse_sanity_input(lhs)
            except ValueError:
                pass
            else:
                lhs, rhs = "", lhs
        if lhs:
            target = caller.search(lhs)
            if not target:
                return
        if not hasattr(target, "traits"):
            caller.msg(f"{target.get_display_name(caller)} has no sanity.")
            return

        if not rhs:
            if "=" in self.args:
                caller.msg(_SANITY_USAGE)
                return
            caller.msg(get_display_scroll(target, looker=caller))
            return

        if target != caller and not caller.check_permstring("Builder"):
            caller.msg("You can't change someone else's sanity.")
            return

        try:
            value, relative = parse_sanity_input(rhs)
        except ValueError:
            caller.msg(_SANITY_USAGE)
            return

        tracker = get_tracker()
        if not tracker.is_active(target):
            caller.msg(f"{target.get_display_name(caller)} has no sanity to lose.")
            return
        if relative:
            new = tracker.adjust_current(target, value)
        else:
            new = tracker.set_current(target, value)
        capacity = tracker.get_capacity(target)
        if target == caller:
            caller.msg(f"Your sanity is now {new}/{capacity}.")
        else:
            caller.msg(
                f"{target.get_display_name(caller)}'s sanity is now {new}/{capacity}."
            )


class CmdSetAbility(Command):
    """
    Change a character's ability score directly.

    Usage:
        setability <target> <ability> <value>

    The sanity maximum follows Charisma, Intelligence and Wisdom, and
    current sanity shrinks if the maximum drops below it.

    Example:
        setability Bob wis 14
    """

    key = "setability"
    aliases = ("setab",)
    locks = "cmd:perm(Admin) or perm(Builder)"
    help_category = "Admin"

    def func(self):
        caller = self.caller
        if not self.args:
            caller.msg(_SETABILITY_USAGE)
            return
        parts = self.args.split(None, 2)
        if len(parts) != 3 or not _VALUE_RE.match(parts[2]):
            caller.msg(_SETABILITY_USAGE)
            return
        target_name, ability, value_str = parts
        target = caller.search(target_name, global_search=True)
        if not target:
            return
        if not hasattr(target, "traits"):
            caller.msg(f"{target.key} has no abilities.")
            return
        try:
            value = stat_manager.set_ability(target, ability, int(value_str))
        except KeyError:
            caller.msg(f"Unknown ability: {ability}")
            return
        caller.msg(f"{normalize_stat_key(ability)} set to {value} on {target.key}.")
        caller.msg(get_display_scroll(target, looker=caller))


class SanityCmdSet(CmdSet):
    key = "Sanity CmdSet"

    def at_cmdset_creation(self):
        super().at_cmdset_creation()
        self.add(CmdSanity)
        self.add(CmdSetAbility)
