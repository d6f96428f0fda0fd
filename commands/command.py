"""
Commands

Commands describe the input the account can do to the game.

"""

from evennia.commands.command import Command as BaseCommand
from evennia.commands.default.muxcommand import MuxCommand as BaseMuxCommand


class PromptMixin:
    """Refresh the caller's prompt once the command has run."""

    def at_post_cmd(self):
        refresh = getattr(self.caller, "refresh_prompt", None)
        if callable(refresh):
            refresh()


class Command(PromptMixin, BaseCommand):
    """
    Base command for the game's own commands.

    Each Command implements the following methods, called in this order
    (only func() is actually required):

        - at_pre_cmd(): If this returns anything truthy, execution is aborted.
        - parse(): Should perform any extra parsing needed on self.args
            and store the result on self.
        - func(): Performs the actual work.
        - at_post_cmd(): Extra actions, refreshing the prompt here.

    """

    pass


class MuxCommand(PromptMixin, BaseMuxCommand):
    """
    MuxCommand with the game's prompt refresh; used as the default
    command class so Evennia's built-in commands behave the same way.
    """

    pass
