import math

from evennia.objects.objects import DefaultCharacter
from evennia.contrib.rpg.traits import TraitHandler
from evennia.utils import lazy_property, iter_to_str


class Character(DefaultCharacter):
    """
    The base typeclass for all characters, tracking abilities, resources
    and sanity.
    """

    @lazy_property
    def traits(self):
        # this adds the handler as .traits
        return TraitHandler(self)

    @property
    def sanity_tracker(self):
        from world.sanity import get_tracker

        return get_tracker()

    @property
    def sanity(self):
        """Current sanity points, or None before the record exists."""
        return self.sanity_tracker.get_current(self)

    @sanity.setter
    def sanity(self, value: int) -> None:
        self.sanity_tracker.set_current(self, value)

    @property
    def max_sanity(self):
        """Sanity capacity derived from the mental abilities."""
        return self.sanity_tracker.get_capacity(self)

    @property
    def sanity_tier(self):
        return self.sanity_tracker.get_tier(self)

    def at_object_creation(self):
        from world import stats

        super().at_object_creation()
        # `apply_stats` will not overwrite stats that already exist
        stats.apply_stats(self)
        self.sanity_tracker.initialize(self)

    def at_post_puppet(self, **kwargs):
        """Ensure stats and sanity exist when a character is controlled."""
        from world import stats

        super().at_post_puppet(**kwargs)
        stats.apply_stats(self)
        self.sanity_tracker.initialize(self)

    def get_display_status(self, looker, **kwargs):
        """
        Returns a quick view of the current status of this character
        """
        chunks = []
        # prefix the status string with the character's name, if it's someone else checking
        if looker != self:
            chunks.append(self.get_display_name(looker, **kwargs))

        # add resource levels
        hp = int(math.ceil(self.traits.health.percent(None)))
        mp = int(math.ceil(self.traits.mana.percent(None)))
        sp = int(math.ceil(self.traits.stamina.percent(None)))
        resources = f"Health {hp}% : Mana {mp}% : Stamina {sp}%"

        tracker = self.sanity_tracker
        if tracker.config.show_meter:
            san = tracker.get_percent(self)
            if san is not None:
                resources += f" : Sanity {san}%"
        chunks.append(resources)

        # get all the current status flags for this character
        if status_tags := self.tags.get(category="status", return_list=True):
            chunks.append(iter_to_str(status_tags))

        # glue together the chunks and return
        return " - ".join(chunks)

    def get_resource_prompt(self):
        """Return the player's prompt string."""
        hp = self.traits.health
        mp = self.traits.mana
        sp = self.traits.stamina
        prompt = (
            f"[|r{int(hp.current)}|n/{int(hp.max)}] "
            f"[|b{int(mp.current)}|n/{int(mp.max)}] "
            f"[|g{int(sp.current)}|n/{int(sp.max)}]"
        )
        tracker = self.sanity_tracker
        record = tracker.get_record(self)
        if tracker.config.show_meter and record and record.capacity > 0:
            prompt += f" [|m{record.current}|n/{record.capacity}]"
        return prompt + " >"

    def refresh_prompt(self):
        """Refresh the player's prompt display."""
        if self.sessions.count():
            self.msg(prompt=self.get_resource_prompt())


class PlayerCharacter(Character):
    """
    The typeclass for all player characters, including special player-feedback features.
    """

    def get_display_name(self, looker, **kwargs):
        """
        Adds color to the display name.
        """
        name = super().get_display_name(looker, **kwargs)
        if looker == self:
            # special color for our own name
            return f"|c{name}|n"
        return f"|g{name}|n"
