"""Utility imports for world.system package."""

from . import constants
from . import stat_manager
from . import sanity_manager

__all__ = ["constants", "stat_manager", "sanity_manager"]
