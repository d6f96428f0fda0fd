from django.conf import settings
from evennia.utils import logger

from world.system.constants import SANITY_MODULE_ID


def sanity_debug(msg: str, force: bool = False) -> None:
    """Log ``msg`` prefixed with the sanity module id.

    Nothing is logged unless ``force`` is set or ``SANITY_DEBUG`` is
    enabled in the settings.
    """
    if not (force or getattr(settings, "SANITY_DEBUG", False)):
        return
    logger.log_info(f"{SANITY_MODULE_ID} | {msg}")
