"""
Server startstop hooks

This module contains functions called by Evennia at various
points during its startup, reload and shutdown sequence. It
allows for customizing the server operation as desired.

This module must contain at least these global functions:

at_server_init()
at_server_start()
at_server_stop()
at_server_reload_start()
at_server_reload_stop()
at_server_cold_start()
at_server_cold_stop()

"""

import time

from evennia.server.models import ServerConfig
from evennia.utils import logger


def _initialize_sanity_records(tracker):
    """Create sanity records on characters that predate the sanity system."""

    from typeclasses.characters import Character
    from world import stats

    initialized = 0
    for char in Character.objects.all_family():
        stats.apply_stats(char)
        if tracker.initialize(char):
            initialized += 1

    if initialized:
        logger.log_info(f"Initialized sanity on {initialized} characters")
    return initialized


def at_server_init():
    """Called as the service layer initializes."""

    from world.sanity import reset_tracker

    logger.log_info("at_server_init: resetting sanity tracker")
    reset_tracker()


def at_server_start():
    """
    This is called every time the server starts up, regardless of
    how it was shut down.
    """
    from world.sanity import get_tracker

    _initialize_sanity_records(get_tracker())
    ServerConfig.objects.conf("server_start_time", time.time())


def at_server_stop():
    """
    This is called just before the server is shut down, regardless
    of it is for a reload, reset or shutdown.
    """
    logger.log_info("at_server_stop: cleaning up")
    ServerConfig.objects.conf("server_start_time", delete=True)


def at_server_reload_start():
    """
    This is called only when server starts back up after a reload.
    """
    logger.log_info("at_server_reload_start: preparing reload")
    ServerConfig.objects.conf("reload_started", time.time())


def at_server_reload_stop():
    """
    This is called only time the server stops before a reload.
    """
    logger.log_info("at_server_reload_stop: reload complete")
    ServerConfig.objects.conf("reload_started", delete=True)


def at_server_cold_start():
    """
    This is called only when the server starts "cold", i.e. after a
    shutdown or a reset.
    """
    logger.log_info("at_server_cold_start: cold boot")


def at_server_cold_stop():
    """
    This is called only when the server goes down due to a shutdown or
    reset.
    """
    logger.log_info("at_server_cold_stop: shutting down")
