r"""
Evennia settings file.

Remember:

Don't copy more from the default file than you actually intend to
change; this will make sure that you don't overload upstream updates
unnecessarily.

When changing a setting requiring a file system path (like
path/to/actual/file.py), use GAME_DIR and EVENNIA_DIR to reference
your game folder and the Evennia library folders respectively. Python
paths (path.to.module) should be given relative to the game's root
folder (typeclasses.foo) whereas paths within the Evennia library
needs to be given explicitly (evennia.foo).

If you want to share your game dir, including its settings, you can
put secret game- or server-specific settings in secret_settings.py.

"""

# Use the defaults from Evennia unless explicitly overridden
from evennia.settings_default import *

######################################################################
# Evennia base server config
######################################################################

# This is the name of your game. Make it catchy!
SERVERNAME = "Tabulanil Sanity"

# Defines the base character type as PlayerCharacter instead of Character
BASE_CHARACTER_TYPECLASS = "typeclasses.characters.PlayerCharacter"

# The game only customizes characters; everything else uses Evennia's own
# typeclasses.
BASE_ACCOUNT_TYPECLASS = "evennia.accounts.accounts.DefaultAccount"
BASE_GUEST_TYPECLASS = "evennia.accounts.accounts.DefaultGuest"
BASE_OBJECT_TYPECLASS = "evennia.objects.objects.DefaultObject"
BASE_ROOM_TYPECLASS = "evennia.objects.objects.DefaultRoom"
BASE_EXIT_TYPECLASS = "evennia.objects.objects.DefaultExit"
BASE_CHANNEL_TYPECLASS = "evennia.comms.comms.DefaultChannel"
BASE_SCRIPT_TYPECLASS = "evennia.scripts.scripts.DefaultScript"

# No game-specific web pages or service plugins
ROOT_URLCONF = "evennia.web.urls"
SERVER_SERVICES_PLUGIN_MODULES = []
PORTAL_SERVICES_PLUGIN_MODULES = []
AT_INITIAL_SETUP_HOOK_MODULE = None

# Use the project MuxCommand for all default commands
COMMAND_DEFAULT_CLASS = "commands.command.MuxCommand"

# ----------------------------------------------------------------------
# Sanity settings
# ----------------------------------------------------------------------
# Show the sanity meter in status lines and on other characters' sheets.
SANITY_SHOW_METER = True

# When ``True`` insanity tier changes are announced to the whole room.
# Otherwise only the affected character is told.
SANITY_PUBLIC_NOTIFICATIONS = False

# Log every sanity tier change
SANITY_DEBUG = False

# Descending current/capacity ratios marking insanity tiers 1 and up
SANITY_TIER_COEFFICIENTS = (0.8, 0.6, 0.4, 0.2, 0.1, 0.0)

######################################################################
# Config for contrib packages
######################################################################

# EvMenu Login - https://www.evennia.com/docs/latest/Contribs/Contrib-Menu-Login.html
CMDSET_UNLOGGEDIN = "evennia.contrib.base_systems.menu_login.UnloggedinCmdSet"
CONNECTION_SCREEN_MODULE = "evennia.contrib.base_systems.menu_login.connection_screens"

######################################################################
# Settings given in secret_settings.py override those in this file.
######################################################################
try:
    from server.conf.secret_settings import *
except ImportError:
    from evennia.utils.logger import log_warn
    log_warn("secret_settings.py file not found or failed to import.")
