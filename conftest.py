import evennia
import pytest


# pytest-django has configured Django by the time this runs; Evennia's
# flat API (create_object, search_object, ...) still needs initializing.
# Initialization reads ServerConfig, so it runs once the test database
# exists and with database access unblocked. Like Evennia's own test
# runner, it also flags the settings as a test environment.
@pytest.fixture(scope="session", autouse=True)
def _evennia_init(django_db_setup, django_db_blocker):
    from django.conf import settings

    if getattr(evennia, "SESSION_HANDLER", None) is None:
        with django_db_blocker.unblock():
            evennia._init()
    settings.TEST_ENVIRONMENT = True
    yield
    settings.TEST_ENVIRONMENT = False
