"""
Mailcompose settings, read from the Django settings with defaults.
"""

from django.conf import settings

DEFAULTS = {
    # Message-ID headers are generated as <uuid.TAG@DOMAIN>
    "MAILCOMPOSE_MESSAGE_ID_DOMAIN": "localhost",
    "MAILCOMPOSE_MESSAGE_ID_TAG": "mailcompose",
    "MAILCOMPOSE_DKIM_PRIVATE_KEY_B64": None,
    "MAILCOMPOSE_DKIM_PRIVATE_KEY_FILE": None,
    "MAILCOMPOSE_DKIM_SELECTOR": "mailcompose",
    "MAILCOMPOSE_DKIM_DOMAINS": [],
}


def get_setting(name: str):
    """Return the Django setting ``name``, or its default.

    Defaults are also used when no Django settings are configured, so the
    composer can run outside of a Django project.
    """
    if not settings.configured:
        return DEFAULTS[name]
    return getattr(settings, name, DEFAULTS[name])
