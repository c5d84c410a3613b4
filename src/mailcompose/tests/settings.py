"""Django settings used to run the mailcompose test suite."""

SECRET_KEY = "mailcompose-tests"  # noqa: S105

INSTALLED_APPS = ["mailcompose"]

DATABASES = {}

USE_TZ = True
TIME_ZONE = "Europe/Paris"
USE_I18N = True

MAILCOMPOSE_MESSAGE_ID_DOMAIN = "localhost"
MAILCOMPOSE_MESSAGE_ID_TAG = "mailcompose"
MAILCOMPOSE_DKIM_SELECTOR = "mailcompose"
MAILCOMPOSE_DKIM_DOMAINS = []
MAILCOMPOSE_DKIM_PRIVATE_KEY_B64 = None
MAILCOMPOSE_DKIM_PRIVATE_KEY_FILE = None
