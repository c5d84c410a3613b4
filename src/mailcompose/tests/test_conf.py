"""Tests for the mailcompose settings."""

from django.test import override_settings

from mailcompose.conf import DEFAULTS, get_setting
from mailcompose.rfc5322.composer import EmailBuilder


def test_defaults_match_test_settings():
    """Test that every default is readable from the settings."""
    for name, default in DEFAULTS.items():
        assert get_setting(name) == default


@override_settings(MAILCOMPOSE_MESSAGE_ID_DOMAIN="mail.example.org")
def test_override_message_id_domain():
    """Test that overridden settings are read at call time."""
    assert get_setting("MAILCOMPOSE_MESSAGE_ID_DOMAIN") == "mail.example.org"


@override_settings(
    MAILCOMPOSE_MESSAGE_ID_DOMAIN="mail.example.org",
    MAILCOMPOSE_MESSAGE_ID_TAG="newsletter",
)
def test_message_id_uses_settings():
    """Test that generated Message-ID headers use the configured tag and domain."""
    email = (
        EmailBuilder(message_id_source=lambda: "abc")
        .to("to@example.org")
        .from_("me@example.org")
        .build()
    )
    assert "Message-ID: <abc.newsletter@mail.example.org>\r\n" in email.as_string()
