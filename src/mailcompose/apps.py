"""Mailcompose application"""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class MailcomposeConfig(AppConfig):
    """Configuration class for the mailcompose app."""

    name = "mailcompose"
    label = "mailcompose"
    verbose_name = _("mailcompose application")
