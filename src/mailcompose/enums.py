"""
Mailcompose enums declaration
"""

from typing import Optional, Tuple

from django.db import models
from django.utils.translation import gettext_lazy as _


class MultipartTypeChoices(models.TextChoices):
    """Defines the MIME multipart subtypes a message node can have.

    Values are the MIME minor type, the major type is always "multipart".
    """

    MIXED = "mixed", _("Mixed")  # RFC 2046 section 5.1.3
    ALTERNATIVE = "alternative", _("Alternative")  # RFC 2046 section 5.1.4
    DIGEST = "digest", _("Digest")  # RFC 2046 section 5.1.5
    ENCRYPTED = "encrypted", _("Encrypted")  # RFC 1847 section 2.2
    PARALLEL = "parallel", _("Parallel")  # RFC 2046 section 5.1.6
    SIGNED = "signed", _("Signed")  # RFC 1847 section 2.1

    @classmethod
    def from_content_type(
        cls, content_type: Tuple[str, str]
    ) -> Optional["MultipartTypeChoices"]:
        """Map a (major, minor) pair to a multipart type.

        Unknown multipart subtypes fall back to MIXED, other major types map
        to None.
        """
        major, minor = content_type
        if major.lower() != "multipart":
            return None
        try:
            return cls(minor.lower())
        except ValueError:
            return cls.MIXED

    def to_content_type(self) -> Tuple[str, str]:
        """Return the (major, minor) pair of this multipart type."""
        return ("multipart", self.value)


class ContentTransferEncodingChoices(models.TextChoices):
    """Defines the Content-Transfer-Encoding values used for body parts."""

    IDENTITY = "7bit", _("Identity")
    QUOTED_PRINTABLE = "quoted-printable", _("Quoted-printable")  # RFC 2045 6.7
    BASE64 = "base64", _("Base64")  # RFC 2045 6.8
