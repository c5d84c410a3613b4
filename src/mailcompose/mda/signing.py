"""Handles DKIM signing of composed email messages."""

import base64
import logging
from typing import Optional

from dkim import sign as dkim_sign

from ..conf import get_setting
from ..rfc5322.envelope import Email

logger = logging.getLogger(__name__)

SIGNED_HEADERS = [
    b"To",
    b"Cc",
    b"From",
    b"Sender",
    b"Subject",
    b"Message-ID",
    b"Reply-To",
    b"In-Reply-To",
    b"References",
    b"Date",
]


def _load_private_key() -> Optional[bytes]:
    key_file = get_setting("MAILCOMPOSE_DKIM_PRIVATE_KEY_FILE")
    if key_file:
        try:
            with open(key_file, "rb") as f:
                return f.read()
        except FileNotFoundError:
            logger.error("DKIM private key file not found: %s", key_file)
            return None

    key_b64 = get_setting("MAILCOMPOSE_DKIM_PRIVATE_KEY_B64")
    if key_b64:
        try:
            return base64.b64decode(key_b64)
        except (TypeError, ValueError):
            logger.error("Failed to decode MAILCOMPOSE_DKIM_PRIVATE_KEY_B64.")
            return None

    return None


def sign_message_dkim(raw_mime_message: bytes, sender_email: str) -> Optional[bytes]:
    """Sign a raw MIME message with DKIM.

    Uses the private key and selector defined in the settings. Only signs
    domains listed in MAILCOMPOSE_DKIM_DOMAINS.

    Args:
        raw_mime_message: The raw bytes of the MIME message.
        sender_email: The email address of the sender (e.g., "user@example.com").

    Returns:
        The DKIM-Signature header bytes if signed, otherwise None.
    """
    dkim_private_key = _load_private_key()
    if not dkim_private_key:
        logger.warning(
            "MAILCOMPOSE_DKIM_PRIVATE_KEY_B64/FILE is not set, skipping DKIM signing"
        )
        return None

    try:
        domain = sender_email.split("@")[1]
    except IndexError:
        logger.error("Invalid sender email format for DKIM signing: %s", sender_email)
        return None

    if domain not in get_setting("MAILCOMPOSE_DKIM_DOMAINS"):
        logger.warning(
            "Domain %s is not in MAILCOMPOSE_DKIM_DOMAINS, skipping DKIM signing",
            domain,
        )
        return None

    try:
        signature = dkim_sign(
            message=raw_mime_message,
            selector=get_setting("MAILCOMPOSE_DKIM_SELECTOR").encode("ascii"),
            domain=domain.encode("ascii"),
            privkey=dkim_private_key,
            include_headers=SIGNED_HEADERS,
            canonicalize=(b"relaxed", b"simple"),
        )
    except Exception as e:  # noqa: BLE001 pylint: disable=broad-exception-caught
        logger.error("Error during DKIM signing for domain %s: %s", domain, e)
        return None

    # dkim_sign returns the folded DKIM-Signature header, ending with CRLF
    return signature.rstrip(b"\r\n")


def sign_email(email: Email) -> Email:
    """Return ``email`` with a DKIM-Signature header prepended, when possible.

    The signing domain is the one of the envelope sender. The email is
    returned unchanged when it cannot be signed.
    """
    sender_email = email.envelope.sender
    if not sender_email:
        logger.warning(
            "Email %s has no envelope sender, skipping DKIM signing", email.message_id
        )
        return email

    signature_header = sign_message_dkim(email.message, sender_email)
    if not signature_header:
        return email

    return Email(
        signature_header + b"\r\n" + email.message, email.envelope, email.message_id
    )
