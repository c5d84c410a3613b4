"""Exceptions raised while composing RFC5322 messages."""


class EmailComposeError(Exception):
    """Base exception for errors during email composition."""


class EmptyAddressListError(EmailComposeError):
    """An address-list header was built from an empty list."""


class EnvelopeError(EmailComposeError):
    """The message envelope could not be built."""


class EmptyForwardPathError(EnvelopeError):
    """The envelope has no recipient."""


class MissingSenderError(EnvelopeError):
    """No sender could be found for the envelope or the From header."""


class AddressParseError(EmailComposeError):
    """Text did not resolve to exactly one email address."""


class UnparseableAttachmentNameError(EmailComposeError):
    """No filename could be derived for an attachment."""
