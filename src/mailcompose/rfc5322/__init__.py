"""
RFC5322 email format package.

This package provides functionality for building email messages according
to RFC5322 and the MIME RFCs: header folding, address rendering, multipart
trees and email builders.
"""

from .address import (
    Address,
    Group,
    Mailbox,
    encode_display_name,
    fold_address_list,
    parse_address,
    parse_mailbox,
)
from .composer import EmailBuilder, PartBuilder
from .envelope import Email, Envelope
from .errors import (
    AddressParseError,
    EmailComposeError,
    EmptyAddressListError,
    EmptyForwardPathError,
    EnvelopeError,
    MissingSenderError,
    UnparseableAttachmentNameError,
)
from .folding import MIME_LINE_LENGTH, fold, normalize_line_breaks
from .headers import Header, HeaderMap, format_content_type
from .message import BOUNDARY_LENGTH, MimeMessage

__all__ = [
    # Folding
    "MIME_LINE_LENGTH",
    "fold",
    "normalize_line_breaks",
    # Headers
    "Header",
    "HeaderMap",
    "format_content_type",
    # Addresses
    "Address",
    "Mailbox",
    "Group",
    "encode_display_name",
    "fold_address_list",
    "parse_address",
    "parse_mailbox",
    # Messages
    "BOUNDARY_LENGTH",
    "MimeMessage",
    "PartBuilder",
    "EmailBuilder",
    "Email",
    "Envelope",
    # Errors
    "EmailComposeError",
    "EmptyAddressListError",
    "EnvelopeError",
    "EmptyForwardPathError",
    "MissingSenderError",
    "AddressParseError",
    "UnparseableAttachmentNameError",
]
