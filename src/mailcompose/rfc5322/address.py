"""
RFC5322 mailboxes and groups.

This module renders addresses for header fields, encoding non-ASCII display
names as RFC2047 encoded words, and folds address lists between whole
addresses. Free text is parsed with the Flanker library.
"""

import logging
import re
from email.charset import Charset
from typing import List, Optional, Sequence, Union

from flanker.addresslib import address as flanker_address

from .errors import AddressParseError, EmptyAddressListError
from .folding import MIME_LINE_LENGTH

logger = logging.getLogger(__name__)

# utf-8 header encoding picks whichever of "q" and "b" is shorter
UTF8_CHARSET = Charset("utf-8")

GROUP_RE = re.compile(r"^\s*(?P<name>[^:<>@\"]+):(?P<members>.*);\s*$", re.DOTALL)


def encode_display_name(name: str) -> str:
    """
    Return ``name`` as it must appear in a header.

    Names made only of ASCII letters, digits and spaces are kept verbatim,
    anything else becomes an RFC2047 encoded word.

    Examples:
        >>> encode_display_name("Joe Blogs")
        'Joe Blogs'
        >>> encode_display_name("ä space")
        '=?utf-8?q?=C3=A4_space?='
    """
    if all(char == " " or (char.isascii() and char.isalnum()) for char in name):
        return name
    return UTF8_CHARSET.header_encode(name)


class Mailbox:
    """A single address, with an optional display name."""

    def __init__(self, address: str, name: Optional[str] = None):
        self.address = address
        self.name = name or None

    @classmethod
    def parse(cls, text: str) -> "Mailbox":
        """Parse free text such as ``"Joe" <joe@example.org>``."""
        return parse_mailbox(text)

    def __str__(self):
        if self.name is None:
            return f"<{self.address}>"
        return f"{encode_display_name(self.name)} <{self.address}>"

    def __repr__(self):
        return f"Mailbox({self.address!r}, name={self.name!r})"

    def __eq__(self, other):
        if not isinstance(other, Mailbox):
            return NotImplemented
        return (self.address, self.name) == (other.address, other.name)

    def __hash__(self):
        return hash((self.address, self.name))


class Group:
    """A named list of mailboxes, rendered as a single address-list entry."""

    def __init__(self, name: str, mailboxes: Optional[Sequence[Mailbox]] = None):
        self.name = name
        self.mailboxes = tuple(mailboxes or ())

    def __str__(self):
        members = ", ".join(str(mailbox) for mailbox in self.mailboxes)
        return f"{self.name}: {members};"

    def __repr__(self):
        return f"Group({self.name!r}, {list(self.mailboxes)!r})"

    def __eq__(self, other):
        if not isinstance(other, Group):
            return NotImplemented
        return (self.name, self.mailboxes) == (other.name, other.mailboxes)

    def __hash__(self):
        return hash((self.name, self.mailboxes))


Address = Union[Mailbox, Group]


def to_address(value) -> Address:
    """
    Coerce builder input into an Address.

    Mailboxes and groups are returned as is, a string is taken as a bare
    address and an ``(address, name)`` pair as a named mailbox.

    Raises:
        AddressParseError: for any other value.
    """
    if isinstance(value, (Mailbox, Group)):
        return value
    if isinstance(value, str):
        return Mailbox(value)
    if isinstance(value, tuple) and len(value) == 2:
        return Mailbox(value[0], value[1])
    raise AddressParseError(f"Cannot use {value!r} as an email address")


def to_mailbox(value) -> Mailbox:
    """Coerce builder input into a Mailbox, refusing groups."""
    address = to_address(value)
    if not isinstance(address, Mailbox):
        raise AddressParseError(f"Expected a mailbox, got group {address.name!r}")
    return address


def mailboxes_of(address: Address) -> List[Mailbox]:
    """Return the mailboxes an address stands for, expanding groups."""
    if isinstance(address, Group):
        return list(address.mailboxes)
    return [address]


def _from_flanker(parsed) -> Mailbox:
    if not isinstance(parsed, flanker_address.EmailAddress):
        raise AddressParseError(f"Not an email address: {parsed!s}")
    return Mailbox(parsed.address, parsed.display_name or None)


def parse_address(text: str) -> Address:
    """
    Parse free text into exactly one Address.

    Group syntax (``name: a@example.org, b@example.org;``) yields a Group,
    anything else must be a single mailbox.

    Raises:
        AddressParseError: if the text is not exactly one address.
    """
    if not text or not text.strip():
        raise AddressParseError("Empty address")

    match = GROUP_RE.match(text)
    if match:
        name = match.group("name").strip()
        members = match.group("members")
        if not members.strip():
            return Group(name, [])
        parsed, unparsed = flanker_address.parse_list(members, as_tuple=True)
        if unparsed:
            raise AddressParseError(
                f"Could not parse group members of {name!r}: {unparsed!r}"
            )
        return Group(name, [_from_flanker(member) for member in parsed])

    parsed = flanker_address.parse(text, strict=True)
    if parsed is None:
        logger.debug("Flanker could not parse address %r", text)
        raise AddressParseError(f"Expected a single address, got {text!r}")
    return _from_flanker(parsed)


def parse_mailbox(text: str) -> Mailbox:
    """Parse free text into exactly one Mailbox."""
    address = parse_address(text)
    if not isinstance(address, Mailbox):
        raise AddressParseError(f"Expected a single mailbox, got {text!r}")
    return address


def fold_address_list(start_column: int, addresses: Sequence[Address]) -> str:
    """
    Render an address list, breaking lines only between whole addresses.

    Args:
        start_column: Column of the first address, usually the header name
            length plus two for ``": "``.
        addresses: The addresses to render, in order.

    Returns:
        The comma separated list, with CRLF + TAB before any address that
        would go past MIME_LINE_LENGTH.

    Raises:
        EmptyAddressListError: if ``addresses`` is empty.
    """
    if not addresses:
        raise EmptyAddressListError("Header value cannot be empty")

    parts = []
    line_length = start_column
    for address in addresses:
        entry = f"{address}, "
        if line_length + len(entry) > MIME_LINE_LENGTH:
            parts.append("\r\n\t")
            line_length = 0
        line_length += len(entry)
        parts.append(entry)

    # Drop the final ", "
    return "".join(parts)[:-2]
