"""
Transport-level envelope and finished email values.
"""

from typing import Optional, Sequence, Tuple

from .address import Mailbox
from .errors import EmptyForwardPathError


class Envelope:
    """
    SMTP envelope of a message.

    Only mailboxes are accepted: the forward path lists every recipient
    (including Bcc) and must not be empty, the reverse path is the bounce
    address.
    """

    def __init__(
        self, forward_path: Sequence[Mailbox], reverse_path: Optional[Mailbox] = None
    ):
        if not forward_path:
            raise EmptyForwardPathError("Missing destination address")
        self._forward_path = tuple(forward_path)
        self._reverse_path = reverse_path

    @property
    def forward_path(self) -> Tuple[Mailbox, ...]:
        return self._forward_path

    @property
    def reverse_path(self) -> Optional[Mailbox]:
        return self._reverse_path

    @property
    def recipients(self):
        """Bare recipient addresses, as handed to an SMTP client."""
        return [mailbox.address for mailbox in self._forward_path]

    @property
    def sender(self) -> Optional[str]:
        """Bare sender address, or None for a null reverse path."""
        return self._reverse_path.address if self._reverse_path else None

    def __eq__(self, other):
        if not isinstance(other, Envelope):
            return NotImplemented
        return (self._forward_path, self._reverse_path) == (
            other._forward_path,
            other._reverse_path,
        )

    def __repr__(self):
        return f"Envelope({list(self._forward_path)!r}, {self._reverse_path!r})"


class Email:
    """A finished message, ready to be handed to a transport."""

    __slots__ = ("_message", "_envelope", "_message_id")

    def __init__(self, message: bytes, envelope: Envelope, message_id: str):
        self._message = bytes(message)
        self._envelope = envelope
        self._message_id = message_id

    @property
    def message(self) -> bytes:
        return self._message

    @property
    def envelope(self) -> Envelope:
        return self._envelope

    @property
    def message_id(self) -> str:
        return self._message_id

    def as_string(self) -> str:
        """Decode the message as UTF-8."""
        return self._message.decode("utf-8")

    def __eq__(self, other):
        if not isinstance(other, Email):
            return NotImplemented
        return (self._message, self._envelope, self._message_id) == (
            other._message,
            other._envelope,
            other._message_id,
        )

    def __hash__(self):
        return hash((self._message, self._message_id))

    def __repr__(self):
        return f"<Email message_id={self._message_id!r} size={len(self._message)}>"
