"""
RFC5322 email composer.

This module provides builders to assemble RFC5322 messages: PartBuilder for
single MIME parts and EmailBuilder for complete emails. EmailBuilder derives
the envelope, the Sender and From headers and the default Date and
Message-ID headers when the email is built, and emits them in a fixed
order after the headers added while constructing the body.
"""

import base64
import copy
import datetime
import itertools
import logging
import os
import uuid
from email.utils import encode_rfc2231, format_datetime
from typing import Callable, List, Optional, Union

from django.conf import settings
from django.utils import timezone

from ..conf import get_setting
from ..enums import ContentTransferEncodingChoices, MultipartTypeChoices
from .address import Address, Mailbox, mailboxes_of, to_address, to_mailbox
from .envelope import Email, Envelope
from .errors import MissingSenderError, UnparseableAttachmentNameError
from .folding import normalize_line_breaks
from .headers import Header
from .message import MimeMessage, TokenSource

logger = logging.getLogger(__name__)

TEXT_PLAIN_UTF_8 = "text/plain; charset=utf-8"
TEXT_HTML_UTF_8 = "text/html; charset=utf-8"

Clock = Callable[[], datetime.datetime]
MessageIdSource = Callable[[], str]


def local_now() -> datetime.datetime:
    """Current time in the Django TIME_ZONE, or in the host's local zone."""
    now = datetime.datetime.now(datetime.timezone.utc)
    if settings.configured:
        return timezone.localtime(now)
    return now.astimezone()


def new_message_id() -> str:
    """Generate a fresh, globally unique message id."""
    return str(uuid.uuid4())


def format_content_disposition(filename: str) -> str:
    """
    Build an attachment Content-Disposition value.

    Examples:
        >>> format_content_disposition("report.pdf")
        'attachment; filename="report.pdf"'
    """
    if filename.isascii():
        quoted = filename.replace("\\", "\\\\").replace('"', '\\"')
        return f'attachment; filename="{quoted}"'
    # RFC 2231 extended parameter for non-ASCII filenames
    return f"attachment; filename*={encode_rfc2231(filename, 'utf-8')}"


def _make_header(header: Union[Header, str], value: Optional[str]) -> Header:
    if isinstance(header, Header):
        return header
    if value is None:
        raise TypeError(f"Missing value for header {header!r}")
    return Header(header, value)


class PartBuilder:
    """Builds a MimeMessage."""

    def __init__(self, token_source: Optional[TokenSource] = None):
        self._token_source = token_source
        self._message = MimeMessage(token_source=token_source)

    def header(
        self, header: Union[Header, str], value: Optional[str] = None
    ) -> "PartBuilder":
        """Add a header, keeping existing ones with the same name."""
        self._message.headers.insert(_make_header(header, value))
        return self

    def replace_header(
        self, header: Union[Header, str], value: Optional[str] = None
    ) -> "PartBuilder":
        """Replace all the headers with the same name, or add the header."""
        self._message.headers.replace(_make_header(header, value))
        return self

    def get_header(self, name: str) -> Optional[Header]:
        """Return the latest header named ``name``, if any."""
        return self._message.headers.get(name)

    def body(self, body: str) -> "PartBuilder":
        """Set the body, normalizing its line breaks to CRLF."""
        self._message.body = normalize_line_breaks(body)
        return self

    def message_type(self, message_type: MultipartTypeChoices) -> "PartBuilder":
        """Make this part a multipart of the given type."""
        self._message.message_type = message_type
        return self

    def content_type(self, content_type: str) -> "PartBuilder":
        """Add a Content-Type header, e.g. ``text/plain; charset=utf-8``."""
        return self.header("Content-Type", content_type)

    def child(self, child: MimeMessage) -> "PartBuilder":
        """Add a child part."""
        self._message.children.append(child)
        return self

    def copy(self) -> "PartBuilder":
        """Return an independent builder holding a copy of this part."""
        clone = PartBuilder.__new__(PartBuilder)
        clone._token_source = self._token_source
        clone._message = copy.deepcopy(self._message)
        return clone

    def build(self) -> MimeMessage:
        """Return the built message, with its structural headers updated.

        The builder keeps its own copy and may be built again.
        """
        message = copy.deepcopy(self._message)
        message.update_headers()
        return message


class EmailBuilder:  # pylint: disable=too-many-instance-attributes,too-many-public-methods
    """
    Builds an Email.

    Every configuration method returns the builder so that calls can be
    chained. Nothing is derived before build(), which works on a copy of the
    accumulated message: a builder can be built several times.

    Args:
        token_source: Source of random boundaries for the message parts.
        message_id_source: Source of ids for generated Message-ID headers.
        clock: Source of the current time for generated Date headers.
    """

    def __init__(
        self,
        token_source: Optional[TokenSource] = None,
        message_id_source: Optional[MessageIdSource] = None,
        clock: Optional[Clock] = None,
    ):
        self._token_source = token_source
        self._message_id_source = message_id_source or new_message_id
        self._clock = clock or local_now

        self._message = PartBuilder(token_source=token_source)
        self._to: List[Address] = []
        self._from: List[Address] = []
        self._cc: List[Address] = []
        self._bcc: List[Address] = []
        self._reply_to: List[Address] = []
        self._in_reply_to: List[str] = []
        self._references: List[str] = []
        self._sender: Optional[Mailbox] = None
        self._envelope: Optional[Envelope] = None
        self._date_issued = False
        self._message_id: Optional[str] = None

    def _part(self) -> PartBuilder:
        return PartBuilder(token_source=self._token_source)

    def body(self, body: str) -> "EmailBuilder":
        """Set the body of the top-level part."""
        self._message.body(body)
        return self

    def header(
        self, header: Union[Header, str], value: Optional[str] = None
    ) -> "EmailBuilder":
        """Add a generic header."""
        self._message.header(header, value)
        return self

    def replace_header(
        self, header: Union[Header, str], value: Optional[str] = None
    ) -> "EmailBuilder":
        """Replace an existing header, or add it."""
        self._message.replace_header(header, value)
        return self

    def get_header(self, name: str) -> Optional[Header]:
        """Return the latest header named ``name`` added so far, if any."""
        return self._message.get_header(name)

    def from_(self, address) -> "EmailBuilder":
        """Add an author to the From header."""
        self._from.append(to_address(address))
        return self

    def to(self, address) -> "EmailBuilder":
        """Add a recipient to the To header and to the envelope."""
        self._to.append(to_address(address))
        return self

    def cc(self, address) -> "EmailBuilder":
        """Add a recipient to the Cc header and to the envelope."""
        self._cc.append(to_address(address))
        return self

    def bcc(self, address) -> "EmailBuilder":
        """Add a recipient to the envelope only."""
        self._bcc.append(to_address(address))
        return self

    def reply_to(self, address) -> "EmailBuilder":
        """Add an address to the Reply-To header."""
        self._reply_to.append(to_address(address))
        return self

    def in_reply_to(self, message_id: str) -> "EmailBuilder":
        """Add a message id to the In-Reply-To header."""
        self._in_reply_to.append(message_id)
        return self

    def references(self, message_id: str) -> "EmailBuilder":
        """Add a message id to the References header."""
        self._references.append(message_id)
        return self

    def sender(self, address) -> "EmailBuilder":
        """Set the Sender header, which also becomes the envelope sender."""
        self._sender = to_mailbox(address)
        return self

    def subject(self, subject: str) -> "EmailBuilder":
        """Add a Subject header."""
        return self.header("Subject", subject)

    def date(self, date: datetime.datetime) -> "EmailBuilder":
        """Add a Date header. Naive datetimes are taken as UTC."""
        if date.tzinfo is None or date.tzinfo.utcoffset(date) is None:
            date = timezone.make_aware(date, datetime.timezone.utc)
        self.header("Date", format_datetime(date))
        self._date_issued = True
        return self

    def attachment(
        self, body: bytes, filename: str, content_type: str
    ) -> "EmailBuilder":
        """
        Attach raw bytes to the email, making it multipart/mixed.

        Args:
            body: The raw content of the attachment.
            filename: Name announced in the Content-Disposition header.
            content_type: MIME type of the content, e.g. ``application/pdf``.
        """
        if not filename:
            raise UnparseableAttachmentNameError("Attachment filename is empty")

        encoded_body = base64.encodebytes(body).decode("ascii").rstrip("\n")
        content = (
            self._part()
            .body(encoded_body)
            .header("Content-Disposition", format_content_disposition(filename))
            .header("Content-Type", content_type)
            .header(
                "Content-Transfer-Encoding",
                ContentTransferEncodingChoices.BASE64.value,
            )
            .build()
        )
        return self.message_type(MultipartTypeChoices.MIXED).child(content)

    def attachment_from_file(
        self,
        path: Union[str, os.PathLike],
        content_type: str,
        filename: Optional[str] = None,
    ) -> "EmailBuilder":
        """
        Attach the content of a file.

        The filename defaults to the last component of ``path``. Errors from
        reading the file are propagated unchanged.
        """
        with open(path, "rb") as attachment_file:
            body = attachment_file.read()

        if filename is None:
            filename = os.path.basename(os.fspath(path))
        if not filename:
            raise UnparseableAttachmentNameError(
                f"Cannot derive an attachment filename from {path!s}"
            )
        return self.attachment(body, filename, content_type)

    def message_type(self, message_type: MultipartTypeChoices) -> "EmailBuilder":
        """Set the multipart type of the top-level part."""
        self._message.message_type(message_type)
        return self

    def child(self, child: MimeMessage) -> "EmailBuilder":
        """Add a child part to the top-level part."""
        self._message.child(child)
        return self

    def text(self, body: str) -> "EmailBuilder":
        """Add a text/plain part."""
        return self.child(self._part().body(body).content_type(TEXT_PLAIN_UTF_8).build())

    def html(self, body: str) -> "EmailBuilder":
        """Add a text/html part."""
        return self.child(self._part().body(body).content_type(TEXT_HTML_UTF_8).build())

    def alternative(self, body_html: str, body_text: str) -> "EmailBuilder":
        """Add a multipart/alternative part with text and HTML versions."""
        text = self._part().body(body_text).content_type(TEXT_PLAIN_UTF_8).build()
        html = self._part().body(body_html).content_type(TEXT_HTML_UTF_8).build()
        alternative = (
            self._part()
            .message_type(MultipartTypeChoices.ALTERNATIVE)
            .child(text)
            .child(html)
        )
        return self.message_type(MultipartTypeChoices.MIXED).child(alternative.build())

    def message_id(self, message_id: str) -> "EmailBuilder":
        """Set the Message-ID header, used verbatim."""
        self.header("Message-ID", message_id)
        self._message_id = message_id
        return self

    def envelope(self, envelope: Envelope) -> "EmailBuilder":
        """
        Set the envelope for manual destination control.

        Without it, the envelope is derived from To, Cc and Bcc, and from
        Sender or From.
        """
        self._envelope = envelope
        return self

    def build_body(self) -> bytes:
        """Serialize the message as configured so far, without derived headers.

        This can be used to sign or encrypt the body, e.g. with S/MIME.
        """
        return self._message.build().as_bytes()

    def _infer_sender(self) -> Optional[Mailbox]:
        """Return the Sender, inferring one when there are several authors."""
        if self._sender is not None or len(self._from) < 2:
            return self._sender

        # Only a mailbox can be a Sender, not a group
        for author in self._from:
            if isinstance(author, Mailbox):
                logger.debug("Using %s as Sender of a multi-author email", author)
                return author
        raise MissingSenderError(
            "Every From entry is a group, an explicit Sender is required"
        )

    def _derive_envelope(self, sender: Optional[Mailbox]) -> Envelope:
        forward_path = [
            Mailbox(mailbox.address)
            for recipient in itertools.chain(self._to, self._cc, self._bcc)
            for mailbox in mailboxes_of(recipient)
        ]

        if sender is not None:
            reverse_path = Mailbox(sender.address)
        elif self._from:
            # An author group stands for its first member
            authors = mailboxes_of(self._from[0])
            if not authors:
                raise MissingSenderError("The first From entry is an empty group")
            reverse_path = Mailbox(authors[0].address)
        else:
            raise MissingSenderError("Missing from address")

        envelope = Envelope(forward_path, reverse_path)
        logger.debug(
            "Derived envelope from %s to %s", envelope.sender, envelope.recipients
        )
        return envelope

    def build(self) -> Email:
        """
        Build the Email.

        Raises:
            MissingSenderError: if no envelope sender or From can be found.
            EmptyForwardPathError: if the derived envelope has no recipient.
        """
        message = self._message.copy()

        sender = self._infer_sender()
        if sender is not None:
            message.header("Sender", str(sender))

        envelope = self._envelope or self._derive_envelope(sender)

        if self._to:
            message.header(Header.from_addresses("To", self._to))
        if self._from:
            message.header(Header.from_addresses("From", self._from))
        elif envelope.reverse_path is not None:
            message.header(
                Header.from_addresses("From", [Mailbox(envelope.reverse_path.address)])
            )
        else:
            raise MissingSenderError("Missing from address")
        if self._cc:
            message.header(Header.from_addresses("Cc", self._cc))
        if self._reply_to:
            message.header(Header.from_addresses("Reply-To", self._reply_to))
        if self._in_reply_to:
            message.header("In-Reply-To", " ".join(self._in_reply_to))
        if self._references:
            message.header("References", " ".join(self._references))

        if not self._date_issued:
            message.header("Date", format_datetime(self._clock()))

        message.header("MIME-Version", "1.0")

        message_id = self._message_id
        if message_id is None:
            message_id = self._message_id_source()
            message.header(
                "Message-ID",
                f"<{message_id}.{get_setting('MAILCOMPOSE_MESSAGE_ID_TAG')}"
                f"@{get_setting('MAILCOMPOSE_MESSAGE_ID_DOMAIN')}>",
            )
            logger.debug("Generated Message-ID %s", message_id)

        return Email(message.build().as_bytes(), envelope, message_id)
