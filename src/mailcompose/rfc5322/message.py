"""
MIME message tree.

A MimeMessage is a node holding headers, a body and, for multipart messages,
child nodes separated by a boundary. Serialization is plain recursion over
the tree.
"""

import logging
from typing import Callable, Dict, List, Optional

from django.utils.crypto import get_random_string

from ..enums import MultipartTypeChoices
from .folding import fold
from .headers import Header, HeaderMap

logger = logging.getLogger(__name__)

BOUNDARY_LENGTH = 30

# Returns a random alphanumeric string of the requested length
TokenSource = Callable[[int], str]


def random_boundary(token_source: Optional[TokenSource] = None) -> str:
    """Generate a multipart boundary token."""
    return (token_source or get_random_string)(BOUNDARY_LENGTH)


class MimeMessage:
    """
    A MIME message, or a part of one.

    ``body`` is kept in its transfer form: it is written out as is, so it
    must already be encoded (base64, quoted-printable...) when needed.

    Headers derived from the structure of the message (Content-Type of
    multipart messages) are not kept in sync automatically: call
    update_headers() after changing ``message_type``, ``children``,
    ``boundary`` or ``message_type_params``.
    """

    def __init__(
        self,
        body: str = "",
        message_type: Optional[MultipartTypeChoices] = None,
        children: Optional[List["MimeMessage"]] = None,
        boundary: Optional[str] = None,
        message_type_params: Optional[Dict[str, str]] = None,
        token_source: Optional[TokenSource] = None,
    ):
        self.headers = HeaderMap()
        self.body = body
        self.message_type = message_type
        # Additional Content-Type parameters, never including "boundary"
        self.message_type_params = message_type_params
        self.children = list(children or [])
        self.boundary = boundary or random_boundary(token_source)
        self.update_headers()

    def update_headers(self) -> None:
        """Update the Content-Type header from the structure of the message."""
        if self.children and self.message_type is None:
            self.message_type = MultipartTypeChoices.MIXED

        if self.message_type is None:
            return

        params = {
            key: value
            for key, value in (self.message_type_params or {}).items()
            if key.lower() != "boundary"
        }
        params["boundary"] = self.boundary
        self.headers.replace(
            Header.from_content_type(
                MultipartTypeChoices(self.message_type).to_content_type(), params
            )
        )

    def as_string(self) -> str:
        """Serialize the message: folded headers, blank line, then the body."""
        lines = []
        for header in self.headers:
            prefix = f"{header.name}: "
            lines.append(prefix + fold(header.value, start_column=len(prefix)))
            lines.append("\r\n")
        lines.append("\r\n")
        return "".join(lines) + self.as_string_without_headers()

    def as_string_without_headers(self) -> str:
        """Serialize the body and the children, without this node's headers."""
        result = [f"{self.body}\r\n"]

        if self.children:
            for child in self.children:
                result.append(f"--{self.boundary}\r\n{child.as_string()}\r\n")
            result.append(f"--{self.boundary}--\r\n")

        return "".join(result)

    def as_bytes(self) -> bytes:
        """Serialize the message as UTF-8 bytes."""
        return self.as_string().encode("utf-8")

    def __repr__(self):
        return (
            f"<MimeMessage type={self.message_type!s} "
            f"children={len(self.children)} boundary={self.boundary!r}>"
        )
