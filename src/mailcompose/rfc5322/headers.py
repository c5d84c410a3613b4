"""
Header fields and the ordered, multi-valued header collection.
"""

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .address import fold_address_list

ContentType = Tuple[str, str]


def format_content_type(
    content_type: ContentType, params: Optional[Dict[str, str]] = None
) -> str:
    """
    Render a Content-Type value as ``major/minor; key=value; ...``.

    Parameters are emitted in the order of ``params``.

    Examples:
        >>> format_content_type(("multipart", "mixed"), {"boundary": "abc"})
        'multipart/mixed; boundary=abc'
    """
    major, minor = content_type
    result = f"{major}/{minor}"
    for key, value in (params or {}).items():
        result = f"{result}; {key}={value}"
    return result


class Header:
    """A single header field. The value is stored before folding."""

    __slots__ = ("_name", "_value")

    def __init__(self, name: str, value: str):
        self._name = name
        self._value = value

    @classmethod
    def from_addresses(cls, name: str, addresses: Iterable) -> "Header":
        """
        Build an address-list header (To, From, Cc, ...).

        The list is folded between whole addresses, starting after the
        ``Name: `` prefix. Raises EmptyAddressListError for an empty list.
        """
        return cls(name, fold_address_list(len(name) + 2, list(addresses)))

    @classmethod
    def from_content_type(
        cls, content_type: ContentType, params: Optional[Dict[str, str]] = None
    ) -> "Header":
        """Build a Content-Type header."""
        return cls("Content-Type", format_content_type(content_type, params))

    @property
    def name(self) -> str:
        return self._name

    @property
    def value(self) -> str:
        return self._value

    def __str__(self):
        return f"{self._name}: {self._value}"

    def __repr__(self):
        return f"Header({self._name!r}, {self._value!r})"

    def __eq__(self, other):
        if not isinstance(other, Header):
            return NotImplemented
        return (self._name, self._value) == (other._name, other._value)

    def __hash__(self):
        return hash((self._name, self._value))


class HeaderMap:
    """
    Ordered collection of headers, allowing several entries per name.

    Headers are kept twice: as an ordered list, which drives iteration and
    serialization, and as a mapping from the lowercased header name to every
    entry with that name, for lookups. Names keep their original case.
    """

    def __init__(self, headers: Optional[Iterable[Header]] = None):
        self._ordered: List[Header] = []
        self._by_name: Dict[str, List[Header]] = {}
        for header in headers or ():
            self.insert(header)

    def insert(self, header: Header) -> None:
        """Append ``header``, keeping any existing entries with the same name."""
        self._ordered.append(header)
        self._by_name.setdefault(header.name.lower(), []).append(header)

    def replace(self, header: Header) -> None:
        """
        Replace every entry named like ``header`` with ``header``.

        The new header takes the position of the first former entry, or is
        appended when there was none.
        """
        key = header.name.lower()
        ordered = []
        inserted = False
        for existing in self._ordered:
            if existing.name.lower() != key:
                ordered.append(existing)
            elif not inserted:
                ordered.append(header)
                inserted = True
        if not inserted:
            ordered.append(header)

        self._ordered = ordered
        self._by_name[key] = [header]

    def get(self, name: str) -> Optional[Header]:
        """Return the last header inserted under ``name``, or None."""
        headers = self._by_name.get(name.lower())
        return headers[-1] if headers else None

    def find(self, name: str) -> Optional[List[Header]]:
        """Return all headers named ``name`` in insertion order, or None."""
        headers = self._by_name.get(name.lower())
        return list(headers) if headers else None

    def __iter__(self) -> Iterator[Header]:
        return iter(list(self._ordered))

    def __len__(self):
        return len(self._ordered)

    def __contains__(self, name):
        return bool(self._by_name.get(name.lower()))

    def __eq__(self, other):
        if not isinstance(other, HeaderMap):
            return NotImplemented
        return self._ordered == other._ordered

    def __repr__(self):
        return f"HeaderMap({self._ordered!r})"
