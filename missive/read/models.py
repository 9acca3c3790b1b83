"""Data models for email message reading."""

from dataclasses import asdict, dataclass, field
from enum import Enum


class HeaderVisibility(str, Enum):
    """Which headers the read template shows."""

    configured = "configured"
    hide_all = "hide_all"
    show_only = "show_only"


@dataclass(frozen=True)
class HeaderFilterPolicy:
    """Header visibility for the read template.

    Exactly one mode applies. Build it with the class methods (or
    from_flags at the CLI boundary) rather than the constructor, so the
    header list is only ever set for show_only.
    """

    visibility: HeaderVisibility = HeaderVisibility.configured
    headers: tuple[str, ...] = ()

    @classmethod
    def show_configured(cls) -> "HeaderFilterPolicy":
        return cls()

    @classmethod
    def hide_all(cls) -> "HeaderFilterPolicy":
        return cls(HeaderVisibility.hide_all)

    @classmethod
    def show_only(cls, headers: list[str]) -> "HeaderFilterPolicy":
        return cls(HeaderVisibility.show_only, tuple(headers))

    @classmethod
    def from_flags(
        cls, no_headers: bool, headers: list[str] | None
    ) -> "HeaderFilterPolicy":
        """Build the policy from the --no-headers / --header options.

        Raises:
            ValueError: If both options are given.
        """
        if no_headers and headers:
            raise ValueError("--no-headers cannot be used with --header")
        if no_headers:
            return cls.hide_all()
        if headers:
            return cls.show_only(headers)
        return cls.show_configured()


@dataclass(frozen=True)
class Mailbox:
    """One address entry: display name and/or address."""

    name: str | None = None
    address: str | None = None


@dataclass(frozen=True)
class AddressGroup:
    """A named RFC 5322 group ("Team: a@x, b@y;")."""

    name: str | None = None
    mailboxes: tuple[Mailbox, ...] = ()


@dataclass(frozen=True)
class AddressList:
    """A plain address header: a flat list of mailboxes."""

    mailboxes: tuple[Mailbox, ...] = ()


@dataclass(frozen=True)
class GroupList:
    """An address header containing named groups."""

    groups: tuple[AddressGroup, ...] = ()


AddressField = AddressList | GroupList


@dataclass(frozen=True)
class MessageHeaders:
    """Headers extracted for structured output.

    A field is None when the message doesn't carry that header; None
    fields are left out of to_dict() entirely.
    """

    from_: str | None = None
    to: str | None = None
    cc: str | None = None
    bcc: str | None = None
    subject: str | None = None
    date: str | None = None  # RFC 3339
    message_id: str | None = None
    in_reply_to: str | None = None  # First id only

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization, omitting absent headers."""
        return {
            key.rstrip("_"): value
            for key, value in asdict(self).items()
            if value is not None
        }


@dataclass(frozen=True)
class StructuredMessage:
    """A read message as a machine-consumable record."""

    id: str  # Envelope id, or positional index when ids ran out
    headers: MessageHeaders
    body: str  # Plain body taken from the read template

    def to_dict(self) -> dict:
        return {"id": self.id, "headers": self.headers.to_dict(), "body": self.body}


@dataclass
class StructuredMessages:
    """Ordered collection of read messages.

    str() gives the human-readable rendering: bodies only, separated
    by one blank line.
    """

    messages: list[StructuredMessage] = field(default_factory=list)

    def __iter__(self):
        return iter(self.messages)

    def __len__(self) -> int:
        return len(self.messages)

    def __getitem__(self, index: int) -> StructuredMessage:
        return self.messages[index]

    def __str__(self) -> str:
        return "\n\n".join(msg.body for msg in self.messages)

    def to_dict(self) -> list[dict]:
        """Convert to a list of dictionaries for JSON serialization."""
        return [msg.to_dict() for msg in self.messages]
