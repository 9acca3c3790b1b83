"""Fetched messages and their parsed MIME view.

A Message is what the backend hands back: the raw RFC 5322 bytes plus
the envelope it was fetched for. parsed() gives header accessors and
body extraction on top of Python's email package.
"""

import re
from datetime import datetime
from email import policy
from email.message import EmailMessage
from email.parser import BytesParser
from pathlib import Path

import html2text

from missive.errors import ParseError
from missive.read.models import AddressField, AddressGroup, AddressList, GroupList, Mailbox

_MSG_ID_RE = re.compile(r"<([^<>]*)>")


class Message:
    """A message fetched from a backend, not yet parsed."""

    def __init__(self, envelope_id: str, raw: bytes, path: Path | None = None):
        self.envelope_id = envelope_id
        self.raw = raw
        self.path = path
        self._parsed: ParsedMessage | None = None

    def __repr__(self) -> str:
        return f"Message(envelope_id={self.envelope_id!r}, size={len(self.raw)})"

    def parsed(self) -> "ParsedMessage":
        """Parse the raw bytes (once) and return the parsed view.

        Raises:
            ParseError: If the bytes are empty or not a parseable message.
        """
        if self._parsed is None:
            if not self.raw.strip():
                raise ParseError(f"message {self.envelope_id} is empty")
            try:
                msg = BytesParser(policy=policy.default).parsebytes(self.raw)
            except (ValueError, TypeError, LookupError) as e:
                raise ParseError(f"cannot parse message {self.envelope_id}: {e}") from e
            self._parsed = ParsedMessage(msg)
        return self._parsed

    def raw_text(self) -> str:
        """The raw message decoded as text, CRLF normalized to LF."""
        return self.raw.decode("utf-8", errors="replace").replace("\r\n", "\n")


class ParsedMessage:
    """Header accessors and body extraction for a parsed message.

    Accessors return None when the header is missing or empty. Header
    values the email package cannot make sense of raise ParseError.
    """

    def __init__(self, msg: EmailMessage):
        self._msg = msg

    def header(self, name: str) -> str | None:
        """Return a header as display text (first occurrence)."""
        value = self._get(name)
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    def addresses(self, name: str) -> AddressField | None:
        """Return an address header as an AddressList or GroupList."""
        value = self._get(name)
        if value is None or not hasattr(value, "groups"):
            return None
        return parse_address_field(value.groups)

    def from_(self) -> AddressField | None:
        return self.addresses("From")

    def to(self) -> AddressField | None:
        return self.addresses("To")

    def cc(self) -> AddressField | None:
        return self.addresses("Cc")

    def bcc(self) -> AddressField | None:
        return self.addresses("Bcc")

    def subject(self) -> str | None:
        return self.header("Subject")

    def date(self) -> datetime | None:
        """Parsed Date header; None when missing or unparseable."""
        value = self._get("Date")
        if value is None:
            return None
        return getattr(value, "datetime", None)

    def message_id(self) -> str | None:
        ids = self._message_ids("Message-ID")
        return ids[0] if ids else None

    def in_reply_to(self) -> list[str]:
        """All ids listed in In-Reply-To, in header order."""
        return self._message_ids("In-Reply-To")

    def text_body(self) -> str:
        """The plain text body.

        Prefers the first text/plain part; falls back to the first
        text/html part converted to text. Attachments are skipped.
        """
        body_plain = None
        body_html = None

        for part in self._msg.walk():
            # Skip multipart containers themselves
            if part.get_content_maintype() == "multipart":
                continue

            content_type = part.get_content_type()
            disposition = str(part.get("Content-Disposition", ""))

            # Attachments have a Content-Disposition of "attachment",
            # or an explicit filename on an inline part that isn't text
            if "attachment" in disposition or (
                part.get_filename() and content_type not in ("text/plain", "text/html")
            ):
                continue

            if content_type == "text/plain" and body_plain is None:
                body_plain = _decode_part(part)
            elif content_type == "text/html" and body_html is None:
                body_html = _decode_part(part)

        if body_plain is not None:
            return body_plain
        if body_html is not None:
            return html_to_text(body_html)
        return ""

    def _get(self, name: str):
        try:
            return self._msg.get(name)
        except (ValueError, TypeError, IndexError, AttributeError) as e:
            raise ParseError(f"malformed {name} header: {e}") from e

    def _message_ids(self, name: str) -> list[str]:
        value = self.header(name)
        if value is None:
            return []
        ids = _MSG_ID_RE.findall(value)
        if not ids:
            # Bare ids without angle brackets
            ids = value.split()
        return [i.strip() for i in ids if i.strip()]


def parse_address_field(groups) -> AddressField:
    """Turn email.headerregistry groups into an AddressList or GroupList.

    The email package wraps ungrouped addresses in groups without a
    display name; only headers with at least one named group become a
    GroupList.
    """
    if any(group.display_name is not None for group in groups):
        return GroupList(
            tuple(
                AddressGroup(
                    name=group.display_name or None,
                    mailboxes=tuple(_mailbox(a) for a in group.addresses),
                )
                for group in groups
            )
        )

    return AddressList(
        tuple(_mailbox(a) for group in groups for a in group.addresses)
    )


def html_to_text(html: str) -> str:
    """Convert an HTML body to readable plain text."""
    converter = html2text.HTML2Text()
    converter.ignore_images = True
    converter.body_width = 0  # Don't wrap lines
    return converter.handle(html)


def _mailbox(address) -> Mailbox:
    addr_spec = address.addr_spec
    return Mailbox(
        name=address.display_name or None,
        # An empty addr-spec renders as "<>"
        address=addr_spec if addr_spec not in ("", "<>") else None,
    )


def _decode_part(part) -> str:
    payload = part.get_payload(decode=True)
    if not payload:
        return ""
    charset = part.get_content_charset() or "utf-8"
    try:
        return payload.decode(charset, errors="replace")
    except LookupError:
        # Unknown charset name
        return payload.decode("utf-8", errors="replace")
