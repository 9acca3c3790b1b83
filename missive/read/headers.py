"""Structured header extraction for read messages."""

from datetime import timezone

import structlog

from missive.errors import ParseError
from missive.read.address import format_address
from missive.read.message import Message
from missive.read.models import MessageHeaders

logger = structlog.get_logger()


def project_headers(message: Message) -> MessageHeaders:
    """Extract the canonical headers of a message for structured output.

    Always works from the parsed MIME message, whatever the read
    template chose to display. A header is present only when the
    message carries a non-empty value for it.

    If the message cannot be parsed, an empty MessageHeaders is
    returned instead of raising.
    """
    try:
        parsed = message.parsed()

        date = parsed.date()
        if date is not None and date.tzinfo is None:
            # "-0000" dates carry no zone; RFC 3339 needs one
            date = date.replace(tzinfo=timezone.utc)

        in_reply_to = parsed.in_reply_to()

        return MessageHeaders(
            from_=_formatted(parsed.from_()),
            to=_formatted(parsed.to()),
            cc=_formatted(parsed.cc()),
            bcc=_formatted(parsed.bcc()),
            subject=parsed.subject(),
            date=date.isoformat() if date is not None else None,
            message_id=parsed.message_id(),
            in_reply_to=in_reply_to[0] if in_reply_to else None,
        )
    except ParseError as e:
        logger.warning("mime_parse_failed", envelope_id=message.envelope_id, error=str(e))
        return MessageHeaders()


def _formatted(field) -> str | None:
    if field is None:
        return None
    return format_address(field) or None
