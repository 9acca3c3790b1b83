"""Read templates: the human-oriented text form of a message.

A read template is a block of "Name: value" header lines, a blank
line, then the plain text body. Which header lines appear depends on
the HeaderFilterPolicy; the blank line is always there, so the body
can be recovered from any template with extract_body_from_template().
"""

import structlog

from missive.config import DEFAULT_READ_HEADERS, AccountConfig
from missive.errors import ParseError, RenderError
from missive.read.address import format_address
from missive.read.message import Message, ParsedMessage
from missive.read.models import HeaderFilterPolicy, HeaderVisibility

logger = structlog.get_logger()

# Headers rendered through the address formatter
ADDRESS_HEADERS = {"from", "to", "cc", "bcc", "reply-to", "sender"}


def visible_headers(account: AccountConfig, policy: HeaderFilterPolicy) -> list[str]:
    """Header names the template shows under the given policy.

    Names are deduplicated case-insensitively, keeping the first spelling.
    """
    if policy.visibility is HeaderVisibility.hide_all:
        return []

    if policy.visibility is HeaderVisibility.show_only:
        names = list(policy.headers)
    else:
        names = list(account.get("read_headers", DEFAULT_READ_HEADERS))

    seen: set[str] = set()
    result = []
    for name in names:
        name = name.strip()
        if name and name.lower() not in seen:
            seen.add(name.lower())
            result.append(name)
    return result


def render_read_template(
    message: Message, account: AccountConfig, policy: HeaderFilterPolicy
) -> str:
    """Render a message as a read template.

    Headers missing from the message, or too malformed to read, are
    skipped. If the message can't be parsed, the raw message text
    stands in for the template.

    Raises:
        RenderError: If the message body can't be rendered.
    """
    try:
        parsed = message.parsed()
    except ParseError as e:
        logger.warning("template_from_raw", envelope_id=message.envelope_id, error=str(e))
        return message.raw_text()

    lines = []
    for name in visible_headers(account, policy):
        try:
            value = _header_value(parsed, name)
        except ParseError as e:
            # A malformed header only loses its own line
            logger.warning(
                "header_skipped",
                envelope_id=message.envelope_id,
                header=name,
                error=str(e),
            )
            continue
        if value:
            lines.append(f"{name}: {value}")

    try:
        body = _normalize_body(parsed.text_body())
    except (ParseError, ValueError, LookupError, AssertionError) as e:
        # Broken transfer encodings or html2text choking on markup
        raise RenderError(f"cannot render message {message.envelope_id}: {e}") from e

    return "\n".join(lines) + "\n\n" + body


def extract_body_from_template(tpl: str) -> str:
    """Return the body part of a rendered template.

    The body starts after the first blank line. A bare "\\n\\n" is looked
    for first, then "\\r\\n\\r\\n"; without either the whole template is
    the body.
    """
    pos = tpl.find("\n\n")
    if pos != -1:
        return tpl[pos + 2 :]

    pos = tpl.find("\r\n\r\n")
    if pos != -1:
        return tpl[pos + 4 :]

    return tpl


def _header_value(parsed: ParsedMessage, name: str) -> str | None:
    if name.lower() in ADDRESS_HEADERS:
        field = parsed.addresses(name)
        if field is not None:
            return format_address(field)
    return parsed.header(name)


def _normalize_body(body: str) -> str:
    body = body.replace("\r\n", "\n").replace("\r", "\n")
    return "\n".join(line.rstrip() for line in body.split("\n")).rstrip("\n")
