"""Email message reading.

Turns fetched messages into read templates and structured records.
The pipeline that ties it together lives in missive.read.pipeline.
"""

from missive.read.address import format_address
from missive.read.headers import project_headers
from missive.read.message import Message, ParsedMessage, parse_address_field
from missive.read.models import (
    AddressGroup,
    AddressList,
    GroupList,
    HeaderFilterPolicy,
    HeaderVisibility,
    Mailbox,
    MessageHeaders,
    StructuredMessage,
    StructuredMessages,
)
from missive.read.template import extract_body_from_template, render_read_template

__all__ = [
    "AddressGroup",
    "AddressList",
    "GroupList",
    "HeaderFilterPolicy",
    "HeaderVisibility",
    "Mailbox",
    "Message",
    "MessageHeaders",
    "ParsedMessage",
    "StructuredMessage",
    "StructuredMessages",
    "extract_body_from_template",
    "format_address",
    "parse_address_field",
    "project_headers",
    "render_read_template",
]
