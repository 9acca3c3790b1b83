"""Display formatting for address headers."""

from missive.read.models import AddressField, AddressGroup, GroupList, Mailbox


def format_address(field: AddressField) -> str:
    """Format a parsed address header as a single display string.

    Flat lists render each entry as "Name <address>", "address" or
    "Name" depending on what is present, joined with ", ". Entries with
    neither are dropped.

    Groups render as "Name: member1, member2;" using member addresses
    only, joined with a single space.
    """
    if isinstance(field, GroupList):
        return " ".join(
            f"{group.name or ''}: {_group_members(group)};"
            for group in field.groups
        )

    return ", ".join(
        rendered
        for rendered in (_format_mailbox(m) for m in field.mailboxes)
        if rendered
    )


def _group_members(group: AddressGroup) -> str:
    return ", ".join(m.address for m in group.mailboxes if m.address)


def _format_mailbox(mailbox: Mailbox) -> str | None:
    if mailbox.name and mailbox.address:
        return f"{mailbox.name} <{mailbox.address}>"
    return mailbox.address or mailbox.name or None
