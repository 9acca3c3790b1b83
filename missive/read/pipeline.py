"""The read-message pipeline.

Fetches a batch of messages, renders each one's read template, and
assembles StructuredMessages in the order the ids were given.
"""

import structlog

from missive.config import AccountConfig, MissiveConfig, resolve_account
from missive.read.headers import project_headers
from missive.read.models import HeaderFilterPolicy, StructuredMessage, StructuredMessages
from missive.read.template import extract_body_from_template, render_read_template
from missive.storage.backend import MaildirBackend, build_backend

logger = structlog.get_logger()


async def read_messages(
    backend: MaildirBackend,
    account: AccountConfig,
    folder: str,
    ids: list[str],
    *,
    preview: bool = False,
    policy: HeaderFilterPolicy | None = None,
) -> StructuredMessages:
    """Read messages and build their structured form.

    With preview=True messages are peeked and keep their flags;
    otherwise they are marked as seen by the backend.

    Structured headers always come from the parsed message, whatever
    the policy hides from the template. A message that can't be
    parsed keeps its body but gets empty headers.

    Raises:
        FetchError: If the backend can't fetch the batch.
        RenderError: If any message fails to render.
    """
    policy = policy or HeaderFilterPolicy.show_configured()

    logger.info(
        "read_messages_started",
        folder=folder,
        ids=ids,
        preview=preview,
        headers=policy.visibility.value,
    )

    if preview:
        emails = await backend.peek_messages(folder, ids)
    else:
        emails = await backend.get_messages(folder, ids)

    structured = []
    for idx, email in enumerate(emails):
        tpl = render_read_template(email, account, policy)
        headers = project_headers(email)
        body = extract_body_from_template(tpl)

        # Use the envelope id if available, otherwise the index
        msg_id = ids[idx] if idx < len(ids) else str(idx)

        structured.append(StructuredMessage(id=msg_id, headers=headers, body=body))

    return StructuredMessages(structured)


async def resolve_and_read(
    config: MissiveConfig,
    account_name: str | None,
    folder: str | None,
    ids: list[str],
    *,
    preview: bool = False,
    policy: HeaderFilterPolicy | None = None,
) -> StructuredMessages:
    """Resolve the account, build its backend and read the messages.

    folder=None reads from the account's default folder.

    Raises:
        ConfigError: If the account can't be resolved.
        FetchError: If the backend can't fetch the batch.
        RenderError: If any message fails to render.
    """
    account = resolve_account(config, account_name)
    backend = build_backend(account)

    return await read_messages(
        backend,
        account,
        folder or account["default_folder"],
        ids,
        preview=preview,
        policy=policy,
    )
