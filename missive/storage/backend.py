"""Async message retrieval on top of Maildir storage.

The backend offers two retrieval modes. get_messages() marks every
fetched message as seen; peek_messages() leaves the mailbox untouched.
All blocking file I/O runs in a worker thread via asyncio.to_thread().
"""

import asyncio
from pathlib import Path

import structlog

from missive.config import AccountConfig
from missive.errors import ConfigError, FetchError
from missive.read.message import Message
from missive.storage.maildir import SEEN_FLAG, MaildirStorage

logger = structlog.get_logger()


class MaildirBackend:
    """Fetches messages by envelope id from a local Maildir."""

    def __init__(self, storage: MaildirStorage) -> None:
        self._storage = storage

    @property
    def storage(self) -> MaildirStorage:
        return self._storage

    async def get_messages(self, folder: str, ids: list[str]) -> list[Message]:
        """Fetch messages and mark them as seen.

        Raises:
            FetchError: If the folder or any id is missing, or a file
                can't be read. Nothing is marked seen in that case.
        """
        return await asyncio.to_thread(self._fetch_sync, folder, ids, True)

    async def peek_messages(self, folder: str, ids: list[str]) -> list[Message]:
        """Fetch messages without changing their flags.

        Raises:
            FetchError: If the folder or any id is missing, or a file
                can't be read.
        """
        return await asyncio.to_thread(self._fetch_sync, folder, ids, False)

    def _fetch_sync(self, folder: str, ids: list[str], mark_seen: bool) -> list[Message]:
        if self._storage.folder_path(folder) is None:
            raise FetchError(f"Folder '{folder}' not found", folder=folder)

        # Resolve and read the whole batch before touching any flag
        messages = []
        try:
            for envelope_id in ids:
                path = self._storage.get_message_path(folder, envelope_id)
                if path is None:
                    raise FetchError(
                        f"Message '{envelope_id}' not found in folder '{folder}'",
                        folder=folder,
                        envelope_id=envelope_id,
                    )
                messages.append(Message(envelope_id, path.read_bytes(), path))
        except OSError as e:
            raise FetchError(f"Cannot read folder '{folder}': {e}", folder=folder) from e

        logger.debug("messages_fetched", folder=folder, count=len(messages), mark_seen=mark_seen)

        if mark_seen:
            self._mark_seen(folder, messages)

        return messages

    def _mark_seen(self, folder: str, messages: list[Message]) -> None:
        # The same id may be requested twice; move each file only once
        moved: dict[Path, Path] = {}
        for message in messages:
            if message.path not in moved:
                try:
                    moved[message.path] = self._storage.add_flags(message.path, SEEN_FLAG)
                except OSError as e:
                    raise FetchError(
                        f"Cannot flag message '{message.envelope_id}' as seen: {e}",
                        folder=folder,
                        envelope_id=message.envelope_id,
                    ) from e
                logger.debug("message_marked_seen", envelope_id=message.envelope_id)
            message.path = moved[message.path]


def build_backend(account: AccountConfig) -> MaildirBackend:
    """Build the backend for a resolved account.

    Raises:
        ConfigError: If the account has no mail_dir or it doesn't exist.
    """
    mail_dir = account.get("mail_dir")
    if not mail_dir:
        raise ConfigError("Account has no mail_dir set")

    base_path = Path(mail_dir).expanduser()
    if not base_path.is_dir():
        raise ConfigError(f"mail_dir {base_path} does not exist")

    return MaildirBackend(MaildirStorage(base_path))
