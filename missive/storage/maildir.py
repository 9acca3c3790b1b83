"""Maildir storage for email messages.

Implements the Maildir format used by mbsync, offlineimap, notmuch and
most local mail tools. Handles folder lookup, message lookup by
envelope id and flag updates.

Maildir format uses three subdirectories:
- tmp/: Messages being delivered (atomic write in progress)
- new/: Newly delivered, unread messages
- cur/: Messages that have been seen

Message filenames follow the format:
<unique-name>:2,<flags>

The unique name is the envelope id missive exposes. Flags are single
uppercase letters (alphabetically sorted):
- D: Draft
- F: Flagged (starred)
- R: Replied
- S: Seen (read)
- T: Trashed
"""

import os
from pathlib import Path

# Separator between the unique name and the info part of a filename
INFO_SEPARATOR = ":2,"

SEEN_FLAG = "S"

# The inbox may be the Maildir root itself (mbsync's default layout)
INBOX = "INBOX"


def split_filename(filename: str) -> tuple[str, str]:
    """Split a Maildir filename into (unique name, flags).

    Files in new/ usually have no info part, so flags are empty.
    """
    unique, sep, flags = filename.partition(INFO_SEPARATOR)
    if not sep:
        # Some tools write ":1," info or nothing at all
        unique = filename.split(":", 1)[0]
        flags = ""
    return unique, flags


class MaildirStorage:
    """Storage backend for Maildir format.

    Looks up folders and message files for one account and updates
    message flags by renaming files.

    Example:
        storage = MaildirStorage(Path("~/Mail/Personal"))
        path = storage.get_message_path("INBOX", envelope_id)
        storage.add_flags(path, "S")
    """

    def __init__(self, base_path: Path):
        """Initialize Maildir storage.

        Args:
            base_path: Base directory for Maildir storage (e.g., ~/Mail/Personal).
        """
        self._base_path = base_path.expanduser().resolve()

    @property
    def base_path(self) -> Path:
        """Get the base path for this Maildir storage."""
        return self._base_path

    @staticmethod
    def is_maildir(path: Path) -> bool:
        """Check whether a directory has the cur/ new/ tmp/ structure."""
        return all((path / subdir).is_dir() for subdir in ("cur", "new", "tmp"))

    def folder_path(self, folder_name: str) -> Path | None:
        """Locate an existing folder.

        INBOX resolves to <base>/INBOX when present, otherwise to the
        Maildir root if the root is itself a Maildir.

        Returns:
            Path to the folder, or None if no such Maildir folder exists.
        """
        folder_path = self._base_path / folder_name
        if self.is_maildir(folder_path):
            return folder_path

        if folder_name.upper() == INBOX and self.is_maildir(self._base_path):
            return self._base_path

        return None

    def get_message_path(self, folder: str, envelope_id: str) -> Path | None:
        """Get the path to a message by envelope id.

        Looks in cur/ then new/ of the given folder.

        Returns:
            Path to the message file, or None if not found.
        """
        folder_path = self.folder_path(folder)
        if folder_path is None:
            return None

        for subdir in ("cur", "new"):
            for path in (folder_path / subdir).iterdir():
                if split_filename(path.name)[0] == envelope_id:
                    return path

        return None

    def add_flags(self, path: Path, flags: str) -> Path:
        """Add flags to a message, moving it to cur/.

        Args:
            path: Current path of the message file.
            flags: Flags to add (e.g., "S").

        Returns:
            The message's new path (unchanged if nothing had to move).
        """
        unique, current = split_filename(path.name)
        merged = "".join(sorted(set(current) | set(flags)))

        dest_path = path.parent.parent / "cur" / f"{unique}{INFO_SEPARATOR}{merged}"
        if dest_path != path:
            os.rename(path, dest_path)

        return dest_path
