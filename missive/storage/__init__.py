"""Local Maildir storage and the message backend built on it."""

from missive.storage.backend import MaildirBackend, build_backend
from missive.storage.maildir import MaildirStorage, split_filename

__all__ = ["MaildirBackend", "MaildirStorage", "build_backend", "split_filename"]
