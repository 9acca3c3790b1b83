"""Configuration schema definitions.

Uses TypedDict for type safety without runtime overhead.
These types match the structure of config.toml.
"""

from typing import TypedDict


class DefaultsConfig(TypedDict, total=False):
    """Default settings applied to every account.

    Attributes:
        folder: Folder read when no --folder is given.
        read_headers: Headers shown at the top of a read message.
    """

    folder: str
    read_headers: list[str]


class AccountConfig(TypedDict, total=False):
    """Single email account configuration.

    Attributes:
        mail_dir: Local Maildir path for this account (e.g., "~/Mail/Work").
        default_folder: Folder read when no --folder is given.
        read_headers: Headers shown at the top of a read message,
            overriding defaults.read_headers.
    """

    mail_dir: str
    default_folder: str
    read_headers: list[str]


class MissiveConfig(TypedDict, total=False):
    """Root configuration structure.

    Attributes:
        defaults: Default settings for all accounts.
        accounts: Dict mapping account names to their configurations.
    """

    defaults: DefaultsConfig
    accounts: dict[str, AccountConfig]
