"""missive: read email from local Maildir folders."""

__version__ = "0.1.0"
