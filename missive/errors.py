"""Exception hierarchy for missive.

Every error raised by the library derives from MissiveError so the CLI
can report it uniformly. ParseError is the only one that never reaches
the caller of the read pipeline: a message whose MIME structure cannot
be parsed is still read, just without structured headers.
"""


class MissiveError(Exception):
    """Base class for all missive errors."""


class ConfigError(MissiveError):
    """Account or configuration resolution failed."""


class FetchError(MissiveError):
    """Messages could not be retrieved from the backend.

    Attributes:
        folder: Folder the fetch targeted.
        envelope_id: The envelope that failed, if the failure is tied to one.
    """

    def __init__(self, message: str, *, folder: str | None = None, envelope_id: str | None = None):
        super().__init__(message)
        self.folder = folder
        self.envelope_id = envelope_id


class RenderError(MissiveError):
    """A message could not be rendered into its read template."""


class ParseError(MissiveError):
    """A message's MIME structure could not be parsed."""
