"""Error kinds raised by the inline-table pipeline.

Build-time errors (rendering, serialization, compression) abort the whole
table.  Query-time errors abort a single query and leave the overflow cache
untouched.  Date-parse failures are never errors.
"""


class InlineTableError(Exception):
    """Base class for every error raised by this package."""


class RenderingFailure(InlineTableError):
    """The markup collaborator could not render or transform a cell."""


class SerializationFailure(InlineTableError):
    """The record set could not be encoded as JSON."""


class CompressionFailure(InlineTableError):
    """The serialized record set could not be compressed or encoded."""


class PayloadDecodeError(InlineTableError):
    """A payload reference resolved to data that does not decode to entries."""


class ReferenceNotFoundError(InlineTableError):
    """A cache-hash payload reference has no stored value."""

    def __init__(self, reference: str):
        super().__init__(f"No cached payload for reference {reference}")
        self.reference = reference
