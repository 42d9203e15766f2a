"""Error types raised by the tagging pipeline."""

from __future__ import annotations


class TaggerError(RuntimeError):
    """Base class for pipeline errors."""


class InputError(TaggerError):
    """Raised when run inputs are unusable before any remote call is made."""


class TransportError(TaggerError):
    """Raised when a TMDb request cannot complete."""


class NotFoundError(TaggerError):
    """Raised when TMDb is reachable but the search yields no candidates."""


class PartialFieldError(TaggerError):
    """Raised for a single metadata field that could not be produced.

    Never aborts a run; the aggregator logs it and moves on.
    """

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class SerializationError(TaggerError):
    """Raised when the tag document cannot be built or written."""
