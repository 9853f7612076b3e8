"""Error kinds raised by the analysis engine."""


class VerbatimError(Exception):
    """Base class for all engine errors."""


class NotFoundError(VerbatimError, KeyError):
    """A word, suggestion or confirmed error does not belong to the session."""

    def __str__(self) -> str:
        # KeyError wraps its message in quotes
        return str(self.args[0]) if self.args else ""


class InvalidRangeError(VerbatimError, ValueError):
    """A time span whose end precedes its start."""


class InvalidTransitionError(VerbatimError):
    """A lifecycle move that is not permitted from the word's current status."""


class LedgerInconsistencyError(VerbatimError):
    """Confirmed words and ledger entries are no longer in 1:1 correspondence."""
