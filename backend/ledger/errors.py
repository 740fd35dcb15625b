"""Failure taxonomy for ledger operations.

Every failure is terminal for the user action that caused it; nothing here is
retried. Routers turn these into ``ApiResponse.fail`` envelopes.
"""


class LedgerError(Exception):
    """Base class for ledger failures."""


class FetchFailure(LedgerError):
    """A persistence read was rejected. No summary is computed."""


class MutationFailure(LedgerError):
    """An insert, update or delete was rejected and rolled back."""


class ValidationFailure(LedgerError, ValueError):
    """Required input is missing or malformed. Raised before any write."""
