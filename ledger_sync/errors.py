"""
Error types raised by the ingestion pipeline and its HTTP surface.

The API layer maps each of these to a response envelope; see the
exception handlers registered in ledger_sync.main.
"""

from dataclasses import dataclass


class LedgerSyncError(Exception):
    """Base class for all application errors."""


@dataclass(frozen=True)
class FieldError:
    """One problem found in an incoming snapshot."""
    path: str
    reason: str

    def __str__(self) -> str:
        return f"{self.path}: {self.reason}"


class SnapshotValidationError(LedgerSyncError, ValueError):
    """
    The snapshot payload is malformed or incomplete.

    Raised before anything is written. The caller can fix the
    payload and resubmit.
    """

    def __init__(self, errors: list[FieldError]):
        self.errors = list(errors)
        summary = "; ".join(str(e) for e in self.errors) or "invalid snapshot"
        super().__init__(f"Invalid snapshot: {summary}")


class IngestionError(LedgerSyncError):
    """
    The store failed while applying a snapshot.

    The whole unit of work has been rolled back by the time this
    is raised. The original exception is chained as __cause__.
    """

    def __init__(self, message: str, file_name: str | None = None):
        self.file_name = file_name
        super().__init__(message)


class AuthorizationError(LedgerSyncError):
    """Missing or invalid credentials on an API request."""


class LedgerWriteError(LedgerSyncError):
    """
    Writing an import control failure record failed.

    Raised by the import control service; the ingestion service
    catches and logs it so the original failure is what callers see.
    """


class TransactionTimeoutError(LedgerSyncError):
    """
    A unit of work ran past its time limit.

    Raised by a store before it commits, so the whole unit of work
    is rolled back.
    """

    def __init__(self, elapsed: float, limit: float):
        self.elapsed = elapsed
        self.limit = limit
        super().__init__(
            f"Transaction took {elapsed:.2f}s, limit is {limit}s"
        )
