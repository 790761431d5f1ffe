"""
Snapshot validation.

Turns an untrusted payload into a LedgerSnapshot, or raises
SnapshotValidationError listing every problem found. Nothing is
read from or written to the store here.
"""

from typing import Any

from pydantic import ValidationError

from ledger_sync.errors import FieldError, SnapshotValidationError
from ledger_sync.schemas.snapshot import LedgerSnapshot


def _path(location: tuple) -> str:
    return ".".join(str(part) for part in location) or "<root>"


def validate_snapshot(payload: Any) -> LedgerSnapshot:
    """Validate and normalise a raw snapshot payload."""
    if isinstance(payload, LedgerSnapshot):
        return payload
    try:
        return LedgerSnapshot.model_validate(payload)
    except ValidationError as e:
        raise SnapshotValidationError([
            FieldError(path=_path(err["loc"]), reason=err["msg"])
            for err in e.errors()
        ]) from e
