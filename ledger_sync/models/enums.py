"""
Shared enumerations for database models.
"""

import enum


class SyncState(str, enum.Enum):
    """Progress of an upstream batch sync run."""
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
