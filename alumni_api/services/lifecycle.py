"""
Soft-delete lifecycle of employment records.

    ACTIVE --soft_delete--> SOFT_DELETED --restore--> ACTIVE
                                         --purge----> (removed)

A removed document no longer exists, so it has no state of its own.
Any transition requested from the wrong state is rejected with NotFoundError.
"""

from enum import Enum

from alumni_api.core.errors import NotFoundError


class RecordState(str, Enum):
    ACTIVE = "active"
    SOFT_DELETED = "soft_deleted"

    @classmethod
    def of(cls, doc: dict) -> "RecordState":
        return cls.SOFT_DELETED if doc.get("deleted") else cls.ACTIVE


class Transition(str, Enum):
    SOFT_DELETE = "soft_delete"
    RESTORE = "restore"
    PURGE = "purge"


# transition -> state the record must currently be in.
# Admins get no bypass: soft deleting a missing or already trashed record is
# a 404 for them too, so a repeated delete never reports success.
REQUIRED_STATE = {
    Transition.SOFT_DELETE: RecordState.ACTIVE,
    Transition.RESTORE: RecordState.SOFT_DELETED,
    Transition.PURGE: RecordState.SOFT_DELETED,
}

_REJECTION = {
    Transition.SOFT_DELETE: "Data not found",
    Transition.RESTORE: "Data not found or not in trash",
    Transition.PURGE: "Data not found or not in trash (soft delete it first)",
}


def can_transition(doc: dict, transition: Transition) -> bool:
    return doc is not None and RecordState.of(doc) == REQUIRED_STATE[transition]


def check_transition(doc: dict, transition: Transition) -> None:
    """Raise NotFoundError unless ``doc`` exists and is in the required state."""
    if not can_transition(doc, transition):
        raise NotFoundError(_REJECTION[transition])
