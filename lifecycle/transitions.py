# lifecycle/transitions.py
# Static transition tables, one per entity kind. Nothing else decides legality.

from enum import Enum

from database.lifecycle_models import (
    CollaborationStatusDB,
    DeliverableStatusDB,
    PaymentStatusDB,
    DisputeStatusDB,
)
from lifecycle.errors import InvalidTransition


class EntityKind(str, Enum):
    COLLABORATION = "collaboration"
    DELIVERABLE = "deliverable"
    PAYMENT = "payment"
    DISPUTE = "dispute"


C = CollaborationStatusDB
D = DeliverableStatusDB
P = PaymentStatusDB
X = DisputeStatusDB

ALLOWED: dict[EntityKind, dict[Enum, frozenset]] = {
    EntityKind.COLLABORATION: {
        C.PENDING: frozenset({C.ACCEPTED, C.DECLINED}),
        C.ACCEPTED: frozenset({C.IN_PROGRESS, C.CANCELLED}),
        C.IN_PROGRESS: frozenset({C.COMPLETED, C.CANCELLED}),
        C.DECLINED: frozenset(),
        C.COMPLETED: frozenset(),
        C.CANCELLED: frozenset(),
    },
    EntityKind.DELIVERABLE: {
        D.PENDING: frozenset({D.SUBMITTED}),
        D.SUBMITTED: frozenset({D.APPROVED, D.REVISION_REQUESTED, D.REJECTED}),
        D.REVISION_REQUESTED: frozenset({D.SUBMITTED}),
        D.APPROVED: frozenset(),
        D.REJECTED: frozenset(),
    },
    EntityKind.PAYMENT: {
        P.PENDING: frozenset({P.IN_ESCROW, P.REFUNDED}),  # refund before funds are held
        P.IN_ESCROW: frozenset({P.RELEASED, P.REFUNDED}),
        P.RELEASED: frozenset(),
        P.REFUNDED: frozenset(),
    },
    # Resolution and closing may happen straight from OPEN.
    EntityKind.DISPUTE: {
        X.OPEN: frozenset({X.IN_REVIEW, X.RESOLVED, X.CLOSED}),
        X.IN_REVIEW: frozenset({X.RESOLVED, X.CLOSED}),
        X.RESOLVED: frozenset(),
        X.CLOSED: frozenset(),
    },
}


def _value(status) -> str:
    return status.value if isinstance(status, Enum) else str(status)


def is_allowed(kind: EntityKind, old, new) -> bool:
    """True when (old -> new) is in the table for this entity kind."""
    table = ALLOWED[kind]
    for current, targets in table.items():
        if current.value == _value(old):
            return any(t.value == _value(new) for t in targets)
    return False


def is_terminal(kind: EntityKind, status) -> bool:
    table = ALLOWED[kind]
    for current, targets in table.items():
        if current.value == _value(status):
            return not targets
    return False


def allowed_targets(kind: EntityKind, status) -> list[str]:
    for current, targets in ALLOWED[kind].items():
        if current.value == _value(status):
            return sorted(t.value for t in targets)
    return []


def assert_transition(kind: EntityKind, old, new) -> None:
    if is_allowed(kind, old, new):
        return
    old_v, new_v = _value(old), _value(new)
    if is_terminal(kind, old):
        message = f"Cannot change {kind.value} status from '{old_v}' to '{new_v}': '{old_v}' is terminal"
    else:
        message = f"Invalid {kind.value} status transition from '{old_v}' to '{new_v}'"
    raise InvalidTransition(
        message,
        entity=kind.value,
        current_status=old_v,
        requested_status=new_v,
        allowed=allowed_targets(kind, old),
    )
