from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation

from sqlalchemy.orm import Session

from lifecycle.errors import NotFound, Conflict, InvalidArgument
from lifecycle.transitions import EntityKind, assert_transition

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")
# Numeric(12, 2): at most 10 integer digits
MONEY_LIMIT = Decimal("1e10")


def to_money(value, field_name: str) -> Decimal:
    """Coerce to a 2-place Decimal, rejecting anything that would lose precision."""
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidArgument(f"{field_name} must be a decimal number, got {value!r}", field=field_name)
    if not amount.is_finite():
        raise InvalidArgument(f"{field_name} must be finite, got {value!r}", field=field_name)
    if abs(amount) >= MONEY_LIMIT:
        raise InvalidArgument(
            f"{field_name} exceeds the maximum of 9999999999.99: {amount}", field=field_name
        )
    if amount != amount.quantize(CENTS):
        raise InvalidArgument(f"{field_name} has more than 2 decimal places: {amount}", field=field_name)
    return amount.quantize(CENTS)


def coerce_status(enum_cls, value, kind: EntityKind):
    try:
        return enum_cls(value)
    except ValueError:
        valid = ", ".join(s.value for s in enum_cls)
        raise InvalidArgument(
            f"Unknown {kind.value} status {value!r}. Valid statuses: {valid}",
            entity=kind.value,
            requested_status=str(value),
        )


class StateMachine:
    """
    Shared plumbing for the entity state machines: lookup by id and the
    compare-and-swap status write. Subclasses set `model`, `kind` and `label`.
    Nothing here commits; the coordinator owns the transaction.
    """

    model = None
    kind: EntityKind = None
    label = "Entity"

    def __init__(self, db: Session):
        self.db = db

    def get(self, entity_id: str, for_update: bool = False):
        query = self.db.query(self.model).filter(self.model.id == entity_id)
        if for_update:
            query = query.with_for_update().populate_existing()
        entity = query.first()
        if not entity:
            raise NotFound(f"{self.label} with id {entity_id} not found", entity=self.kind.value, id=entity_id)
        return entity

    def _transition(self, entity, new_status, **values):
        """
        Check the table, then write status + updated_at only if nobody changed
        the status since we read it.
        """
        observed = entity.status
        assert_transition(self.kind, observed, new_status)

        values.update(status=new_status, updated_at=datetime.utcnow())
        count = (
            self.db.query(self.model)
            .filter(self.model.id == entity.id, self.model.status == observed)
            .update(values, synchronize_session=False)
        )
        if count != 1:
            raise Conflict(
                f"{self.label} {entity.id} was modified concurrently; "
                f"status is no longer '{observed.value}'",
                entity=self.kind.value,
                id=entity.id,
                expected_status=observed.value,
            )
        self.db.refresh(entity)
        logger.info(
            "%s %s: %s -> %s", self.label, entity.id, observed.value, entity.status.value
        )
        return entity
