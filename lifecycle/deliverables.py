from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from database.lifecycle_models import (
    Collaboration, CollaborationStatusDB, Deliverable, DeliverableStatusDB,
)
from lifecycle.base import StateMachine, coerce_status
from lifecycle.errors import InvalidState, InvalidArgument
from lifecycle.transitions import EntityKind

logger = logging.getLogger(__name__)

# Collaboration statuses under which work can be added
OPEN_FOR_WORK = (CollaborationStatusDB.ACCEPTED, CollaborationStatusDB.IN_PROGRESS)


class DeliverableStateMachine(StateMachine):
    """
    Owns Deliverable.status.

    pending -> submitted -> approved | revision_requested | rejected
    revision_requested -> submitted
    """

    model = Deliverable
    kind = EntityKind.DELIVERABLE
    label = "Deliverable"

    def create(
        self,
        collaboration: Collaboration,
        title: str,
        description: Optional[str] = None,
        file_url: Optional[str] = None,
    ) -> Deliverable:
        if collaboration.status not in OPEN_FOR_WORK:
            valid = ", ".join(s.value for s in OPEN_FOR_WORK)
            raise InvalidState(
                f"Cannot create deliverable for collaboration in {collaboration.status.value} status. "
                f"Valid statuses: {valid}",
                entity="collaboration",
                id=collaboration.id,
                current_status=collaboration.status.value,
            )

        if not title or not title.strip():
            raise InvalidArgument("Deliverable title must not be empty", field="title")

        now = datetime.utcnow()
        deliverable = Deliverable(
            collaboration_id=collaboration.id,
            title=title,
            description=description,
            file_url=file_url,
            status=DeliverableStatusDB.PENDING,
            submitted_at=None,
            created_at=now,
            updated_at=now,
        )
        self.db.add(deliverable)
        self.db.flush()
        logger.info("Deliverable %s created on collaboration %s", deliverable.id, collaboration.id)
        return deliverable

    def update_status(
        self,
        deliverable_id: str,
        new_status: DeliverableStatusDB,
        feedback: Optional[str] = None,
    ) -> Deliverable:
        deliverable = self.get(deliverable_id, for_update=True)
        new_status = coerce_status(DeliverableStatusDB, new_status, self.kind)

        values = {}
        if new_status == DeliverableStatusDB.SUBMITTED:
            # Refreshed on every (re)submission
            values["submitted_at"] = datetime.utcnow()
        if feedback is not None:
            values["feedback"] = feedback

        return self._transition(deliverable, new_status, **values)

    def list_for_collaboration(self, collaboration_id: str) -> list[Deliverable]:
        return self.db.query(Deliverable).filter(
            Deliverable.collaboration_id == collaboration_id
        ).order_by(Deliverable.created_at.asc()).all()
