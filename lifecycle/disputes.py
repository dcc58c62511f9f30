from __future__ import annotations

import logging
from datetime import datetime

from database.lifecycle_models import Collaboration, Dispute, DisputeStatusDB
from lifecycle.base import StateMachine
from lifecycle.directory import ParticipantDirectory
from lifecycle.errors import Forbidden, InvalidArgument
from lifecycle.transitions import EntityKind

logger = logging.getLogger(__name__)


class DisputeProcess(StateMachine):
    """
    Side-channel record of a disagreement on a collaboration.

    open -> in_review -> resolved | closed
    Disputes never change the collaboration, its deliverables or payments;
    an operator reads them before forcing a transition elsewhere.
    """

    model = Dispute
    kind = EntityKind.DISPUTE
    label = "Dispute"

    def __init__(self, db, directory: ParticipantDirectory):
        super().__init__(db)
        self.directory = directory

    def open(self, collaboration: Collaboration, initiated_by: str, subject: str, description: str) -> Dispute:
        participants = self.directory.participant_user_ids(collaboration.campaign_id, collaboration.influencer_id)
        if initiated_by not in participants:
            raise Forbidden(
                f"User {initiated_by} is not authorized to create a dispute for collaboration {collaboration.id}",
                entity="collaboration",
                id=collaboration.id,
                initiated_by=initiated_by,
            )

        if not subject or not subject.strip():
            raise InvalidArgument("Dispute subject must not be empty", field="subject")

        now = datetime.utcnow()
        dispute = Dispute(
            collaboration_id=collaboration.id,
            initiated_by=initiated_by,
            subject=subject,
            description=description,
            status=DisputeStatusDB.OPEN,
            created_at=now,
            updated_at=now,
        )
        self.db.add(dispute)
        self.db.flush()
        logger.info("Dispute %s opened on collaboration %s by %s", dispute.id, collaboration.id, initiated_by)
        return dispute

    def start_review(self, dispute_id: str) -> Dispute:
        dispute = self.get(dispute_id, for_update=True)
        return self._transition(dispute, DisputeStatusDB.IN_REVIEW)

    def resolve(self, dispute_id: str, resolution: str) -> Dispute:
        dispute = self.get(dispute_id, for_update=True)
        return self._transition(
            dispute,
            DisputeStatusDB.RESOLVED,
            resolution=resolution,
            resolved_at=datetime.utcnow(),
        )

    def close(self, dispute_id: str, reason: str) -> Dispute:
        dispute = self.get(dispute_id, for_update=True)
        return self._transition(
            dispute,
            DisputeStatusDB.CLOSED,
            resolution=f"Closed: {reason}",
            resolved_at=datetime.utcnow(),
        )

    def list_for_collaboration(self, collaboration_id: str) -> list[Dispute]:
        return self.db.query(Dispute).filter(
            Dispute.collaboration_id == collaboration_id
        ).order_by(Dispute.created_at.asc()).all()
