from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database.models import CampaignStatus
from database.lifecycle_models import Collaboration, CollaborationStatusDB
from lifecycle.base import StateMachine, coerce_status, to_money
from lifecycle.directory import ParticipantDirectory
from lifecycle.errors import NotFound, InvalidState, Conflict, InvalidArgument
from lifecycle.transitions import EntityKind

logger = logging.getLogger(__name__)


class CollaborationStateMachine(StateMachine):
    """
    Owns Collaboration.status.

    pending -> accepted | declined
    accepted -> in_progress | cancelled
    in_progress -> completed | cancelled
    """

    model = Collaboration
    kind = EntityKind.COLLABORATION
    label = "Collaboration"

    def __init__(self, db: Session, directory: ParticipantDirectory):
        super().__init__(db)
        self.directory = directory

    def create(self, campaign_id: str, influencer_id: str, agreed_price) -> Collaboration:
        price = to_money(agreed_price, "agreed_price")
        if price <= 0:
            raise InvalidArgument(f"agreed_price must be positive, got {price}", field="agreed_price")

        campaign = self.directory.get_campaign(campaign_id)
        if not campaign:
            raise NotFound(f"Campaign with id {campaign_id} not found", entity="campaign", id=campaign_id)

        if campaign.status != CampaignStatus.ACTIVE:
            raise InvalidState(
                f"Campaign {campaign_id} is not active (status '{campaign.status.value}')",
                entity="campaign",
                id=campaign_id,
                current_status=campaign.status.value,
            )

        if not self.directory.get_influencer_profile(influencer_id):
            raise NotFound(
                f"Influencer profile with id {influencer_id} not found",
                entity="influencer_profile",
                id=influencer_id,
            )

        # Any earlier collaboration blocks the pair, whatever its status
        existing = self.db.query(Collaboration).filter(
            Collaboration.campaign_id == campaign_id,
            Collaboration.influencer_id == influencer_id,
        ).first()
        if existing:
            raise self._duplicate(campaign_id, influencer_id, existing.id)

        now = datetime.utcnow()
        collaboration = Collaboration(
            campaign_id=campaign_id,
            influencer_id=influencer_id,
            agreed_price=price,
            status=CollaborationStatusDB.PENDING,
            created_at=now,
            updated_at=now,
        )
        self.db.add(collaboration)
        try:
            self.db.flush()
        except IntegrityError:
            # Lost the race against a concurrent create for the same pair
            raise self._duplicate(campaign_id, influencer_id)

        logger.info(
            "Collaboration %s created for campaign %s / influencer %s at %s",
            collaboration.id, campaign_id, influencer_id, price,
        )
        return collaboration

    def transition(self, collaboration_id: str, new_status: CollaborationStatusDB) -> Collaboration:
        collaboration = self.get(collaboration_id, for_update=True)
        return self._transition(collaboration, coerce_status(CollaborationStatusDB, new_status, self.kind))

    def list_for_influencer(self, influencer_id: str) -> list[Collaboration]:
        return self.db.query(Collaboration).filter(
            Collaboration.influencer_id == influencer_id
        ).order_by(Collaboration.created_at.asc()).all()

    @staticmethod
    def _duplicate(campaign_id, influencer_id, existing_id=None) -> Conflict:
        return Conflict(
            f"Collaboration already exists for campaign {campaign_id} and influencer {influencer_id}",
            entity="collaboration",
            campaign_id=campaign_id,
            influencer_id=influencer_id,
            existing_id=existing_id,
        )
