# Lifecycle Coordinator
# Single entry point for every lifecycle operation. Owns the transaction
# boundary and the checks that span more than one state machine.

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import List, Optional

from sqlalchemy.orm import Session

from database.lifecycle_models import (
    Collaboration, CollaborationStatusDB,
    Deliverable, DeliverableStatusDB,
    Payment, PaymentStatusDB,
    Dispute,
)
from lifecycle.base import coerce_status
from lifecycle.collaborations import CollaborationStateMachine
from lifecycle.deliverables import DeliverableStateMachine
from lifecycle.directory import ParticipantDirectory
from lifecycle.disputes import DisputeProcess
from lifecycle.errors import LifecycleError, InvalidState
from lifecycle.events import EventBus, LifecycleEvent, LifecycleEventType
from lifecycle.payments import PaymentStateMachine
from lifecycle.transitions import EntityKind

logger = logging.getLogger(__name__)


class LifecycleCoordinator:
    """
    Façade over the collaboration, deliverable, payment and dispute machines.

    Each public mutating method runs as one unit of work: all validation,
    then the write, then commit. Any failure rolls the whole thing back.
    Events raised during the unit of work are published only after commit.
    """

    def __init__(self, db: Session, events: Optional[EventBus] = None):
        self.db = db
        self.directory = ParticipantDirectory(db)
        self.collaborations = CollaborationStateMachine(db, self.directory)
        self.deliverables = DeliverableStateMachine(db)
        self.payments = PaymentStateMachine(db)
        self.disputes = DisputeProcess(db, self.directory)
        self.events = events or EventBus()
        self._outbox: List[LifecycleEvent] = []

    # =========================================================================
    # UNIT OF WORK
    # =========================================================================

    @contextmanager
    def _unit_of_work(self, operation: str):
        try:
            yield
            self.db.commit()
        except LifecycleError as e:
            self.db.rollback()
            self._outbox.clear()
            logger.warning("%s rejected (%s): %s", operation, e.kind, e.message)
            raise
        except Exception:
            self.db.rollback()
            self._outbox.clear()
            logger.exception("%s failed", operation)
            raise

        outbox, self._outbox = self._outbox, []
        for event in outbox:
            self.events.publish(event)

    def _emit(self, type: LifecycleEventType, collaboration: Collaboration, entity_id: str, **payload):
        brand_user_id, influencer_user_id = self.directory.participants(
            collaboration.campaign_id, collaboration.influencer_id
        )
        self._outbox.append(LifecycleEvent(
            type=type,
            collaboration_id=collaboration.id,
            entity_id=entity_id,
            brand_user_id=brand_user_id,
            influencer_user_id=influencer_user_id,
            payload=payload,
        ))

    # =========================================================================
    # COLLABORATIONS
    # =========================================================================

    def create_collaboration(self, campaign_id: str, influencer_id: str, agreed_price) -> Collaboration:
        with self._unit_of_work("CreateCollaboration"):
            collaboration = self.collaborations.create(campaign_id, influencer_id, agreed_price)
        return collaboration

    def update_collaboration_status(self, collaboration_id: str, status) -> Collaboration:
        with self._unit_of_work("UpdateCollaborationStatus"):
            collaboration = self.collaborations.transition(collaboration_id, status)
            if collaboration.status == CollaborationStatusDB.COMPLETED:
                # Downstream effects (reviews, profile aggregates) hang off this event
                self._emit(
                    LifecycleEventType.COLLABORATION_COMPLETED,
                    collaboration,
                    collaboration.id,
                    agreed_price=str(collaboration.agreed_price),
                )
        return collaboration

    def get_collaboration(self, collaboration_id: str) -> Collaboration:
        return self.collaborations.get(collaboration_id)

    def list_influencer_collaborations(self, influencer_id: str) -> list[Collaboration]:
        return self.collaborations.list_for_influencer(influencer_id)

    # =========================================================================
    # DELIVERABLES
    # =========================================================================

    def create_deliverable(
        self,
        collaboration_id: str,
        title: str,
        description: Optional[str] = None,
        file_url: Optional[str] = None,
    ) -> Deliverable:
        with self._unit_of_work("CreateDeliverable"):
            # Parent read locked in the same transaction as the child write
            collaboration = self.collaborations.get(collaboration_id, for_update=True)
            deliverable = self.deliverables.create(collaboration, title, description, file_url)
        return deliverable

    def update_deliverable_status(self, deliverable_id: str, status, feedback: Optional[str] = None) -> Deliverable:
        with self._unit_of_work("UpdateDeliverableStatus"):
            deliverable = self.deliverables.update_status(deliverable_id, status, feedback)
            if deliverable.status == DeliverableStatusDB.SUBMITTED:
                self._emit(
                    LifecycleEventType.DELIVERABLE_SUBMITTED,
                    deliverable.collaboration,
                    deliverable.id,
                    title=deliverable.title,
                )
        return deliverable

    def get_deliverable(self, deliverable_id: str) -> Deliverable:
        return self.deliverables.get(deliverable_id)

    def list_collaboration_deliverables(self, collaboration_id: str) -> list[Deliverable]:
        self.collaborations.get(collaboration_id)
        return self.deliverables.list_for_collaboration(collaboration_id)

    # =========================================================================
    # PAYMENTS
    # =========================================================================

    def create_payment(self, collaboration_id: str, amount, platform_commission, influencer_payout) -> Payment:
        with self._unit_of_work("CreatePayment"):
            collaboration = self.collaborations.get(collaboration_id)
            payment = self.payments.create(collaboration, amount, platform_commission, influencer_payout)
        return payment

    def update_payment_status(self, payment_id: str, status, transaction_id: Optional[str] = None) -> Payment:
        with self._unit_of_work("UpdatePaymentStatus"):
            payment = self.payments.get(payment_id, for_update=True)
            status = coerce_status(PaymentStatusDB, status, EntityKind.PAYMENT)

            collaboration = None
            if status == PaymentStatusDB.RELEASED:
                # Funds leave escrow only for finished work
                collaboration = self.collaborations.get(payment.collaboration_id, for_update=True)
                if collaboration.status != CollaborationStatusDB.COMPLETED:
                    raise InvalidState(
                        f"Cannot release payment {payment.id}: collaboration {collaboration.id} "
                        f"is in {collaboration.status.value} status, must be completed",
                        entity="collaboration",
                        id=collaboration.id,
                        current_status=collaboration.status.value,
                        requested_status=status.value,
                    )

            payment = self.payments.update_status(payment, status, transaction_id)
            if collaboration is not None:
                self._emit(
                    LifecycleEventType.PAYMENT_RELEASED,
                    collaboration,
                    payment.id,
                    influencer_payout=str(payment.influencer_payout),
                )
        return payment

    def get_payment(self, payment_id: str) -> Payment:
        return self.payments.get(payment_id)

    def list_collaboration_payments(self, collaboration_id: str) -> list[Payment]:
        self.collaborations.get(collaboration_id)
        return self.payments.list_for_collaboration(collaboration_id)

    def list_influencer_earnings(self, influencer_id: str) -> list[Payment]:
        return self.payments.list_for_influencer(influencer_id)

    # =========================================================================
    # DISPUTES
    # =========================================================================

    def open_dispute(self, collaboration_id: str, initiated_by: str, subject: str, description: str) -> Dispute:
        with self._unit_of_work("OpenDispute"):
            collaboration = self.collaborations.get(collaboration_id)
            dispute = self.disputes.open(collaboration, initiated_by, subject, description)
            self._emit(
                LifecycleEventType.DISPUTE_OPENED,
                collaboration,
                dispute.id,
                initiated_by=initiated_by,
                subject=subject,
            )
        return dispute

    def start_dispute_review(self, dispute_id: str) -> Dispute:
        with self._unit_of_work("StartDisputeReview"):
            dispute = self.disputes.start_review(dispute_id)
        return dispute

    def resolve_dispute(self, dispute_id: str, resolution: str) -> Dispute:
        with self._unit_of_work("ResolveDispute"):
            dispute = self.disputes.resolve(dispute_id, resolution)
            self._emit(
                LifecycleEventType.DISPUTE_RESOLVED,
                dispute.collaboration,
                dispute.id,
                resolution=resolution,
            )
        return dispute

    def close_dispute(self, dispute_id: str, reason: str) -> Dispute:
        with self._unit_of_work("CloseDispute"):
            dispute = self.disputes.close(dispute_id, reason)
        return dispute

    def get_dispute(self, dispute_id: str) -> Dispute:
        return self.disputes.get(dispute_id)

    def list_collaboration_disputes(self, collaboration_id: str) -> list[Dispute]:
        self.collaborations.get(collaboration_id)
        return self.disputes.list_for_collaboration(collaboration_id)
