from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from database.lifecycle_models import Collaboration, Payment, PaymentStatusDB
from lifecycle.base import StateMachine, coerce_status, to_money
from lifecycle.errors import InvalidArgument
from lifecycle.transitions import EntityKind

logger = logging.getLogger(__name__)


def validate_split(amount, platform_commission, influencer_payout):
    """
    Check the escrow split: amount = platform_commission + influencer_payout.
    Returns the three values as 2-place Decimals.
    """
    amount = to_money(amount, "amount")
    commission = to_money(platform_commission, "platform_commission")
    payout = to_money(influencer_payout, "influencer_payout")

    if amount <= 0:
        raise InvalidArgument(f"amount must be positive, got {amount}", field="amount")
    if commission < 0:
        raise InvalidArgument(
            f"platform_commission must not be negative, got {commission}", field="platform_commission"
        )
    if payout <= 0:
        raise InvalidArgument(f"influencer_payout must be positive, got {payout}", field="influencer_payout")

    if commission + payout != amount:
        raise InvalidArgument(
            f"amount {amount} does not equal platform_commission {commission} "
            f"+ influencer_payout {payout} (= {commission + payout})",
            amount=str(amount),
            platform_commission=str(commission),
            influencer_payout=str(payout),
        )
    return amount, commission, payout


class PaymentStateMachine(StateMachine):
    """
    Owns Payment.status (escrow flow).

    pending -> in_escrow | refunded
    in_escrow -> released | refunded
    """

    model = Payment
    kind = EntityKind.PAYMENT
    label = "Payment"

    def create(self, collaboration: Collaboration, amount, platform_commission, influencer_payout) -> Payment:
        amount, commission, payout = validate_split(amount, platform_commission, influencer_payout)

        now = datetime.utcnow()
        payment = Payment(
            collaboration_id=collaboration.id,
            amount=amount,
            platform_commission=commission,
            influencer_payout=payout,
            status=PaymentStatusDB.PENDING,
            transaction_id=None,
            created_at=now,
            updated_at=now,
        )
        self.db.add(payment)
        self.db.flush()
        logger.info(
            "Payment %s created on collaboration %s: %s (commission %s, payout %s)",
            payment.id, collaboration.id, amount, commission, payout,
        )
        return payment

    def update_status(
        self,
        payment: Payment,
        new_status: PaymentStatusDB,
        transaction_id: Optional[str] = None,
    ) -> Payment:
        new_status = coerce_status(PaymentStatusDB, new_status, self.kind)
        values = {}
        # Omitted transaction_id keeps whatever is stored
        if transaction_id is not None:
            values["transaction_id"] = transaction_id
        return self._transition(payment, new_status, **values)

    def list_for_collaboration(self, collaboration_id: str) -> list[Payment]:
        return self.db.query(Payment).filter(
            Payment.collaboration_id == collaboration_id
        ).order_by(Payment.created_at.asc()).all()

    def list_for_influencer(self, influencer_id: str) -> list[Payment]:
        return self.db.query(Payment).join(Collaboration).filter(
            Collaboration.influencer_id == influencer_id
        ).order_by(Payment.created_at.asc()).all()
