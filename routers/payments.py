# Payments Router
# Escrow flow: pending -> in_escrow -> released, refunds from either open state

from fastapi import APIRouter, Depends, status

from lifecycle import LifecycleCoordinator
from routers.dependencies import get_coordinator
from schemas.lifecycle import (
    PaymentCreate,
    PaymentResponse,
    PaymentStatusUpdate,
)

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.post("", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
async def create_payment(
    data: PaymentCreate,
    coordinator: LifecycleCoordinator = Depends(get_coordinator),
):
    """
    Create a pending payment. amount must equal platform_commission + influencer_payout.
    """
    payment = coordinator.create_payment(
        collaboration_id=data.collaboration_id,
        amount=data.amount,
        platform_commission=data.platform_commission,
        influencer_payout=data.influencer_payout,
    )
    return PaymentResponse.model_validate(payment)


@router.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment(
    payment_id: str,
    coordinator: LifecycleCoordinator = Depends(get_coordinator),
):
    return PaymentResponse.model_validate(coordinator.get_payment(payment_id))


@router.patch("/{payment_id}/status", response_model=PaymentResponse)
async def update_payment_status(
    payment_id: str,
    data: PaymentStatusUpdate,
    coordinator: LifecycleCoordinator = Depends(get_coordinator),
):
    """
    Advance a payment. Release requires the collaboration to be completed.
    """
    payment = coordinator.update_payment_status(
        payment_id,
        data.status.value,
        transaction_id=data.transaction_id,
    )
    return PaymentResponse.model_validate(payment)
