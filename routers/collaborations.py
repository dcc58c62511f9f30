# Collaborations Router
# Brand/influencer engagements on a campaign and their lifecycle

from fastapi import APIRouter, Depends, status
from typing import List

from lifecycle import LifecycleCoordinator
from routers.dependencies import get_coordinator
from schemas.lifecycle import (
    CollaborationCreate,
    CollaborationResponse,
    CollaborationStatusUpdate,
    DeliverableResponse,
    DisputeResponse,
    PaymentResponse,
)

router = APIRouter(prefix="/collaborations", tags=["Collaborations"])
influencers_router = APIRouter(prefix="/influencers", tags=["Collaborations"])


# ============================================================================
# COLLABORATION ENDPOINTS
# ============================================================================

@router.post("", response_model=CollaborationResponse, status_code=status.HTTP_201_CREATED)
async def create_collaboration(
    data: CollaborationCreate,
    coordinator: LifecycleCoordinator = Depends(get_coordinator),
):
    """
    Create a pending collaboration between an active campaign and an influencer.
    Only one collaboration may exist per (campaign, influencer) pair.
    """
    collaboration = coordinator.create_collaboration(
        campaign_id=data.campaign_id,
        influencer_id=data.influencer_id,
        agreed_price=data.agreed_price,
    )
    return CollaborationResponse.model_validate(collaboration)


@router.get("/{collaboration_id}", response_model=CollaborationResponse)
async def get_collaboration(
    collaboration_id: str,
    coordinator: LifecycleCoordinator = Depends(get_coordinator),
):
    return CollaborationResponse.model_validate(coordinator.get_collaboration(collaboration_id))


@router.patch("/{collaboration_id}/status", response_model=CollaborationResponse)
async def update_collaboration_status(
    collaboration_id: str,
    data: CollaborationStatusUpdate,
    coordinator: LifecycleCoordinator = Depends(get_coordinator),
):
    """
    Move a collaboration along its lifecycle.

    pending -> accepted | declined
    accepted -> in_progress | cancelled
    in_progress -> completed | cancelled
    """
    collaboration = coordinator.update_collaboration_status(collaboration_id, data.status.value)
    return CollaborationResponse.model_validate(collaboration)


@router.get("/{collaboration_id}/deliverables", response_model=List[DeliverableResponse])
async def list_collaboration_deliverables(
    collaboration_id: str,
    coordinator: LifecycleCoordinator = Depends(get_coordinator),
):
    """Deliverables of a collaboration, oldest first."""
    deliverables = coordinator.list_collaboration_deliverables(collaboration_id)
    return [DeliverableResponse.model_validate(d) for d in deliverables]


@router.get("/{collaboration_id}/payments", response_model=List[PaymentResponse])
async def list_collaboration_payments(
    collaboration_id: str,
    coordinator: LifecycleCoordinator = Depends(get_coordinator),
):
    payments = coordinator.list_collaboration_payments(collaboration_id)
    return [PaymentResponse.model_validate(p) for p in payments]


@router.get("/{collaboration_id}/disputes", response_model=List[DisputeResponse])
async def list_collaboration_disputes(
    collaboration_id: str,
    coordinator: LifecycleCoordinator = Depends(get_coordinator),
):
    disputes = coordinator.list_collaboration_disputes(collaboration_id)
    return [DisputeResponse.model_validate(d) for d in disputes]


# ============================================================================
# INFLUENCER VIEWS
# ============================================================================

@influencers_router.get("/{influencer_id}/collaborations", response_model=List[CollaborationResponse])
async def list_influencer_collaborations(
    influencer_id: str,
    coordinator: LifecycleCoordinator = Depends(get_coordinator),
):
    """All collaborations of an influencer profile, oldest first."""
    collaborations = coordinator.list_influencer_collaborations(influencer_id)
    return [CollaborationResponse.model_validate(c) for c in collaborations]


@influencers_router.get("/{influencer_id}/earnings", response_model=List[PaymentResponse])
async def list_influencer_earnings(
    influencer_id: str,
    coordinator: LifecycleCoordinator = Depends(get_coordinator),
):
    """Payments across all collaborations of an influencer profile."""
    payments = coordinator.list_influencer_earnings(influencer_id)
    return [PaymentResponse.model_validate(p) for p in payments]
