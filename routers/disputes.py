# Disputes Router
# Disagreements raised by a collaboration participant and settled by admins

from fastapi import APIRouter, Depends, status

from lifecycle import LifecycleCoordinator
from routers.dependencies import get_coordinator
from schemas.lifecycle import (
    DisputeClose,
    DisputeCreate,
    DisputeResolve,
    DisputeResponse,
)

router = APIRouter(prefix="/disputes", tags=["Disputes"])


# ============================================================================
# PARTICIPANT ENDPOINTS
# ============================================================================

@router.post("", response_model=DisputeResponse, status_code=status.HTTP_201_CREATED)
async def create_dispute(
    data: DisputeCreate,
    coordinator: LifecycleCoordinator = Depends(get_coordinator),
):
    """
    Open a dispute on a collaboration.
    initiated_by must be the brand owner or the influencer of that collaboration.
    """
    dispute = coordinator.open_dispute(
        collaboration_id=data.collaboration_id,
        initiated_by=data.initiated_by,
        subject=data.subject,
        description=data.description,
    )
    return DisputeResponse.model_validate(dispute)


@router.get("/{dispute_id}", response_model=DisputeResponse)
async def get_dispute(
    dispute_id: str,
    coordinator: LifecycleCoordinator = Depends(get_coordinator),
):
    return DisputeResponse.model_validate(coordinator.get_dispute(dispute_id))


# ============================================================================
# ADMIN ENDPOINTS
# ============================================================================

@router.put("/{dispute_id}/review", response_model=DisputeResponse)
async def start_dispute_review(
    dispute_id: str,
    coordinator: LifecycleCoordinator = Depends(get_coordinator),
):
    """Mark a dispute as under review."""
    return DisputeResponse.model_validate(coordinator.start_dispute_review(dispute_id))


@router.post("/{dispute_id}/resolve", response_model=DisputeResponse)
async def resolve_dispute(
    dispute_id: str,
    data: DisputeResolve,
    coordinator: LifecycleCoordinator = Depends(get_coordinator),
):
    """
    Resolve a dispute. The collaboration itself is not changed;
    follow-up actions (cancel, refund) are separate calls.
    """
    dispute = coordinator.resolve_dispute(dispute_id, data.resolution)
    return DisputeResponse.model_validate(dispute)


@router.post("/{dispute_id}/close", response_model=DisputeResponse)
async def close_dispute(
    dispute_id: str,
    data: DisputeClose,
    coordinator: LifecycleCoordinator = Depends(get_coordinator),
):
    """Close a dispute without a resolution."""
    return DisputeResponse.model_validate(coordinator.close_dispute(dispute_id, data.reason))
