# Deliverables Router
# Work items submitted by influencers and reviewed by brands

from fastapi import APIRouter, Depends, status

from lifecycle import LifecycleCoordinator
from routers.dependencies import get_coordinator
from schemas.lifecycle import (
    DeliverableCreate,
    DeliverableResponse,
    DeliverableStatusUpdate,
)

router = APIRouter(prefix="/deliverables", tags=["Deliverables"])


@router.post("", response_model=DeliverableResponse, status_code=status.HTTP_201_CREATED)
async def create_deliverable(
    data: DeliverableCreate,
    coordinator: LifecycleCoordinator = Depends(get_coordinator),
):
    """
    Add a deliverable to an accepted or in-progress collaboration.
    """
    deliverable = coordinator.create_deliverable(
        collaboration_id=data.collaboration_id,
        title=data.title,
        description=data.description,
        file_url=data.file_url,
    )
    return DeliverableResponse.model_validate(deliverable)


@router.get("/{deliverable_id}", response_model=DeliverableResponse)
async def get_deliverable(
    deliverable_id: str,
    coordinator: LifecycleCoordinator = Depends(get_coordinator),
):
    return DeliverableResponse.model_validate(coordinator.get_deliverable(deliverable_id))


@router.patch("/{deliverable_id}/status", response_model=DeliverableResponse)
async def update_deliverable_status(
    deliverable_id: str,
    data: DeliverableStatusUpdate,
    coordinator: LifecycleCoordinator = Depends(get_coordinator),
):
    """
    Submit, approve, reject or request a revision of a deliverable.
    Feedback is stored only when provided.
    """
    deliverable = coordinator.update_deliverable_status(
        deliverable_id,
        data.status.value,
        feedback=data.feedback,
    )
    return DeliverableResponse.model_validate(deliverable)
