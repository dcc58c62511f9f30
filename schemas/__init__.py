# Schemas module for the Collaboration Lifecycle API

from schemas.lifecycle import (
    # Enums
    CollaborationStatus,
    DeliverableStatus,
    PaymentStatus,
    DisputeStatus,

    # Collaboration
    CollaborationCreate,
    CollaborationStatusUpdate,
    CollaborationResponse,

    # Deliverable
    DeliverableCreate,
    DeliverableStatusUpdate,
    DeliverableResponse,

    # Payment
    PaymentCreate,
    PaymentStatusUpdate,
    PaymentResponse,

    # Dispute
    DisputeCreate,
    DisputeResolve,
    DisputeClose,
    DisputeResponse,
)

__all__ = [
    "CollaborationStatus",
    "DeliverableStatus",
    "PaymentStatus",
    "DisputeStatus",
    "CollaborationCreate",
    "CollaborationStatusUpdate",
    "CollaborationResponse",
    "DeliverableCreate",
    "DeliverableStatusUpdate",
    "DeliverableResponse",
    "PaymentCreate",
    "PaymentStatusUpdate",
    "PaymentResponse",
    "DisputeCreate",
    "DisputeResolve",
    "DisputeClose",
    "DisputeResponse",
]
