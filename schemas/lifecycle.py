# Pydantic Schemas for the Collaboration Lifecycle API

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal
from enum import Enum


# ============================================================================
# ENUMS
# ============================================================================

class CollaborationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class DeliverableStatus(str, Enum):
    PENDING = "pending"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REVISION_REQUESTED = "revision_requested"
    REJECTED = "rejected"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    IN_ESCROW = "in_escrow"
    RELEASED = "released"
    REFUNDED = "refunded"


class DisputeStatus(str, Enum):
    OPEN = "open"
    IN_REVIEW = "in_review"
    RESOLVED = "resolved"
    CLOSED = "closed"


# ============================================================================
# COLLABORATION SCHEMAS
# ============================================================================

class CollaborationCreate(BaseModel):
    """Schema for creating a collaboration."""
    campaign_id: str
    influencer_id: str
    agreed_price: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)


class CollaborationStatusUpdate(BaseModel):
    """Schema for moving a collaboration to a new status."""
    status: CollaborationStatus


class CollaborationResponse(BaseModel):
    """Schema for collaboration response."""
    id: str
    campaign_id: str
    influencer_id: str
    agreed_price: Decimal
    status: CollaborationStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# ============================================================================
# DELIVERABLE SCHEMAS
# ============================================================================

class DeliverableCreate(BaseModel):
    """Schema for creating a deliverable."""
    collaboration_id: str
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    file_url: Optional[str] = Field(None, max_length=500)


class DeliverableStatusUpdate(BaseModel):
    """Schema for a review action on a deliverable."""
    status: DeliverableStatus
    feedback: Optional[str] = None


class DeliverableResponse(BaseModel):
    """Schema for deliverable response."""
    id: str
    collaboration_id: str
    title: str
    description: Optional[str]
    file_url: Optional[str]
    status: DeliverableStatus
    feedback: Optional[str]
    submitted_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# ============================================================================
# PAYMENT SCHEMAS
# ============================================================================

class PaymentCreate(BaseModel):
    """Schema for creating an escrow payment."""
    collaboration_id: str
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    platform_commission: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    influencer_payout: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)


class PaymentStatusUpdate(BaseModel):
    """Schema for advancing the escrow flow."""
    status: PaymentStatus
    transaction_id: Optional[str] = Field(None, max_length=255)  # Omit to keep the stored reference


class PaymentResponse(BaseModel):
    """Schema for payment response."""
    id: str
    collaboration_id: str
    amount: Decimal
    platform_commission: Decimal
    influencer_payout: Decimal
    status: PaymentStatus
    transaction_id: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# ============================================================================
# DISPUTE SCHEMAS
# ============================================================================

class DisputeCreate(BaseModel):
    """Schema for opening a dispute."""
    collaboration_id: str
    initiated_by: str  # user_id of the brand owner or the influencer
    subject: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1, max_length=2000)


class DisputeResolve(BaseModel):
    """Schema for resolving a dispute (admin only)."""
    resolution: str = Field(..., min_length=1, max_length=2000)


class DisputeClose(BaseModel):
    """Schema for closing a dispute without resolution (admin only)."""
    reason: str = Field(..., min_length=1, max_length=2000)


class DisputeResponse(BaseModel):
    """Schema for dispute response."""
    id: str
    collaboration_id: str
    initiated_by: str
    subject: str
    description: str
    status: DisputeStatus
    resolution: Optional[str]
    resolved_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
