# Database Models for the Collaboration Lifecycle
# Tables owned by the lifecycle engine: collaborations and everything hanging off them.
# Statuses here are only ever changed through lifecycle/ (see lifecycle/transitions.py).

from sqlalchemy import Column, String, DateTime, ForeignKey, Text, JSON, Enum, Boolean, Numeric, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from database.models import Base, generate_uuid


# ============================================================================
# ENUMS
# ============================================================================

class CollaborationStatusDB(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class DeliverableStatusDB(str, enum.Enum):
    PENDING = "pending"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REVISION_REQUESTED = "revision_requested"
    REJECTED = "rejected"


class PaymentStatusDB(str, enum.Enum):
    PENDING = "pending"
    IN_ESCROW = "in_escrow"
    RELEASED = "released"
    REFUNDED = "refunded"


class DisputeStatusDB(str, enum.Enum):
    OPEN = "open"
    IN_REVIEW = "in_review"
    RESOLVED = "resolved"
    CLOSED = "closed"


def _enum_column(enum_cls, name, default):
    return Column(
        Enum(enum_cls, values_callable=lambda x: [e.value for e in x], name=name),
        nullable=False,
        default=default,
    )


# ============================================================================
# COLLABORATION
# ============================================================================

class Collaboration(Base):
    """Agreement between one campaign and one influencer at an agreed price."""
    __tablename__ = "collaborations"
    __table_args__ = (
        UniqueConstraint("campaign_id", "influencer_id", name="uq_collaboration_campaign_influencer"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    campaign_id = Column(String(36), ForeignKey("campaigns.id"), nullable=False, index=True)
    influencer_id = Column(String(36), ForeignKey("influencer_profiles.id"), nullable=False, index=True)

    agreed_price = Column(Numeric(12, 2), nullable=False)  # Immutable after creation

    status = _enum_column(CollaborationStatusDB, "collaborationstatus", CollaborationStatusDB.PENDING)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    campaign = relationship("Campaign")
    influencer = relationship("InfluencerProfile")
    deliverables = relationship("Deliverable", back_populates="collaboration", order_by="Deliverable.created_at")
    payments = relationship("Payment", back_populates="collaboration")
    disputes = relationship("Dispute", back_populates="collaboration")


# ============================================================================
# DELIVERABLE
# ============================================================================

class Deliverable(Base):
    """One unit of submitted work under a collaboration."""
    __tablename__ = "deliverables"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    collaboration_id = Column(String(36), ForeignKey("collaborations.id"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text)
    file_url = Column(String(500))

    status = _enum_column(DeliverableStatusDB, "deliverablestatus", DeliverableStatusDB.PENDING)
    feedback = Column(Text)  # Set by the reviewer
    submitted_at = Column(DateTime)  # Null until first submission

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    collaboration = relationship("Collaboration", back_populates="deliverables")


# ============================================================================
# PAYMENT (ESCROW)
# ============================================================================

class Payment(Base):
    """Escrow transaction paying the influencer for a collaboration."""
    __tablename__ = "payments"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    collaboration_id = Column(String(36), ForeignKey("collaborations.id"), nullable=False, index=True)

    amount = Column(Numeric(12, 2), nullable=False)
    platform_commission = Column(Numeric(12, 2), nullable=False)
    influencer_payout = Column(Numeric(12, 2), nullable=False)  # amount - platform_commission

    status = _enum_column(PaymentStatusDB, "paymentstatus", PaymentStatusDB.PENDING)
    transaction_id = Column(String(255))  # Gateway reference, opaque

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    collaboration = relationship("Collaboration", back_populates="payments")


# ============================================================================
# DISPUTE
# ============================================================================

class Dispute(Base):
    """Disagreement raised by either participant of a collaboration."""
    __tablename__ = "disputes"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    collaboration_id = Column(String(36), ForeignKey("collaborations.id"), nullable=False, index=True)
    initiated_by = Column(String(36), ForeignKey("users.id"), nullable=False)

    subject = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)

    status = _enum_column(DisputeStatusDB, "disputestatus", DisputeStatusDB.OPEN)

    resolution = Column(Text)
    resolved_at = Column(DateTime)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    collaboration = relationship("Collaboration", back_populates="disputes")
    initiator = relationship("User")


# ============================================================================
# NOTIFICATION
# ============================================================================

class Notification(Base):
    """User notifications produced from lifecycle events."""
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    type = Column(String(50), nullable=False)  # collaboration_completed, dispute_opened, etc.
    title = Column(String(200), nullable=False)
    message = Column(Text)
    data = Column(JSON)  # Additional context (collaboration_id, amount, etc.)

    is_read = Column(Boolean, default=False)
    read_at = Column(DateTime)

    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    user = relationship("User")
