import os
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_collaborations.db")
os.environ.setdefault("NOTIFICATIONS_ENABLED", "true")

import uuid
from datetime import timedelta
from decimal import Decimal
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from database.config import get_db, init_db
from database.models import User, UserType, BrandProfile, InfluencerProfile, Campaign, CampaignStatus
from database.lifecycle_models import CollaborationStatusDB
from lifecycle import EventBus, LifecycleCoordinator
from server import app
from services.notification_service import NotificationListener


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'lifecycle.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def events(session_factory):
    bus = EventBus()
    bus.subscribe(NotificationListener(session_factory))
    return bus


@pytest.fixture
def coordinator(db, events):
    return LifecycleCoordinator(db, events=events)


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    # No context manager: startup would create tables on DATABASE_URL
    yield TestClient(app)
    app.dependency_overrides.clear()


# ============================================================================
# SEED HELPERS
# ============================================================================

def make_user(db, user_type=UserType.BRAND, name=None):
    user = User(
        email=f"user-{uuid.uuid4()}@example.com",
        name=name or f"{user_type.value} user",
        user_type=user_type,
    )
    db.add(user)
    db.flush()
    return user


def make_brand(db, user=None):
    user = user or make_user(db, UserType.BRAND)
    brand = BrandProfile(user_id=user.id, company_name="Acme Beverages", industry="Food & Drink")
    db.add(brand)
    db.flush()
    return brand


def make_campaign(db, brand, status=CampaignStatus.ACTIVE):
    campaign = Campaign(
        brand_id=brand.id,
        title="Summer launch",
        budget=Decimal("10000.00"),
        status=status,
    )
    db.add(campaign)
    db.flush()
    return campaign


def make_influencer(db, user=None):
    user = user or make_user(db, UserType.INFLUENCER)
    profile = InfluencerProfile(user_id=user.id, display_name="Jane Creates", follower_count=12000)
    db.add(profile)
    db.flush()
    return profile


@pytest.fixture
def world(db):
    """One active campaign, its brand owner, an influencer and an outsider."""
    brand_user = make_user(db, UserType.BRAND, name="Brand Owner")
    influencer_user = make_user(db, UserType.INFLUENCER, name="Influencer")
    outsider = make_user(db, UserType.BRAND, name="Someone Else")
    brand = make_brand(db, brand_user)
    campaign = make_campaign(db, brand)
    influencer = make_influencer(db, influencer_user)
    db.commit()
    return SimpleNamespace(
        brand_user=brand_user,
        influencer_user=influencer_user,
        outsider=outsider,
        brand=brand,
        campaign=campaign,
        influencer=influencer,
    )


def advance(coordinator, collaboration_id, *statuses):
    collaboration = None
    for status in statuses:
        collaboration = coordinator.update_collaboration_status(collaboration_id, status)
    return collaboration


@pytest.fixture
def collaboration(coordinator, world):
    """Pending collaboration between the seeded campaign and influencer."""
    return coordinator.create_collaboration(world.campaign.id, world.influencer.id, Decimal("1500.50"))


@pytest.fixture
def accepted_collaboration(coordinator, collaboration):
    return advance(coordinator, collaboration.id, CollaborationStatusDB.ACCEPTED)


@pytest.fixture
def completed_collaboration(coordinator, collaboration):
    return advance(coordinator, collaboration.id, "accepted", "in_progress", "completed")


def backdate(db, entity, *columns):
    """Shift timestamp columns one minute into the past."""
    for column in columns:
        setattr(entity, column, getattr(entity, column) - timedelta(minutes=1))
    db.commit()
    return entity
