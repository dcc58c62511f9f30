from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from database.models import Campaign, CampaignStatus, InfluencerProfile, BrandProfile


@dataclass(frozen=True)
class CampaignRef:
    id: str
    status: CampaignStatus
    brand_id: str


@dataclass(frozen=True)
class InfluencerRef:
    id: str
    user_id: str


@dataclass(frozen=True)
class BrandRef:
    id: str
    user_id: str


class ParticipantDirectory:
    """
    Read-only view of the profile/campaign side of the platform.
    The engine never writes these tables.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_campaign(self, campaign_id: str) -> Optional[CampaignRef]:
        campaign = self.db.query(Campaign).filter(Campaign.id == campaign_id).first()
        if not campaign:
            return None
        return CampaignRef(id=campaign.id, status=campaign.status, brand_id=campaign.brand_id)

    def get_influencer_profile(self, influencer_id: str) -> Optional[InfluencerRef]:
        profile = self.db.query(InfluencerProfile).filter(InfluencerProfile.id == influencer_id).first()
        if not profile:
            return None
        return InfluencerRef(id=profile.id, user_id=profile.user_id)

    def get_brand_profile(self, brand_id: str) -> Optional[BrandRef]:
        brand = self.db.query(BrandProfile).filter(BrandProfile.id == brand_id).first()
        if not brand:
            return None
        return BrandRef(id=brand.id, user_id=brand.user_id)

    def participants(self, campaign_id: str, influencer_id: str) -> tuple[Optional[str], Optional[str]]:
        """(brand owner user id, influencer user id); None where the chain does not resolve."""
        brand_user_id = None
        campaign = self.get_campaign(campaign_id)
        if campaign:
            brand = self.get_brand_profile(campaign.brand_id)
            if brand:
                brand_user_id = brand.user_id

        influencer = self.get_influencer_profile(influencer_id)
        influencer_user_id = influencer.user_id if influencer else None
        return brand_user_id, influencer_user_id

    def participant_user_ids(self, campaign_id: str, influencer_id: str) -> list[str]:
        return [u for u in self.participants(campaign_id, influencer_id) if u]
