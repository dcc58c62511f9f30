# Lifecycle Routers Module
# Exports all API routers for the collaboration lifecycle

from routers.collaborations import router as collaborations_router, influencers_router
from routers.deliverables import router as deliverables_router
from routers.payments import router as payments_router
from routers.disputes import router as disputes_router

__all__ = [
    'collaborations_router',
    'influencers_router',
    'deliverables_router',
    'payments_router',
    'disputes_router',
]
