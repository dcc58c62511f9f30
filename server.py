# FastAPI Server for the Collaboration Lifecycle API

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.app_config import CORS_ORIGINS
from database.config import init_db
from lifecycle import LifecycleError
from routers.collaborations import router as collaborations_router, influencers_router
from routers.deliverables import router as deliverables_router
from routers.payments import router as payments_router
from routers.disputes import router as disputes_router

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Collaboration Lifecycle API",
    description="Collaborations, deliverables, escrow payments and disputes for brand/influencer campaigns",
    version="1.0.0"
)


@app.on_event("startup")
def startup_event():
    # Creates missing tables only; schema changes go through alembic
    init_db()
    logger.info("Database tables initialized")


# CORS Setup
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(LifecycleError)
async def lifecycle_error_handler(request: Request, exc: LifecycleError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# ============================================================================
# LIFECYCLE ROUTERS
# ============================================================================
app.include_router(collaborations_router, prefix="/api")
app.include_router(influencers_router, prefix="/api")
app.include_router(deliverables_router, prefix="/api")
app.include_router(payments_router, prefix="/api")
app.include_router(disputes_router, prefix="/api")


@app.get("/")
def root():
    return {
        "message": "Collaboration Lifecycle API",
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/health")
def health_check():
    return {"status": "healthy"}
