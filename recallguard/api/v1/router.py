"""API v1 router - includes all v1 endpoints."""

from fastapi import APIRouter

from recallguard.api.v1.endpoints import health, notes, questions

api_router = APIRouter()

api_router.include_router(health.router, prefix="", tags=["Health"])
api_router.include_router(notes.router, prefix="", tags=["Notes"])
api_router.include_router(questions.router, prefix="", tags=["Questions"])
