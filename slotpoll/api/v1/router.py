"""Main API router for v1."""
from fastapi import APIRouter

from slotpoll.api.v1.endpoints import auth, members, polls, users

api_router = APIRouter(prefix="/api/v1")

# Include all endpoint routers
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(polls.router, prefix="/polls", tags=["Polls"])
api_router.include_router(members.router, prefix="/polls", tags=["Members"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
