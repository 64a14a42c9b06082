"""API routes: the single route table for the service."""

from fastapi import APIRouter

from app.api.v1 import auth, health, plants, secret, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(auth.router)
router.include_router(secret.router, prefix="/secrets", tags=["secrets"])
router.include_router(plants.router, prefix="/plants", tags=["plants"])
