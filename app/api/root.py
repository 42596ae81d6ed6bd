from fastapi import APIRouter

from app.core.config import settings

router = APIRouter()

@router.get("/")
def root():
    return {
        "name": "User Management API",
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "users": settings.API_PREFIX,
    }
