from fastapi import APIRouter

from .endpoints import chat
from .endpoints import health

# Mounted at the application root
service_router = APIRouter()
service_router.include_router(health.router, prefix="", tags=["health"])

# Mounted under {API_PREFIX}/{API_VERSION}
api_router = APIRouter()
api_router.include_router(chat.router, prefix="/chat", tags=["chat"])
