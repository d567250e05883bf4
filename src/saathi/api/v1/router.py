"""Version 1 API: classification plus health probes."""

from fastapi import APIRouter

from saathi.api.v1.endpoints import classification, health

api_router = APIRouter()

api_router.include_router(classification.router, prefix="/classify", tags=["Classification"])
api_router.include_router(health.router, prefix="/health", tags=["Health"])
