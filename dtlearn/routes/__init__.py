"""API routes for dtlearn."""

from fastapi import APIRouter

from dtlearn.routes import datasets, learn, monitoring

api_router = APIRouter(prefix="/api", tags=["api"])

api_router.include_router(monitoring.router)
api_router.include_router(datasets.router, prefix="/datasets", tags=["datasets"])
api_router.include_router(learn.router, prefix="/learn", tags=["learn"])
