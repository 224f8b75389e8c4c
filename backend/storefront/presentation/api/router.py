"""Top-level API router — includes versioned sub-routers and the live socket."""

from fastapi import APIRouter

from storefront.presentation.api.v1.endpoints.realtime import socket_router
from storefront.presentation.api.v1.router import router as v1_router

router = APIRouter(prefix="/api")
router.include_router(v1_router)
router.include_router(socket_router)
