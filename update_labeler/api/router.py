from fastapi import APIRouter

from update_labeler.api.v1 import internal

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(internal.router)
