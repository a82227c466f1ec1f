"""Health check endpoint."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from cutout.config import Config

router = APIRouter(tags=["Health"], route_class=DishkaRoute)


@router.get("/health")
async def health(config: FromDishka[Config]) -> dict:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": config.server.version,
    }
