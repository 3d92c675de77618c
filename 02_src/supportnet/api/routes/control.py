"""Control API routes."""

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import Application


class StatusResponse(BaseModel):
    """Response model for status."""

    status: str


class TickResponse(BaseModel):
    """Response model for a manual tick."""

    outcome: str


def create_control_router(app: Application) -> APIRouter:
    """Create control router."""
    router = APIRouter(prefix="/api/control", tags=["control"])

    @router.post("/tick", response_model=TickResponse)
    async def tick() -> dict:
        """Run one scheduler tick now."""
        try:
            outcome = await app.scheduler.tick()
            return {"outcome": outcome.value}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.post("/reset", response_model=StatusResponse)
    async def reset_system() -> dict:
        """Reset conversation state and trace data."""
        try:
            await app.reset()
            return {"status": "ok"}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
