"""Observability API routes."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException, Query

from ...app import Application
from ...policy import format_interval


class TraceEventResponse(BaseModel):
    """Response model for trace event."""

    id: str
    event_type: str
    actor: str
    data: dict[str, Any]
    timestamp: datetime


class ConversationResponse(BaseModel):
    """Response model for the conversation snapshot."""

    phase: str
    history_length: int
    timeout_counter: int
    current_interval: str
    last_contact: datetime
    mood: str | None
    sobriety: str


def create_observability_router(app: Application) -> APIRouter:
    """Create observability router."""
    router = APIRouter(prefix="/api", tags=["observability"])

    @router.get("/conversation", response_model=ConversationResponse)
    async def get_conversation() -> dict:
        """Current conversation state without message content."""
        try:
            snapshot = await app.machine.snapshot()
            return {
                "phase": snapshot.phase.value,
                "history_length": len(snapshot.history),
                "timeout_counter": snapshot.timeout_counter,
                "current_interval": format_interval(snapshot.current_interval),
                "last_contact": snapshot.last_contact,
                "mood": snapshot.mood.value if snapshot.mood else None,
                "sobriety": app.sobriety.elapsed().describe(),
            }
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.get("/trace-events", response_model=list[TraceEventResponse])
    async def get_trace_events(
        after: str | None = Query(None, description="ISO timestamp filter"),
        limit: int = Query(100, ge=1, le=1000),
        event_type: str | None = Query(None, description="Filter by event type"),
        actor: str | None = Query(None, description="Filter by actor"),
    ) -> list[dict]:
        """Get trace events with optional filters."""
        try:
            after_dt = None
            if after:
                try:
                    after_dt = datetime.fromisoformat(after)
                except ValueError:
                    raise HTTPException(
                        status_code=400, detail="Invalid after timestamp format"
                    )

            event_types = [event_type] if event_type else None

            events = await app.storage.get_trace_events(
                after=after_dt,
                event_types=event_types,
                actor=actor,
                limit=limit,
            )

            return [
                {
                    "id": e.id,
                    "event_type": e.event_type,
                    "actor": e.actor,
                    "data": e.data,
                    "timestamp": e.timestamp.isoformat(),
                }
                for e in events
            ]

        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
