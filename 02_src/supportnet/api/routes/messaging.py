"""Messaging API routes."""

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import Application
from ...errors import TransportError


class MessageRequest(BaseModel):
    """Inbound direct message pushed by a chat bridge."""

    sender_id: str
    text: str


class StatusResponse(BaseModel):
    """Response model for status."""

    status: str


class EndResponse(BaseModel):
    """Response model for an explicit end."""

    ended: bool


def create_messaging_router(app: Application) -> APIRouter:
    """Create messaging router."""
    router = APIRouter(prefix="/api", tags=["messaging"])

    @router.post("/messages", response_model=StatusResponse, status_code=202)
    async def receive_message(request: MessageRequest) -> dict:
        """Deliver a direct message to the conversation entry point."""
        try:
            await app.transport.deliver(request.sender_id, request.text)
            return {"status": "accepted"}
        except TransportError as e:
            raise HTTPException(status_code=503, detail=str(e))
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.post("/conversation/end", response_model=EndResponse)
    async def end_conversation() -> dict:
        """End the current conversation regardless of timeout state."""
        try:
            ended = await app.request_end_conversation()
            return {"ended": ended}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
