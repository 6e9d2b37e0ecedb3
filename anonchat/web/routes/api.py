"""JSON API routes for the message board."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from anonchat.core.dependencies import get_coordinator
from anonchat.domain.messages.schemas import MessageCreate, MessageOut, SubmissionOut
from anonchat.domain.messages.services import AdmissionResult, ChatCoordinator

router = APIRouter()

_STATUS_CODES = {
    AdmissionResult.ACCEPTED: status.HTTP_201_CREATED,
    AdmissionResult.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
    AdmissionResult.REJECTED: status.HTTP_400_BAD_REQUEST,
}


@router.get("/messages", response_model=list[MessageOut])
async def list_messages(coordinator: ChatCoordinator = Depends(get_coordinator)):
    """Return every message on the board, oldest first. Content is not escaped."""
    messages = await coordinator.messages()
    return [MessageOut.model_validate(message) for message in messages]


@router.post(
    "/messages",
    response_model=SubmissionOut,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": SubmissionOut},
        status.HTTP_429_TOO_MANY_REQUESTS: {"model": SubmissionOut},
    },
)
async def post_message(
    payload: MessageCreate,
    coordinator: ChatCoordinator = Depends(get_coordinator),
):
    """Submit a message through the moderation pipeline."""
    result = await coordinator.submit(payload.sender, payload.content)
    body = SubmissionOut(status=result.value, detail=result.detail)
    return JSONResponse(status_code=_STATUS_CODES[result], content=body.model_dump())
