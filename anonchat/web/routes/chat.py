from urllib.parse import quote

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from anonchat.core.dependencies import get_coordinator
from anonchat.domain.messages.services import AdmissionResult, ChatCoordinator
from anonchat.web.rendering import templates

router = APIRouter()

_ERROR_STATUS = {
    AdmissionResult.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
    AdmissionResult.REJECTED: status.HTTP_400_BAD_REQUEST,
}


@router.get("/", response_class=HTMLResponse)
async def board(
    request: Request,
    username: str | None = None,
    coordinator: ChatCoordinator = Depends(get_coordinator),
):
    """Display the message board, oldest message first."""
    messages = await coordinator.messages()
    return templates.TemplateResponse(
        request,
        "index.html",
        {"messages": messages, "username": username or ""},
    )


@router.post("/send")
async def send(
    request: Request,
    username: str = Form(...),
    message: str = Form(...),
    coordinator: ChatCoordinator = Depends(get_coordinator),
):
    """Post a message and return to the board, or explain why it was refused."""
    result = await coordinator.submit(username, message)

    if result is AdmissionResult.ACCEPTED:
        return RedirectResponse(
            url=f"/?username={quote(username, safe='')}",
            status_code=status.HTTP_303_SEE_OTHER,
        )

    return templates.TemplateResponse(
        request,
        "errors/refused.html",
        {"detail": result.detail, "username": username},
        status_code=_ERROR_STATUS[result],
    )
