from fastapi import APIRouter, Depends

from anonchat.core.dependencies import get_coordinator
from anonchat.domain.messages.services import ChatCoordinator

router = APIRouter()


@router.get("/health", summary="Health check")
async def health(coordinator: ChatCoordinator = Depends(get_coordinator)) -> dict[str, str | int]:
    """Simple health check that also reports the size and state of the board."""
    return {"status": "ok", **coordinator.state_summary()}
