"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from waste_tracker.serializers import serialize_bin, serialize_notification

if TYPE_CHECKING:
    from waste_tracker.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/overview", dependencies=[Depends(require_admin)])
async def overview(request: Request) -> dict[str, object]:
    """Return aggregate user, bin and leaderboard statistics."""
    container: AppContainer = request.app.state.container
    return container.admin_service.get_overview()


@router.get("/users", dependencies=[Depends(require_admin)])
async def list_users(request: Request) -> dict[str, object]:
    """Return users with activity summaries."""
    container: AppContainer = request.app.state.container
    return {"users": container.admin_service.list_users()}


@router.post("/bins/{bin_id}/maintenance", dependencies=[Depends(require_admin)])
async def start_maintenance(bin_id: UUID, request: Request) -> dict[str, object]:
    """Put a bin into maintenance."""
    container: AppContainer = request.app.state.container
    return {"bin": serialize_bin(container.bin_service.set_maintenance(bin_id))}


@router.delete("/bins/{bin_id}/maintenance", dependencies=[Depends(require_admin)])
async def end_maintenance(bin_id: UUID, request: Request) -> dict[str, object]:
    """Return a bin to level-driven status."""
    container: AppContainer = request.app.state.container
    return {"bin": serialize_bin(container.bin_service.clear_maintenance(bin_id))}


@router.post("/bins/{bin_id}/collect", dependencies=[Depends(require_admin)])
async def collect_bin(bin_id: UUID, request: Request) -> dict[str, object]:
    """Record that a bin was emptied."""
    container: AppContainer = request.app.state.container
    return {"bin": serialize_bin(container.bin_service.record_collection(bin_id))}


@router.post("/reminders", dependencies=[Depends(require_admin)])
async def send_reminders(request: Request) -> dict[str, object]:
    """Send the daily reminder to every opted-in user."""
    container: AppContainer = request.app.state.container
    sent = container.notification_service.send_daily_reminders()
    return {"sent": [serialize_notification(item) for item in sent]}
