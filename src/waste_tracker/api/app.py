"""FastAPI application factory."""

import logging
from uuid import UUID

from fastapi import Depends, FastAPI, Header, Request, status
from fastapi.responses import JSONResponse

from waste_tracker.api.admin import router as admin_router
from waste_tracker.api.dependencies import require_user_id
from waste_tracker.api.models import (
    BinLevelRequest,
    LogWasteRequest,
    ModeRequest,
    PreferencesRequest,
)
from waste_tracker.app_logging import configure_logging
from waste_tracker.containers import AppContainer
from waste_tracker.domain.enums import AnalyticsPeriod, EcoFactCategory, UserMode
from waste_tracker.domain.errors import (
    Conflict,
    InvalidInput,
    NotFound,
    Unauthorized,
    WasteTrackerError,
)
from waste_tracker.serializers import (
    serialize_bin,
    serialize_bin_update,
    serialize_eco_fact,
    serialize_entry,
    serialize_insights,
    serialize_leaderboard_entry,
    serialize_notification,
    serialize_predictions,
    serialize_profile,
    serialize_reward,
    serialize_snapshot,
    serialize_unlocks,
)
from waste_tracker.services.eco_facts import random_eco_fact

_ERROR_STATUS: dict[type[WasteTrackerError], int] = {
    InvalidInput: 422,
    NotFound: 404,
    Conflict: 409,
    Unauthorized: 403,
}


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(admin_router)

    @app.exception_handler(WasteTrackerError)
    async def handle_domain_error(
        request: Request, exc: WasteTrackerError
    ) -> JSONResponse:
        status_code = _status_for(exc)
        logger.info(
            "Request rejected",
            extra={"path": request.url.path, "error": type(exc).__name__},
        )
        return JSONResponse(
            status_code=status_code,
            content={"error": type(exc).__name__, "detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/me")
    async def me(
        request: Request,
        user_id: UUID = Depends(require_user_id),
        x_user_name: str | None = Header(default=None),
    ) -> dict[str, object]:
        """Return the caller's profile, creating it on first use."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.user_service.ensure_profile(user_id, x_user_name)
        return serialize_profile(profile)

    @app.patch("/me/mode")
    async def set_mode(
        body: ModeRequest, request: Request, user_id: UUID = Depends(require_user_id)
    ) -> dict[str, object]:
        """Switch between adult and child mode."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.user_service.set_mode(user_id, body.mode)
        return serialize_profile(profile)

    @app.patch("/me/preferences")
    async def update_preferences(
        body: PreferencesRequest,
        request: Request,
        user_id: UUID = Depends(require_user_id),
    ) -> dict[str, object]:
        """Update notification and theme preferences."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.user_service.update_preferences(
            user_id, notifications=body.notifications, theme=body.theme
        )
        return serialize_profile(profile)

    @app.post("/waste", status_code=status.HTTP_201_CREATED)
    async def log_waste(
        body: LogWasteRequest,
        request: Request,
        user_id: UUID = Depends(require_user_id),
    ) -> dict[str, object]:
        """Log a waste entry and report any unlocked achievements."""
        state_container: AppContainer = request.app.state.container
        logged = state_container.waste_log_service.log_waste(
            user_id=user_id,
            waste_type=body.waste_type,
            weight=body.weight,
            location=body.location,
            ai_classified=body.ai_classified,
            ai_confidence=body.ai_confidence,
        )
        return {
            "entry": serialize_entry(logged.entry),
            "profile": serialize_profile(logged.profile),
            "unlocked": serialize_unlocks(logged.unlocks),
            "message": _logged_message(logged.profile.mode, logged.entry.points),
        }

    @app.get("/waste")
    async def list_waste(
        request: Request, limit: int = 20, user_id: UUID = Depends(require_user_id)
    ) -> dict[str, object]:
        """Return the caller's most recent entries."""
        state_container: AppContainer = request.app.state.container
        entries = state_container.waste_log_service.list_entries(user_id, limit)
        return {"entries": [serialize_entry(entry) for entry in entries]}

    @app.post("/waste/classify")
    async def classify_waste(
        request: Request, user_id: UUID = Depends(require_user_id)
    ) -> dict[str, object]:
        """Suggest a waste type for the raw image in the request body."""
        state_container: AppContainer = request.app.state.container
        image = await request.body()
        result = state_container.classifier_service.classify(image)
        return result.model_dump(mode="json")

    @app.get("/analytics")
    async def analytics(
        request: Request,
        period: AnalyticsPeriod = AnalyticsPeriod.WEEK,
        scope: str = "me",
        user_id: UUID = Depends(require_user_id),
    ) -> dict[str, object]:
        """Return aggregated analytics for the caller or, for admins, everyone."""
        state_container: AppContainer = request.app.state.container
        target: UUID | None = user_id
        if scope == "all":
            state_container.user_service.require_admin(user_id)
            target = None
        snapshot = state_container.analytics_service.get_analytics(target, period)
        return serialize_snapshot(snapshot)

    @app.get("/analytics/predictions")
    async def predictions(
        request: Request, user_id: UUID = Depends(require_user_id)
    ) -> dict[str, object]:
        """Return next-week forecasts per waste type."""
        state_container: AppContainer = request.app.state.container
        forecasts = state_container.analytics_service.get_predictions(user_id)
        return {"predictions": serialize_predictions(forecasts)}

    @app.get("/analytics/insights")
    async def insights(
        request: Request, user_id: UUID = Depends(require_user_id)
    ) -> dict[str, object]:
        """Return insights and tips for the caller."""
        state_container: AppContainer = request.app.state.container
        result = state_container.analytics_service.generate_insights(user_id)
        return serialize_insights(result)

    @app.get("/leaderboard")
    async def leaderboard(
        request: Request,
        period: AnalyticsPeriod = AnalyticsPeriod.WEEK,
        limit: int | None = None,
    ) -> dict[str, object]:
        """Return the top users for the period."""
        state_container: AppContainer = request.app.state.container
        resolved_limit = (
            state_container.settings.leaderboard_default_limit
            if limit is None
            else limit
        )
        rows = state_container.analytics_service.get_leaderboard(
            period, resolved_limit
        )
        return {"leaderboard": [serialize_leaderboard_entry(row) for row in rows]}

    @app.get("/rewards")
    async def list_rewards(
        request: Request, user_id: UUID = Depends(require_user_id)
    ) -> dict[str, object]:
        """Return the caller's rewards."""
        state_container: AppContainer = request.app.state.container
        rewards = state_container.reward_service.list_rewards(user_id)
        return {"rewards": [serialize_reward(reward) for reward in rewards]}

    @app.post("/rewards/{reward_id}/claim")
    async def claim_reward(
        reward_id: UUID, request: Request, user_id: UUID = Depends(require_user_id)
    ) -> dict[str, object]:
        """Claim an unlocked reward."""
        state_container: AppContainer = request.app.state.container
        reward = state_container.reward_service.claim(user_id, reward_id)
        return {"reward": serialize_reward(reward)}

    @app.get("/notifications")
    async def list_notifications(
        request: Request, user_id: UUID = Depends(require_user_id)
    ) -> dict[str, object]:
        """Return the caller's recent notifications."""
        state_container: AppContainer = request.app.state.container
        notifications = state_container.notification_service.list_notifications(
            user_id, state_container.settings.notifications_page_size
        )
        return {
            "notifications": [serialize_notification(item) for item in notifications]
        }

    @app.post("/notifications/{notification_id}/read")
    async def mark_notification_read(
        notification_id: UUID,
        request: Request,
        user_id: UUID = Depends(require_user_id),
    ) -> dict[str, str]:
        """Mark a notification as read."""
        state_container: AppContainer = request.app.state.container
        state_container.notification_service.mark_read(user_id, notification_id)
        return {"status": "ok"}

    @app.get("/bins")
    async def list_bins(request: Request) -> dict[str, object]:
        """Return every bin with its fill status."""
        state_container: AppContainer = request.app.state.container
        bins = state_container.bin_service.list_bins()
        return {"bins": [serialize_bin(item) for item in bins]}

    @app.post("/bins/initialize")
    async def initialize_bins(
        request: Request, user_id: UUID = Depends(require_user_id)
    ) -> dict[str, object]:
        """Seed the default bin network (admins only)."""
        state_container: AppContainer = request.app.state.container
        bins = state_container.bin_service.initialize_bins(user_id)
        return {"bins": [serialize_bin(item) for item in bins]}

    @app.post("/bins/{bin_id}/level")
    async def update_bin_level(
        bin_id: UUID, body: BinLevelRequest, request: Request
    ) -> dict[str, object]:
        """Apply a fill-level reading to a bin."""
        state_container: AppContainer = request.app.state.container
        update = state_container.bin_service.update_level(bin_id, body.current_level)
        return serialize_bin_update(update)

    @app.get("/eco-facts/random")
    async def eco_fact(
        for_children: bool | None = None, category: EcoFactCategory | None = None
    ) -> dict[str, object]:
        """Return a random eco fact for the dashboard."""
        fact = random_eco_fact(for_children=for_children, category=category)
        return {"fact": serialize_eco_fact(fact) if fact else None}

    return app


def _status_for(exc: WasteTrackerError) -> int:
    for error_type, status_code in _ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status_code
    return 400


def _logged_message(mode: UserMode, points: int) -> str:
    if mode is UserMode.CHILD:
        return f"Amazing! You earned {points} eco points! Keep saving the planet!"
    return f"Successfully logged waste. Earned {points} points."
