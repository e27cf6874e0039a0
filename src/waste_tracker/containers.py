"""Dependency container wiring for the application."""

import random
from dataclasses import dataclass

from supabase import create_client

from waste_tracker.adapters.supabase_bin_repository import SupabaseBinRepository
from waste_tracker.adapters.supabase_notification_repository import (
    SupabaseNotificationRepository,
)
from waste_tracker.adapters.supabase_reward_repository import SupabaseRewardRepository
from waste_tracker.adapters.supabase_user_repository import SupabaseUserRepository
from waste_tracker.adapters.supabase_waste_repository import (
    SupabaseWasteEntryRepository,
)
from waste_tracker.config import Settings
from waste_tracker.services.achievements import AchievementService
from waste_tracker.services.admin import AdminService
from waste_tracker.services.analytics import AnalyticsService
from waste_tracker.services.bins import AdminNotificationAlertSink, BinService
from waste_tracker.services.classifier import ClassifierService, RandomWasteClassifier
from waste_tracker.services.notifications import NotificationService
from waste_tracker.services.rewards import RewardService
from waste_tracker.services.users import UserService
from waste_tracker.services.waste import WasteLogService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    waste_log_service: WasteLogService
    achievement_service: AchievementService
    reward_service: RewardService
    notification_service: NotificationService
    bin_service: BinService
    analytics_service: AnalyticsService
    classifier_service: ClassifierService
    admin_service: AdminService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    entry_repository = SupabaseWasteEntryRepository(supabase_client)
    reward_repository = SupabaseRewardRepository(supabase_client)
    notification_repository = SupabaseNotificationRepository(supabase_client)
    bin_repository = SupabaseBinRepository(supabase_client)
    rng = random.Random(resolved_settings.classifier_seed)

    user_service = UserService(user_repository)
    achievement_service = AchievementService(
        entry_repository=entry_repository,
        reward_repository=reward_repository,
        user_repository=user_repository,
    )
    waste_log_service = WasteLogService(
        repository=entry_repository,
        user_service=user_service,
        achievement_service=achievement_service,
    )
    reward_service = RewardService(reward_repository)
    notification_service = NotificationService(
        repository=notification_repository,
        user_repository=user_repository,
        rng=rng,
    )
    bin_service = BinService(
        repository=bin_repository,
        alert_sink=AdminNotificationAlertSink(notification_service, user_service),
        user_service=user_service,
        rng=rng,
    )
    analytics_service = AnalyticsService(entry_repository, user_repository)
    classifier_service = ClassifierService(RandomWasteClassifier(rng))
    admin_service = AdminService(
        user_repository=user_repository,
        entry_repository=entry_repository,
        bin_repository=bin_repository,
        analytics_service=analytics_service,
    )

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        waste_log_service=waste_log_service,
        achievement_service=achievement_service,
        reward_service=reward_service,
        notification_service=notification_service,
        bin_service=bin_service,
        analytics_service=analytics_service,
        classifier_service=classifier_service,
        admin_service=admin_service,
    )
