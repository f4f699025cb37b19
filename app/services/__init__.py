"""Services package - expose all concrete services from one import."""
from .achievement_service import AchievementService
from .leaderboard_service import LeaderboardService
from .timeline_service import TimelineService
from .toast_service import ToastService, ToastHandle
from .dashboard_service import HydrationSession, SimulationScheduler
from .telemetry_service import TelemetrySimulator
from .profile_service import ProfileService

__all__ = [
    'AchievementService',
    'LeaderboardService',
    'TimelineService',
    'ToastService',
    'ToastHandle',
    'HydrationSession',
    'SimulationScheduler',
    'TelemetrySimulator',
    'ProfileService',
]
