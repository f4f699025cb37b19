"""Business logic for the achievement catalogue and per-user unlocks."""
from typing import Dict, List, Optional

from app import mock_data


class AchievementService:
    """Resolves which achievements each leaderboard user has unlocked.

    Unlocks are derived deterministically from the user and achievement ids
    so that every render of a profile shows the same badges.
    """

    def __init__(self, catalogue: Optional[List[Dict]] = None,
                 users: Optional[List[Dict]] = None) -> None:
        """
        Args:
            catalogue: Achievement definitions (defaults to the demo catalogue).
            users:     Users that can hold achievements (defaults to the
                       demo leaderboard).
        """
        self._catalogue = catalogue if catalogue is not None else mock_data.ACHIEVEMENTS
        self._user_ids = {u['id'] for u in
                          (users if users is not None else mock_data.LEADERBOARD_USERS)}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @staticmethod
    def is_unlocked(achievement_id: int, user_id: int) -> bool:
        """Return ``True`` if *user_id* holds *achievement_id*."""
        return (achievement_id * 3 + user_id * 5) % 10 > 3

    def catalogue(self) -> List[Dict]:
        """Return a copy of every achievement definition."""
        return [dict(a) for a in self._catalogue]

    def for_user(self, user_id: int) -> List[Dict]:
        """Return the full catalogue annotated with an ``achieved`` flag.

        Args:
            user_id: Leaderboard user id.

        Returns:
            List of achievement dicts (``id``, ``icon``, ``title``,
            ``description``, ``achieved``), or an empty list when the user
            is unknown.
        """
        if user_id not in self._user_ids:
            return []
        return [
            dict(a, achieved=self.is_unlocked(a['id'], user_id))
            for a in self._catalogue
        ]

    def achieved_count(self, user_id: int) -> int:
        """Return how many achievements *user_id* has unlocked."""
        return sum(1 for a in self.for_user(user_id) if a['achieved'])
