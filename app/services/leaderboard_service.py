"""Business logic for leaderboard rankings and public profile cards."""
from typing import Dict, List, Optional

import nephra
from app import mock_data
from .achievement_service import AchievementService


class LeaderboardService:
    """Serves the drops leaderboard and the per-user profile cards built
    from it.

    Users are ranked by their drops balance; the ``rank`` stored on each
    user is the authoritative position.
    """

    def __init__(self, users: Optional[List[Dict]] = None,
                 achievements: Optional[AchievementService] = None) -> None:
        """
        Args:
            users:        Leaderboard entries (defaults to the demo users).
            achievements: Achievement resolver for profile cards.
        """
        self._users = users if users is not None else mock_data.LEADERBOARD_USERS
        self._achievements = achievements or AchievementService(users=self._users)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_rankings(self, limit: Optional[int] = None) -> List[Dict]:
        """Return the leaderboard ordered by rank.

        Args:
            limit: Maximum number of entries to return (``None`` = all).

        Returns:
            List of user dicts extended with ``hydration_rank`` (rank name)
            and ``top_three`` (highlighted rows).
        """
        ordered = sorted(self._users, key=lambda u: u['rank'])
        if limit is not None:
            ordered = ordered[:max(0, limit)]
        return [
            dict(u,
                 hydration_rank=nephra.get_hydration_rank(u['level'])['rank'],
                 top_three=u['rank'] <= 3)
            for u in ordered
        ]

    def get_user(self, user_id: int) -> Optional[Dict]:
        """Return the leaderboard entry for *user_id*, or ``None``."""
        for user in self._users:
            if user['id'] == user_id:
                return dict(user)
        return None

    def get_user_card(self, user_id: int) -> Optional[Dict]:
        """Return the public profile card for *user_id*, or ``None`` if not
        found.

        The card includes the user entry, the hydration rank lookup, the
        achievement list with unlock flags and the unlocked count.
        """
        user = self.get_user(user_id)
        if user is None:
            return None
        achievements = self._achievements.for_user(user_id)
        return {
            'user': user,
            'hydration_rank': nephra.get_hydration_rank(user['level']),
            'achievements': achievements,
            'achieved_count': sum(1 for a in achievements if a['achieved']),
        }
