"""Profile-page actions backed by the AI flows."""
import json
import logging
from typing import Dict, Optional

from pydantic import ValidationError

import nephra
from app import mock_data
from app.flows import (
    FlowError, HydrationRecommendationsFlow, MotivationFlow, ProfileInsightsFlow,
)
from app.schemas import HydrationRecommendationsInput, ProfileInsightsInput, Profile
from genai_client import GenAIError

logger = logging.getLogger('nephra.profile')

FALLBACK_MOTIVATION = {
    'title': 'Welcome Back!',
    'message': "Let's get hydrated today and keep the streak alive! 💪💧",
}


class ProfileService:
    """Runs the AI flows on behalf of the dashboard and profile pages.

    Every action swallows validation, client and flow failures: it logs
    them and returns ``None`` (or the fallback motivation) so a flaky model
    never breaks a page.
    """

    def __init__(self, client) -> None:
        """
        Args:
            client: ``GeminiClient`` (or compatible), or ``None`` when AI is
                not configured.
        """
        self._client = client

    @property
    def ai_enabled(self) -> bool:
        return self._client is not None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_hydration_recommendation(self, profile: Dict) -> Optional[Dict]:
        """Return ``{'goal_ml', 'alert_interval_minutes'}`` for *profile*, or
        ``None`` on any error."""
        if not self.ai_enabled:
            logger.warning("Hydration recommendation requested but AI is not configured")
            return None
        try:
            validated = Profile.model_validate(profile)
            request = HydrationRecommendationsInput(
                age=validated.age,
                gender=validated.gender,
                weight=validated.weight,
                historical_data=json.dumps(mock_data.RECOMMENDATION_HISTORY),
                health_conditions=validated.health_conditions or None,
            )
            result = HydrationRecommendationsFlow(self._client).run(request)
        except (ValidationError, GenAIError, FlowError) as e:
            logger.error("Error getting hydration recommendation: %s", e)
            return None
        return result.model_dump()

    def get_profile_insights(self, data: Dict) -> Optional[Dict]:
        """Return ``{'insight'}`` for the profile described by *data*, or
        ``None`` on any error."""
        if not self.ai_enabled:
            logger.warning("Profile insight requested but AI is not configured")
            return None
        try:
            validated = ProfileInsightsInput.model_validate(data)
            result = ProfileInsightsFlow(self._client).run(validated)
        except (ValidationError, GenAIError, FlowError) as e:
            logger.error("Error getting profile insights: %s", e)
            return None
        return result.model_dump()

    def get_initial_motivation(self, name: str = None, streak: int = 5,
                               progress_percentage: float = 0) -> Dict:
        """Return ``{'title', 'message'}`` from the motivation flow, or the
        fallback message when the flow is unavailable or fails."""
        if not self.ai_enabled:
            return dict(FALLBACK_MOTIVATION)
        payload = {
            'name': name or self.current_user()['name'],
            'streak': streak,
            'progress_percentage': progress_percentage,
        }
        try:
            return MotivationFlow(self._client).run(payload).model_dump()
        except (ValidationError, GenAIError, FlowError) as e:
            logger.error("Error getting initial motivation: %s", e)
            return dict(FALLBACK_MOTIVATION)

    # ------------------------------------------------------------------
    # Demo defaults
    # ------------------------------------------------------------------

    @staticmethod
    def current_user() -> Dict:
        for user in mock_data.LEADERBOARD_USERS:
            if user['id'] == mock_data.CURRENT_USER_ID:
                return dict(user)
        return dict(mock_data.LEADERBOARD_USERS[0])

    @staticmethod
    def default_profile() -> Dict:
        return dict(mock_data.DEFAULT_PROFILE)

    def default_insights_request(self) -> Dict:
        """Insight request for the signed-in demo user."""
        user = self.current_user()
        return {
            'name': user['name'],
            'level': user['level'],
            'hydration_rank': nephra.get_hydration_rank(user['level'])['rank'],
            'historical_data': json.dumps(mock_data.INSIGHTS_HISTORY),
            'health_conditions': mock_data.INSIGHTS_HEALTH_CONDITIONS,
        }
