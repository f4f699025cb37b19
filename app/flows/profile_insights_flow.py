"""One actionable, personalised hydration tip for the profile page."""
from app.schemas import ProfileInsightsInput, ProfileInsightsOutput
from .base import Flow

PROMPT = """You are a helpful and friendly AI hydration coach. Your goal is to provide a single, \
actionable, and personalized tip to help the user improve their hydration habits.

User's Name: {name}
User's Level: {level}
Hydration Rank: {rank}
Health Conditions: {health}

Analyze their historical hydration data to find a pattern. The data is a JSON list of drinking events.
Historical Data: {history}

Based on this data, provide one insightful tip. For example:
- If they drink a lot in the morning but little in the afternoon, suggest an afternoon reminder.
- If they consistently miss their goal by a small amount, suggest a specific small increase.
- If they report a health condition, gently tie the advice to it.
- Keep the tone positive and encouraging. Address the user by name.
"""


class ProfileInsightsFlow(Flow):
    name = 'profileInsightsFlow'
    input_schema = ProfileInsightsInput
    output_schema = ProfileInsightsOutput

    def render_prompt(self, data: ProfileInsightsInput) -> str:
        return PROMPT.format(name=data.name, level=data.level, rank=data.hydration_rank,
                             health=data.health_conditions or 'None reported',
                             history=data.historical_data)
