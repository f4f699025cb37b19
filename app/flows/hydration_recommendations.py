"""Personalised daily hydration goal and reminder interval."""
from app.schemas import HydrationRecommendationsInput, HydrationRecommendationsOutput
from .base import Flow, format_number

PROMPT = """You are an AI assistant that provides personalized hydration recommendations based on user data.

Analyze the following user profile and historical hydration data to determine the optimal \
daily hydration goal and alert interval.

User Profile:
- Age: {age}
- Gender: {gender}
- Weight: {weight} kg
{health}
Historical Hydration Data:
{history}

Provide the optimal daily hydration goal in milliliters and the alert interval in minutes.
Consider activity level, climate, health conditions and individual preferences. Someone with \
a fever, who is menstruating, or who has diabetes may need more water.

Make sure the suggested goals are realistic and achievable for the user.
"""


class HydrationRecommendationsFlow(Flow):
    name = 'hydrationRecommendationsFlow'
    input_schema = HydrationRecommendationsInput
    output_schema = HydrationRecommendationsOutput

    def render_prompt(self, data: HydrationRecommendationsInput) -> str:
        health = ''
        if data.health_conditions:
            health = f"- Health Conditions: {data.health_conditions}\n"
        return PROMPT.format(age=format_number(data.age), gender=data.gender,
                             weight=format_number(data.weight), health=health,
                             history=data.historical_data)
