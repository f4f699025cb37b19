"""Input and output schemas for the AI flows and the profile form.

Inputs accept both snake_case and the camelCase keys the web client sends
(``historicalData``, ``healthConditions``, ``hydrationRank``).  Field
descriptions on the output models are forwarded to the model as part of the
response schema.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _FlowInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class HydrationRecommendationsInput(_FlowInput):
    age: float = Field(description="The age of the user in years.")
    gender: str = Field(description="The gender of the user (e.g., male, female, other).")
    weight: float = Field(description="The weight of the user in kilograms.")
    historical_data: str = Field(
        alias="historicalData",
        description="Historical hydration data in JSON format, including timestamps and amounts.")
    health_conditions: Optional[str] = Field(
        default=None, alias="healthConditions",
        description="Optional free-text field for health conditions that might affect "
                    "hydration needs (e.g., fever, diabetes, menstruation).")


class HydrationRecommendationsOutput(BaseModel):
    goal_ml: float = Field(description="The recommended daily hydration goal in milliliters.")
    alert_interval_minutes: float = Field(description="The recommended alert interval in minutes.")


class MotivationInput(_FlowInput):
    name: str = Field(description="The user's name.")
    streak: int = Field(description="The current daily streak of meeting hydration goals.")
    progress_percentage: float = Field(
        description="The percentage of the daily hydration goal completed.")


class MotivationOutput(BaseModel):
    message: str = Field(
        description="A short, witty, and encouraging message for the user. "
                    "It should be 1-2 sentences.")
    title: str = Field(
        description="A short, encouraging title for the message. "
                    "E.g., 'Great start!' or 'Keep it up!'.")


class ProfileInsightsInput(_FlowInput):
    name: str = Field(description="The user's name.")
    level: int = Field(description="The user's current level.")
    hydration_rank: str = Field(
        alias="hydrationRank",
        description="The user's current hydration rank (e.g., 'Scout', 'Hydro-Hero').")
    historical_data: str = Field(
        alias="historicalData", description="A JSON string of historical hydration data.")
    health_conditions: Optional[str] = Field(
        default=None, alias="healthConditions",
        description="Any health conditions the user has reported.")


class ProfileInsightsOutput(BaseModel):
    insight: str = Field(
        description="A personalized insight or tip for the user based on their hydration "
                    "patterns, e.g. 'You're great at hydrating in the morning, but tend to "
                    "forget in the afternoon. Try setting a reminder!'")


class Profile(_FlowInput):
    """The editable personal details on the profile page."""
    name: str
    age: float
    gender: str
    weight: float
    health_conditions: Optional[str] = Field(default=None, alias="healthConditions")
