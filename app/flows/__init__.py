"""Flows package - expose every AI flow and the name registry."""
from .base import Flow, FlowError, FlowOutputError, response_schema_for
from .motivation_flow import MotivationFlow
from .hydration_recommendations import HydrationRecommendationsFlow
from .profile_insights_flow import ProfileInsightsFlow

FLOWS = {
    MotivationFlow.name: MotivationFlow,
    HydrationRecommendationsFlow.name: HydrationRecommendationsFlow,
    ProfileInsightsFlow.name: ProfileInsightsFlow,
}


def get_flow(name: str, client) -> Flow:
    """Instantiate the flow registered under *name*.

    Raises:
        KeyError: No flow has that name.
    """
    try:
        flow_cls = FLOWS[name]
    except KeyError:
        raise KeyError(f"Unknown flow: {name!r}") from None
    return flow_cls(client)


__all__ = [
    'Flow',
    'FlowError',
    'FlowOutputError',
    'response_schema_for',
    'MotivationFlow',
    'HydrationRecommendationsFlow',
    'ProfileInsightsFlow',
    'FLOWS',
    'get_flow',
]
