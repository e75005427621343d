"""Health-check data for the ping endpoint."""

from growth_sim.core.calculator import Strategy
from growth_sim.schemas.ping import PingResponse

ENGINE_NAME = "growth-projection"


def get_ping_response() -> PingResponse:
    """Report liveness and the projection strategies this build supports."""
    return PingResponse(
        message="pong",
        engine=ENGINE_NAME,
        strategies=[strategy.value for strategy in Strategy],
    )
