from fastapi import Request

from app.services.simulation_service import SimulationService


def get_simulation_service(request: Request) -> SimulationService:
    """The application's shared simulation service."""
    return request.app.state.simulation
