"""Rules configuration endpoints for reading and updating thresholds."""

from fastapi import APIRouter, Request

from app.models import RulesConfig

router = APIRouter(prefix="/api")


@router.get("/rules", response_model=RulesConfig)
async def get_rules(request: Request) -> RulesConfig:
    """Return the current rule thresholds and restricted currencies."""
    return request.app.state.config


@router.put("/rules", response_model=RulesConfig)
async def update_rules(
    new_config: RulesConfig,
    request: Request,
) -> RulesConfig:
    """Replace the rules configuration.

    Updates both the app-level config and the engine's config reference
    so the next transfer is screened against the new thresholds. Rule
    order is not configurable.
    """
    request.app.state.config = new_config
    request.app.state.engine.config = new_config
    return new_config
