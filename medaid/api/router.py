"""HTTP routes over the pricing, persona and comparison engines.

Handlers are plain sync functions: the engines are pure and never block on
I/O. Responses use camelCase keys for the presentation layer.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from medaid.comparison import ComparisonLimitError, evaluate_plans
from medaid.config import settings
from medaid.models.enums import PersonaType
from medaid.persona import get_defaults_for_persona, validate_plan
from medaid.pricing import calculate_profile, get_disclaimer
from medaid.schemas.requests import CompareRequest, ProfileRequest, RiskRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["plans"])


@router.get("/disclaimer")
def disclaimer() -> dict[str, str]:
    return {"disclaimer": get_disclaimer()}


@router.post("/pricing/profile")
def pricing_profile(body: ProfileRequest) -> dict[str, Any]:
    """Financial profile for one plan and household."""
    profile = calculate_profile(body.contribution, body.members, body.income)
    return profile.model_dump(mode="json", by_alias=True)


@router.post("/personas/risks")
def persona_risks(body: RiskRequest) -> list[dict[str, Any]]:
    """Risk findings for one plan name and user profile."""
    return [risk.model_dump(mode="json") for risk in validate_plan(body.plan_name, body.profile)]


@router.get("/personas/{label}/defaults")
def persona_defaults(label: str) -> dict[str, bool]:
    """Default needs for a persona slug or label; unknown personas get {}."""
    persona = PersonaType.from_label(label)
    if persona is None:
        logger.info("Unknown persona label %r", label)
        return {}
    return get_defaults_for_persona(persona).model_dump(by_alias=True, exclude_none=True)


@router.post("/compare")
def compare(body: CompareRequest) -> dict[str, Any]:
    """Side-by-side assessment of the plans in the compare tray."""
    try:
        result = evaluate_plans(
            body.plans,
            body.members,
            body.income,
            body.profile,
            max_plans=settings.max_compare_plans,
        )
    except ComparisonLimitError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return result.model_dump(mode="json", by_alias=True)
