"""Persona engine: validates a plan against a user's declared needs.

Pure Python, deterministic. Runs the exclusion catalog first, then the persona
mismatch heuristics, and returns every finding in evaluation order.
"""

from __future__ import annotations

import logging

from medaid.persona.rules import EXCLUSION_RULES, PERSONA_MISMATCH_RULES
from medaid.schemas.persona import PlanRisk, UserProfile

logger = logging.getLogger(__name__)


def validate_plan(plan_name: str, profile: UserProfile) -> list[PlanRisk]:
    """Return the risks of `plan_name` for `profile` (empty if none apply)."""
    name = plan_name or ""
    risks = [
        rule.to_risk()
        for rule in (*EXCLUSION_RULES, *PERSONA_MISMATCH_RULES)
        if rule.matches(name, profile)
    ]
    if risks:
        logger.debug("Plan %r: %d risk(s) for persona %s", name, len(risks), profile.persona)
    return risks
