"""Persona engine: rule-based plan risk warnings and persona defaults."""

from medaid.models.enums import PersonaType
from medaid.persona.engine import validate_plan
from medaid.persona.personas import get_defaults_for_persona
from medaid.schemas.persona import Needs, PlanRisk, UserProfile

__all__ = [
    "validate_plan",
    "get_defaults_for_persona",
    "PersonaType",
    "Needs",
    "PlanRisk",
    "UserProfile",
]
