"""Default needs per persona.

Used when a user lands on a persona page without filling in the triage form.
"""

from __future__ import annotations

from medaid.models.enums import PersonaType
from medaid.schemas.persona import Needs

PERSONA_DEFAULTS: dict[PersonaType, Needs] = {
    PersonaType.CHRONIC_WARRIOR: Needs(chronic_adl=True),
    PersonaType.FAMILY_PLANNER: Needs(maternity=True),
    PersonaType.DIGITAL_NATIVE: Needs(digital_first=True),
    PersonaType.BUDGET_CONSCIOUS: Needs(digital_first=False),
    PersonaType.REGIONAL_RESIDENT: Needs(travel=False),
    PersonaType.EXECUTIVE: Needs(travel=True, chronic_adl=True),
}


def get_defaults_for_persona(persona: PersonaType | str) -> Needs:
    """Default needs for a persona; unknown personas get empty needs.

    Only exact persona values are recognized. Use `PersonaType.from_label`
    first when starting from a page slug.
    """
    try:
        key = PersonaType(persona)
    except ValueError:
        return Needs()
    return PERSONA_DEFAULTS[key]
