"""Pydantic schemas for the persona engine.

Needs flags are tri-state: True, False, or absent (None). Rules only ever test
truthiness, so absent and False behave alike; the distinction survives
serialization so default-needs payloads stay minimal.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from medaid.models.enums import PersonaType, RiskLevel


class Needs(BaseModel):
    """Declared needs, derived from the triage questions."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    chronic_adl: bool | None = Field(default=None, alias="chronicADL")  # Additional Disease List cover
    orthopedic: bool | None = None     # anticipating joint or back surgery
    maternity: bool | None = None      # pregnant or planning
    travel: bool | None = None         # frequent traveller
    digital_first: bool | None = Field(default=None, alias="digitalFirst")  # willing to use apps


class UserProfile(BaseModel):
    """Who the user is and what they need.

    `persona` keeps unknown labels as plain strings; they simply match no
    persona-specific rule.
    """

    model_config = ConfigDict(frozen=True)

    persona: PersonaType | str
    needs: Needs = Field(default_factory=Needs)
    location: str | None = None  # e.g. "Coastal", "Inland"


class PlanRisk(BaseModel):
    """One finding from validating a plan against a user profile."""

    model_config = ConfigDict(frozen=True)

    level: RiskLevel
    warning: str
    details: str
