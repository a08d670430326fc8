"""Domain enums shared by the pricing, persona and comparison schemas.

All enums use the str mixin so they serialize to their plain values.
"""

from __future__ import annotations

from enum import Enum


class PricingModel(str, Enum):
    """How a plan's contribution table is keyed."""

    STANDARD = "Standard"
    INCOME_BANDED = "Income_Banded"


class MsaType(str, Enum):
    """Medical Savings Account allocation model declared on a contribution."""

    NONE = "None"
    FIXED = "Fixed"
    PERCENTAGE = "Percentage"  # recognized, never computed


class MemberClass(str, Enum):
    """Household member classes used by every rate and threshold table."""

    MAIN = "main"
    ADULT = "adult"
    CHILD = "child"


class RiskLevel(str, Enum):
    """Severity of a plan/persona finding."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class PersonaType(str, Enum):
    """User archetypes that drive default needs and mismatch heuristics."""

    CHRONIC_WARRIOR = "Chronic Warrior"
    DIGITAL_NATIVE = "Digital Native"
    FAMILY_PLANNER = "Family Planner"
    BUDGET_CONSCIOUS = "Budget Conscious"
    REGIONAL_RESIDENT = "Regional Resident"
    EXECUTIVE = "Executive"

    @classmethod
    def from_label(cls, label: str) -> PersonaType | None:
        """Resolve a page slug or display label to a persona.

        Accepts "the-chronic-warrior", "The Chronic Warrior", "chronic_warrior"
        and so on. Returns None when nothing matches.
        """
        words = label.replace("-", " ").replace("_", " ").split()
        if words and words[0].lower() == "the":
            words = words[1:]
        key = " ".join(words).lower()
        for member in cls:
            if member.value.lower() == key:
                return member
        return None
