"""Risk rule catalog.

Each rule is a declarative descriptor evaluated by `RiskRule.matches`:
plan-name substring markers, need flags that must be set or unset, and an
optional persona. Catalogs are ordered; order only affects output ordering.

Plan rules are sourced from the 2026 plan guides (Smart, Comprehensive, Core,
KeyCare and Priority series).
"""

from __future__ import annotations

from dataclasses import dataclass

from medaid.models.enums import PersonaType, RiskLevel
from medaid.schemas.persona import Needs, PlanRisk, UserProfile


@dataclass(frozen=True)
class RiskRule:
    """A (condition, finding) pair. Empty condition fields do not constrain."""

    warning: str
    details: str
    level: RiskLevel = RiskLevel.HIGH
    plan_contains_any: tuple[str, ...] = ()
    plan_contains_none: tuple[str, ...] = ()
    needs_set: tuple[str, ...] = ()
    needs_unset: tuple[str, ...] = ()
    persona: PersonaType | None = None

    def matches(self, plan_name: str, profile: UserProfile) -> bool:
        if self.persona is not None and profile.persona != self.persona:
            return False
        if self.plan_contains_any and not any(marker in plan_name for marker in self.plan_contains_any):
            return False
        if any(marker in plan_name for marker in self.plan_contains_none):
            return False
        return _needs_match(profile.needs, self.needs_set, self.needs_unset)

    def to_risk(self) -> PlanRisk:
        return PlanRisk(level=self.level, warning=self.warning, details=self.details)


def _needs_match(needs: Needs, needs_set: tuple[str, ...], needs_unset: tuple[str, ...]) -> bool:
    if not all(getattr(needs, flag) for flag in needs_set):
        return False
    return not any(getattr(needs, flag) for flag in needs_unset)


# ── Exclusions (always HIGH) ───────────────────────────────────────────────

EXCLUSION_RULES: tuple[RiskRule, ...] = (
    RiskRule(
        warning="Joint Replacement Exclusion",
        details=(
            "This plan strictly excludes hip, knee, and shoulder replacements unless it "
            "is a PMB emergency. Classic Smart is safer."
        ),
        plan_contains_any=("Essential Smart", "Essential Dynamic Smart", "Active Smart"),
        needs_set=("orthopedic",),
    ),
    RiskRule(
        warning="No ADL Chronic Cover",
        details=(
            "You indicated a need for complex chronic medication. 'Classic Smart "
            "Comprehensive' excludes the Additional Disease List (ADL). You must choose "
            "'Classic Comprehensive'."
        ),
        plan_contains_any=("Smart Comprehensive",),
        needs_set=("chronic_adl",),
    ),
    # Requires maternity to be both set and unset, so it never fires. Kept
    # as published until the intended condition is confirmed.
    RiskRule(
        warning="Private Ward Exclusion",
        details=(
            "Core plans only cover General Ward costs. For maternity, this means no "
            "private room unless you pay extra."
        ),
        plan_contains_any=("Core",),
        needs_set=("maternity",),
        needs_unset=("maternity",),
    ),
    RiskRule(
        warning="Digital Gatekeeper Risk",
        details=(
            "KeyCare Start requires all GP visits to start online/digitally. If you "
            "prefer walking into a doctor's rooms, you will have no cover."
        ),
        plan_contains_any=("KeyCare Start Regional",),
        needs_unset=("digital_first",),
    ),
    RiskRule(
        warning="Limited ADL Cover",
        details=(
            "Priority plans have limited ADL cover. Once your chronic allowance is "
            "reached, you might pay out of pocket."
        ),
        plan_contains_any=("Priority",),
        needs_set=("chronic_adl",),
    ),
)


# ── Persona mismatches ─────────────────────────────────────────────────────

PERSONA_MISMATCH_RULES: tuple[RiskRule, ...] = (
    RiskRule(
        warning="Low Tech-Value",
        details=(
            "This plan doesn't offer the digital-first incentives (like R0 video "
            "consults) that maximize value for your profile."
        ),
        level=RiskLevel.LOW,
        persona=PersonaType.DIGITAL_NATIVE,
        plan_contains_none=("Smart", "KeyCare Start"),
    ),
    RiskRule(
        warning="No Day-to-Day Funding",
        details=(
            "As a Chronic Warrior, you likely need regular GP visits. Core plans have "
            "0% day-to-day cover."
        ),
        level=RiskLevel.MEDIUM,
        persona=PersonaType.CHRONIC_WARRIOR,
        plan_contains_any=("Core",),
    ),
)
