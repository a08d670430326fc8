"""Tests for the persona engine.

Each test builds a UserProfile and asserts the risks raised for a plan name,
plus the persona default-needs table and label resolution.
"""

from __future__ import annotations

import pytest

from medaid.models.enums import RiskLevel
from medaid.persona import Needs, PersonaType, UserProfile, get_defaults_for_persona, validate_plan
from medaid.persona.rules import EXCLUSION_RULES


def _profile(persona: str = "Executive", **needs: bool) -> UserProfile:
    return UserProfile(persona=persona, needs=Needs(**needs))


def _warnings(risks) -> list[str]:
    return [r.warning for r in risks]


class TestExclusionRules:
    """Catalog rules always surface as HIGH."""

    def test_joint_replacement_exclusion(self) -> None:
        risks = validate_plan("Essential Smart", _profile(orthopedic=True))
        assert len(risks) == 1
        assert risks[0].level == RiskLevel.HIGH
        assert risks[0].warning == "Joint Replacement Exclusion"

    @pytest.mark.parametrize("plan", ["Essential Dynamic Smart", "Active Smart", "Classic Essential Smart"])
    def test_joint_replacement_other_smart_plans(self, plan: str) -> None:
        assert "Joint Replacement Exclusion" in _warnings(validate_plan(plan, _profile(orthopedic=True)))

    def test_joint_replacement_needs_orthopedic(self) -> None:
        assert validate_plan("Essential Smart", _profile(orthopedic=False)) == []

    def test_classic_smart_is_safe_for_orthopedic(self) -> None:
        assert validate_plan("Classic Smart", _profile(orthopedic=True)) == []

    def test_no_adl_chronic_cover(self) -> None:
        risks = validate_plan("Classic Smart Comprehensive", _profile(chronic_adl=True))
        assert _warnings(risks) == ["No ADL Chronic Cover"]

    def test_private_ward_exclusion_never_fires(self) -> None:
        for maternity in (True, False, None):
            risks = validate_plan("Classic Core", _profile(maternity=maternity))
            assert "Private Ward Exclusion" not in _warnings(risks)

    def test_private_ward_rule_still_catalogued(self) -> None:
        assert "Private Ward Exclusion" in [rule.warning for rule in EXCLUSION_RULES]

    def test_digital_gatekeeper_when_not_digital(self) -> None:
        risks = validate_plan("KeyCare Start Regional", _profile(digital_first=False))
        assert _warnings(risks) == ["Digital Gatekeeper Risk"]

    def test_digital_gatekeeper_when_flag_absent(self) -> None:
        risks = validate_plan("KeyCare Start Regional", _profile())
        assert _warnings(risks) == ["Digital Gatekeeper Risk"]

    def test_digital_gatekeeper_cleared_for_digital_users(self) -> None:
        assert validate_plan("KeyCare Start Regional", _profile(digital_first=True)) == []

    def test_limited_adl_cover(self) -> None:
        risks = validate_plan("Classic Priority", _profile(chronic_adl=True))
        assert _warnings(risks) == ["Limited ADL Cover"]

    def test_plan_name_match_is_case_sensitive(self) -> None:
        assert validate_plan("classic priority", _profile(chronic_adl=True)) == []


class TestPersonaMismatch:
    """Heuristics that run after the catalog."""

    def test_digital_native_on_traditional_plan(self) -> None:
        risks = validate_plan("Classic Comprehensive", _profile("Digital Native", digital_first=True))
        assert len(risks) == 1
        assert risks[0].level == RiskLevel.LOW
        assert risks[0].warning == "Low Tech-Value"

    @pytest.mark.parametrize("plan", ["Classic Smart", "KeyCare Start", "KeyCare Start Regional"])
    def test_digital_native_on_digital_plan(self, plan: str) -> None:
        risks = validate_plan(plan, _profile("Digital Native", digital_first=True))
        assert "Low Tech-Value" not in _warnings(risks)

    def test_chronic_warrior_on_core(self) -> None:
        risks = validate_plan("Classic Core", _profile("Chronic Warrior", chronic_adl=True))
        assert len(risks) == 1
        assert risks[0].level == RiskLevel.MEDIUM
        assert risks[0].warning == "No Day-to-Day Funding"

    def test_enum_persona_matches(self) -> None:
        profile = UserProfile(persona=PersonaType.CHRONIC_WARRIOR)
        assert _warnings(validate_plan("Coastal Core", profile)) == ["No Day-to-Day Funding"]

    def test_unknown_persona_gets_catalog_only(self) -> None:
        risks = validate_plan("Classic Priority", _profile("Night Owl", chronic_adl=True))
        assert _warnings(risks) == ["Limited ADL Cover"]


class TestOrdering:
    def test_catalog_before_persona_heuristics(self) -> None:
        profile = _profile("Chronic Warrior", chronic_adl=True)
        risks = validate_plan("Priority Core", profile)
        assert _warnings(risks) == ["Limited ADL Cover", "No Day-to-Day Funding"]
        assert [r.level for r in risks] == [RiskLevel.HIGH, RiskLevel.MEDIUM]

    def test_catalog_order_preserved(self) -> None:
        profile = _profile(orthopedic=True, chronic_adl=True)
        risks = validate_plan("Active Smart Comprehensive Priority", profile)
        assert _warnings(risks) == [
            "Joint Replacement Exclusion",
            "No ADL Chronic Cover",
            "Limited ADL Cover",
        ]

    def test_deterministic(self) -> None:
        profile = _profile("Digital Native", orthopedic=True)
        assert validate_plan("Essential Smart", profile) == validate_plan("Essential Smart", profile)

    def test_empty_plan_name(self) -> None:
        assert validate_plan("", _profile(chronic_adl=True)) == []


class TestPersonaDefaults:
    @pytest.mark.parametrize(
        ("persona", "expected"),
        [
            ("Chronic Warrior", {"chronicADL": True}),
            ("Family Planner", {"maternity": True}),
            ("Digital Native", {"digitalFirst": True}),
            ("Budget Conscious", {"digitalFirst": False}),
            ("Regional Resident", {"travel": False}),
            ("Executive", {"travel": True, "chronicADL": True}),
        ],
    )
    def test_known_personas(self, persona: str, expected: dict[str, bool]) -> None:
        needs = get_defaults_for_persona(persona)
        assert needs.model_dump(by_alias=True, exclude_none=True) == expected

    def test_unknown_persona_gets_empty_needs(self) -> None:
        assert get_defaults_for_persona("Night Owl") == Needs()

    def test_display_label_is_not_a_persona(self) -> None:
        assert get_defaults_for_persona("The Chronic Warrior") == Needs()

    def test_defaults_feed_validation(self) -> None:
        profile = UserProfile(persona="Executive", needs=get_defaults_for_persona("Executive"))
        assert _warnings(validate_plan("Classic Priority", profile)) == ["Limited ADL Cover"]


class TestPersonaLabels:
    @pytest.mark.parametrize(
        "label",
        ["the-chronic-warrior", "The Chronic Warrior", "chronic_warrior", "Chronic Warrior", "CHRONIC-WARRIOR"],
    )
    def test_labels_resolve(self, label: str) -> None:
        assert PersonaType.from_label(label) is PersonaType.CHRONIC_WARRIOR

    def test_unknown_label(self) -> None:
        assert PersonaType.from_label("the-night-owl") is None

    def test_empty_label(self) -> None:
        assert PersonaType.from_label("") is None
