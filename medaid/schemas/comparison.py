"""Pydantic schemas for the plan comparison orchestrator."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from medaid.schemas.persona import PlanRisk
from medaid.schemas.pricing import ContributionRecord, FinancialProfile, Money


def _as_contribution_list(value: Any) -> Any:
    # Joined rows sometimes carry a single object instead of a list
    if value is None:
        return []
    if isinstance(value, Mapping | ContributionRecord):
        return [value]
    return value


class PlanOffer(BaseModel):
    """A plan as fetched by the data layer, with its joined contribution rows."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int | str
    name: str
    scheme: str | None = None
    contributions: Annotated[list[ContributionRecord], BeforeValidator(_as_contribution_list)] = Field(
        default_factory=list,
    )

    @property
    def contribution(self) -> ContributionRecord | None:
        """The contribution row that gets priced (the first one)."""
        return self.contributions[0] if self.contributions else None


class PlanAssessment(BaseModel):
    """Pricing and persona results merged for one plan card."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    plan_id: int | str
    plan_name: str
    scheme: str | None = None
    financials: FinancialProfile
    risks: list[PlanRisk] = Field(default_factory=list)
    has_high_risk: bool = False
    headline_warning: str | None = None
    price_from: Money | None = None


class ComparisonResult(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    assessments: list[PlanAssessment] = Field(default_factory=list)
    disclaimer: str
