"""Request bodies for the HTTP surface."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from medaid.schemas.comparison import PlanOffer
from medaid.schemas.persona import UserProfile
from medaid.schemas.pricing import ZERO, Amount, ContributionRecord, MemberCounts


class ProfileRequest(BaseModel):
    contribution: ContributionRecord | None = None
    members: MemberCounts = Field(default_factory=MemberCounts)
    income: Amount = ZERO


class RiskRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    plan_name: str = Field(alias="planName")
    profile: UserProfile


class CompareRequest(BaseModel):
    plans: list[PlanOffer]
    members: MemberCounts = Field(default_factory=MemberCounts)
    income: Amount = ZERO
    profile: UserProfile
