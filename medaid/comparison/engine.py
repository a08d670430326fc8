"""Comparison orchestrator: runs both engines for every plan on screen.

Pure Python. The pricing and persona engines stay independent; this module
only merges their outputs the way a plan card shows them.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from decimal import Decimal

from medaid.models.enums import RiskLevel
from medaid.persona import validate_plan
from medaid.pricing import MalformedEncodingError, calculate_profile, get_disclaimer
from medaid.pricing.decoding import decode_pricing_matrix
from medaid.schemas.comparison import ComparisonResult, PlanAssessment, PlanOffer
from medaid.schemas.persona import UserProfile
from medaid.schemas.pricing import BandedMatrix, ContributionRecord, MemberCounts

logger = logging.getLogger(__name__)


class ComparisonLimitError(ValueError):
    """Raised when more plans are submitted than the compare tray holds."""

    def __init__(self, submitted: int, limit: int) -> None:
        super().__init__(f"At most {limit} plans can be compared, got {submitted}")
        self.submitted = submitted
        self.limit = limit


def price_from(contribution: ContributionRecord | None) -> Decimal | None:
    """Principal-member rate shown as "From R…" on benefit cards.

    Uses the fixed rate card, or band 0 of an income-banded matrix. None when
    the matrix is missing or unusable.
    """
    if contribution is None:
        return None
    try:
        matrix = decode_pricing_matrix(contribution.pricing_model, contribution.pricing_matrix)
    except MalformedEncodingError:
        return None
    if matrix is None:
        return None
    if isinstance(matrix, BandedMatrix):
        return matrix.bands[0].main if matrix.bands else None
    return matrix.rates.main


def assess_plan(
    plan: PlanOffer,
    members: MemberCounts,
    income: Decimal | float,
    profile: UserProfile,
) -> PlanAssessment:
    risks = validate_plan(plan.name, profile)
    headline = next((r.warning for r in risks if r.level is RiskLevel.HIGH), None)
    return PlanAssessment(
        plan_id=plan.id,
        plan_name=plan.name,
        scheme=plan.scheme,
        financials=calculate_profile(plan.contribution, members, income),
        risks=risks,
        has_high_risk=headline is not None,
        headline_warning=headline,
        price_from=price_from(plan.contribution),
    )


def evaluate_plans(
    plans: Sequence[PlanOffer],
    members: MemberCounts,
    income: Decimal | float,
    profile: UserProfile,
    max_plans: int | None = None,
) -> ComparisonResult:
    """Assess every plan for one household and persona, keeping input order.

    Raises:
        ComparisonLimitError: If `max_plans` is given and exceeded.
    """
    if max_plans is not None and len(plans) > max_plans:
        raise ComparisonLimitError(len(plans), max_plans)

    assessments = [assess_plan(plan, members, income, profile) for plan in plans]
    logger.info(
        "Compared %d plan(s), %d with high risk",
        len(assessments),
        sum(1 for a in assessments if a.has_high_risk),
    )
    return ComparisonResult(assessments=assessments, disclaimer=get_disclaimer())
