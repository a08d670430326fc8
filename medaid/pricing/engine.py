"""Pricing engine: contribution record + household → FinancialProfile.

Pure Python orchestrator. No DB access, no configuration, no I/O. Figures are
exact Decimals; formatting to currency belongs to the presentation layer. Every
failure inside is recovered locally; callers always get a well-formed profile,
and an all-zero profile means the plan's data was unusable.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from pydantic import ValidationError

from medaid.pricing.premium import calculate_premium
from medaid.pricing.thresholds import calculate_thresholds
from medaid.schemas.pricing import (
    ZERO,
    ContributionRecord,
    FinancialProfile,
    IncentiveSummary,
    MemberCounts,
    SavingsSummary,
    ThresholdSummary,
)

logger = logging.getLogger(__name__)

DISCLAIMER = (
    "All premiums, savings allocations and thresholds shown are estimates based on "
    "published contribution tables and the household details you entered. They are "
    "not a quote and do not constitute financial advice. Confirm every figure with "
    "the medical scheme or an accredited broker before you join or change plans."
)


def _as_record(contribution: ContributionRecord | Mapping[str, Any] | None) -> ContributionRecord | None:
    if contribution is None or isinstance(contribution, ContributionRecord):
        return contribution
    try:
        return ContributionRecord.model_validate(dict(contribution))
    except (TypeError, ValueError, ValidationError) as exc:
        logger.warning("Contribution record rejected, pricing as empty: %s", exc)
        return None


def calculate_incentives(contribution: ContributionRecord | None = None) -> IncentiveSummary:
    """Personal health fund figures.

    TODO: compute once contribution records carry a personal health fund structure.
    """
    return IncentiveSummary()


def calculate_profile(
    contribution: ContributionRecord | Mapping[str, Any] | None,
    members: MemberCounts,
    income: Decimal | float = 0,
) -> FinancialProfile:
    """Build the financial profile for a household on one plan.

    Args:
        contribution: The plan's contribution record (or the raw row). None
            when the plan has no contribution data.
        members: Household member counts.
        income: Declared monthly income for income-banded plans.

    Returns:
        FinancialProfile with premium, savings, thresholds and incentives.
    """
    record = _as_record(contribution)
    if record is None:
        logger.debug("No contribution record, returning empty profile")
        return FinancialProfile()

    monthly_premium = calculate_premium(record, members, income)
    thresholds = calculate_thresholds(record, members)
    annual_allocation = thresholds.annual_msa
    annual_threshold = thresholds.annual_threshold

    return FinancialProfile(
        monthly_premium=monthly_premium,
        annual_premium=monthly_premium * 12,
        savings=SavingsSummary(
            annual_allocation=annual_allocation,
            monthly_allocation=annual_allocation / 12,
            is_pooled=annual_allocation > 0,
        ),
        thresholds=ThresholdSummary(
            annual_threshold=annual_threshold,
            self_payment_gap=max(ZERO, annual_threshold - annual_allocation),
            limited_above_threshold=thresholds.limited_above_threshold,
        ),
        incentives=calculate_incentives(record),
    )


def get_disclaimer() -> str:
    """Advisory text that must accompany any rendered financial figure."""
    return DISCLAIMER
