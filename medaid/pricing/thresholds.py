"""Savings, threshold and LATB calculator.

Per member class the threshold falls back through:
  annual_threshold_<class> → annual_threshold → 0
with the child class also accepting the legacy `child_threshold` before the
shared field. Annual MSA prefers explicit per-class allocations over a Fixed
MSA structure. Self-payment gap = max(0, threshold − MSA).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from decimal import Decimal
from typing import Any

from medaid.models.enums import MemberClass, MsaType
from medaid.pricing.decoding import (
    MalformedEncodingError,
    decode_msa_structure,
    decode_threshold_structure,
)
from medaid.schemas.pricing import (
    ZERO,
    ContributionRecord,
    MemberCounts,
    MsaStructure,
    ThresholdResult,
    ThresholdStructure,
)

logger = logging.getLogger(__name__)


def _weighted(members: MemberCounts, per_class: dict[MemberClass, Decimal | None]) -> Decimal:
    """Sum of per-class amounts weighted by member counts, missing as 0."""
    return sum(
        ((per_class[cls] or ZERO) * members.count(cls) for cls in MemberClass),
        ZERO,
    )


def _class_threshold(structure: ThresholdStructure, member_class: MemberClass) -> Decimal | None:
    explicit = getattr(structure, f"annual_threshold_{member_class.value}")
    if explicit is not None:
        return explicit
    if member_class is MemberClass.CHILD and structure.child_threshold is not None:
        return structure.child_threshold
    return structure.annual_threshold


def annual_msa(
    structure: ThresholdStructure,
    msa: MsaStructure | None,
    members: MemberCounts,
) -> Decimal:
    """Annual MSA allocation for the household."""
    if structure.msa_allocation_main is not None:
        return _weighted(members, {
            cls: getattr(structure, f"msa_allocation_{cls.value}") for cls in MemberClass
        })
    if msa is not None and msa.type is MsaType.FIXED and msa.value is not None:
        return msa.value * members.total
    # Percentage-of-premium MSA is not computed
    return ZERO


def annual_threshold(structure: ThresholdStructure, members: MemberCounts) -> Decimal:
    return _weighted(members, {cls: _class_threshold(structure, cls) for cls in MemberClass})


def limited_above_threshold(structure: ThresholdStructure, members: MemberCounts) -> Decimal:
    if structure.latb_limit_main is None:
        return ZERO
    return _weighted(members, {
        cls: getattr(structure, f"latb_limit_{cls.value}") for cls in MemberClass
    })


def _decode_or_none[T](decoder: Callable[[Any], T | None], raw: Any, label: str) -> T | None:
    try:
        return decoder(raw)
    except MalformedEncodingError as exc:
        logger.warning("%s not decodable, treated as absent: %s", label, exc)
        return None


def calculate_thresholds(contribution: ContributionRecord, members: MemberCounts) -> ThresholdResult:
    """Calculate MSA, threshold, self-payment gap and LATB for one plan.

    Returns the all-zero result when the plan carries no threshold structure.
    """
    structure = _decode_or_none(decode_threshold_structure, contribution.threshold_structure, "Threshold structure")
    msa = _decode_or_none(decode_msa_structure, contribution.msa_structure, "MSA structure")

    if structure is None:
        return ThresholdResult()

    msa_total = annual_msa(structure, msa, members)
    threshold_total = annual_threshold(structure, members)

    return ThresholdResult(
        annual_msa=msa_total,
        annual_threshold=threshold_total,
        self_payment_gap=max(ZERO, threshold_total - msa_total),
        limited_above_threshold=limited_above_threshold(structure, members),
    )
