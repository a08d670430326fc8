"""Monthly premium calculator.

Premium = main_rate × main + adult_rate × adult + child_rate × child, with the
rate card picked from the plan's pricing matrix:
- Standard: the single rate card.
- Income_Banded: the first band whose [min, max] contains the income. When
  no band matches, band 0 is used instead of pricing the plan at R0.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from decimal import Decimal

from medaid.pricing.decoding import MalformedEncodingError, decode_pricing_matrix
from medaid.schemas.pricing import (
    ZERO,
    BandedMatrix,
    ContributionRecord,
    IncomeBand,
    MemberCounts,
    coerce_amount,
)

logger = logging.getLogger(__name__)


def select_band(bands: Sequence[IncomeBand], income: Decimal) -> IncomeBand | None:
    """Return the first band containing `income`, falling back to the first band.

    Returns None only when there are no bands at all.
    """
    for band in bands:
        if band.contains(income):
            return band
    if not bands:
        return None
    logger.info("Income %s falls outside every band, using first band", income)
    return bands[0]


def calculate_premium(
    contribution: ContributionRecord,
    members: MemberCounts,
    income: Decimal | float = 0,
) -> Decimal:
    """Calculate the monthly premium for a household on one plan.

    Args:
        contribution: The plan's contribution record.
        members: Household member counts.
        income: Declared monthly income, only used by income-banded plans.

    Returns:
        Unrounded monthly premium; 0 when the pricing matrix is unusable.
    """
    try:
        matrix = decode_pricing_matrix(contribution.pricing_model, contribution.pricing_matrix)
    except MalformedEncodingError as exc:
        logger.warning("Pricing matrix not decodable, premium set to 0: %s", exc)
        return ZERO

    if matrix is None:
        return ZERO

    if isinstance(matrix, BandedMatrix):
        rates = select_band(matrix.bands, coerce_amount(income))
        if rates is None:
            return ZERO
    else:
        rates = matrix.rates

    return rates.premium_for(members)
