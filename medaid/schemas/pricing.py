"""Pydantic schemas for the pricing engine.

Inputs mirror the already-joined contribution rows handed over by the data
layer. The three structured columns (pricing matrix, MSA structure, threshold
structure) can arrive as native objects or JSON text; `medaid.pricing.decoding`
turns them into the typed models below exactly once.

Outputs are frozen and serialize with camelCase keys for the presentation layer.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from medaid.models.enums import MemberClass, MsaType, PricingModel

ZERO = Decimal("0")


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------


def coerce_optional_amount(value: Any) -> Decimal | None:
    """Coerce a number-like value to Decimal, or None when it is not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, int | float | str):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            return None
        return amount if amount.is_finite() else None
    return None


def coerce_amount(value: Any) -> Decimal:
    """Like coerce_optional_amount, but missing or non-numeric becomes 0."""
    amount = coerce_optional_amount(value)
    return ZERO if amount is None else amount


def _coerce_pricing_model(value: Any) -> Any:
    if isinstance(value, PricingModel):
        return value
    try:
        return PricingModel(value)
    except ValueError:
        return PricingModel.STANDARD


def _coerce_msa_type(value: Any) -> Any:
    if isinstance(value, MsaType):
        return value
    try:
        return MsaType(value)
    except ValueError:
        return MsaType.NONE


Amount = Annotated[Decimal, BeforeValidator(coerce_amount)]
OptionalAmount = Annotated[Decimal | None, BeforeValidator(coerce_optional_amount)]

# Decimal in Python, plain number on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


class MemberCounts(BaseModel):
    """Household shape. There is always a principal member."""

    model_config = ConfigDict(frozen=True)

    main: int = Field(default=1, ge=1)
    adult: int = Field(default=0, ge=0)
    child: int = Field(default=0, ge=0)

    def count(self, member_class: MemberClass) -> int:
        return getattr(self, member_class.value)

    @property
    def total(self) -> int:
        return self.main + self.adult + self.child


class ContributionRecord(BaseModel):
    """One contribution row for a plan, as fetched from storage.

    The structured columns stay untyped here; they may be objects, arrays or
    JSON text depending on how the row was stored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    pricing_model: Annotated[PricingModel, BeforeValidator(_coerce_pricing_model)] = PricingModel.STANDARD
    pricing_matrix: Any = None
    msa_structure: Any = None
    threshold_structure: Any = None


# ---------------------------------------------------------------------------
# Decoded structures
# ---------------------------------------------------------------------------


class RateCard(BaseModel):
    """Monthly rate per member class."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    main: Amount = ZERO
    adult: Amount = ZERO
    child: Amount = ZERO

    def premium_for(self, members: MemberCounts) -> Decimal:
        """Each member class contributes its rate at full weight."""
        return self.main * members.main + self.adult * members.adult + self.child * members.child


class IncomeBand(RateCard):
    """A rate card that applies to incomes within [min, max], both inclusive."""

    lower: OptionalAmount = Field(default=None, alias="min")
    upper: OptionalAmount = Field(default=None, alias="max")  # None means unbounded

    def contains(self, income: Decimal) -> bool:
        lower = self.lower if self.lower is not None else ZERO
        if income < lower:
            return False
        return self.upper is None or income <= self.upper


class FixedMatrix(BaseModel):
    """Standard pricing: one rate card for every income."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["fixed"] = "fixed"
    rates: RateCard = Field(default_factory=RateCard)


class BandedMatrix(BaseModel):
    """Income-banded pricing: ordered bands, first match wins."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["banded"] = "banded"
    bands: tuple[IncomeBand, ...] = ()


PricingMatrix = Annotated[FixedMatrix | BandedMatrix, Field(discriminator="kind")]


class MsaStructure(BaseModel):
    """Savings account model. `value` is only meaningful for Fixed."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: Annotated[MsaType, BeforeValidator(_coerce_msa_type)] = MsaType.NONE
    value: OptionalAmount = None


class ThresholdStructure(BaseModel):
    """Per-class thresholds, MSA allocations and LATB limits.

    Every field is optional; absence is meaningful and drives the fallback
    chain in `medaid.pricing.thresholds`.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    annual_threshold: OptionalAmount = None
    annual_threshold_main: OptionalAmount = None
    annual_threshold_adult: OptionalAmount = None
    annual_threshold_child: OptionalAmount = None
    child_threshold: OptionalAmount = None  # legacy alias for annual_threshold_child

    msa_allocation_main: OptionalAmount = None
    msa_allocation_adult: OptionalAmount = None
    msa_allocation_child: OptionalAmount = None

    latb_limit_main: OptionalAmount = None
    latb_limit_adult: OptionalAmount = None
    latb_limit_child: OptionalAmount = None


class ThresholdResult(BaseModel):
    """Raw output of the threshold sub-calculation."""

    model_config = ConfigDict(frozen=True)

    annual_msa: Decimal = ZERO
    annual_threshold: Decimal = ZERO
    self_payment_gap: Decimal = ZERO
    limited_above_threshold: Decimal = ZERO


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------


class _Output(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class SavingsSummary(_Output):
    annual_allocation: Money = ZERO
    monthly_allocation: Money = ZERO
    is_pooled: bool = False


class ThresholdSummary(_Output):
    annual_threshold: Money = ZERO
    self_payment_gap: Money = ZERO
    limited_above_threshold: Money = ZERO


class IncentiveSummary(_Output):
    """Personal health fund figures. Not modelled yet, always zero."""

    base_fund: Money = ZERO
    potential_boost: Money = ZERO
    max_fund: Money = ZERO


class FinancialProfile(_Output):
    """Everything the plan card needs to show money for one plan."""

    monthly_premium: Money = ZERO
    annual_premium: Money = ZERO
    savings: SavingsSummary = Field(default_factory=SavingsSummary)
    thresholds: ThresholdSummary = Field(default_factory=ThresholdSummary)
    incentives: IncentiveSummary = Field(default_factory=IncentiveSummary)
