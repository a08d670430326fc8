"""Pricing engine: premiums, savings allocations, thresholds and LATB."""

from medaid.pricing.decoding import MalformedEncodingError
from medaid.pricing.engine import calculate_incentives, calculate_profile, get_disclaimer
from medaid.pricing.premium import calculate_premium, select_band
from medaid.pricing.thresholds import calculate_thresholds

__all__ = [
    "calculate_profile",
    "calculate_premium",
    "calculate_thresholds",
    "calculate_incentives",
    "select_band",
    "get_disclaimer",
    "MalformedEncodingError",
]
