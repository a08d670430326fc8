"""Plan comparison: merges pricing and persona results per plan."""

from medaid.comparison.engine import ComparisonLimitError, assess_plan, evaluate_plans, price_from

__all__ = ["evaluate_plans", "assess_plan", "price_from", "ComparisonLimitError"]
