"""Cost calculation: per-workflow cost model and the two-workflow comparator."""

from .comparator import compare, compare_from_source
from .cost_model import NOMINAL_AREA, calculate_costs

__all__ = ["NOMINAL_AREA", "calculate_costs", "compare", "compare_from_source"]
