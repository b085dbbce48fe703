"""Run the cost model for both workflows and pair the results."""
import logging
from typing import Any, Mapping

from ..config.models import ComparisonResult, InputRecord, Workflow
from ..ingest.form_reader import read_inputs
from .cost_model import calculate_costs

logger = logging.getLogger(__name__)


def compare(chemistry_free: InputRecord, traditional: InputRecord) -> ComparisonResult:
    """Compute both breakdowns; the first record is workflow A (``fl``)."""
    result = ComparisonResult(
        fl=calculate_costs(chemistry_free),
        tr=calculate_costs(traditional),
    )
    logger.debug(
        "Comparison totals: fl=%.4f tr=%.4f",
        result.fl.total_monthly_cost,
        result.tr.total_monthly_cost,
    )
    return result


def compare_from_source(source: Mapping[str, Any]) -> ComparisonResult:
    """Read both workflow namespaces from ``source`` and compare them."""
    return compare(
        read_inputs(Workflow.CHEMISTRY_FREE.prefix, source),
        read_inputs(Workflow.TRADITIONAL.prefix, source),
    )
