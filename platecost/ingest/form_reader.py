"""Read namespaced form values into :class:`InputRecord` objects.

Bad input never raises here: a field that is absent, empty or does not
start with a number reads as ``0.0`` so the calculator always has
something to compute.
"""
import math
import re
from typing import Any, Dict, Mapping

from ..config.fields import FIELDS, resolve_key
from ..config.models import InputRecord

# Longest leading decimal literal, the way browsers parse number text.
_LEADING_NUMBER = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')


def parse_number(value: Any) -> float:
    """Parse a single field value; anything unusable becomes ``0.0``.

    Examples:
        "12.5"   -> 12.5
        " 3e2 "  -> 300.0
        "12abc"  -> 12.0
        ""       -> 0.0
        "abc"    -> 0.0
        None     -> 0.0
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        result = float(value)
    else:
        m = _LEADING_NUMBER.match(str(value).strip())
        if not m:
            return 0.0
        result = float(m.group(0))
    if math.isnan(result) or math.isinf(result):
        return 0.0
    return result


def read_inputs(prefix: str, source: Mapping[str, Any]) -> InputRecord:
    """Build an :class:`InputRecord` from ``source[prefix + field_id]``.

    ``source`` is any mapping of form field ids to their current text,
    e.g. Streamlit's ``session_state`` or a parsed request body.
    """
    values = {
        spec.attr: parse_number(source.get(prefix + spec.field_id))
        for spec in FIELDS
    }
    return InputRecord(**values)


def record_from_mapping(data: Mapping[str, Any]) -> InputRecord:
    """Build a record from a mapping keyed by any field naming form.

    Keys may be storage keys (``developerPrice``), field ids
    (``developer-price``) or attribute names.  Unknown keys are ignored,
    missing fields read as ``0.0``.
    """
    values: Dict[str, float] = {}
    for key, raw in data.items():
        spec = resolve_key(str(key))
        if spec is None:
            continue
        values[spec.attr] = parse_number(raw)
    return InputRecord(**values)


def record_to_storage(record: InputRecord) -> Dict[str, float]:
    """Storage-key -> value mapping, the persisted record format."""
    return {spec.storage_key: getattr(record, spec.attr) for spec in FIELDS}


def format_input_value(value: float) -> str:
    """Text shown in a form field for a stored value (``10.0`` -> ``"10"``)."""
    if value.is_integer():
        return str(int(value))
    return repr(value)


def record_to_form_values(prefix: str, record: InputRecord) -> Dict[str, str]:
    """Form field id -> text for repopulating the inputs of one workflow."""
    return {
        prefix + spec.field_id: format_input_value(getattr(record, spec.attr))
        for spec in FIELDS
    }
