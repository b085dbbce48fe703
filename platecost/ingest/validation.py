"""Submission-time validity checks for the numeric input form.

The form reader forgives everything; this module is the gate in front of
an explicit calculation.  A field is valid when it holds one complete,
finite, non-negative number.  Required fields must also be non-empty.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from ..config.fields import FIELD_IDS, by_field_id, display_label


@dataclass(frozen=True)
class FieldError:
    """One invalid form field."""

    field_id: str  # full id including the workflow prefix, e.g. "fl-plate-price"
    raw: Any
    message: str


def _as_text(raw: Any) -> str:
    if raw is None:
        return ""
    if isinstance(raw, float) and math.isnan(raw):
        return ""
    return str(raw).strip()


def check_field(raw: Any, required: bool = True) -> Optional[str]:
    """Return an error message for ``raw``, or ``None`` if it is valid."""
    if isinstance(raw, bool):
        return "请输入数字"
    text = _as_text(raw)
    if not text:
        return "必填项" if required else None
    if "_" in text:
        return "请输入数字"
    try:
        value = float(text)
    except ValueError:
        return "请输入数字"
    if math.isnan(value) or math.isinf(value):
        return "请输入有限数字"
    if value < 0:
        return "不能为负数"
    return None


def is_field_valid(raw: Any, required: bool = True) -> bool:
    """Per-edit validity check used for input styling; never computes."""
    return check_field(raw, required=required) is None


def validate_form(
    values: Mapping[str, Any],
    prefixes: Sequence[str],
    required_fields: Optional[Iterable[str]] = None,
) -> List[FieldError]:
    """Check every field of every workflow namespace in ``values``.

    Args:
        values:          Field id (with prefix) -> raw text.
        prefixes:        Workflow prefixes to check, e.g. ``["fl-", "tr-"]``.
        required_fields: Unprefixed field ids that must be filled in.
                         Defaults to all fields.

    Returns:
        All invalid fields, in form order.  Empty when the form may be
        submitted.
    """
    required = set(FIELD_IDS if required_fields is None else required_fields)
    errors: List[FieldError] = []
    for prefix in prefixes:
        for field_id in FIELD_IDS:
            full_id = prefix + field_id
            raw = values.get(full_id)
            message = check_field(raw, required=field_id in required)
            if message is not None:
                errors.append(FieldError(field_id=full_id, raw=raw, message=message))
    return errors


def describe_errors(errors: Sequence[FieldError], prefix_labels: Mapping[str, str]) -> str:
    """Single user-facing message listing the invalid fields."""
    lines = ["请填写所有必填项并确保输入有效。"]
    for err in errors:
        prefix, _, field_id = err.field_id.partition("-")
        spec = by_field_id(field_id)
        name = display_label(spec) if spec else field_id
        workflow = prefix_labels.get(prefix + "-", prefix)
        lines.append(f"- {workflow} / {name}: {err.message}")
    return "\n".join(lines)
