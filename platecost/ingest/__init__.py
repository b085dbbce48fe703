"""Form input reading and validation.

Public API
----------
.. autofunction:: read_inputs
.. autofunction:: record_from_mapping
.. autofunction:: validate_form
"""
from .form_reader import (
    parse_number,
    read_inputs,
    record_from_mapping,
    record_to_form_values,
    record_to_storage,
)
from .validation import FieldError, describe_errors, is_field_valid, validate_form

__all__ = [
    "parse_number",
    "read_inputs",
    "record_from_mapping",
    "record_to_form_values",
    "record_to_storage",
    "FieldError",
    "describe_errors",
    "is_field_valid",
    "validate_form",
]
